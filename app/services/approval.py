"""
services/approval.py

승인 상태 머신(Approval State Machine).

대학(University) / 학생(Student) / 동아리(RSO) / 동아리 가입 신청(Membership)은
모두 pending 상태로 생성되고, 승인권자만 active 로 바꾸거나
거절(행 삭제)할 수 있다.

    (없음) --가입/신청--> pending --승인--> active
                            |
                            +--거절--> [삭제]

주요 기능:
- approve : pending 인 경우에만 active 로 변경 (조건부 UPDATE 한 번)
- deny    : pending 대상의 소유 계정을 삭제 (연쇄 삭제, 한 트랜잭션)
- 승인권자 판단

설계 원칙:
- 승인은 "status = pending 일 때만 UPDATE" 하는 compare-and-set 으로 처리
  -> 동시에 두 번 승인해도 두 번째 요청은 0 rows 를 보고 NotFoundError
- active -> pending 으로 되돌리는 전이는 없음
- commit / rollback 은 호출 측의 atomic() 블록에서 수행
- HTTP / FastAPI 의존성 없음

관련 파일:
- app.services.guard         : 대학 소유 / 동아리 관리 여부 확인
- app.services.approval_log  : 승인/거절 로그 기록
- app.routers.universities / students / rsos : 승인 API

"""

import logging
from enum import Enum

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError, NotFoundError
from app.models.approval_log import ApprovalAction
from app.models.rso import RSO, RSOMembership
from app.models.status import Status
from app.models.student import Student
from app.models.university import University
from app.models.user import User
from app.services.approval_log import write_approval_log
from app.services.guard import (
    administers_active_rso,
    get_or_404,
    is_admin,
    owns_active_university,
)

logger = logging.getLogger(__name__)


class EntityKind(str, Enum):
    UNIVERSITY = "university"
    STUDENT = "student"
    RSO = "rso"
    MEMBERSHIP = "membership"


_MODELS = {
    EntityKind.UNIVERSITY: University,
    EntityKind.STUDENT: Student,
    EntityKind.RSO: RSO,
    EntityKind.MEMBERSHIP: RSOMembership,
}

_LABELS = {
    EntityKind.UNIVERSITY: "University",
    EntityKind.STUDENT: "Student",
    EntityKind.RSO: "RSO",
    EntityKind.MEMBERSHIP: "Membership",
}


def owner_user_id(kind: EntityKind, target) -> int:
    if kind == EntityKind.RSO:
        return target.admin_id
    return target.user_id


"""
승인권자 확인

- ADMIN          : 모든 대상
- university     : ADMIN 만
- student / rso  : 소속 대학(active)의 소유자
- membership     : 해당 동아리(active)의 관리자, 또는 동아리 소속 대학 소유자

"""

def can_manage_members(db: Session, actor: User, rso: RSO) -> bool:
    return (
        is_admin(actor)
        or administers_active_rso(db, actor, rso.id)
        or owns_active_university(db, actor, rso.university_id)
    )


def ensure_can_review(db: Session, actor: User, kind: EntityKind, target) -> None:
    if is_admin(actor):
        return

    if kind in (EntityKind.STUDENT, EntityKind.RSO):
        if owns_active_university(db, actor, target.university_id):
            return

    elif kind == EntityKind.MEMBERSHIP:
        rso = db.get(RSO, target.rso_id)
        if rso is not None and can_manage_members(db, actor, rso):
            return

    raise ForbiddenError(f"Not allowed to review this {_LABELS[kind].lower()}")


def approve(db: Session, actor: User, kind: EntityKind, entity_id: int):
    model = _MODELS[kind]
    label = _LABELS[kind]

    target = get_or_404(db, model, entity_id, label)
    ensure_can_review(db, actor, kind, target)

    # compare-and-set: 현재 상태가 pending 인 경우에만 반영
    result = db.execute(
        update(model)
        .where(model.id == entity_id, model.status == Status.PENDING)
        .values(status=Status.ACTIVE)
    )
    if result.rowcount == 0:
        raise NotFoundError(f"{label} not found or already approved")

    write_approval_log(
        db,
        actor_id=actor.id,
        action=ApprovalAction.APPROVE,
        entity_kind=kind.value,
        entity_id=entity_id,
        target_user_id=owner_user_id(kind, target),
    )
    db.refresh(target)
    logger.info("%s %s approved by user %s", kind.value, entity_id, actor.id)
    return target


"""
거절

- 대상이 없거나 pending 이 아니면 NotFoundError (no-op 와 구분되는 결과)
- 삭제 직전 pending 행을 FOR UPDATE 로 다시 확인 -> 그 사이 승인된 대상은 삭제하지 않음
- university / student / rso : 소유 계정(User)을 삭제
  -> 대학 / 학생 / 동아리 / 가입 신청 / 이벤트 / 댓글 / 평점 연쇄 삭제
- membership : 가입 신청 행만 삭제 (학생 계정은 유지)
- 삭제 도중 실패하면 호출 측 atomic() 에서 전체 rollback

반환값: 삭제 전 대상 정보 스냅샷

"""

def deny(db: Session, actor: User, kind: EntityKind, entity_id: int) -> dict:
    model = _MODELS[kind]
    label = _LABELS[kind]

    target = get_or_404(db, model, entity_id, label)
    ensure_can_review(db, actor, kind, target)

    # 삭제 직전에 pending 행을 잠그고 다시 확인 (그 사이 승인되었으면 거절 불가)
    still_pending = db.scalar(
        select(model.id)
        .where(model.id == entity_id, model.status == Status.PENDING)
        .with_for_update()
    )
    if still_pending is None:
        raise NotFoundError(f"{label} not found or already approved")

    owner_id = owner_user_id(kind, target)
    snapshot = {"kind": kind.value, "id": entity_id, "user_id": owner_id}

    if kind == EntityKind.MEMBERSHIP:
        result = db.execute(
            delete(RSOMembership).where(
                RSOMembership.id == entity_id,
                RSOMembership.status == Status.PENDING,
            )
        )
        if result.rowcount == 0:
            raise NotFoundError(f"{label} not found or already approved")
    else:
        owner = get_or_404(db, User, owner_id, "User")
        if owner.id == actor.id:
            raise ForbiddenError("Cannot deny yourself")
        if is_admin(owner):
            raise ForbiddenError("Cannot delete an admin account")
        db.delete(owner)
        db.flush()

    write_approval_log(
        db,
        actor_id=actor.id,
        action=ApprovalAction.DENY,
        entity_kind=kind.value,
        entity_id=entity_id,
        target_user_id=owner_id,
    )
    logger.info("%s %s denied by user %s", kind.value, entity_id, actor.id)
    return snapshot
