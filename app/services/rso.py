"""
services/rso.py

동아리(RSO) 생성 및 가입 신청 비즈니스 로직.

주요 기능:
- 동아리 생성 + 생성자 RSO_ADMIN 승격 (한 트랜잭션)
- 동아리 가입 신청 (pending Membership 생성)

설계 원칙:
- 동아리 생성과 권한 승격은 호출 측 atomic() 블록 하나에서 함께 commit
  -> 승격이 실패하면 동아리 행도 남지 않는다
- 중복 가입 신청은 ConflictError. 기존 신청을 active 로 바꾸지 않는다

"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, ForbiddenError, ValidationError
from app.models.rso import RSO, RSOMembership
from app.models.status import Status
from app.models.student import Student
from app.models.university import University
from app.models.user import User, Role
from app.services.guard import get_or_404

logger = logging.getLogger(__name__)


def _active_student_at(db: Session, user: User, university_id: int) -> Student | None:
    return db.scalar(
        select(Student).where(
            Student.user_id == user.id,
            Student.university_id == university_id,
            Student.status == Status.ACTIVE,
        )
    )


def promote_to_rso_admin(db: Session, user: User) -> None:
    if user.role == Role.STUDENT:
        user.role = Role.RSO_ADMIN
    db.flush()


"""
동아리 생성

- 생성자는 해당 대학의 active 학생이어야 함
- 대학은 active 상태여야 함
- 동아리는 pending 으로 생성되고, 생성자는 RSO_ADMIN 으로 승격
- 같은 대학 안에서 동아리 이름 중복 불가

"""

def create_rso(
    db: Session,
    actor: User,
    *,
    university_id: int,
    name: str,
    description: str | None = None,
) -> RSO:
    university = get_or_404(db, University, university_id, "University")
    if university.status != Status.ACTIVE:
        raise ValidationError("University is not active")

    if actor.role not in (Role.STUDENT, Role.RSO_ADMIN):
        raise ForbiddenError("Only students can create RSOs")
    if not _active_student_at(db, actor, university_id):
        raise ForbiddenError("Only active students of this university can create RSOs")

    duplicate = db.scalar(
        select(RSO.id).where(RSO.university_id == university_id, RSO.name == name)
    )
    if duplicate is not None:
        raise ConflictError("RSO name already exists at this university")

    rso = RSO(
        university_id=university_id,
        admin_id=actor.id,
        name=name,
        description=description,
        status=Status.PENDING,
    )
    db.add(rso)
    db.flush()

    promote_to_rso_admin(db, actor)

    logger.info("RSO %s created by user %s (pending)", rso.id, actor.id)
    return rso


"""
동아리 가입 신청

- 동아리는 active 상태여야 함
- 신청자는 동아리 소속 대학의 active 학생이어야 함
- (user_id, rso_id) 가 이미 있으면 ConflictError

"""

def join_rso(db: Session, actor: User, rso_id: int) -> RSOMembership:
    rso = get_or_404(db, RSO, rso_id, "RSO")
    if rso.status != Status.ACTIVE:
        raise ValidationError("RSO is not active")

    if not _active_student_at(db, actor, rso.university_id):
        raise ForbiddenError("Only active students of this university can join")

    existing = db.scalar(
        select(RSOMembership).where(
            RSOMembership.user_id == actor.id,
            RSOMembership.rso_id == rso_id,
        )
    )
    if existing is not None:
        raise ConflictError("User already requested to join this RSO")

    membership = RSOMembership(user_id=actor.id, rso_id=rso_id, status=Status.PENDING)
    db.add(membership)
    try:
        db.flush()
    except IntegrityError:
        # 동시에 들어온 같은 신청은 UNIQUE(user_id, rso_id) 에서 걸린다
        raise ConflictError("User already requested to join this RSO")

    logger.info("User %s requested to join RSO %s", actor.id, rso_id)
    return membership
