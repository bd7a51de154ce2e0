"""
services/guard.py

권한 검사(Authorization Guard) 로직 모음.

라우터/서비스에서 변경 작업 직전에 호출하여
"이 사용자가 이 대상을 바꿀 수 있는가"를 판단한다.

주요 기능:
- 대상 레코드 조회 (없으면 NotFoundError)
- 소유자 또는 ADMIN 여부 확인 (아니면 ForbiddenError)
- 대학 소유 / 동아리 관리 여부 확인
- 이벤트 게시 규칙(visibility 별 게시 권한) 검사

설계 원칙:
- HTTP / FastAPI 의존성 없음
- 판단 기준은 항상 DB에 저장된 현재 상태 (토큰 클레임 아님)

"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError, NotFoundError, ValidationError
from app.models.event import Visibility
from app.models.rso import RSO
from app.models.status import Status
from app.models.university import University
from app.models.user import User, Role


def is_admin(actor: User) -> bool:
    return actor.role == Role.ADMIN


def get_or_404(db: Session, model, entity_id: int, label: str):
    row = db.get(model, entity_id)
    if row is None:
        raise NotFoundError(f"{label} not found")
    return row


"""
소유자 확인

- 대상의 소유자(created_by / user_id)와 현재 사용자가 같으면 허용
- allow_admin=True 이면 ADMIN도 허용
- 그 외에는 ForbiddenError

"""

def ensure_owner_or_admin(actor: User, owner_id: int, *, message: str, allow_admin: bool = True) -> None:
    if actor.id == owner_id:
        return
    if allow_admin and is_admin(actor):
        return
    raise ForbiddenError(message)


def owns_active_university(db: Session, actor: User, university_id: int | None) -> bool:
    if university_id is None:
        return False
    found = db.scalar(
        select(University.id).where(
            University.id == university_id,
            University.user_id == actor.id,
            University.status == Status.ACTIVE,
        )
    )
    return found is not None


def administers_active_rso(db: Session, actor: User, rso_id: int | None) -> bool:
    if rso_id is None:
        return False
    found = db.scalar(
        select(RSO.id).where(
            RSO.id == rso_id,
            RSO.admin_id == actor.id,
            RSO.status == Status.ACTIVE,
        )
    )
    return found is not None


def administers_active_rso_at(db: Session, actor: User, university_id: int | None) -> bool:
    if university_id is None:
        return False
    found = db.scalar(
        select(RSO.id).where(
            RSO.university_id == university_id,
            RSO.admin_id == actor.id,
            RSO.status == Status.ACTIVE,
        ).limit(1)
    )
    return found is not None


# 대학 지정 없는 public 이벤트: active 대학 소유자 또는 active 동아리 관리자만
def has_active_publisher_standing(db: Session, actor: User) -> bool:
    owns_university = db.scalar(
        select(University.id).where(
            University.user_id == actor.id,
            University.status == Status.ACTIVE,
        ).limit(1)
    )
    if owns_university is not None:
        return True
    runs_rso = db.scalar(
        select(RSO.id).where(
            RSO.admin_id == actor.id,
            RSO.status == Status.ACTIVE,
        ).limit(1)
    )
    return runs_rso is not None


"""
이벤트 게시 규칙 검사

- visibility 와 연관 경로(university_id / rso_id)의 조합을 검증
- rso 이벤트의 university_id 는 동아리 소속 대학으로 고정
- 게시 권한:
  - ADMIN      : 항상 허용
  - public     : active 대학 소유자 또는 active 동아리 관리자 (university_id 지정 시 그 대학에 대한 권한 필요)
  - private    : 해당 active 대학 소유자 또는 그 대학의 active 동아리 관리자
  - rso        : 해당 active 동아리 관리자

반환값: 정규화된 (university_id, rso_id)

"""

def ensure_can_publish(
    db: Session,
    actor: User,
    *,
    visibility: Visibility,
    university_id: int | None,
    rso_id: int | None,
) -> tuple[int | None, int | None]:
    if visibility == Visibility.RSO:
        if rso_id is None:
            raise ValidationError("rso events require rso_id")
        rso = get_or_404(db, RSO, rso_id, "RSO")
        if university_id is not None and university_id != rso.university_id:
            raise ValidationError("university_id does not match the RSO's university")
        university_id = rso.university_id
        if not is_admin(actor) and not administers_active_rso(db, actor, rso_id):
            raise ForbiddenError("Only the admin of an active RSO can publish its events")
        return university_id, rso_id

    if rso_id is not None:
        raise ValidationError(f"{visibility.value} events cannot carry rso_id")

    if visibility == Visibility.PRIVATE and university_id is None:
        raise ValidationError("private events require university_id")

    if university_id is not None:
        get_or_404(db, University, university_id, "University")

    if is_admin(actor):
        return university_id, None

    if university_id is None:
        if has_active_publisher_standing(db, actor):
            return None, None
        raise ForbiddenError("Only owners of an active university or admins of an active RSO can publish events")

    if owns_active_university(db, actor, university_id) or administers_active_rso_at(db, actor, university_id):
        return university_id, None

    raise ForbiddenError("Not allowed to publish events for this university")
