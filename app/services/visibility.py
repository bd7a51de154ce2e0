"""
services/visibility.py

이벤트 노출 범위 계산(Visibility Resolver).

현재 사용자(actor)의 권한, 대학 소속(Student 상태), 동아리 가입(Membership 상태)을
기준으로 조회 가능한 이벤트 집합을 계산한다.
저장된 권한 목록이 아니라 매 요청마다 DB 상태로 다시 계산하는 필터이며,
승인 상태가 바뀌면 바로 결과에 반영된다.

조회 범위(scope):
- university : 사용자가 소유한 대학의 모든 이벤트
- rso_admin  : 사용자가 관리하는 active 동아리의 이벤트 (없으면 빈 목록)
- student    : 아래 세 조건의 합집합
    1) visibility = public
    2) visibility = private 이고 사용자가 그 대학의 active 학생
    3) visibility = rso 이고 사용자가 그 동아리의 active 회원

설계 원칙:
- 세 범위 모두 하나의 규칙(visibility_clause)에서 만들어진다
- Event 하나만 SELECT 하고 조건은 EXISTS / IN 서브쿼리로 표현
  -> 여러 조건을 동시에 만족해도 이벤트는 한 번만 반환된다
- 단건 조회 / 댓글 / 평점 권한도 같은 규칙(can_view)으로 판단

관련 파일:
- app.routers.events      : 이벤트 조회 API
- app.models.event        : Event / Visibility

"""

from enum import Enum

from sqlalchemy import and_, exists, false, or_, select
from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError
from app.models.event import Event, Visibility
from app.models.rso import RSO, RSOMembership
from app.models.status import Status
from app.models.student import Student
from app.models.university import University
from app.models.user import User, Role


class Scope(str, Enum):
    UNIVERSITY = "university"
    RSO_ADMIN = "rso_admin"
    STUDENT = "student"


# scope 별로 조회를 허용하는 권한. student scope 는 인증된 모든 사용자
_SCOPE_ROLES = {
    Scope.UNIVERSITY: (Role.UNIVERSITY, Role.ADMIN),
    Scope.RSO_ADMIN: (Role.RSO_ADMIN, Role.ADMIN),
    Scope.STUDENT: tuple(Role),
}


def _owned_university_ids(actor: User):
    return select(University.id).where(University.user_id == actor.id)


def _administered_rso_ids(actor: User):
    return select(RSO.id).where(RSO.admin_id == actor.id, RSO.status == Status.ACTIVE)


def _student_clause(actor: User):
    active_student_here = exists().where(
        Student.user_id == actor.id,
        Student.university_id == Event.university_id,
        Student.status == Status.ACTIVE,
    )
    active_member_here = exists().where(
        RSOMembership.user_id == actor.id,
        RSOMembership.rso_id == Event.rso_id,
        RSOMembership.status == Status.ACTIVE,
    )
    return or_(
        Event.visibility == Visibility.PUBLIC,
        and_(Event.visibility == Visibility.PRIVATE, active_student_here),
        and_(Event.visibility == Visibility.RSO, active_member_here),
    )


def visibility_clause(actor: User, scope: Scope):
    if scope == Scope.UNIVERSITY:
        return Event.university_id.in_(_owned_university_ids(actor))
    if scope == Scope.RSO_ADMIN:
        return Event.rso_id.in_(_administered_rso_ids(actor))
    if scope == Scope.STUDENT:
        return _student_clause(actor)
    return false()


def ensure_scope_allowed(actor: User, scope: Scope) -> None:
    if actor.role not in _SCOPE_ROLES[scope]:
        raise ForbiddenError(f"Role {actor.role.value} cannot query {scope.value} events")


"""
이벤트 목록 계산

- scope 에 맞지 않는 권한이면 ForbiddenError (빈 결과와 구분)
- university_id / rso_id 필터는 노출 가능한 집합 안에서만 적용
- 시작 시각, id 순으로 정렬

"""

def resolve_events(
    db: Session,
    actor: User,
    scope: Scope,
    *,
    university_id: int | None = None,
    rso_id: int | None = None,
) -> list[Event]:
    ensure_scope_allowed(actor, scope)

    stmt = select(Event).where(visibility_clause(actor, scope))
    if university_id is not None:
        stmt = stmt.where(Event.university_id == university_id)
    if rso_id is not None:
        stmt = stmt.where(Event.rso_id == rso_id)

    stmt = stmt.order_by(Event.starts_at, Event.id)
    return list(db.scalars(stmt).all())


def can_view(db: Session, actor: User, event_id: int) -> bool:
    if actor.role == Role.ADMIN:
        return True
    # 작성자, 대학 소유자, 동아리 관리자도 자기 이벤트는 항상 볼 수 있다
    stmt = select(Event.id).where(
        Event.id == event_id,
        or_(
            Event.created_by == actor.id,
            visibility_clause(actor, Scope.UNIVERSITY),
            visibility_clause(actor, Scope.RSO_ADMIN),
            visibility_clause(actor, Scope.STUDENT),
        ),
    )
    return db.scalar(stmt) is not None
