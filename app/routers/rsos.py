"""
rsos.py

동아리(RSO) 생성 / 승인 / 가입 신청 API 모음.

주요 기능:
- 동아리 생성 (pending) + 생성자 RSO_ADMIN 승격
- 동아리 목록 / 단건 / 내가 관리하는 동아리 조회
- 대학 소유자 / 관리자의 동아리 승인 / 거절
- 동아리 가입 신청, 가입 신청 목록 조회, 가입 승인 / 거절

설계 원칙:
- 동아리 생성과 권한 승격은 한 트랜잭션 (실패 시 둘 다 rollback)
- 중복 가입 신청은 409, 기존 신청이 자동으로 active 가 되지 않음
- 승인권자 판단과 상태 전이는 service(app.services.approval)에 위임

관련 파일:
- app.services.rso         : 동아리 생성 / 가입 신청
- app.services.approval    : 승인 / 거절
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.deps import get_current_user, get_db
from app.core.errors import ForbiddenError
from app.db.session import atomic
from app.models.rso import RSO, RSOMembership
from app.models.status import Status
from app.models.user import User
from app.schemas.rso import MembershipResponse, RSOCreateRequest, RSOResponse
from app.services.approval import EntityKind, approve, can_manage_members, deny
from app.services.guard import get_or_404
from app.services.rso import create_rso, join_rso

router = APIRouter(prefix="/rsos", tags=["rsos"])


"""
동아리 생성 API

- 해당 대학의 active 학생만 가능
- 생성된 동아리는 pending, 생성자는 rso_admin 으로 승격
- 두 변경 중 하나라도 실패하면 전체 rollback 후 500

"""
@router.post("", status_code=status.HTTP_201_CREATED)
def create(
    body: RSOCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        rso = create_rso(
            db,
            current_user,
            university_id=body.university_id,
            name=body.name,
            description=body.description,
        )

    return {
        "message": "RSO created and user promoted to RSO admin.",
        "data": {
            "rso_id": rso.id,
            "status": rso.status.value,
            "role": current_user.role.value,
        },
    }


@router.get("")
def list_rsos(
    status_filter: Status = Query(default=Status.ACTIVE, alias="status"),
    university_id: int | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    stmt = select(RSO).where(RSO.status == status_filter)
    if university_id is not None:
        stmt = stmt.where(RSO.university_id == university_id)
    rows = db.scalars(stmt.order_by(RSO.name)).all()
    return {
        "data": [RSOResponse.model_validate(r).model_dump(mode="json") for r in rows],
        "meta": {"count": len(rows)},
    }


# 내가 관리하는 동아리 목록 (pending 포함)
@router.get("/mine")
def my_rsos(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rows = db.scalars(select(RSO).where(RSO.admin_id == current_user.id).order_by(RSO.id)).all()
    return {
        "data": [RSOResponse.model_validate(r).model_dump(mode="json") for r in rows],
        "meta": {"count": len(rows)},
    }


@router.get("/{rso_id}")
def get_rso(
    rso_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    rso = get_or_404(db, RSO, rso_id, "RSO")
    return {
        "message": f"RSO is {rso.status.value}",
        "data": RSOResponse.model_validate(rso).model_dump(mode="json"),
    }


@router.post("/{rso_id}/approve")
def approve_rso(
    rso_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        rso = approve(db, current_user, EntityKind.RSO, rso_id)

    return {
        "message": "RSO approved successfully",
        "data": RSOResponse.model_validate(rso).model_dump(mode="json"),
    }


@router.post("/{rso_id}/deny")
def deny_rso(
    rso_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        snapshot = deny(db, current_user, EntityKind.RSO, rso_id)

    return {
        "message": "RSO denied and admin account deleted",
        "data": snapshot,
    }


"""
동아리 가입 신청 API

- pending 가입 신청 생성 후 membership_id 반환
- 이미 신청했으면 409

"""
@router.post("/{rso_id}/join", status_code=status.HTTP_201_CREATED)
def join(
    rso_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        membership = join_rso(db, current_user, rso_id)

    return {
        "message": "Request to join RSO submitted",
        "data": {"membership_id": membership.id, "status": membership.status.value},
    }


"""
가입 신청 목록 조회

- 동아리 관리자 / 대학 소유자 / 관리자만 조회 가능
- status 기본값 pending

"""
@router.get("/{rso_id}/members")
def list_members(
    rso_id: int,
    status_filter: Status = Query(default=Status.PENDING, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rso = get_or_404(db, RSO, rso_id, "RSO")
    if not can_manage_members(db, current_user, rso):
        raise ForbiddenError("Not allowed to view members of this RSO")

    rows = db.scalars(
        select(RSOMembership)
        .where(RSOMembership.rso_id == rso_id, RSOMembership.status == status_filter)
        .order_by(RSOMembership.id)
    ).all()
    return {
        "data": [MembershipResponse.model_validate(m).model_dump(mode="json") for m in rows],
        "meta": {"count": len(rows)},
    }


@router.post("/memberships/{membership_id}/approve")
def approve_membership(
    membership_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        membership = approve(db, current_user, EntityKind.MEMBERSHIP, membership_id)

    return {
        "message": "Membership approved successfully",
        "data": MembershipResponse.model_validate(membership).model_dump(mode="json"),
    }


@router.post("/memberships/{membership_id}/deny")
def deny_membership(
    membership_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        snapshot = deny(db, current_user, EntityKind.MEMBERSHIP, membership_id)

    return {
        "message": "Membership request denied",
        "data": snapshot,
    }
