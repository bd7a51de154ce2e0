"""
universities.py

대학(University) 등록 및 승인 API 모음.

주요 기능:
- 대학 계정의 대학 등록 (pending)
- 대학 목록 조회 (status 필터)
- 플랫폼 관리자의 대학 승인 / 거절

설계 원칙:
- 대학 계정 1개당 대학 1개
- 승인 / 거절 규칙은 service(app.services.approval)에 위임
- 거절 시 대학 계정까지 삭제

"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.deps import get_current_admin, get_current_university, get_db
from app.core.errors import ConflictError
from app.db.session import atomic
from app.models.status import Status
from app.models.university import University
from app.models.user import User
from app.schemas.university import UniversityCreateRequest, UniversityResponse
from app.services.approval import EntityKind, approve, deny

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/universities", tags=["universities"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_university(
    body: UniversityCreateRequest,
    db: Session = Depends(get_db),
    owner: User = Depends(get_current_university),
):
    if owner.university is not None:
        raise ConflictError("University already registered for this account")

    name_taken = db.scalar(select(University.id).where(University.name == body.name))
    if name_taken is not None:
        raise ConflictError("University name already exists")

    university = University(**body.model_dump(), user_id=owner.id, status=Status.PENDING)
    with atomic(db):
        db.add(university)
    db.refresh(university)

    logger.info("University %s registered by user %s (pending)", university.id, owner.id)
    return {
        "message": "University registered, pending approval",
        "data": UniversityResponse.model_validate(university).model_dump(mode="json"),
    }


# 대학 목록 조회 (가입 화면에서 사용하므로 인증 불필요)
@router.get("")
def list_universities(
    status_filter: Status = Query(default=Status.ACTIVE, alias="status"),
    db: Session = Depends(get_db),
):
    rows = db.scalars(
        select(University)
        .where(University.status == status_filter)
        .order_by(University.name)
    ).all()
    return {
        "data": [UniversityResponse.model_validate(u).model_dump(mode="json") for u in rows],
        "meta": {"count": len(rows)},
    }


@router.post("/{university_id}/approve")
def approve_university(
    university_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    with atomic(db):
        university = approve(db, admin, EntityKind.UNIVERSITY, university_id)

    return {
        "message": "University approved successfully",
        "data": UniversityResponse.model_validate(university).model_dump(mode="json"),
    }


@router.post("/{university_id}/deny")
def deny_university(
    university_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    with atomic(db):
        snapshot = deny(db, admin, EntityKind.UNIVERSITY, university_id)

    return {
        "message": "University denied and owner account deleted",
        "data": snapshot,
    }
