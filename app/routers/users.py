"""
users.py

사용자 계정 관리 API 모음 (본인 계정 + 관리자 회원 조회).

주요 기능:
- 본인 계정 정보 조회 (대학 / 학생 등록 상태 포함)
- 이메일 / 비밀번호 변경
- 계정 삭제 (대학 / 학생 / 동아리 / 가입 신청 / 이벤트 등 연쇄 삭제)
- 관리자 전용 회원 목록 / 상세 조회

설계 원칙:
- 모든 변경은 현재 비밀번호 확인 후 수행
- ADMIN 계정은 스스로 삭제 불가
- 삭제는 한 트랜잭션 안에서 종속 레코드까지 함께 삭제

관련 파일:
- app.models.user          : User / Role 모델
- app.core.deps            : 인증(get_current_user)
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.deps import get_current_admin, get_current_user, get_db
from app.core.errors import ConflictError, ForbiddenError, NotFoundError, UnauthenticatedError, ValidationError
from app.core.security import get_password_hash, verify_password
from app.db.session import atomic
from app.models.user import User, Role
from app.schemas.auth import DeleteMeRequest, EditAccountRequest
from app.schemas.user import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _profile_payload(user: User) -> dict:
    university = user.university
    student = user.student
    return {
        **UserResponse.model_validate(user).model_dump(mode="json"),
        "university": (
            {"id": university.id, "name": university.name, "status": university.status.value}
            if university
            else None
        ),
        "student": (
            {"id": student.id, "university_id": student.university_id, "status": student.status.value}
            if student
            else None
        ),
    }


"""
본인 계정 조회 API

- 계정 정보와 함께 대학 / 학생 등록 상태를 반환
- 등록 레코드가 없으면 null

"""
@router.get("/me")
def profile(current_user: User = Depends(get_current_user)):
    return {"data": _profile_payload(current_user)}


@router.patch("/me")
def edit_account(
    data: EditAccountRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if data.email is None and data.new_password is None:
        raise ValidationError("No changes provided")

    if not verify_password(data.current_password, user.password_hash):
        raise UnauthenticatedError("Invalid password")

    if data.email is not None and data.email != user.email:
        taken = db.scalar(select(User.id).where(User.email == data.email))
        if taken is not None:
            raise ConflictError("Email already registered")

    with atomic(db):
        if data.email is not None:
            user.email = data.email
        if data.new_password is not None:
            user.password_hash = get_password_hash(data.new_password)
    db.refresh(user)

    return {"data": UserResponse.model_validate(user).model_dump(mode="json")}


"""
계정 삭제 API

- 본인 비밀번호 확인 후 삭제
- ADMIN 계정은 삭제 불가
- 대학 / 학생 / 동아리 / 가입 신청 / 이벤트 / 댓글 / 평점이 함께 삭제됨

"""
@router.delete("/me")
def delete_me(
    data: DeleteMeRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not verify_password(data.password, user.password_hash):
        raise UnauthenticatedError("Invalid password")

    if user.role == Role.ADMIN:
        raise ForbiddenError("Admin users cannot delete themselves")

    user_id = user.id
    with atomic(db):
        db.delete(user)

    logger.info("User %s deleted their account", user_id)
    return {"message": "User and associated data deleted successfully", "data": {"id": user_id}}


# 전체 회원 목록 조회 (관리자 전용, role 로 필터 가능)
@router.get("")
def list_users(
    role: Role | None = Query(default=None),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    stmt = select(User)
    if role is not None:
        stmt = stmt.where(User.role == role)
    users = db.scalars(stmt.order_by(User.id)).all()
    return {
        "data": [UserResponse.model_validate(u).model_dump(mode="json") for u in users],
        "meta": {"count": len(users)},
    }


# 회원 상세 조회 (관리자 전용)
@router.get("/{user_id}")
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return {"data": _profile_payload(user)}
