"""
auth.py

인증(Authentication) API 모음.

이 파일은 회원 가입과 로그인(토큰 발급)을 담당한다.
JWT Access Token 하나만 사용하며, 만료되면 다시 로그인해야 한다.

주요 기능:
- 회원 가입 (대학 / 학생 계정)
- 로그인 및 토큰 발급

설계 원칙:
- Access Token은 Authorization Header(Bearer)로 전달
- 토큰에는 {user_id, role} 만 담고, 권한 판단은 매 요청 DB 기준
- 가입 직후 계정은 바로 로그인 가능하지만,
  대학/학생 등록 레코드는 승인 전까지 pending 상태

관련 파일:
- app.core.security        : 비밀번호 해시 / JWT 생성·검증
- app.models.user          : User / Role 모델
- app.schemas.auth         : 인증 관련 요청/응답

"""

import logging

from fastapi import APIRouter, Depends, status

from sqlalchemy.orm import Session
from sqlalchemy import select

from app.core.deps import get_db
from app.core.errors import ConflictError, UnauthenticatedError
from app.core.security import get_password_hash, verify_password, create_access_token
from app.db.session import atomic
from app.models.user import User, Role
from app.schemas.auth import RegisterRequest, LoginRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


"""
회원 가입 API

- 이메일 기준으로 신규 계정 생성
- role 은 university / student 만 허용
- 같은 이메일이 이미 있으면 409

"""

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    exists = db.scalar(select(User.id).where(User.email == data.email))
    if exists is not None:
        raise ConflictError("Email already registered")

    user = User(
        email=data.email,
        password_hash=get_password_hash(data.password),
        role=Role(data.role),
    )
    with atomic(db):
        db.add(user)
    db.refresh(user)

    logger.info("User %s registered as %s", user.id, user.role.value)
    return {
        "data": {
            "id": user.id,
            "email": user.email,
            "role": user.role.value,
        }
    }


"""
로그인 API

- 이메일 / 비밀번호 인증
- Access Token 과 사용자 {id, role} 반환

"""

@router.post("/login")
def login(data: LoginRequest, db: Session = Depends(get_db)):
    user = db.scalar(select(User).where(User.email == data.email))

    if not user or not verify_password(data.password, user.password_hash):
        raise UnauthenticatedError("Invalid credentials")

    access = create_access_token(user_id=user.id, role=user.role.value)

    return {
        "data": {
            "access_token": access,
            "token_type": "bearer",
            "user": {
                "id": user.id,
                "role": user.role.value,
            },
        }
    }
