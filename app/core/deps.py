from typing import Generator

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session
from sqlalchemy import select

from app.core.errors import ForbiddenError, UnauthenticatedError
from app.core.security import decode_access_token
from app.db.session import SessionLocal
from app.models.user import User, Role

# Swagger Authorize에서 "Bearer 토큰" 입력받는 스키마
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if cred is None:
        raise UnauthenticatedError("Not authenticated")

    try:
        user_id, _ = decode_access_token(cred.credentials)
    except JWTError:
        raise UnauthenticatedError("Could not validate credentials")

    # role은 토큰이 아니라 DB 기준으로 매 요청마다 다시 판단
    user = db.scalar(select(User).where(User.id == user_id))
    if not user:
        raise UnauthenticatedError("User not found")

    return user


def require_roles(*roles: Role):
    def _checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            allowed = ", ".join(r.value for r in roles)
            raise ForbiddenError(f"Requires role in ({allowed})")
        return current_user
    return _checker

get_current_admin = require_roles(Role.ADMIN)
get_current_university = require_roles(Role.UNIVERSITY)
