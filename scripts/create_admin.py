"""

플랫폼 관리자(ADMIN) 초기 계정 생성 스크립트.

- 서버 최초 세팅 시 단 한 번 실행하는 용도
- .env에 정의된 ADMIN_EMAIL / ADMIN_PASSWORD 환경 변수를 읽어
  ADMIN 계정을 생성한다.
- 이미 ADMIN 계정이 존재하면 생성하지 않고 종료한다.

사용 목적:
- 대학 승인 및 모든 승인/거절 API에 접근할 수 있는
  관리자 계정을 안전하게 초기화하기 위함 (셀프 가입으로는 ADMIN 불가)

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ python -m scripts.create_admin

"""

import logging
import os
from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import select
from app.db.session import SessionLocal
from app.models.user import User, Role
from app.core.security import get_password_hash

logger = logging.getLogger("create_admin")


def create_admin(db, *, email: str, password: str) -> User | None:
    exists = db.scalar(select(User).where(User.role == Role.ADMIN))
    if exists:
        logger.info("ADMIN already exists. Skip creation.")
        return None

    email_exists = db.scalar(select(User).where(User.email == email))
    if email_exists:
        raise RuntimeError("Email already exists but is not ADMIN")

    user = User(
        email=email,
        password_hash=get_password_hash(password),
        role=Role.ADMIN,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("ADMIN created: %s", email)
    return user


def main():
    logging.basicConfig(level=logging.INFO)
    db = SessionLocal()
    try:
        create_admin(
            db,
            email=os.environ["ADMIN_EMAIL"],
            password=os.environ["ADMIN_PASSWORD"],
        )
    finally:
        db.close()


if __name__ == "__main__":
    main()
