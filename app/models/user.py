"""
user.py

사용자(User) 및 권한(Role) 모델 정의 파일.

이 파일은 계정의 기본 정보(email / password_hash)와
권한(Role)을 관리한다.
대학(University), 학생(Student), 동아리(RSO), 가입 신청(Membership),
이벤트/댓글/평점은 모두 User에 종속되며,
User 삭제 시 함께 삭제(cascade)된다.

"""

import datetime
from enum import Enum

from sqlalchemy import String, DateTime, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, utcnow



"""
사용자 권한(Role) 정의

- ADMIN       : 플랫폼 관리자 (대학 승인, 모든 승인/거절 가능)
- UNIVERSITY  : 대학 계정 (소속 학생/동아리 승인)
- RSO_ADMIN   : 동아리 관리자 (동아리 생성 시 학생에서 승격)
- STUDENT     : 일반 학생

"""

class Role(str, Enum):
    ADMIN = "admin"
    UNIVERSITY = "university"
    RSO_ADMIN = "rso_admin"
    STUDENT = "student"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[Role] = mapped_column(SAEnum(Role, name="user_role"), nullable=False, default=Role.STUDENT)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    # 종속 레코드 (User 삭제 시 함께 삭제)
    university = relationship("University", back_populates="owner", uselist=False, cascade="all, delete-orphan")
    student = relationship("Student", back_populates="user", uselist=False, cascade="all, delete-orphan")
    rsos = relationship("RSO", back_populates="admin", cascade="all, delete-orphan")
    memberships = relationship("RSOMembership", back_populates="user", cascade="all, delete-orphan")
    events = relationship("Event", back_populates="creator", cascade="all, delete-orphan")
    comments = relationship("EventComment", back_populates="user", cascade="all, delete-orphan")
    ratings = relationship("EventRating", back_populates="user", cascade="all, delete-orphan")
