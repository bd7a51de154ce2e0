import datetime

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, utcnow
from app.models.status import Status


class University(Base):
    """대학 레코드.

    - user_id: 대학을 등록한 UNIVERSITY 계정 (대학당 1명)
    - status: 플랫폼 관리자가 승인하면 active
    """

    __tablename__ = "universities"

    id: Mapped[int] = mapped_column(primary_key=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, index=True, nullable=False
    )

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    num_students: Mapped[int | None] = mapped_column(Integer, nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)

    status: Mapped[Status] = mapped_column(
        SAEnum(Status, name="university_status"), nullable=False, default=Status.PENDING
    )
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    owner = relationship("User", back_populates="university")
    students = relationship("Student", back_populates="university", cascade="all, delete-orphan")
    rsos = relationship("RSO", back_populates="university", cascade="all, delete-orphan")
    events = relationship("Event", back_populates="university", cascade="all, delete-orphan")
