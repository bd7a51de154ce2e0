import datetime

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, utcnow
from app.models.status import Status


class Student(Base):
    """학생 등록 레코드.

    STUDENT 계정 1개당 1행. 소속 대학이 승인하기 전까지 pending 이며,
    pending 학생은 대학 비공개(private) 이벤트를 볼 수 없다.
    """

    __tablename__ = "students"

    id: Mapped[int] = mapped_column(primary_key=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, index=True, nullable=False
    )
    university_id: Mapped[int] = mapped_column(
        ForeignKey("universities.id", ondelete="CASCADE"), index=True, nullable=False
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    status: Mapped[Status] = mapped_column(
        SAEnum(Status, name="student_status"), nullable=False, default=Status.PENDING
    )
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    user = relationship("User", back_populates="student")
    university = relationship("University", back_populates="students")
