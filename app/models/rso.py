import datetime

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, utcnow
from app.models.status import Status


class RSO(Base):
    """동아리(Registered Student Organization).

    - admin_id: 동아리를 만든 학생 (생성과 동시에 RSO_ADMIN으로 승격)
    - status: 소속 대학(또는 관리자)이 승인하면 active
    """

    __tablename__ = "rsos"
    __table_args__ = (
        UniqueConstraint("university_id", "name", name="uq_rsos_university_name"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    university_id: Mapped[int] = mapped_column(
        ForeignKey("universities.id", ondelete="CASCADE"), index=True, nullable=False
    )
    admin_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[Status] = mapped_column(
        SAEnum(Status, name="rso_status"), nullable=False, default=Status.PENDING
    )
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    university = relationship("University", back_populates="rsos")
    admin = relationship("User", back_populates="rsos")
    memberships = relationship("RSOMembership", back_populates="rso", cascade="all, delete-orphan")
    events = relationship("Event", back_populates="rso", cascade="all, delete-orphan")


class RSOMembership(Base):
    """동아리 가입 신청 레코드.

    (user_id, rso_id) 조합은 유일하며, 중복 신청은 새 행을 만들지 않는다.
    동아리 관리자가 승인해야 active 가 되고, 그때부터 rso 이벤트가 보인다.
    """

    __tablename__ = "rso_memberships"
    __table_args__ = (
        UniqueConstraint("user_id", "rso_id", name="uq_rso_memberships_user_rso"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    rso_id: Mapped[int] = mapped_column(
        ForeignKey("rsos.id", ondelete="CASCADE"), index=True, nullable=False
    )

    status: Mapped[Status] = mapped_column(
        SAEnum(Status, name="membership_status"), nullable=False, default=Status.PENDING
    )
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    user = relationship("User", back_populates="memberships")
    rso = relationship("RSO", back_populates="memberships")
