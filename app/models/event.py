"""

event.py

이벤트(Event), 이벤트 댓글(EventComment), 이벤트 평점(EventRating) 모델 정의 파일.

이벤트의 visibility 값이 어떤 연관 경로가 유효한지 결정한다.
- public  : 모든 학생에게 노출 (university_id 선택)
- private : university_id 필수, 해당 대학의 active 학생에게만 노출
- rso     : rso_id 필수, 해당 동아리의 active 회원에게만 노출

댓글/평점은 작성자 본인만 수정할 수 있으며,
평점은 (event_id, user_id) 당 1개로 upsert 된다.

"""

import datetime
from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, utcnow


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    RSO = "rso"


class Category(str, Enum):
    SOCIAL = "social"
    FUNDRAISING = "fundraising"
    TECH_TALK = "tech talk"
    OTHER = "other"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint(
            "(visibility != 'private' OR university_id IS NOT NULL) "
            "AND (visibility != 'rso' OR rso_id IS NOT NULL)",
            name="ck_events_visibility_scope",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[Category] = mapped_column(
        SAEnum(Category, name="event_category", values_callable=_enum_values),
        nullable=False,
        default=Category.OTHER,
    )

    starts_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    visibility: Mapped[Visibility] = mapped_column(
        SAEnum(Visibility, name="event_visibility", values_callable=_enum_values),
        nullable=False,
        index=True,
    )
    university_id: Mapped[int | None] = mapped_column(
        ForeignKey("universities.id", ondelete="CASCADE"), index=True, nullable=True
    )
    rso_id: Mapped[int | None] = mapped_column(
        ForeignKey("rsos.id", ondelete="CASCADE"), index=True, nullable=True
    )

    created_by: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    creator = relationship("User", back_populates="events")
    university = relationship("University", back_populates="events")
    rso = relationship("RSO", back_populates="events")
    comments = relationship("EventComment", back_populates="event", cascade="all, delete-orphan")
    ratings = relationship("EventRating", back_populates="event", cascade="all, delete-orphan")


class EventComment(Base):
    __tablename__ = "event_comments"

    id: Mapped[int] = mapped_column(primary_key=True)

    event_id: Mapped[int] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), index=True, nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    event = relationship("Event", back_populates="comments")
    user = relationship("User", back_populates="comments")


class EventRating(Base):
    __tablename__ = "event_ratings"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_ratings_event_user"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_event_ratings_range"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    event_id: Mapped[int] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), index=True, nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    event = relationship("Event", back_populates="ratings")
    user = relationship("User", back_populates="ratings")
