"""
services/events.py

이벤트 / 댓글 / 평점 도메인의 비즈니스 로직 모음.

라우터는 이 파일의 함수를 호출하고
commit / rollback 및 응답 변환만 담당한다.

설계 원칙:
- 이벤트 수정/삭제: 작성자 또는 ADMIN
- visibility / university_id / rso_id 를 바꾸는 수정은 게시 규칙을 다시 검사
- 댓글 작성, 평점 등록은 해당 이벤트를 볼 수 있는 사용자만
- 댓글 수정은 작성자 본인만, 삭제는 작성자 또는 ADMIN
- 평점은 (event_id, user_id) 당 1개, 다시 주면 값만 갱신

관련 파일:
- app.services.guard       : 소유자 확인 / 게시 규칙
- app.services.visibility  : can_view
- app.routers.events / comments / ratings

"""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.models.event import Event, EventComment, EventRating, Visibility
from app.models.user import User
from app.services.guard import ensure_can_publish, ensure_owner_or_admin, get_or_404
from app.services.visibility import can_view

logger = logging.getLogger(__name__)

_SCOPE_FIELDS = ("visibility", "university_id", "rso_id")


def create_event(db: Session, actor: User, data: dict) -> Event:
    university_id, rso_id = ensure_can_publish(
        db,
        actor,
        visibility=data["visibility"],
        university_id=data.get("university_id"),
        rso_id=data.get("rso_id"),
    )
    event = Event(**{**data, "university_id": university_id, "rso_id": rso_id, "created_by": actor.id})
    db.add(event)
    db.flush()
    logger.info("Event %s (%s) created by user %s", event.id, event.visibility.value, actor.id)
    return event


def get_visible_event(db: Session, actor: User, event_id: int) -> Event:
    event = get_or_404(db, Event, event_id, "Event")
    # 볼 수 없는 이벤트는 존재 여부도 드러내지 않는다
    if not can_view(db, actor, event_id):
        raise NotFoundError("Event not found")
    return event


def update_event(db: Session, actor: User, event_id: int, changes: dict) -> Event:
    event = get_or_404(db, Event, event_id, "Event")
    ensure_owner_or_admin(actor, event.created_by, message="Unauthorized to update this event")

    if not changes:
        raise ValidationError("No changes provided")

    if any(field in changes for field in _SCOPE_FIELDS):
        visibility = changes.get("visibility", event.visibility)
        university_id = changes.get("university_id", event.university_id)
        rso_id = changes.get("rso_id", event.rso_id)
        # rso 가 아닌 이벤트로 바꾸면 rso 연결은 해제
        if visibility != Visibility.RSO and "rso_id" not in changes:
            rso_id = None
        # 동아리를 바꾸면 university_id 는 새 동아리의 대학으로 다시 채운다
        if changes.get("rso_id") is not None and "university_id" not in changes:
            university_id = None
        university_id, rso_id = ensure_can_publish(
            db,
            actor,
            visibility=visibility,
            university_id=university_id,
            rso_id=rso_id,
        )
        changes = {**changes, "university_id": university_id, "rso_id": rso_id}

    for field, value in changes.items():
        setattr(event, field, value)
    db.flush()
    return event


def delete_event(db: Session, actor: User, event_id: int) -> None:
    event = get_or_404(db, Event, event_id, "Event")
    ensure_owner_or_admin(actor, event.created_by, message="Unauthorized to delete this event")
    db.delete(event)
    db.flush()


def list_comments(db: Session, actor: User, event_id: int) -> list[EventComment]:
    get_visible_event(db, actor, event_id)
    return list(
        db.scalars(
            select(EventComment)
            .where(EventComment.event_id == event_id)
            .order_by(EventComment.created_at, EventComment.id)
        ).all()
    )


def add_comment(db: Session, actor: User, event_id: int, text: str) -> EventComment:
    get_visible_event(db, actor, event_id)
    comment = EventComment(event_id=event_id, user_id=actor.id, text=text)
    db.add(comment)
    db.flush()
    return comment


def update_comment(db: Session, actor: User, comment_id: int, text: str) -> EventComment:
    comment = get_or_404(db, EventComment, comment_id, "Comment")
    ensure_owner_or_admin(
        actor, comment.user_id, message="You can only edit your own comments", allow_admin=False
    )
    comment.text = text
    db.flush()
    return comment


def delete_comment(db: Session, actor: User, comment_id: int) -> None:
    comment = get_or_404(db, EventComment, comment_id, "Comment")
    ensure_owner_or_admin(actor, comment.user_id, message="You can only delete your own comments")
    db.delete(comment)
    db.flush()


"""
평점 등록/수정 (upsert)

- 1 ~ 5 범위만 허용
- 이미 준 평점이 있으면 값만 갱신
- 키가 (event_id, 본인 user_id) 이므로 소유권은 키 자체로 보장

"""

def upsert_rating(db: Session, actor: User, event_id: int, rating: int) -> EventRating:
    if rating < 1 or rating > 5:
        raise ValidationError("rating must be between 1 and 5")
    get_visible_event(db, actor, event_id)

    row = db.scalar(
        select(EventRating).where(EventRating.event_id == event_id, EventRating.user_id == actor.id)
    )
    if row is None:
        row = EventRating(event_id=event_id, user_id=actor.id, rating=rating)
        db.add(row)
    else:
        row.rating = rating
    db.flush()
    return row


def get_user_rating(db: Session, actor: User, event_id: int) -> int | None:
    get_visible_event(db, actor, event_id)
    return db.scalar(
        select(EventRating.rating).where(EventRating.event_id == event_id, EventRating.user_id == actor.id)
    )


def delete_rating(db: Session, actor: User, event_id: int) -> None:
    get_visible_event(db, actor, event_id)
    row = db.scalar(
        select(EventRating).where(EventRating.event_id == event_id, EventRating.user_id == actor.id)
    )
    if row is None:
        raise NotFoundError("Rating not found")
    db.delete(row)
    db.flush()


def average_rating(db: Session, actor: User, event_id: int) -> float | None:
    get_visible_event(db, actor, event_id)
    avg = db.scalar(select(func.avg(EventRating.rating)).where(EventRating.event_id == event_id))
    if avg is None:
        return None
    return round(float(avg), 2)
