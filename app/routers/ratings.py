"""
ratings.py

이벤트 평점(EventRating) API 모음.

- 평점 등록/수정 (upsert) : 이벤트를 볼 수 있는 사용자, 1 ~ 5
- 본인 평점 조회 / 삭제
- 평균 평점 조회 (소수점 둘째 자리 반올림, 평점이 없으면 null)

평점의 키가 (event_id, 본인 user_id) 이므로
다른 사용자의 평점은 경로상 지정할 수 없다.

"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_current_user, get_db
from app.db.session import atomic
from app.models.user import User
from app.schemas.event import RatingRequest
from app.services import events as event_service

router = APIRouter(prefix="/events/{event_id}/rating", tags=["ratings"])


@router.put("")
def rate_event(
    event_id: int,
    body: RatingRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        row = event_service.upsert_rating(db, current_user, event_id, body.rating)

    return {
        "message": "Rating submitted successfully.",
        "data": {"event_id": event_id, "rating": row.rating},
    }


@router.get("")
def my_rating(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rating = event_service.get_user_rating(db, current_user, event_id)
    return {"data": {"event_id": event_id, "rating": rating}}


@router.delete("")
def delete_rating(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        event_service.delete_rating(db, current_user, event_id)

    return {"message": "Rating deleted successfully.", "data": {"event_id": event_id}}


@router.get("/average")
def average_rating(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    avg = event_service.average_rating(db, current_user, event_id)
    return {"data": {"event_id": event_id, "average_rating": avg}}
