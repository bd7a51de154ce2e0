"""
comments.py

이벤트 댓글(EventComment) API 모음.

- 댓글 작성 / 목록 조회 : 이벤트를 볼 수 있는 사용자
- 댓글 수정 : 작성자 본인만
- 댓글 삭제 : 작성자 또는 ADMIN

"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.deps import get_current_user, get_db
from app.db.session import atomic
from app.models.user import User
from app.schemas.event import CommentRequest, CommentResponse
from app.services import events as event_service

router = APIRouter(tags=["comments"])


@router.post("/events/{event_id}/comments", status_code=status.HTTP_201_CREATED)
def add_comment(
    event_id: int,
    body: CommentRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        comment = event_service.add_comment(db, current_user, event_id, body.text)

    return {
        "message": "Comment added successfully.",
        "data": CommentResponse.model_validate(comment).model_dump(mode="json"),
    }


@router.get("/events/{event_id}/comments")
def list_comments(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rows = event_service.list_comments(db, current_user, event_id)
    return {
        "message": "Comments retrieved successfully",
        "data": [CommentResponse.model_validate(c).model_dump(mode="json") for c in rows],
        "meta": {"count": len(rows)},
    }


@router.patch("/comments/{comment_id}")
def update_comment(
    comment_id: int,
    body: CommentRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        comment = event_service.update_comment(db, current_user, comment_id, body.text)

    return {
        "message": "Comment updated successfully.",
        "data": CommentResponse.model_validate(comment).model_dump(mode="json"),
    }


@router.delete("/comments/{comment_id}")
def delete_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        event_service.delete_comment(db, current_user, comment_id)

    return {"message": "Comment deleted successfully.", "data": {"id": comment_id}}
