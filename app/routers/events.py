"""
events.py

이벤트(Event) 게시 / 조회 / 수정 API 모음.

주요 기능:
- 이벤트 게시 (visibility 별 게시 규칙 적용)
- 학생 기준 조회 : public + 소속 대학 private + 가입 동아리 rso
- 대학 기준 조회 : 본인 대학의 모든 이벤트
- 동아리 관리자 기준 조회 : 관리하는 active 동아리의 이벤트
- 단건 조회 / 수정 / 삭제

설계 원칙:
- 세 가지 조회는 모두 하나의 resolver(app.services.visibility)를 사용
- 권한이 맞지 않는 조회는 403, 결과가 없는 조회는 빈 목록
- 수정 / 삭제는 작성자 또는 ADMIN

"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.deps import get_current_user, get_db
from app.db.session import atomic
from app.models.user import User
from app.schemas.event import EventCreateRequest, EventResponse, EventUpdateRequest
from app.services import events as event_service
from app.services.visibility import Scope, resolve_events

router = APIRouter(prefix="/events", tags=["events"])


def _events_payload(message: str, rows) -> dict:
    return {
        "message": message,
        "data": [EventResponse.model_validate(e).model_dump(mode="json") for e in rows],
        "meta": {"count": len(rows)},
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_event(
    body: EventCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        event = event_service.create_event(db, current_user, body.model_dump())

    return {
        "message": "Event created successfully",
        "data": EventResponse.model_validate(event).model_dump(mode="json"),
    }


"""
학생 기준 이벤트 조회 API

- 인증된 모든 사용자
- university_id / rso_id 로 노출 가능한 범위 안에서 추가 필터

"""
@router.get("")
def student_events(
    university_id: int | None = None,
    rso_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rows = resolve_events(db, current_user, Scope.STUDENT, university_id=university_id, rso_id=rso_id)
    return _events_payload("Student events retrieved successfully.", rows)


@router.get("/university")
def university_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rows = resolve_events(db, current_user, Scope.UNIVERSITY)
    return _events_payload("University events retrieved successfully.", rows)


# 관리하는 active 동아리가 없으면 빈 목록 (권한 없음과 구분)
@router.get("/rso-admin")
def rso_admin_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rows = resolve_events(db, current_user, Scope.RSO_ADMIN)
    return _events_payload("RSO admin events retrieved successfully.", rows)


@router.get("/{event_id}")
def get_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    event = event_service.get_visible_event(db, current_user, event_id)
    return {"data": EventResponse.model_validate(event).model_dump(mode="json")}


@router.patch("/{event_id}")
def update_event(
    event_id: int,
    body: EventUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        event = event_service.update_event(
            db, current_user, event_id, body.model_dump(exclude_unset=True)
        )

    return {
        "message": "Event updated successfully",
        "data": EventResponse.model_validate(event).model_dump(mode="json"),
    }


@router.delete("/{event_id}")
def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with atomic(db):
        event_service.delete_event(db, current_user, event_id)

    return {"message": "Event deleted successfully", "data": {"id": event_id}}
