# tests/helpers.py
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.user import User, Role
from app.core.security import get_password_hash

PASSWORD = "Passw0rd!"


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def unique_email(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}@campus.edu"


def create_admin_in_db(db: Session, *, email: str | None = None, password: str = PASSWORD) -> User:
    admin = User(
        email=email or unique_email("admin"),
        password_hash=get_password_hash(password),
        role=Role.ADMIN,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


def login(client, email: str, password: str = PASSWORD) -> str:
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["data"]["access_token"]


def register_and_login(client, role: str) -> dict:
    email = unique_email(role)
    reg = client.post("/auth/register", json={"email": email, "password": PASSWORD, "role": role})
    assert reg.status_code == 201, reg.text
    return {"user_id": reg.json()["data"]["id"], "email": email, "token": login(client, email)}


def admin_token(client, db: Session) -> str:
    admin = create_admin_in_db(db)
    return login(client, admin.email)


def setup_university(client, admin_tok: str, *, approve: bool = True) -> dict:
    """
    UNIVERSITY 계정 가입 + 대학 등록 (+ 관리자 승인)
    """
    owner = register_and_login(client, "university")
    r = client.post(
        "/universities",
        headers=auth_header(owner["token"]),
        json={"name": f"Univ {uuid.uuid4().hex[:6]}", "location": "Orlando, FL"},
    )
    assert r.status_code == 201, r.text
    university_id = r.json()["data"]["id"]

    if approve:
        ok = client.post(f"/universities/{university_id}/approve", headers=auth_header(admin_tok))
        assert ok.status_code == 200, ok.text

    return {**owner, "university_id": university_id}


def setup_student(client, university: dict, *, approve: bool = True) -> dict:
    """
    STUDENT 계정 가입 + 학생 등록 (+ 대학 소유자 승인)
    """
    student = register_and_login(client, "student")
    r = client.post(
        "/students",
        headers=auth_header(student["token"]),
        json={"first_name": "Test", "last_name": "Student", "university_id": university["university_id"]},
    )
    assert r.status_code == 201, r.text
    student_id = r.json()["data"]["id"]

    if approve:
        ok = client.post(f"/students/{student_id}/approve", headers=auth_header(university["token"]))
        assert ok.status_code == 200, ok.text

    return {**student, "student_id": student_id, "university_id": university["university_id"]}


def setup_rso(client, creator: dict, university: dict, *, approve: bool = True) -> int:
    """
    active 학생이 동아리 생성 (+ 대학 소유자 승인). 생성자는 rso_admin 으로 승격된다.
    """
    r = client.post(
        "/rsos",
        headers=auth_header(creator["token"]),
        json={"name": f"Club {uuid.uuid4().hex[:6]}", "university_id": university["university_id"]},
    )
    assert r.status_code == 201, r.text
    rso_id = r.json()["data"]["rso_id"]

    if approve:
        ok = client.post(f"/rsos/{rso_id}/approve", headers=auth_header(university["token"]))
        assert ok.status_code == 200, ok.text

    return rso_id


def event_body(visibility: str, *, university_id: int | None = None, rso_id: int | None = None, name: str | None = None) -> dict:
    body = {
        "name": name or f"{visibility} event {uuid.uuid4().hex[:4]}",
        "description": "Test event",
        "category": "social",
        "starts_at": (datetime.now(timezone.utc) + timedelta(days=7)).isoformat(),
        "visibility": visibility,
    }
    if university_id is not None:
        body["university_id"] = university_id
    if rso_id is not None:
        body["rso_id"] = rso_id
    return body


def create_event(client, token: str, visibility: str, **kwargs) -> int:
    r = client.post("/events", headers=auth_header(token), json=event_body(visibility, **kwargs))
    assert r.status_code == 201, r.text
    return r.json()["data"]["id"]


def visible_event_ids(client, token: str, path: str = "/events") -> set[int]:
    r = client.get(path, headers=auth_header(token))
    assert r.status_code == 200, r.text
    return {e["id"] for e in r.json()["data"]}


def count_rows(db: Session, model, *criteria) -> int:
    return db.scalar(select(func.count()).select_from(model).where(*criteria)) or 0
