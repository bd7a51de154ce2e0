"""

이벤트 게시 / 수정 / 삭제 권한 통합 테스트.
- visibility 별 게시 규칙 (private: 대학 소유자 또는 그 대학 동아리 관리자, rso: 동아리 관리자)
- 수정 / 삭제는 작성자 또는 ADMIN
- visibility 를 바꾸는 수정은 게시 규칙을 다시 검사

"""

from app.models.event import Event
from tests.helpers import (
    admin_token,
    auth_header,
    count_rows,
    create_event,
    event_body,
    register_and_login,
    setup_rso,
    setup_student,
    setup_university,
)


def _post(client, token, body):
    return client.post("/events", headers=auth_header(token), json=body)


def test_students_cannot_publish(client, db):
    admin = admin_token(client, db)
    university = setup_university(client, admin)
    student = setup_student(client, university)

    assert _post(client, student["token"], event_body("public")).status_code == 403
    r = _post(client, student["token"], event_body("private", university_id=university["university_id"]))
    assert r.status_code == 403


def test_private_event_requires_university(client, db):
    admin = admin_token(client, db)
    university = setup_university(client, admin)

    r = _post(client, university["token"], event_body("private"))
    assert r.status_code == 422

    r = _post(client, university["token"], event_body("public", rso_id=1))
    assert r.status_code == 422


def test_university_owner_publishes_only_for_own_university(client, db):
    admin = admin_token(client, db)
    home = setup_university(client, admin)
    away = setup_university(client, admin)

    ok = _post(client, home["token"], event_body("private", university_id=home["university_id"]))
    assert ok.status_code == 201, ok.text
    assert ok.json()["data"]["created_by"] == home["user_id"]

    r = _post(client, home["token"], event_body("private", university_id=away["university_id"]))
    assert r.status_code == 403

    r = _post(client, home["token"], event_body("public", university_id=999999))
    assert r.status_code == 404


def test_pending_university_cannot_publish_private(client, db):
    admin = admin_token(client, db)
    university = setup_university(client, admin, approve=False)

    r = _post(client, university["token"], event_body("private", university_id=university["university_id"]))
    assert r.status_code == 403


def test_rso_event_rules(client, db):
    admin = admin_token(client, db)
    university = setup_university(client, admin)
    other = setup_university(client, admin)
    rso_admin = setup_student(client, university)
    rso_id = setup_rso(client, rso_admin, university)

    ok = _post(client, rso_admin["token"], event_body("rso", rso_id=rso_id))
    assert ok.status_code == 201, ok.text
    # university_id 는 동아리 소속 대학으로 채워짐
    assert ok.json()["data"]["university_id"] == university["university_id"]

    r = _post(client, rso_admin["token"], event_body("rso", rso_id=rso_id, university_id=other["university_id"]))
    assert r.status_code == 400

    # 동아리 관리자는 소속 대학 private 이벤트도 게시 가능
    r = _post(client, rso_admin["token"], event_body("private", university_id=university["university_id"]))
    assert r.status_code == 201, r.text

    # 대학 소유자라도 동아리 관리자가 아니면 rso 이벤트 게시 불가
    r = _post(client, university["token"], event_body("rso", rso_id=rso_id))
    assert r.status_code == 403


def test_pending_rso_admin_cannot_publish_rso_event(client, db):
    admin = admin_token(client, db)
    university = setup_university(client, admin)
    creator = setup_student(client, university)
    rso_id = setup_rso(client, creator, university, approve=False)

    r = _post(client, creator["token"], event_body("rso", rso_id=rso_id))
    assert r.status_code == 403


def test_update_is_owner_or_admin(client, db):
    admin = admin_token(client, db)
    home = setup_university(client, admin)
    away = setup_university(client, admin)
    event_id = create_event(client, home["token"], "public", university_id=home["university_id"])

    r = client.patch(f"/events/{event_id}", headers=auth_header(away["token"]), json={"name": "Hijacked"})
    assert r.status_code == 403

    r = client.patch(f"/events/{event_id}", headers=auth_header(home["token"]), json={"name": "Renamed"})
    assert r.status_code == 200, r.text
    assert r.json()["data"]["name"] == "Renamed"

    r = client.patch(f"/events/{event_id}", headers=auth_header(admin), json={"location": "Main Hall"})
    assert r.status_code == 200, r.text
    assert r.json()["data"]["location"] == "Main Hall"

    assert client.patch(f"/events/{event_id}", headers=auth_header(home["token"]), json={}).status_code == 400
    r = client.patch(f"/events/{event_id}", headers=auth_header(home["token"]), json={"name": None})
    assert r.status_code == 422

    assert client.patch("/events/999999", headers=auth_header(admin), json={"name": "x"}).status_code == 404


def test_visibility_change_is_rechecked(client, db):
    admin = admin_token(client, db)
    university = setup_university(client, admin)
    event_id = create_event(client, university["token"], "public")

    # university_id 없이 private 으로 바꿀 수 없음
    r = client.patch(f"/events/{event_id}", headers=auth_header(university["token"]), json={"visibility": "private"})
    assert r.status_code == 400

    r = client.patch(
        f"/events/{event_id}",
        headers=auth_header(university["token"]),
        json={"visibility": "private", "university_id": university["university_id"]},
    )
    assert r.status_code == 200, r.text
    assert r.json()["data"]["visibility"] == "private"

    # 동아리 관리자가 아니므로 rso 이벤트로 바꿀 수 없음
    creator = setup_student(client, university)
    rso_id = setup_rso(client, creator, university)
    r = client.patch(
        f"/events/{event_id}",
        headers=auth_header(university["token"]),
        json={"visibility": "rso", "rso_id": rso_id},
    )
    assert r.status_code == 403


def test_delete_event(client, db):
    admin = admin_token(client, db)
    home = setup_university(client, admin)
    away = setup_university(client, admin)
    first = create_event(client, home["token"], "public")
    second = create_event(client, home["token"], "public")

    assert client.delete(f"/events/{first}", headers=auth_header(away["token"])).status_code == 403

    assert client.delete(f"/events/{first}", headers=auth_header(home["token"])).status_code == 200
    assert client.delete(f"/events/{second}", headers=auth_header(admin)).status_code == 200

    assert count_rows(db, Event) == 0
    assert client.get(f"/events/{first}", headers=auth_header(admin)).status_code == 404


def test_public_event_requires_active_standing(client, db):
    admin = admin_token(client, db)

    # 대학 등록 전 / 승인 전 대학 계정은 public 이벤트를 게시할 수 없음
    no_university = register_and_login(client, "university")
    assert _post(client, no_university["token"], event_body("public")).status_code == 403

    pending_university = setup_university(client, admin, approve=False)
    r = _post(client, pending_university["token"], event_body("public"))
    assert r.status_code == 403

    university = setup_university(client, admin)
    assert _post(client, university["token"], event_body("public")).status_code == 201


def test_public_event_requires_active_rso(client, db):
    admin = admin_token(client, db)
    university = setup_university(client, admin)
    creator = setup_student(client, university)
    rso_id = setup_rso(client, creator, university, approve=False)

    # 동아리 생성으로 rso_admin 이 되었지만 아직 승인 전
    assert _post(client, creator["token"], event_body("public")).status_code == 403

    ok = client.post(f"/rsos/{rso_id}/approve", headers=auth_header(university["token"]))
    assert ok.status_code == 200, ok.text
    assert _post(client, creator["token"], event_body("public")).status_code == 201

    viewer = setup_student(client, university)
    r = client.get("/events", headers=auth_header(viewer["token"]))
    assert r.json()["meta"]["count"] == 1


def test_moving_rso_event_to_another_rso_follows_its_university(client, db):
    admin = admin_token(client, db)
    home = setup_university(client, admin)
    away = setup_university(client, admin)
    home_rso = setup_rso(client, setup_student(client, home), home)
    away_rso = setup_rso(client, setup_student(client, away), away)

    event_id = create_event(client, admin, "rso", rso_id=home_rso)

    r = client.patch(f"/events/{event_id}", headers=auth_header(admin), json={"rso_id": away_rso})
    assert r.status_code == 200, r.text
    assert r.json()["data"]["rso_id"] == away_rso
    assert r.json()["data"]["university_id"] == away["university_id"]
