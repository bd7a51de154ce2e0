"""

이벤트 노출 범위(visibility) 통합 테스트.
- public : 모든 인증 사용자 (대학 계정 포함)
- private : 해당 대학의 active 학생만 (pending 학생은 안 보임)
- rso : 해당 동아리의 active 회원만 (가입 승인 직후부터 보임)
- 대학 / 동아리 관리자 조회 범위, 권한 없는 조회는 403, 결과 없음은 빈 목록

"""

from tests.helpers import (
    admin_token,
    auth_header,
    create_event,
    register_and_login,
    setup_rso,
    setup_student,
    setup_university,
    visible_event_ids,
)


def _world(client, db):
    """대학 두 곳, 동아리 하나, 이벤트 (public / private / rso / 다른 대학 private)"""
    admin = admin_token(client, db)
    home = setup_university(client, admin)
    away = setup_university(client, admin)
    rso_admin = setup_student(client, home)
    rso_id = setup_rso(client, rso_admin, home)

    events = {
        "public": create_event(client, home["token"], "public", university_id=home["university_id"]),
        "private": create_event(client, home["token"], "private", university_id=home["university_id"]),
        "rso": create_event(client, rso_admin["token"], "rso", rso_id=rso_id),
        "away_private": create_event(client, away["token"], "private", university_id=away["university_id"]),
    }
    return {
        "admin": admin,
        "home": home,
        "away": away,
        "rso_admin": rso_admin,
        "rso_id": rso_id,
        "events": events,
    }


def test_public_events_are_visible_to_every_role(client, db):
    w = _world(client, db)
    outsider = register_and_login(client, "student")

    for token in (outsider["token"], w["away"]["token"], w["home"]["token"], w["admin"]):
        assert w["events"]["public"] in visible_event_ids(client, token)


def test_pending_student_sees_only_public(client, db):
    w = _world(client, db)
    pending = setup_student(client, w["home"], approve=False)

    assert visible_event_ids(client, pending["token"]) == {w["events"]["public"]}

    r = client.get(f"/events/{w['events']['private']}", headers=auth_header(pending["token"]))
    assert r.status_code == 404


def test_active_student_sees_own_university_private_events(client, db):
    w = _world(client, db)
    student = setup_student(client, w["home"])

    ids = visible_event_ids(client, student["token"])
    assert ids == {w["events"]["public"], w["events"]["private"]}
    assert w["events"]["away_private"] not in ids
    assert w["events"]["rso"] not in ids


def test_rso_event_visible_right_after_membership_approval(client, db):
    w = _world(client, db)
    student = setup_student(client, w["home"])

    join = client.post(f"/rsos/{w['rso_id']}/join", headers=auth_header(student["token"]))
    assert join.status_code == 201, join.text
    membership_id = join.json()["data"]["membership_id"]

    # 가입 신청만 한 상태에서는 안 보임
    assert w["events"]["rso"] not in visible_event_ids(client, student["token"])

    ok = client.post(
        f"/rsos/memberships/{membership_id}/approve", headers=auth_header(w["rso_admin"]["token"])
    )
    assert ok.status_code == 200, ok.text

    ids = visible_event_ids(client, student["token"])
    assert w["events"]["rso"] in ids

    r = client.get(f"/events/{w['events']['rso']}", headers=auth_header(student["token"]))
    assert r.status_code == 200
    assert r.json()["data"]["visibility"] == "rso"


def test_student_listing_has_no_duplicates(client, db):
    w = _world(client, db)
    student = setup_student(client, w["home"])
    membership_id = client.post(
        f"/rsos/{w['rso_id']}/join", headers=auth_header(student["token"])
    ).json()["data"]["membership_id"]
    client.post(f"/rsos/memberships/{membership_id}/approve", headers=auth_header(w["rso_admin"]["token"]))

    # rso 이벤트는 소속 대학 이벤트이기도 하지만 한 번만 나와야 함
    r = client.get("/events", headers=auth_header(student["token"]))
    ids = [e["id"] for e in r.json()["data"]]
    assert len(ids) == len(set(ids)) == 3
    assert r.json()["meta"]["count"] == 3


def test_student_listing_filters(client, db):
    w = _world(client, db)
    student = setup_student(client, w["home"])

    r = client.get(
        "/events",
        params={"university_id": w["away"]["university_id"]},
        headers=auth_header(student["token"]),
    )
    assert r.status_code == 200
    # 필터를 걸어도 볼 수 없는 이벤트는 나오지 않음
    assert r.json()["data"] == []

    r = client.get("/events", params={"rso_id": w["rso_id"]}, headers=auth_header(student["token"]))
    assert r.json()["data"] == []


def test_university_scope_is_limited_to_owned_university(client, db):
    w = _world(client, db)

    home_ids = visible_event_ids(client, w["home"]["token"], "/events/university")
    assert home_ids == {w["events"]["public"], w["events"]["private"], w["events"]["rso"]}

    away_ids = visible_event_ids(client, w["away"]["token"], "/events/university")
    assert away_ids == {w["events"]["away_private"]}


def test_rso_admin_scope(client, db):
    w = _world(client, db)

    ids = visible_event_ids(client, w["rso_admin"]["token"], "/events/rso-admin")
    assert ids == {w["events"]["rso"]}

    # 동아리가 아직 승인되지 않은 관리자는 빈 목록 (403 아님)
    newcomer = setup_student(client, w["home"])
    setup_rso(client, newcomer, w["home"], approve=False)
    r = client.get("/events/rso-admin", headers=auth_header(newcomer["token"]))
    assert r.status_code == 200
    assert r.json()["data"] == []


def test_scope_with_wrong_role_is_forbidden(client, db):
    w = _world(client, db)
    student = setup_student(client, w["home"])

    assert client.get("/events/university", headers=auth_header(student["token"])).status_code == 403
    assert client.get("/events/rso-admin", headers=auth_header(student["token"])).status_code == 403
    assert client.get("/events/rso-admin", headers=auth_header(w["home"]["token"])).status_code == 403


def test_admin_sees_every_event_by_id(client, db):
    w = _world(client, db)

    for event_id in w["events"].values():
        r = client.get(f"/events/{event_id}", headers=auth_header(w["admin"]))
        assert r.status_code == 200, r.text
