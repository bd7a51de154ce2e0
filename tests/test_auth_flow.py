"""

인증 기본 플로우 통합 테스트.
- 회원가입(대학 / 학생) → 로그인 → 본인 정보 조회,
  중복 이메일 / 잘못된 비밀번호, 회원 탈퇴(연쇄 삭제 / 관리자 금지)까지 검증한다.

"""

from app.models.student import Student
from app.models.user import User
from tests.helpers import (
    PASSWORD,
    admin_token,
    auth_header,
    count_rows,
    create_admin_in_db,
    login,
    register_and_login,
    setup_student,
    setup_university,
    unique_email,
)


def test_register_login_me_flow(client):
    email = unique_email("student")
    reg = client.post("/auth/register", json={"email": email, "password": PASSWORD})
    assert reg.status_code == 201, reg.text
    assert reg.json()["data"]["role"] == "student"

    r = client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert r.status_code == 200, r.text
    body = r.json()["data"]
    assert body["token_type"] == "bearer"
    assert body["user"]["role"] == "student"

    me = client.get("/users/me", headers=auth_header(body["access_token"]))
    assert me.status_code == 200, me.text
    assert me.json()["data"]["email"] == email
    assert me.json()["data"]["student"] is None
    assert me.json()["data"]["university"] is None


def test_register_rejects_admin_role_and_duplicate_email(client):
    email = unique_email("dup")
    r = client.post("/auth/register", json={"email": email, "password": PASSWORD, "role": "admin"})
    assert r.status_code == 422

    ok = client.post("/auth/register", json={"email": email, "password": PASSWORD, "role": "university"})
    assert ok.status_code == 201, ok.text

    dup = client.post("/auth/register", json={"email": email, "password": PASSWORD})
    assert dup.status_code == 409
    assert dup.json()["detail"] == "Email already registered"


def test_login_with_wrong_password_is_401(client):
    user = register_and_login(client, "student")

    r = client.post("/auth/login", json={"email": user["email"], "password": "wrong-password"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid credentials"


def test_protected_route_requires_valid_token(client):
    assert client.get("/users/me").status_code == 401

    r = client.get("/users/me", headers=auth_header("not-a-jwt"))
    assert r.status_code == 401
    assert r.json()["detail"] == "Could not validate credentials"


def test_me_shows_registration_status(client, db):
    admin = admin_token(client, db)
    university = setup_university(client, admin)
    student = setup_student(client, university, approve=False)

    me = client.get("/users/me", headers=auth_header(student["token"]))
    assert me.status_code == 200, me.text
    assert me.json()["data"]["student"]["status"] == "pending"

    mine = client.get("/students/me", headers=auth_header(student["token"]))
    assert mine.status_code == 200
    assert mine.json()["message"] == "Student is pending"


def test_edit_account_requires_current_password(client):
    user = register_and_login(client, "student")
    new_email = unique_email("renamed")

    bad = client.patch(
        "/users/me",
        headers=auth_header(user["token"]),
        json={"email": new_email, "current_password": "nope-nope"},
    )
    assert bad.status_code == 401

    ok = client.patch(
        "/users/me",
        headers=auth_header(user["token"]),
        json={"email": new_email, "current_password": PASSWORD},
    )
    assert ok.status_code == 200, ok.text
    assert login(client, new_email)


def test_delete_me_removes_student_record(client, db):
    admin = admin_token(client, db)
    university = setup_university(client, admin)
    student = setup_student(client, university)

    r = client.request(
        "DELETE",
        "/users/me",
        headers=auth_header(student["token"]),
        json={"password": PASSWORD},
    )
    assert r.status_code == 200, r.text
    assert r.json()["message"] == "User and associated data deleted successfully"

    assert count_rows(db, User, User.id == student["user_id"]) == 0
    assert count_rows(db, Student, Student.id == student["student_id"]) == 0

    gone = client.post("/auth/login", json={"email": student["email"], "password": PASSWORD})
    assert gone.status_code == 401


def test_admin_cannot_delete_self(client, db):
    admin = create_admin_in_db(db)
    token = login(client, admin.email)

    r = client.request("DELETE", "/users/me", headers=auth_header(token), json={"password": PASSWORD})
    assert r.status_code == 403
    assert r.json()["detail"] == "Admin users cannot delete themselves"


def test_admin_lists_and_looks_up_users(client, db):
    admin = admin_token(client, db)
    university = setup_university(client, admin)
    student = setup_student(client, university, approve=False)

    r = client.get("/users", headers=auth_header(admin))
    assert r.status_code == 200, r.text
    ids = {u["id"] for u in r.json()["data"]}
    assert {university["user_id"], student["user_id"]} <= ids

    r = client.get("/users", params={"role": "student"}, headers=auth_header(admin))
    assert [u["id"] for u in r.json()["data"]] == [student["user_id"]]

    detail = client.get(f"/users/{student['user_id']}", headers=auth_header(admin))
    assert detail.status_code == 200, detail.text
    assert detail.json()["data"]["student"]["status"] == "pending"

    assert client.get("/users/999999", headers=auth_header(admin)).status_code == 404


def test_user_lookup_is_admin_only(client, db):
    admin = admin_token(client, db)
    university = setup_university(client, admin)

    assert client.get("/users", headers=auth_header(university["token"])).status_code == 403
    r = client.get(f"/users/{university['user_id']}", headers=auth_header(university["token"]))
    assert r.status_code == 403
