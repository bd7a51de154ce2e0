import pytest
from sqlalchemy import select

from app.models.user import User, Role
from scripts.create_admin import create_admin
from tests.helpers import PASSWORD, auth_header, login, register_and_login


def test_create_admin_once(client, db):
    admin = create_admin(db, email="root@campus.edu", password=PASSWORD)
    assert admin is not None
    assert admin.role == Role.ADMIN

    # 두 번째 실행은 아무것도 만들지 않음
    assert create_admin(db, email="second@campus.edu", password=PASSWORD) is None
    assert db.scalar(select(User.id).where(User.email == "second@campus.edu")) is None

    token = login(client, "root@campus.edu")
    me = client.get("/users/me", headers=auth_header(token))
    assert me.json()["data"]["role"] == "admin"


def test_create_admin_refuses_existing_non_admin_email(client, db):
    user = register_and_login(client, "student")

    with pytest.raises(RuntimeError):
        create_admin(db, email=user["email"], password=PASSWORD)
