"""Admin-only access and the create-admin command."""
from __future__ import annotations

import pytest

from catalog_admin.app import create_app
from catalog_admin.extensions import db
from catalog_admin.models import User


@pytest.fixture
def secured_app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "SECRET_KEY": "test",
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "UPLOAD_FOLDER": str(tmp_path / "uploads"),
            "LOGIN_DISABLED": False,
            "BCRYPT_LOG_ROUNDS": 4,
        }
    )
    with app.app_context():
        db.create_all()
        for username, is_admin in (("boss", True), ("clerk", False)):
            user = User(username=username, is_admin=is_admin)
            user.set_password("s3cret")
            db.session.add(user)
        db.session.commit()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def secured_client(secured_app):
    return secured_app.test_client()


def _login(client, username, password="s3cret"):
    return client.post("/admin/login", json={"username": username, "password": password})


def test_anonymous_request_is_unauthorized(secured_client):
    resp = secured_client.post("/admin/products/grid", json={})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Authentication required"}


def test_wrong_password(secured_client):
    assert _login(secured_client, "boss", "nope").status_code == 401


def test_non_admin_is_forbidden(secured_client):
    assert _login(secured_client, "clerk").status_code == 200

    resp = secured_client.post("/admin/products/grid", json={})

    assert resp.status_code == 403


def test_admin_can_use_grid_until_logout(secured_client):
    login = _login(secured_client, "boss")
    assert login.status_code == 200
    assert login.get_json()["is_admin"] is True

    assert secured_client.post("/admin/products/grid", json={}).status_code == 200
    assert secured_client.get("/admin/products/1").status_code == 404

    assert secured_client.post("/admin/logout").status_code == 204
    assert secured_client.post("/admin/products/grid", json={}).status_code == 401


def test_create_admin_command(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["create-admin", "--username", "root", "--password", "pw"])

    assert "Admin ready: root" in result.output
    user = User.query.filter_by(username="root").one()
    assert user.is_admin is True
    assert user.check_password("pw")


def test_create_admin_requires_force_for_existing_user(app):
    runner = app.test_cli_runner()
    runner.invoke(args=["create-admin", "--username", "root", "--password", "pw"])

    result = runner.invoke(args=["create-admin", "--username", "root", "--password", "other"])
    assert "already exists" in result.output

    result = runner.invoke(args=["create-admin", "--username", "root", "--password", "other", "--force"])
    assert "Admin ready" in result.output
    db.session.expire_all()
    assert User.query.filter_by(username="root").one().check_password("other")
