from app.models import AdminUser
from app.services.auth_service import auth_service
from app.utils.security import create_access_token, verify_password

from conftest import ADMIN_PASSWORD, ADMIN_USERNAME

LOGIN = "/api/v1/auth/login"


def test_login_returns_bearer_token(client, admin):
    resp = client.post(LOGIN, json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["tokenType"] == "Bearer"
    assert data["expiresIn"] > 0
    assert data["admin"]["username"] == ADMIN_USERNAME

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {data['accessToken']}"})
    assert me.status_code == 200
    assert me.json()["data"]["id"] == admin.id


def test_wrong_password(client, admin):
    resp = client.post(LOGIN, json={"username": ADMIN_USERNAME, "password": "wrong"})
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "UNAUTHORIZED"


def test_unknown_user(client):
    resp = client.post(LOGIN, json={"username": "nobody", "password": "whatever"})
    assert resp.status_code == 401


def test_inactive_admin(client, admin, session_factory):
    with session_factory() as db:
        db.get(AdminUser, admin.id).isActive = False
        db.commit()

    resp = client.post(LOGIN, json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "ACCOUNT_INACTIVE"


def test_malformed_token(client):
    resp = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "UNAUTHORIZED"


def test_expired_token(client, admin):
    token, _ = create_access_token(admin.id, expires_minutes=-1)
    resp = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "TOKEN_EXPIRED"


def test_token_of_deleted_admin(client, admin, session_factory):
    token, _ = create_access_token(admin.id)
    with session_factory() as db:
        db.delete(db.get(AdminUser, admin.id))
        db.commit()

    resp = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_create_or_reset_admin(session_factory):
    with session_factory() as db:
        admin, created = auth_service.create_or_reset_admin(db, "editor", "FirstPass1")
        assert created is True
        assert verify_password("FirstPass1", admin.password)

        admin.isActive = False
        db.commit()

        again, created = auth_service.create_or_reset_admin(db, "editor", "SecondPass2")
        assert created is False
        assert again.id == admin.id
        assert again.isActive is True
        assert verify_password("SecondPass2", again.password)


def test_create_admin_cli(monkeypatch, session_factory, count_rows):
    from app import create_admin

    monkeypatch.setattr(create_admin, "SessionLocal", session_factory)

    assert create_admin.main(["owner", "short"]) == 1
    assert count_rows(AdminUser) == 0

    assert create_admin.main(["owner", "LongEnough1"]) == 0
    assert create_admin.main(["owner", "LongEnough2"]) == 0
    assert count_rows(AdminUser) == 1
