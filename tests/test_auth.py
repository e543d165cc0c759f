import time

from sqlmodel import Session, select

from salon_booking.auth import create_access_token, ensure_admin
from salon_booking.models import RevokedToken


def login(client, username, password):
    return client.post("/auth/login", data={"username": username, "password": password})


def test_login_and_me(client, session):
    ensure_admin(session, "admin", "secret123")

    res = login(client, "admin", "secret123")
    assert res.status_code == 200
    token = res.json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["username"] == "admin"
    assert me.json()["is_confirmed"] is True


def test_invalid_credentials(client, session):
    ensure_admin(session, "admin", "secret123")

    assert login(client, "admin", "wrong-pass").status_code == 401
    assert login(client, "nobody", "secret123").json()["detail"] == "Invalid credentials"


def test_unconfirmed_account_is_told_apart(client):
    res = client.post(
        "/auth/register",
        json={"username": "nuevo", "password": "abcdef", "confirm_password": "abcdef"},
    )
    assert res.status_code == 201
    assert res.json()["is_confirmed"] is False

    res = login(client, "nuevo", "abcdef")
    assert res.status_code == 403
    assert res.json()["detail"] == "Account not confirmed"


def test_register_validation(client):
    body = {"username": "nuevo", "password": "abcdef", "confirm_password": "abcdeX"}
    assert client.post("/auth/register", json=body).status_code == 422

    body["confirm_password"] = "abcdef"
    assert client.post("/auth/register", json=body).status_code == 201
    assert client.post("/auth/register", json=body).status_code == 409

    short = {"username": "otro", "password": "abc", "confirm_password": "abc"}
    assert client.post("/auth/register", json=short).status_code == 422


def test_admin_confirms_new_account(admin_client):
    user_id = admin_client.post(
        "/auth/register",
        json={"username": "nuevo", "password": "abcdef", "confirm_password": "abcdef"},
    ).json()["id"]

    res = admin_client.post(f"/admin/users/{user_id}/confirm")

    assert res.status_code == 200
    assert res.json()["is_confirmed"] is True
    assert login(admin_client, "nuevo", "abcdef").status_code == 200


def test_unconfirmed_token_cannot_reach_admin_routes(client, session):
    client.post(
        "/auth/register",
        json={"username": "nuevo", "password": "abcdef", "confirm_password": "abcdef"},
    )
    token = create_access_token({"sub": "nuevo"})

    res = client.get("/admin/dashboard", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 403


def test_logout_revokes_token(admin_client):
    assert admin_client.get("/auth/me").status_code == 200

    assert admin_client.post("/auth/logout").status_code == 204

    res = admin_client.get("/auth/me")
    assert res.status_code == 401
    assert res.json()["detail"] == "Token revoked"


def test_garbage_token(client):
    res = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid token"


def test_logout_prunes_expired_revocations(admin_client, session, engine):
    session.add(RevokedToken(jti="stale", expires_at=int(time.time()) - 60))
    session.commit()

    assert admin_client.post("/auth/logout").status_code == 204

    with Session(engine) as fresh:
        rows = fresh.exec(select(RevokedToken)).all()
    assert [r.jti for r in rows if r.jti == "stale"] == []
    assert len(rows) == 1
    assert rows[0].expires_at > time.time()
