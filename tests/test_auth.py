from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import OperationalError

from jobboard.core.sessions import utcnow
from jobboard.db.schema import sessions, users


def register(client, email="alice@example.com", password="secret1", name="Alice"):
    return client.post("/api/auth/register", json={"email": email, "password": password, "name": name})


def test_register_logs_in_new_user(client, settings):
    resp = register(client)
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Registration successful"
    assert body["user"]["email"] == "alice@example.com"
    assert body["user"]["role"] == "user"
    assert "password_hash" not in body["user"]
    assert settings.session_cookie_name in resp.cookies

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["user"]["name"] == "Alice"


def test_session_cookie_is_http_only(client):
    resp = register(client)
    cookie = resp.headers["set-cookie"].lower()
    assert "httponly" in cookie
    assert "max-age=86400" in cookie
    assert "secure" not in cookie


def test_duplicate_email_rejected(client, db):
    assert register(client).status_code == 201
    resp = register(TestClient(client.app), password="another1")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Email already registered"}

    with db.connection() as conn:
        count = conn.execute(
            select(func.count()).select_from(users).where(users.c.email == "alice@example.com")
        ).scalar()
    assert count == 1


def test_register_validation(client):
    resp = client.post("/api/auth/register", json={"email": "a@x.com", "password": "secret1"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing required fields"

    resp = register(client, password="12345")
    assert resp.status_code == 400
    assert resp.json()["error"] == "Password must be at least 6 characters"


def test_malformed_body_is_400(client):
    resp = client.post("/api/auth/register", content="not json", headers={"content-type": "application/json"})
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_login_success_and_password_mutation(client):
    register(client)
    fresh = TestClient(client.app)

    ok = fresh.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret1"})
    assert ok.status_code == 200
    assert ok.json()["message"] == "Login successful"
    assert ok.json()["user"] == {"id": ok.json()["user"]["id"], "email": "alice@example.com",
                                 "name": "Alice", "role": "user"}

    for bad in ("secret2", "Secret1", "secret", "secret1x"):
        resp = TestClient(client.app).post("/api/auth/login", json={"email": "alice@example.com", "password": bad})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Invalid email or password"}


def test_unknown_email_same_error_as_wrong_password(client):
    resp = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "whatever"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid email or password"}


def test_login_requires_both_fields(client):
    resp = client.post("/api/auth/login", json={"email": "alice@example.com"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Email and password required"


def test_login_replaces_previous_session(client, db):
    register(client)
    client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret1"})
    with db.connection() as conn:
        count = conn.execute(select(func.count()).select_from(sessions)).scalar()
    assert count == 1


def test_me_requires_session(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Not authenticated"}


def test_logout_destroys_session(client):
    register(client)
    resp = client.post("/api/auth/logout")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Logged out successfully"}
    assert client.get("/api/auth/me").status_code == 401


def test_logout_without_session_is_ok(client):
    assert client.post("/api/auth/logout").status_code == 200


def test_logout_store_failure_is_500(client, app, monkeypatch):
    register(client)

    def broken_destroy(token):
        raise OperationalError("DELETE FROM sessions", {}, Exception("database is locked"))

    monkeypatch.setattr(app.state.sessions, "destroy", broken_destroy)
    resp = client.post("/api/auth/logout")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to logout"}


def test_me_with_deleted_user_drops_session(client, db):
    user_id = register(client).json()["user"]["id"]
    with db.transaction() as conn:
        conn.execute(delete(users).where(users.c.id == user_id))

    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"error": "User not found"}
    with db.connection() as conn:
        assert conn.execute(select(func.count()).select_from(sessions)).scalar() == 0


def test_expired_session_is_rejected(client, db):
    register(client)
    with db.transaction() as conn:
        conn.execute(update(sessions).values(expires_at=utcnow() - timedelta(seconds=1)))

    assert client.get("/api/auth/me").status_code == 401
    with db.connection() as conn:
        assert conn.execute(select(func.count()).select_from(sessions)).scalar() == 0


def test_password_stored_as_salted_hash(client, db):
    register(client)
    register(TestClient(client.app), email="bob@example.com", name="Bob")
    with db.connection() as conn:
        hashes = conn.execute(
            select(users.c.password_hash).where(users.c.email.in_(["alice@example.com", "bob@example.com"]))
        ).scalars().all()
    assert len(hashes) == 2
    assert all(h.startswith("$2") for h in hashes)
    assert hashes[0] != hashes[1]


def test_error_body_is_documented(client):
    doc = client.get("/openapi.json").json()
    assert "ErrorResponse" in doc["components"]["schemas"]

    admin_get = doc["paths"]["/api/admin/applications"]["get"]["responses"]
    ref = admin_get["403"]["content"]["application/json"]["schema"]["$ref"]
    assert ref.endswith("/ErrorResponse")
    login = doc["paths"]["/api/auth/login"]["post"]["responses"]
    assert login["401"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
