from datetime import timedelta

from core.security import create_access_token, decode_access_token
from models.session_record import SessionRecord
from models.user import User

ANDROID_UA = "Mozilla/5.0 (Linux; Android 13; Pixel 7) AppleWebKit/537.36 Chrome/120.0 Mobile Safari/537.36"


def _register(client, email="a@x.com", password="secret1", role="sales", name="Alice"):
    return client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password, "role": role},
    )


# -- register ----------------------------------------------------------------


def test_register_creates_active_user(client, db):
    resp = _register(client)
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "User registered successfully"
    assert body["user"]["email"] == "a@x.com"
    assert body["user"]["role"] == "sales"
    assert body["user"]["is_active"] is True
    assert "password_hash" not in body["user"]

    user = db.query(User).filter(User.email == "a@x.com").one()
    assert user.password_hash != "secret1"


def test_register_rejects_duplicate_email(client):
    assert _register(client).status_code == 201
    resp = _register(client, name="Other")
    assert resp.status_code == 422
    body = resp.json()
    assert body["success"] is False
    assert "email" in body["errors"]


def test_register_validates_fields(client):
    resp = client.post(
        "/api/auth/register",
        json={"name": "Bob", "email": "not-an-email", "password": "123", "role": "manager"},
    )
    assert resp.status_code == 422
    errors = resp.json()["errors"]
    assert {"email", "password", "role"} <= set(errors)


# -- login -------------------------------------------------------------------


def test_register_then_login_from_android_phone(client, db):
    _register(client)
    resp = client.post(
        "/api/auth/login",
        json={"email": "a@x.com", "password": "secret1"},
        headers={"User-Agent": ANDROID_UA},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["expires_in"] == 60 * 60
    assert body["user"]["email"] == "a@x.com"
    assert body["mata_data"]["device_type"] == "mobile"
    assert body["mata_data"]["device_name"] == "Android Device"
    assert body["mata_data"]["is_logout"] is False

    payload = decode_access_token(body["access_token"])
    assert payload["sub"] == body["user"]["id"]


def test_login_opens_exactly_one_session_record(client, db, make_user):
    user_id = make_user(email="s@x.com", password="secret1")
    resp = client.post("/api/auth/login", json={"email": "s@x.com", "password": "secret1"})
    assert resp.status_code == 200

    records = db.query(SessionRecord).filter(SessionRecord.user_id == user_id).all()
    assert len(records) == 1
    assert records[0].is_logout is False
    assert records[0].logout_time is None
    assert records[0].mata_id == resp.json()["mata_data"]["mata_id"]


def test_login_uses_supplied_device_details(client, make_user):
    make_user(email="s@x.com", password="secret1")
    resp = client.post(
        "/api/auth/login",
        json={
            "email": "s@x.com",
            "password": "secret1",
            "device_name": "Front desk kiosk",
            "device_type": "tablet",
        },
        headers={"User-Agent": ANDROID_UA},
    )
    assert resp.status_code == 200
    assert resp.json()["mata_data"]["device_name"] == "Front desk kiosk"
    assert resp.json()["mata_data"]["device_type"] == "tablet"


def test_login_wrong_password(client, make_user):
    make_user(email="s@x.com", password="secret1")
    resp = client.post("/api/auth/login", json={"email": "s@x.com", "password": "wrong-one"})
    assert resp.status_code == 401
    assert resp.json() == {"success": False, "error": "Password does not match"}


def test_login_unknown_email(client):
    resp = client.post("/api/auth/login", json={"email": "nobody@x.com", "password": "secret1"})
    assert resp.status_code == 404
    assert resp.json()["error"] == "User not found"


def test_login_inactive_user_is_forbidden_whatever_the_password(client, db, make_user):
    user_id = make_user(email="s@x.com", password="secret1", is_active=False)
    for password in ("secret1", "wrong-one"):
        resp = client.post("/api/auth/login", json={"email": "s@x.com", "password": password})
        assert resp.status_code == 403
        assert resp.json()["error"] == "User account is inactive"

    assert db.query(SessionRecord).filter(SessionRecord.user_id == user_id).count() == 0


# -- me / refresh --------------------------------------------------------------


def test_me_returns_caller(client, sales):
    resp = client.get("/api/auth/me", headers=sales.headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == sales.id
    assert resp.json()["email"] == "sales@example.com"


def test_me_requires_token(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"success": False, "error": "Unauthorized"}


def test_me_rejects_garbage_token(client):
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
    assert resp.status_code == 401


def test_me_rejects_expired_token(client, sales):
    token = create_access_token(sales.id, "sales", expires_delta=timedelta(seconds=-5))
    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_refresh_issues_new_token_without_session(client, db, sales):
    resp = client.post("/api/auth/refresh", headers=sales.headers)
    assert resp.status_code == 200
    body = resp.json()
    assert "mata_data" not in body
    assert decode_access_token(body["access_token"])["sub"] == sales.id
    assert db.query(SessionRecord).count() == 0


def test_deactivated_user_token_is_refused(client, db, sales):
    user = db.query(User).filter(User.id == sales.id).one()
    user.is_active = False
    db.commit()

    resp = client.get("/api/auth/me", headers=sales.headers)
    assert resp.status_code == 403
    assert resp.json()["error"] == "User account is inactive"


# -- logout --------------------------------------------------------------------


def test_logout_closes_session_and_repeats_are_noops(client, db, make_user):
    make_user(email="s@x.com", password="secret1")
    login = client.post("/api/auth/login", json={"email": "s@x.com", "password": "secret1"})
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    first = client.post("/api/auth/logout", headers=headers)
    assert first.status_code == 200
    assert first.json() == {"message": "Successfully logged out"}

    record = db.query(SessionRecord).one()
    assert record.is_logout is True
    assert record.logout_time is not None
    closed_at = record.logout_time

    second = client.post("/api/auth/logout", headers=headers)
    assert second.status_code == 200

    db.expire_all()
    record = db.query(SessionRecord).one()
    assert record.logout_time == closed_at


def test_logout_still_works_after_deactivation(client, db, make_user):
    user_id = make_user(email="gone@x.com", password="secret1")
    login = client.post("/api/auth/login", json={"email": "gone@x.com", "password": "secret1"})
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    user = db.query(User).filter(User.id == user_id).one()
    user.is_active = False
    db.commit()

    assert client.get("/api/auth/me", headers=headers).status_code == 403

    resp = client.post("/api/auth/logout", headers=headers)
    assert resp.status_code == 200

    db.expire_all()
    record = db.query(SessionRecord).filter(SessionRecord.user_id == user_id).one()
    assert record.is_logout is True
    assert record.logout_time is not None


def test_logout_requires_token(client):
    assert client.post("/api/auth/logout").status_code == 401
