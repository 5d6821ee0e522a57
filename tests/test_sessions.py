from datetime import datetime, timedelta, timezone

import pytest

from conftest import auth_headers
from models.session_record import SessionRecord
from sessions.recorder import (
    device_name_from_user_agent,
    device_type_from_user_agent,
    record_login,
    record_logout,
)

IPHONE_UA = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 Mobile/15E148"
IPAD_UA = "Mozilla/5.0 (iPad; CPU OS 17_0 like Mac OS X) AppleWebKit/605.1.15 Safari/604.1"
WINDOWS_UA = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 Chrome/120.0"
MAC_UA = "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) AppleWebKit/605.1.15 Safari/605.1.15"
LINUX_UA = "Mozilla/5.0 (X11; Linux x86_64; rv:120.0) Gecko/20100101 Firefox/120.0"


@pytest.mark.parametrize(
    "user_agent, expected",
    [
        (IPHONE_UA, "iPhone"),
        (IPAD_UA, "iPad"),
        ("Mozilla/5.0 (Linux; Android 13) Mobile", "Android Device"),
        (WINDOWS_UA, "Windows PC"),
        (MAC_UA, "Mac"),
        (LINUX_UA, "Linux PC"),
        ("curl/8.4.0", "Unknown Device"),
        (None, "Unknown Device"),
    ],
)
def test_device_name_from_user_agent(user_agent, expected):
    assert device_name_from_user_agent(user_agent) == expected


@pytest.mark.parametrize(
    "user_agent, expected",
    [
        (IPHONE_UA, "mobile"),
        ("Mozilla/5.0 (Linux; Android 13) Mobile", "mobile"),
        (IPAD_UA, "tablet"),
        ("SomeBrowser (Tablet; rv:1.0)", "tablet"),
        (WINDOWS_UA, "desktop"),
        (None, "desktop"),
    ],
)
def test_device_type_from_user_agent(user_agent, expected):
    assert device_type_from_user_agent(user_agent) == expected


# -- recorder ------------------------------------------------------------------


def _open_record(db, user_id, minutes_ago):
    record = SessionRecord(
        user_id=user_id,
        device_name="Mac",
        device_type="desktop",
        last_login_time=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
        is_logout=False,
    )
    db.add(record)
    db.commit()
    return record.mata_id


def test_record_login_infers_device(db, make_user):
    user_id = make_user()
    record = record_login(db, user_id, IPHONE_UA)
    assert record.device_name == "iPhone"
    assert record.device_type == "mobile"
    assert record.is_logout is False
    assert record.last_login_time is not None


def test_record_logout_closes_only_the_newest_open_record(db, make_user):
    user_id = make_user()
    older = _open_record(db, user_id, minutes_ago=30)
    newer = _open_record(db, user_id, minutes_ago=5)

    closed = record_logout(db, user_id)
    assert closed.mata_id == newer

    rows = {r.mata_id: r for r in db.query(SessionRecord).all()}
    assert rows[newer].is_logout is True
    assert rows[newer].logout_time is not None
    assert rows[older].is_logout is False


def test_record_logout_without_open_record_is_noop(db, make_user):
    user_id = make_user()
    assert record_logout(db, user_id) is None
    assert db.query(SessionRecord).count() == 0


def test_record_logout_ignores_other_users(db, make_user):
    mine = make_user(email="me@example.com")
    theirs = make_user(email="them@example.com")
    other = _open_record(db, theirs, minutes_ago=1)

    assert record_logout(db, mine) is None
    assert db.query(SessionRecord).filter(SessionRecord.mata_id == other).one().is_logout is False


def test_records_are_removed_with_their_user(db, make_user):
    from models.user import User

    user_id = make_user()
    _open_record(db, user_id, minutes_ago=1)
    db.delete(db.query(User).filter(User.id == user_id).one())
    db.commit()
    assert db.query(SessionRecord).count() == 0


# -- /api/mata-data ------------------------------------------------------------


def test_list_records_newest_first_with_owner(client, db, sales):
    older = _open_record(db, sales.id, minutes_ago=30)
    newer = _open_record(db, sales.id, minutes_ago=5)

    resp = client.get("/api/mata-data", headers=sales.headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 2
    assert [r["mata_id"] for r in body["data"]] == [newer, older]
    assert body["data"][0]["user"]["email"] == "sales@example.com"


def test_list_records_filtered_by_user(client, db, admin, sales):
    _open_record(db, sales.id, minutes_ago=3)
    _open_record(db, admin.id, minutes_ago=2)

    resp = client.get("/api/mata-data", params={"user_id": sales.id}, headers=admin.headers)
    assert resp.json()["total"] == 1
    assert resp.json()["data"][0]["user_id"] == sales.id

    by_path = client.get(f"/api/mata-data/user/{sales.id}", headers=admin.headers)
    assert by_path.json()["total"] == 1


def test_active_sessions_excludes_closed(client, db, sales):
    _open_record(db, sales.id, minutes_ago=30)
    _open_record(db, sales.id, minutes_ago=5)
    record_logout(db, sales.id)

    resp = client.get("/api/mata-data/active-sessions", headers=sales.headers)
    assert resp.json()["total"] == 1
    assert all(r["is_logout"] is False for r in resp.json()["data"])


def test_get_record_and_missing(client, db, sales):
    mata_id = _open_record(db, sales.id, minutes_ago=1)
    assert client.get(f"/api/mata-data/{mata_id}", headers=sales.headers).json()["data"]["mata_id"] == mata_id

    missing = client.get("/api/mata-data/does-not-exist", headers=sales.headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Mata data not found"


def test_mata_data_requires_token(client):
    assert client.get("/api/mata-data").status_code == 401


def test_delete_record_is_admin_only(client, db, admin, sales):
    mata_id = _open_record(db, sales.id, minutes_ago=1)

    forbidden = client.delete(f"/api/admin/mata-data/{mata_id}", headers=sales.headers)
    assert forbidden.status_code == 403
    assert forbidden.json()["error"] == "Forbidden - Insufficient permissions"

    resp = client.delete(f"/api/admin/mata-data/{mata_id}", headers=admin.headers)
    assert resp.status_code == 200
    assert db.query(SessionRecord).count() == 0

    again = client.delete(f"/api/admin/mata-data/{mata_id}", headers=admin.headers)
    assert again.status_code == 404


def test_unknown_role_token_is_forbidden(client, make_user):
    # role is re-read from the database, not trusted from the token
    user_id = make_user(email="x@example.com", role="sales")
    resp = client.delete("/api/admin/mata-data/abc", headers=auth_headers(user_id, "admin"))
    assert resp.status_code == 403
