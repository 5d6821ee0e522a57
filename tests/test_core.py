from datetime import timedelta

import pytest

from core.errors import UnauthorizedError
from core.pagination import paginate
from core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from models.user import User


def test_hash_and_verify_password():
    hashed = hash_password("secret1")
    assert hashed.startswith("$pbkdf2-sha256$")
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)


def test_verify_password_malformed_hash():
    assert verify_password("secret1", "not-a-hash") is False


def test_token_round_trip():
    token = create_access_token("user-1", "admin")
    payload = decode_access_token(token)
    assert payload["sub"] == "user-1"
    assert payload["role"] == "admin"


def test_expired_token_is_rejected():
    token = create_access_token("user-1", "admin", expires_delta=timedelta(minutes=-1))
    with pytest.raises(UnauthorizedError):
        decode_access_token(token)


def test_paginate_past_last_page(db, make_user):
    for i in range(3):
        make_user(email=f"u{i}@example.com")

    items, meta = paginate(db.query(User).order_by(User.email), page=2, per_page=2)
    assert [u.email for u in items] == ["u2@example.com"]
    assert meta == {"current_page": 2, "per_page": 2, "total": 3, "last_page": 2, "from": 3, "to": 3}

    items, meta = paginate(db.query(User), page=5, per_page=2)
    assert items == []
    assert meta["from"] is None and meta["to"] is None


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_unknown_route_renders_json_error(client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Not Found"}
