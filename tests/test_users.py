from core.security import verify_password
from models.user import User


def _password_body(old, new, again=None):
    return {
        "old_password": old,
        "new_password": new,
        "reenter_new_password": new if again is None else again,
    }


# -- listing / search ------------------------------------------------------------


def test_list_users_paginated(client, admin, sales, make_user):
    for i in range(3):
        make_user(email=f"extra{i}@example.com", name=f"Extra {i}")

    resp = client.get("/api/admin/sales", params={"per_page": 2}, headers=sales.headers)
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["data"]) == 2
    assert body["pagination"] == {
        "current_page": 1,
        "per_page": 2,
        "total": 5,
        "last_page": 3,
        "from": 1,
        "to": 2,
    }
    assert all("password_hash" not in u for u in body["data"])


def test_list_users_filters(client, admin, sales, make_user):
    make_user(email="off@example.com", is_active=False)

    admins = client.get("/api/admin/sales", params={"role": "admin"}, headers=admin.headers).json()
    assert [u["email"] for u in admins["data"]] == ["admin@example.com"]

    inactive = client.get("/api/admin/sales", params={"is_active": "false"}, headers=admin.headers).json()
    assert [u["email"] for u in inactive["data"]] == ["off@example.com"]


def test_list_users_rejects_oversized_page(client, admin):
    resp = client.get("/api/admin/sales", params={"per_page": 500}, headers=admin.headers)
    assert resp.status_code == 422


def test_search_users(client, admin, sales, make_user):
    make_user(email="jane.doe@example.com", name="Jane Doe")

    resp = client.get("/api/admin/sales/search", params={"q": "JANE"}, headers=admin.headers)
    assert resp.status_code == 200
    assert [u["name"] for u in resp.json()["data"]] == ["Jane Doe"]


def test_search_requires_query(client, admin):
    resp = client.get("/api/admin/sales/search", params={"q": "   "}, headers=admin.headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Search query is required"
    assert "q" in resp.json()["errors"]


def test_get_user(client, admin, sales):
    resp = client.get(f"/api/admin/sales/{sales.id}", headers=admin.headers)
    assert resp.json()["data"]["email"] == "sales@example.com"

    assert client.get("/api/admin/sales/missing", headers=admin.headers).status_code == 404


def test_directory_requires_token(client):
    assert client.get("/api/admin/sales").status_code == 401


# -- status ----------------------------------------------------------------------


def test_update_status_of_another_user(client, db, admin, sales):
    resp = client.put(f"/api/admin/sales/{sales.id}/status", json={"is_active": False}, headers=admin.headers)
    assert resp.status_code == 200
    assert resp.json()["user"]["is_active"] is False
    assert db.query(User).filter(User.id == sales.id).one().is_active is False

    # the deactivated user can no longer log in
    login = client.post("/api/auth/login", json={"email": "sales@example.com", "password": "salespass"})
    assert login.status_code == 403


def test_admin_cannot_change_own_status(client, db, admin):
    resp = client.put(f"/api/admin/sales/{admin.id}/status", json={"is_active": False}, headers=admin.headers)
    assert resp.status_code == 403
    assert resp.json()["message"] == "You cannot modify your own status"
    assert db.query(User).filter(User.id == admin.id).one().is_active is True


def test_sales_cannot_change_own_status(client, sales):
    resp = client.put(f"/api/admin/sales/{sales.id}/status", json={"is_active": True}, headers=sales.headers)
    assert resp.status_code == 403


def test_update_status_unknown_user(client, admin):
    resp = client.put("/api/admin/sales/missing/status", json={"is_active": False}, headers=admin.headers)
    assert resp.status_code == 404


# -- password --------------------------------------------------------------------


def test_update_password(client, db, admin, sales):
    resp = client.put(
        f"/api/admin/sales/{sales.id}/password",
        json=_password_body("salespass", "newpass1"),
        headers=admin.headers,
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "Password updated successfully"

    user = db.query(User).filter(User.id == sales.id).one()
    assert verify_password("newpass1", user.password_hash)

    login = client.post("/api/auth/login", json={"email": "sales@example.com", "password": "newpass1"})
    assert login.status_code == 200


def test_update_password_confirmation_mismatch(client, admin, sales):
    resp = client.put(
        f"/api/admin/sales/{sales.id}/password",
        json=_password_body("salespass", "newpass1", again="newpass2"),
        headers=admin.headers,
    )
    assert resp.status_code == 422
    assert resp.json()["errors"]["reenter_new_password"] == ["New password and re-entered password must match"]


def test_update_password_too_short(client, admin, sales):
    resp = client.put(
        f"/api/admin/sales/{sales.id}/password",
        json=_password_body("salespass", "abc"),
        headers=admin.headers,
    )
    assert resp.status_code == 422
    assert "new_password" in resp.json()["errors"]


def test_update_password_wrong_old_password(client, admin, sales):
    resp = client.put(
        f"/api/admin/sales/{sales.id}/password",
        json=_password_body("not-it", "newpass1"),
        headers=admin.headers,
    )
    assert resp.status_code == 401
    assert resp.json()["message"] == "Old password is incorrect"


def test_update_password_same_as_current(client, db, admin, sales):
    before = db.query(User).filter(User.id == sales.id).one().password_hash
    resp = client.put(
        f"/api/admin/sales/{sales.id}/password",
        json=_password_body("salespass", "salespass"),
        headers=admin.headers,
    )
    assert resp.status_code == 422
    assert resp.json()["message"] == "New password cannot be the same as old password"

    db.expire_all()
    assert db.query(User).filter(User.id == sales.id).one().password_hash == before


# -- dashboards ------------------------------------------------------------------


def test_dashboards_are_role_gated(client, admin, sales):
    assert client.get("/api/admin/dashboard", headers=admin.headers).json() == {"message": "Admin Dashboard"}
    assert client.get("/api/sales/dashboard", headers=admin.headers).status_code == 200
    assert client.get("/api/sales/dashboard", headers=sales.headers).json() == {"message": "Sales Dashboard"}

    denied = client.get("/api/admin/dashboard", headers=sales.headers)
    assert denied.status_code == 403
    assert denied.json() == {"success": False, "error": "Forbidden - Insufficient permissions"}
