import pytest

PAGES = [
    ("privacy-policy", "Privacy policy"),
    ("about-us", "About us entry"),
    ("terms-and-conditions", "Terms and conditions"),
]


def _create(client, headers, slug, title="Version 1", content="Body text", is_active=True):
    return client.post(
        f"/api/admin/{slug}",
        json={"title": title, "content": content, "is_active": is_active},
        headers=headers,
    )


@pytest.mark.parametrize("slug, label", PAGES)
def test_page_lifecycle(client, admin, slug, label):
    created = _create(client, admin.headers, slug)
    assert created.status_code == 201
    assert created.json()["message"] == f"{label} created successfully"
    page = created.json()["data"]
    assert page["user"]["id"] == admin.id

    fetched = client.get(f"/api/{slug}/{page['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["data"]["title"] == "Version 1"

    updated = client.put(f"/api/admin/{slug}/{page['id']}", json={"title": "Version 2"}, headers=admin.headers)
    assert updated.status_code == 200
    assert updated.json()["data"]["title"] == "Version 2"
    assert updated.json()["data"]["content"] == "Body text"

    deleted = client.delete(f"/api/admin/{slug}/{page['id']}", headers=admin.headers)
    assert deleted.json() == {"success": True, "message": f"{label} deleted successfully"}

    missing = client.get(f"/api/{slug}/{page['id']}")
    assert missing.status_code == 404
    assert missing.json()["message"] == f"{label} not found"


@pytest.mark.parametrize("slug, label", PAGES)
def test_latest_active(client, admin, slug, label):
    none_yet = client.get(f"/api/{slug}/latest/active")
    assert none_yet.status_code == 404
    assert none_yet.json()["message"] == f"No active {label.lower()} found"

    _create(client, admin.headers, slug, title="Draft", is_active=False)
    assert client.get(f"/api/{slug}/latest/active").status_code == 404

    _create(client, admin.headers, slug, title="Live")
    resp = client.get(f"/api/{slug}/latest/active")
    assert resp.status_code == 200
    assert resp.json()["data"]["title"] == "Live"


def test_list_filters_on_active_flag(client, admin):
    _create(client, admin.headers, "privacy-policy", title="Live")
    _create(client, admin.headers, "privacy-policy", title="Draft", is_active=False)

    everything = client.get("/api/privacy-policy").json()
    assert everything["total"] == 2

    drafts = client.get("/api/privacy-policy", params={"is_active": "false"}).json()
    assert [p["title"] for p in drafts["data"]] == ["Draft"]


def test_pages_are_separate_resources(client, admin):
    _create(client, admin.headers, "about-us")
    assert client.get("/api/about-us").json()["total"] == 1
    assert client.get("/api/terms-and-conditions").json()["total"] == 0


def test_page_writes_are_admin_only(client, sales):
    assert _create(client, sales.headers, "about-us").status_code == 403
    assert client.post("/api/admin/about-us", json={"title": "x", "content": "y"}).status_code == 401


def test_create_validates_body(client, admin):
    resp = client.post("/api/admin/terms-and-conditions", json={"title": ""}, headers=admin.headers)
    assert resp.status_code == 422
    assert {"title", "content"} <= set(resp.json()["errors"])
