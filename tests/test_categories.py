from __future__ import annotations

import uuid

from conftest import USER_A, USER_B, auth_headers


def test_create_category_with_defaults(client):
    resp = client.post("/api/categories", json={"name": "  Groceries  "}, headers=auth_headers())
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Category created successfully"
    category = body["category"]
    assert category["name"] == "Groceries"
    assert category["color"] == "#95A5A6"
    assert category["icon"] == "📌"
    assert category["userId"] == USER_A
    uuid.UUID(category["id"])


def test_duplicate_name_is_case_insensitive(client, make_category):
    make_category("Groceries")
    resp = client.post("/api/categories", json={"name": "groceries"}, headers=auth_headers())
    assert resp.status_code == 409
    assert resp.json() == {"error": "A category with this name already exists"}


def test_same_name_allowed_for_different_users(client, make_category):
    make_category("Groceries", user=USER_A)
    other = make_category("Groceries", user=USER_B)
    assert other["userId"] == USER_B


def test_blank_name_is_rejected(client):
    resp = client.post("/api/categories", json={"name": "   "}, headers=auth_headers())
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_list_is_scoped_and_newest_first(client, make_category):
    make_category("First")
    make_category("Second")
    make_category("Elsewhere", user=USER_B)

    resp = client.get("/api/categories", headers=auth_headers())
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert [c["name"] for c in body["categories"]] == ["Second", "First"]


def test_get_foreign_category_is_not_found(client, make_category):
    category = make_category("Private", user=USER_B)
    resp = client.get(f"/api/categories/{category['id']}", headers=auth_headers(USER_A))
    assert resp.status_code == 404
    assert resp.json() == {"error": "Category not found"}

    own = client.get(f"/api/categories/{category['id']}", headers=auth_headers(USER_B))
    assert own.status_code == 200
    assert own.json()["name"] == "Private"


def test_seed_defaults_skips_existing_names(client, make_category):
    make_category("travel")

    resp = client.post("/api/categories/defaults", headers=auth_headers())
    assert resp.status_code == 201
    body = resp.json()
    assert body["created"] == 9
    names = {c["name"] for c in body["categories"]}
    assert "Travel" not in names
    assert {"Food & Dining", "Other", "Bills & Utilities"} <= names

    again = client.post("/api/categories/defaults", headers=auth_headers())
    assert again.status_code == 201
    assert again.json()["created"] == 0

    listing = client.get("/api/categories", headers=auth_headers()).json()
    assert listing["count"] == 10


def test_name_is_trimmed_before_length_check(client):
    name = "x" * 100
    resp = client.post("/api/categories", json={"name": f"  {name}  "}, headers=auth_headers())
    assert resp.status_code == 201
    assert resp.json()["category"]["name"] == name

    too_long = client.post("/api/categories", json={"name": "y" * 101}, headers=auth_headers())
    assert too_long.status_code == 400
