from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from conftest import USER_B, auth_headers


def test_create_expense_includes_category(client, make_category):
    category = make_category("Food", color="#FF0000", icon="🍔")
    resp = client.post(
        "/api/expenses",
        json={
            "amount": "42.50",
            "categoryId": category["id"],
            "date": "2024-03-15T12:30:00",
            "description": "Lunch",
        },
        headers=auth_headers(),
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Expense created successfully"
    expense = body["expense"]
    assert Decimal(str(expense["amount"])) == Decimal("42.50")
    assert expense["description"] == "Lunch"
    assert expense["date"].startswith("2024-03-15T12:30:00")
    assert expense["category"] == {
        "id": category["id"],
        "name": "Food",
        "color": "#FF0000",
        "icon": "🍔",
    }


def test_create_requires_amount_category_and_date(client, make_category):
    category = make_category()
    missing_date = client.post(
        "/api/expenses",
        json={"amount": "5.00", "categoryId": category["id"]},
        headers=auth_headers(),
    )
    assert missing_date.status_code == 400

    negative = client.post(
        "/api/expenses",
        json={"amount": "-1", "categoryId": category["id"], "date": "2024-01-01T00:00:00"},
        headers=auth_headers(),
    )
    assert negative.status_code == 400
    assert "details" in negative.json()


def test_create_with_foreign_category_is_not_found(client, make_category):
    foreign = make_category("Theirs", user=USER_B)
    resp = client.post(
        "/api/expenses",
        json={"amount": "5.00", "categoryId": foreign["id"], "date": "2024-01-01T00:00:00"},
        headers=auth_headers(),
    )
    assert resp.status_code == 404
    assert resp.json() == {"error": "Category not found"}


def test_other_users_cannot_read_update_or_delete(client, make_category, make_expense):
    expense = make_expense(make_category()["id"])
    url = f"/api/expenses/{expense['id']}"
    other = auth_headers(USER_B)

    assert client.get(url, headers=other).status_code == 404
    assert client.put(url, json={"amount": "1.00"}, headers=other).status_code == 404
    assert client.delete(url, headers=other).status_code == 404
    assert client.get(url, headers=auth_headers()).status_code == 200


def test_partial_update_only_touches_given_fields(client, make_category, make_expense):
    first = make_category("First")
    second = make_category("Second")
    expense = make_expense(first["id"], amount="10.00", description="Original")

    resp = client.put(
        f"/api/expenses/{expense['id']}",
        json={"amount": "12.34", "categoryId": second["id"]},
        headers=auth_headers(),
    )
    assert resp.status_code == 200
    updated = resp.json()["expense"]
    assert Decimal(str(updated["amount"])) == Decimal("12.34")
    assert updated["categoryId"] == second["id"]
    assert updated["category"]["name"] == "Second"
    assert updated["description"] == "Original"
    assert updated["date"] == expense["date"]


def test_update_always_refreshes_updated_at(client, make_category, make_expense):
    expense = make_expense(make_category()["id"], description="Before")

    resp = client.put(
        f"/api/expenses/{expense['id']}",
        json={"description": "After"},
        headers=auth_headers(),
    )
    assert resp.status_code == 200
    updated = resp.json()["expense"]
    assert updated["description"] == "After"
    assert updated["createdAt"] == expense["createdAt"]
    assert datetime.fromisoformat(updated["updatedAt"]) > datetime.fromisoformat(expense["updatedAt"])


def test_amount_is_stored_and_returned_in_cents(client, make_category, make_expense):
    expense = make_expense(make_category()["id"], amount=5)
    assert expense["amount"] == "5.00"

    fetched = client.get(f"/api/expenses/{expense['id']}", headers=auth_headers()).json()
    assert fetched["amount"] == expense["amount"]

    resp = client.put(
        f"/api/expenses/{expense['id']}",
        json={"amount": "7.5"},
        headers=auth_headers(),
    )
    assert resp.json()["expense"]["amount"] == "7.50"
    again = client.get(f"/api/expenses/{expense['id']}", headers=auth_headers()).json()
    assert again["amount"] == "7.50"


def test_update_rejects_null_required_field(client, make_category, make_expense):
    expense = make_expense(make_category()["id"])
    resp = client.put(
        f"/api/expenses/{expense['id']}",
        json={"amount": None},
        headers=auth_headers(),
    )
    assert resp.status_code == 400


def test_delete_returns_deleted_row(client, make_category, make_expense):
    expense = make_expense(make_category()["id"])
    url = f"/api/expenses/{expense['id']}"

    resp = client.delete(url, headers=auth_headers())
    assert resp.status_code == 200
    assert resp.json()["message"] == "Expense deleted successfully"
    assert resp.json()["expense"]["id"] == expense["id"]
    assert client.get(url, headers=auth_headers()).status_code == 404


def test_list_paginates_newest_first(client, make_category, make_expense):
    category = make_category()
    for day in range(1, 26):
        make_expense(category["id"], date=f"2024-01-{day:02d}T09:00:00")

    resp = client.get("/api/expenses?page=2&pageSize=10", headers=auth_headers())
    assert resp.status_code == 200
    body = resp.json()
    assert body["pagination"] == {
        "page": 2,
        "pageSize": 10,
        "totalCount": 25,
        "totalPages": 3,
        "hasNextPage": True,
        "hasPreviousPage": True,
    }
    dates = [e["date"][:10] for e in body["expenses"]]
    assert dates[0] == "2024-01-15"
    assert dates[-1] == "2024-01-06"


def test_list_filters(client, make_category, make_expense):
    food = make_category("Food")
    travel = make_category("Travel")
    make_expense(food["id"], amount="5.00", date="2024-02-01T10:00:00")
    make_expense(food["id"], amount="50.00", date="2024-02-10T10:00:00")
    make_expense(travel["id"], amount="500.00", date="2024-02-10T23:30:00")
    make_expense(travel["id"], amount="20.00", date="2024-03-01T10:00:00")

    by_category = client.get(
        f"/api/expenses?categoryIds={travel['id']}", headers=auth_headers()
    ).json()
    assert by_category["pagination"]["totalCount"] == 2

    by_amount = client.get(
        "/api/expenses?minAmount=10&maxAmount=100", headers=auth_headers()
    ).json()
    assert sorted(Decimal(str(e["amount"])) for e in by_amount["expenses"]) == [
        Decimal("20.00"),
        Decimal("50.00"),
    ]

    # a date-only endDate covers the whole day
    by_date = client.get(
        "/api/expenses?startDate=2024-02-10&endDate=2024-02-10", headers=auth_headers()
    ).json()
    assert by_date["pagination"]["totalCount"] == 2


def test_list_rejects_bad_queries(client):
    headers = auth_headers()
    assert client.get("/api/expenses?pageSize=101", headers=headers).status_code == 400
    assert client.get("/api/expenses?page=0", headers=headers).status_code == 400
    inverted = client.get("/api/expenses?minAmount=10&maxAmount=1", headers=headers)
    assert inverted.status_code == 400
    assert inverted.json() == {"error": "minAmount must not exceed maxAmount"}
    bad_date = client.get("/api/expenses?startDate=yesterday", headers=headers)
    assert bad_date.status_code == 400


def test_empty_list_has_zero_pages(client):
    body = client.get("/api/expenses", headers=auth_headers()).json()
    assert body["expenses"] == []
    assert body["pagination"]["totalPages"] == 0
    assert body["pagination"]["hasNextPage"] is False
