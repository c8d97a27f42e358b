from __future__ import annotations

from jose import jwt

from conftest import make_token


def test_health_is_public(client):
    for path in ("/api/", "/api/ready"):
        resp = client.get(path)
        assert resp.status_code == 200
        assert resp.json()["message"] == "ready"


def test_missing_header_is_unauthorized(client):
    resp = client.get("/api/categories")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized"}
    assert resp.headers["www-authenticate"] == "Bearer"


def test_wrong_scheme_is_unauthorized(client):
    resp = client.get("/api/categories", headers={"Authorization": f"Token {make_token('u')}"})
    assert resp.status_code == 401


def test_expired_token_is_unauthorized(client):
    token = make_token("user-a", expires_in=-60)
    resp = client.get("/api/categories", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_token_signed_with_other_secret_is_unauthorized(client):
    token = jwt.encode({"sub": "user-a"}, "not-the-secret", algorithm="HS256")
    resp = client.get("/api/categories", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_token_without_sub_is_unauthorized(client):
    resp = client.get("/api/categories", headers={"Authorization": f"Bearer {make_token(None)}"})
    assert resp.status_code == 401


def test_malformed_token_is_unauthorized(client):
    resp = client.get("/api/categories", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_valid_token_is_accepted(client):
    token = make_token("user-a", email="a@example.com")
    resp = client.get("/api/categories", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.json() == {"categories": [], "count": 0}
