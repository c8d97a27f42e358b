from __future__ import annotations

import re

from conftest import USER_A, auth_headers

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
PDF_BYTES = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n" + b"0" * 64


def test_upload_stores_under_user_prefix(client, cloud_storage):
    resp = client.post(
        "/api/upload-receipt",
        files={"receipt": ("my receipt (1).png", PNG_BYTES, "image/png")},
        headers=auth_headers(),
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Receipt uploaded successfully"
    assert re.fullmatch(rf"{USER_A}/receipts/\d+-my_receipt__1_.png", body["key"])
    assert body["url"] == f"https://receipts.test/{body['key']}?signature=fake"

    stored = cloud_storage.objects[body["key"]]
    assert stored["data"] == PNG_BYTES
    assert stored["content_type"] == "image/png"


def test_upload_requires_a_file(client):
    resp = client.post("/api/upload-receipt", headers=auth_headers())
    assert resp.status_code == 400
    assert resp.json() == {"error": "No file uploaded"}


def test_upload_rejects_non_images(client, cloud_storage):
    text = client.post(
        "/api/upload-receipt",
        files={"receipt": ("notes.txt", b"hello", "text/plain")},
        headers=auth_headers(),
    )
    assert text.status_code == 400
    assert text.json() == {"error": "Only image files are allowed"}

    disguised = client.post(
        "/api/upload-receipt",
        files={"receipt": ("scan.png", PDF_BYTES, "image/png")},
        headers=auth_headers(),
    )
    assert disguised.status_code == 400
    assert cloud_storage.objects == {}


def test_upload_rejects_empty_and_oversized_files(client):
    empty = client.post(
        "/api/upload-receipt",
        files={"receipt": ("empty.png", b"", "image/png")},
        headers=auth_headers(),
    )
    assert empty.status_code == 400

    big = PNG_BYTES + b"\x00" * (5 * 1024 * 1024)
    oversized = client.post(
        "/api/upload-receipt",
        files={"receipt": ("big.png", big, "image/png")},
        headers=auth_headers(),
    )
    assert oversized.status_code == 400
    assert oversized.json() == {"error": "File size must be less than 5MB"}


def test_upload_requires_auth(client):
    resp = client.post(
        "/api/upload-receipt",
        files={"receipt": ("r.png", PNG_BYTES, "image/png")},
    )
    assert resp.status_code == 401
