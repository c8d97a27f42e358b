from __future__ import annotations

import os
import pathlib
import tempfile
import time
from typing import Any, Dict, Optional

import pytest

_TMP_DIR = pathlib.Path(tempfile.mkdtemp(prefix="expense-tracker-tests-"))
DB_PATH = _TMP_DIR / "test.db"
TEST_SECRET = "test-secret-key-for-hs256-tokens"

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["AUTH_JWT_SECRET"] = TEST_SECRET
os.environ["MEDIA_POLICY"] = "signed"
os.environ["CORS_ORIGINS"] = "*"
os.environ["DB_CREATE_ALL"] = "false"
os.environ["S3_PREFIX"] = ""
os.environ.setdefault("AWS_REGION", "us-east-1")
for _var in ("AUTH_ISSUER", "AUTH_AUDIENCE", "S3_ENDPOINT_URL", "DYNAMODB_ENDPOINT_URL"):
    os.environ.pop(_var, None)

from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402

from expense_tracker.main import app  # noqa: E402
from expense_tracker.storage.cloud_storage import CloudStorageService  # noqa: E402
from expense_tracker.v1_0.models import Base  # noqa: E402

USER_A = "user-a"
USER_B = "user-b"


def make_token(sub: Optional[str], *, expires_in: int = 3600, **extra: Any) -> str:
    claims: Dict[str, Any] = {"exp": int(time.time()) + expires_in, **extra}
    if sub is not None:
        claims["sub"] = sub
    return jwt.encode(claims, TEST_SECRET, algorithm="HS256")


def auth_headers(sub: str = USER_A) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(sub)}"}


class FakePreferencesStore:
    def __init__(self) -> None:
        self.items: Dict[str, Dict[str, Any]] = {}

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        item = self.items.get(user_id)
        return dict(item) if item else None

    def put(self, item: Dict[str, Any]) -> None:
        self.items[item["userId"]] = dict(item)


class FakeCloudStorage(CloudStorageService):
    def __init__(self) -> None:
        self.objects: Dict[str, Dict[str, Any]] = {}

    def put(self, key: str, data: bytes, *, content_type: str) -> None:
        self.objects[key] = {"data": data, "content_type": content_type}

    def view_url(self, key: str) -> str:
        return f"https://receipts.test/{key}?signature=fake"


@pytest.fixture(scope="session")
def engine():
    sync_engine = create_engine(f"sqlite:///{DB_PATH}", future=True)
    yield sync_engine
    sync_engine.dispose()


@pytest.fixture()
def db(engine):
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine


@pytest.fixture()
def preferences_store() -> FakePreferencesStore:
    return FakePreferencesStore()


@pytest.fixture()
def cloud_storage() -> FakeCloudStorage:
    return FakeCloudStorage()


@pytest.fixture()
def client(db, preferences_store, cloud_storage):
    api = app.state.container.api_container
    with api.preferences_store.override(preferences_store), \
            api.cloud_storage_service.override(cloud_storage):
        with TestClient(app) as test_client:
            yield test_client


@pytest.fixture()
def make_category(client):
    def _make(name: str = "Groceries", user: str = USER_A, **extra: Any) -> Dict[str, Any]:
        resp = client.post("/api/categories", json={"name": name, **extra}, headers=auth_headers(user))
        assert resp.status_code == 201, resp.text
        return resp.json()["category"]

    return _make


@pytest.fixture()
def make_expense(client):
    def _make(
        category_id: str,
        amount: str = "10.00",
        date: str = "2024-03-15T12:00:00",
        user: str = USER_A,
        **extra: Any,
    ) -> Dict[str, Any]:
        body = {"amount": amount, "categoryId": category_id, "date": date, **extra}
        resp = client.post("/api/expenses", json=body, headers=auth_headers(user))
        assert resp.status_code == 201, resp.text
        return resp.json()["expense"]

    return _make
