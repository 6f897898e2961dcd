# CineFam admin test fixtures
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from cinefam.core.catalog_store import CatalogStoreError  # noqa: E402

ACCESS_CODE = "letmein"


class FakeStore:
    """In-memory stand-in for RemoteCatalogStore that records every call."""

    def __init__(self) -> None:
        self.rows: dict[str, list[dict]] = {"films": [], "series": []}
        self.fail_auth = False
        self.fail_logout = False
        self.fail_read: set[str] = set()
        self.fail_upsert_ids: set[str] = set()
        self.auth_calls: list[tuple[str, str]] = []
        self.read_calls: list[str] = []
        self.upsert_calls: list[tuple[str, dict]] = []
        self.logout_calls = 0
        self.access_token: str | None = None

    async def authenticate(self, email: str, password: str) -> str:
        self.auth_calls.append((email, password))
        if self.fail_auth:
            raise CatalogStoreError("invalid login")
        self.access_token = "token-123"
        return self.access_token

    async def invalidate_session(self) -> None:
        self.logout_calls += 1
        self.access_token = None
        if self.fail_logout:
            raise CatalogStoreError("logout failed")

    async def read_all(self, collection: str) -> list[dict]:
        self.read_calls.append(collection)
        if collection in self.fail_read:
            raise CatalogStoreError(f"read {collection} failed")
        return [dict(r) if isinstance(r, dict) else r for r in self.rows[collection]]

    async def upsert(self, collection: str, record: dict[str, Any]) -> None:
        self.upsert_calls.append((collection, record))
        if record.get("id") in self.fail_upsert_ids:
            raise CatalogStoreError("upsert failed")


def film_row(id_: str = "f1", **overrides: Any) -> dict:
    row = {
        "id": id_,
        "title": "X",
        "description": "",
        "release_year": 2020,
        "poster_url": "https://example.com/p.jpg",
        "backdrop_url": "https://example.com/b.jpg",
        "iframe_url": "",
        "genre": ["Action"],
    }
    row.update(overrides)
    return row


def series_row(id_: str = "s1", **overrides: Any) -> dict:
    row = {
        "id": id_,
        "title": "Y",
        "description": "",
        "seasons": 2,
        "poster_url": "https://example.com/p.jpg",
        "backdrop_url": "https://example.com/b.jpg",
        "iframe_url": "",
        "genre": [],
    }
    row.update(overrides)
    return row


@pytest.fixture()
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture()
def flag_path(tmp_path: Path) -> Path:
    return tmp_path / "session.json"


@pytest.fixture()
def app_state(store: FakeStore, flag_path: Path):
    from cinefam.api.state import AppState

    return AppState(store, flag_path=flag_path, success_clear_sec=0.05, access_code=ACCESS_CODE)


@pytest.fixture()
def client(app_state, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    from fastapi.testclient import TestClient

    from cinefam.api import app as app_module

    monkeypatch.setattr(app_module, "ensure_data_dir", lambda: None)
    app = app_module.create_app(app_state)
    with TestClient(app) as c:
        yield c
