"""
Shared pytest fixtures.

Unit tests replace the store client functions (`core.db.fetch_one` /
`core.db.fetch_all`) with `FakeStore`, which records every statement and
replays queued results. Queued exceptions are raised instead of returned.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from core import db


class FakeStore:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self._results: list[Any] = []

    def queue(self, *results: Any) -> None:
        self._results.extend(results)

    def _next(self, default: Any) -> Any:
        result = self._results.pop(0) if self._results else default
        if isinstance(result, BaseException):
            raise result
        return result

    async def fetch_one(self, sql: str, *args: Any) -> dict | None:
        self.calls.append((sql, args))
        return self._next(None)

    async def fetch_all(self, sql: str, *args: Any) -> list[dict]:
        self.calls.append((sql, args))
        return self._next([])

    @property
    def last_args(self) -> tuple[Any, ...]:
        return self.calls[-1][1]


@pytest.fixture
def store(monkeypatch) -> FakeStore:
    fake = FakeStore()
    monkeypatch.setattr(db, "fetch_one", fake.fetch_one)
    monkeypatch.setattr(db, "fetch_all", fake.fetch_all)
    return fake


def make_ingredient(name: str = "sample ingredient 1", price: Any = Decimal("1.99")) -> dict:
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return {
        "id": uuid.uuid4(),
        "name": name,
        "price": price,
        "created": now,
        "last_modified": now,
    }


def make_recipe(name: str = "sample recipe 1") -> dict:
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return {
        "id": uuid.uuid4(),
        "name": name,
        "created": now,
        "last_modified": now,
    }


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client bound to the app. ASGITransport does not run the lifespan,
    so no pool is opened.

    Starlette re-raises exceptions after the catch-all handler has sent its
    response; raise_app_exceptions=False hands that response to the test.
    """
    from main import app

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
