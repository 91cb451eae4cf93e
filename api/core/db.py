"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`). Tests point it at an isolated
database by calling `init_pool(dsn, max_size=1)` themselves.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
- identifiers are sent as text and cast by the backend:
  `CAST($1::text AS uuid)` (see `identifier_param`).

Backend, driver, connection and timeout failures are all re-raised as
`core.errors.StoreError`; this module does not interpret errors.
"""

from __future__ import annotations

import asyncio
import os
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from core.errors import StoreError

_pool: asyncpg.Pool | None = None

# Server errors, client-side encode errors (InterfaceError), connection loss
# and command_timeout expiry.
STORE_FAILURES = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool(dsn: str | None = None, *, min_size: int = 1, max_size: int = 5) -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=_sanitize_database_url(dsn) if dsn else database_url(),
        min_size=min_size,
        max_size=max_size,
        command_timeout=30,
    )


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def identifier_param(value: Any) -> str:
    """
    Text form of an identifier; the backend decides whether it is a UUID.
    """
    return str(value)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


def _store_error(exc: Exception) -> StoreError:
    return StoreError(
        str(exc) or type(exc).__name__,
        sqlstate=getattr(exc, "sqlstate", None),
        constraint_name=getattr(exc, "constraint_name", None),
    )


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    try:
        row = await pool().fetchrow(sql, *args)
    except STORE_FAILURES as exc:
        raise _store_error(exc) from exc
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    try:
        rows = await pool().fetch(sql, *args)
    except STORE_FAILURES as exc:
        raise _store_error(exc) from exc
    return [_record_to_dict(r) for r in rows]


async def execute(sql: str, *args: Any) -> None:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
    """
    try:
        await pool().execute(sql, *args)
    except STORE_FAILURES as exc:
        raise _store_error(exc) from exc
