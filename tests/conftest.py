"""Shared fixtures: an in-memory stand-in for the Supabase client and a clean environment."""

from __future__ import annotations

import pytest


class FakeStore:
    """Answers selects from in-memory tables the way PostgREST would.

    Set ``error`` to make every call raise it.
    """

    def __init__(self, tables: dict[str, list[dict]] | None = None, error: Exception | None = None):
        self.tables = tables or {}
        self.error = error
        self.calls: list[dict] = []

    def select(self, table, *, filters=None, columns="*", order=None, limit=None):
        self.calls.append({"table": table, "filters": filters, "order": order, "limit": limit})
        if self.error is not None:
            raise self.error
        rows = [
            r
            for r in self.tables.get(table, [])
            if all(str(r.get(k)) == v for k, v in (filters or {}).items())
        ]
        if order:
            column, direction = order.rsplit(".", 1)
            rows = sorted(rows, key=lambda r: r.get(column) or "", reverse=direction == "desc")
        if columns != "*":
            wanted = [c.strip() for c in columns.split(",")]
            rows = [{c: r.get(c) for c in wanted} for r in rows]
        if limit is not None:
            rows = rows[:limit]
        return [dict(r) for r in rows]


@pytest.fixture
def fake_store():
    """Factory for in-memory stores: ``fake_store(tables, error=...)``."""
    return FakeStore


BLOGSERVE_ENV_VARS = (
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "NEXT_PUBLIC_SUPABASE_URL",
    "NEXT_PUBLIC_SUPABASE_ANON_KEY",
    "BLOGSERVE_POSTS_TABLE",
    "BLOGSERVE_TRANSLATIONS_TABLE",
    "BLOGSERVE_SOURCE_LOCALE",
    "BLOGSERVE_TIMEOUT",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove env vars that config loading reads so tests see file values."""
    for key in BLOGSERVE_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
