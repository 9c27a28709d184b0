"""Supabase (PostgREST) integration — config and read-only API client.

The CMS writes posts and translations into Supabase tables; blogserve
only ever reads them through the REST endpoint.
"""

from __future__ import annotations

import json
import logging
import os
import urllib.error
import urllib.parse
import urllib.request

from blogserve.errors import StoreError
from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_POSTS_TABLE = "blog_posts"
DEFAULT_TRANSLATIONS_TABLE = "blog_post_translations"


class SupabaseConfig(BaseModel):
    """Connection settings for the Supabase REST endpoint."""

    url: str = ""
    anon_key: str = ""
    timeout: float = 10.0
    posts_table: str = DEFAULT_POSTS_TABLE
    translations_table: str = DEFAULT_TRANSLATIONS_TABLE

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.anon_key)

    @classmethod
    def from_env(cls) -> SupabaseConfig:
        """Create config from environment variables.

        The ``NEXT_PUBLIC_`` names used by the web frontend are accepted
        as fallbacks.
        """
        return cls(
            url=os.environ.get("SUPABASE_URL") or os.environ.get("NEXT_PUBLIC_SUPABASE_URL", ""),
            anon_key=(
                os.environ.get("SUPABASE_ANON_KEY")
                or os.environ.get("NEXT_PUBLIC_SUPABASE_ANON_KEY", "")
            ),
        )


class SupabaseClient:
    """Minimal PostgREST client.

    One request per call, no retries. Every failure surfaces as a
    ``StoreError``; callers decide how to degrade.
    """

    def __init__(self, config: SupabaseConfig) -> None:
        self.config = config
        self.base_url = config.url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.config.anon_key,
            "Authorization": f"Bearer {self.config.anon_key}",
            "Accept": "application/json",
        }

    def _request(self, table: str, params: list[tuple[str, str]]) -> list[dict]:
        """GET ``/rest/v1/<table>`` and return the decoded rows."""
        query = urllib.parse.urlencode(params, safe="*,.")
        url = f"{self.base_url}/rest/v1/{table}?{query}"
        req = urllib.request.Request(url, method="GET", headers=self._headers())
        logger.debug("Supabase GET %s", url)

        try:
            with urllib.request.urlopen(req, timeout=self.config.timeout) as resp:
                payload = resp.read().decode("utf-8")
        except urllib.error.HTTPError as exc:
            raise _error_from_response(exc) from exc
        except (urllib.error.URLError, TimeoutError, OSError) as exc:
            raise StoreError(f"Request to {table} failed: {exc}") from exc

        try:
            rows = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise StoreError(f"Invalid JSON from {table}") from exc
        if not isinstance(rows, list):
            raise StoreError(f"Unexpected response shape from {table}")
        return rows

    def select(
        self,
        table: str,
        *,
        filters: dict[str, str] | None = None,
        columns: str = "*",
        order: str | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        """Select rows matching equality filters.

        Args:
            table: Table name.
            filters: Column → value, each applied as ``col=eq.value``.
            columns: PostgREST ``select`` expression.
            order: Column to sort by, suffixed with ``.asc``/``.desc``.
            limit: Maximum number of rows.

        Returns:
            List of row dicts, possibly empty.
        """
        params: list[tuple[str, str]] = [("select", columns)]
        for column, value in (filters or {}).items():
            params.append((column, f"eq.{value}"))
        if order:
            params.append(("order", order))
        if limit is not None:
            params.append(("limit", str(limit)))
        return self._request(table, params)


def _error_from_response(exc: urllib.error.HTTPError) -> StoreError:
    """Build a StoreError from a PostgREST error body."""
    code = ""
    message = f"HTTP {exc.code}"
    try:
        body = json.loads(exc.read().decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError, OSError, ValueError):
        body = None
    if isinstance(body, dict):
        code = str(body.get("code") or "")
        message = str(body.get("message") or message)
    return StoreError(message, code=code, status=exc.code)
