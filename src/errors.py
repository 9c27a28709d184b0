"""Error types shared across blogserve.

Remote store failures are raised as ``StoreError`` by the integration
layer and caught by the source reader, which degrades them to empty
results. Nothing above the reader ever sees them.
"""

from __future__ import annotations

# PostgREST: table missing from the schema cache.
PGRST_TABLE_NOT_FOUND = "PGRST205"
# Postgres: undefined_table.
PG_UNDEFINED_TABLE = "42P01"

_SCHEMA_ABSENT_CODES = frozenset({PGRST_TABLE_NOT_FOUND, PG_UNDEFINED_TABLE})


class BlogServeError(Exception):
    """Base class for blogserve errors."""


class StoreError(BlogServeError):
    """A remote store request failed.

    Attributes:
        code: Backend error code (PostgREST/Postgres), or "" for
            transport-level failures.
        status: HTTP status, or None when no response was received.
    """

    def __init__(self, message: str, *, code: str = "", status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status

    def __str__(self) -> str:
        parts = [self.message]
        if self.code:
            parts.append(f"code={self.code}")
        if self.status is not None:
            parts.append(f"status={self.status}")
        return " ".join(parts)


def is_schema_absent(error: BaseException) -> bool:
    """Check whether an error means the queried table is not provisioned yet."""
    if not isinstance(error, StoreError):
        return False
    if error.code in _SCHEMA_ABSENT_CODES:
        return True
    message = error.message.lower()
    return "relation" in message and "does not exist" in message
