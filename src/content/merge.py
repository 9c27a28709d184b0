"""Merge static and CMS posts into one catalog.

CMS posts win on slug conflicts: the static version is dropped whole,
fields are never mixed between the two.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime

from blogserve.content.models import Post

# Sorts after every real date when the list is ordered newest first.
_UNDATED = float("-inf")


def _timestamp(value: str) -> float:
    try:
        parsed = datetime.fromisoformat(value.strip())
    except (ValueError, AttributeError):
        return _UNDATED
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.timestamp()


def sort_by_date(posts: Iterable[Post]) -> list[Post]:
    """Return posts newest first; equal dates keep their relative order."""
    return sorted(posts, key=lambda p: _timestamp(p.date), reverse=True)


def merge_posts(static_posts: Iterable[Post], db_posts: Iterable[Post]) -> list[Post]:
    """Combine both sources, de-duplicated by slug and sorted by date."""
    db_posts = list(db_posts)
    db_slugs = {p.slug for p in db_posts}
    unique_static = [p for p in static_posts if p.slug not in db_slugs]
    return sort_by_date([*db_posts, *unique_static])
