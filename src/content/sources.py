"""Source reader — static catalog, CMS posts and translations.

Every remote read goes through ``_safe_select``, which turns store
failures into empty results. The availability contract is that the
static catalog is always served, whatever state the store is in.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from blogserve.content.catalog import STATIC_POSTS
from blogserve.content.enhancer import enhance, extract_first_image
from blogserve.content.models import (
    DBPostRow,
    Post,
    PostStatus,
    Translation,
    TranslationStatus,
)
from blogserve.errors import StoreError, is_schema_absent
from blogserve.integrations.supabase import DEFAULT_POSTS_TABLE, DEFAULT_TRANSLATIONS_TABLE
from pydantic import ValidationError

logger = logging.getLogger(__name__)

SOURCE_LOCALE = "en"


class RowStore(Protocol):
    """Anything that can answer equality-filtered selects (e.g. SupabaseClient)."""

    def select(
        self,
        table: str,
        *,
        filters: dict[str, str] | None = None,
        columns: str = "*",
        order: str | None = None,
        limit: int | None = None,
    ) -> list[dict]: ...


def to_post(row: DBPostRow) -> Post:
    """Map a CMS row onto a Post, enhancing its content.

    Without an explicit cover image, the first absolute https image in
    the body is used.
    """
    content = enhance(row.content)
    return Post(
        slug=row.slug,
        title=row.title,
        description=row.description,
        content=content,
        date=row.date,
        updated_at=row.updated_at or row.date,
        author=row.author,
        tags=tuple(row.tags or ()),
        cover_image=row.cover_image or extract_first_image(content),
        read_time=row.read_time,
        word_count=row.word_count or None,
        meta_title=row.meta_title or None,
        meta_description=row.meta_description or None,
        target_keyword=row.target_keyword or None,
        faq=tuple(row.faq) if row.faq else None,
    )


class SourceReader:
    """Reads posts and translations from their two origins.

    Args:
        store: Remote row store, or None to serve the static catalog only.
        static_posts: Pre-enhanced catalog; defaults to the shipped one.
        source_locale: Locale the posts are authored in.
        posts_table: Name of the CMS posts table.
        translations_table: Name of the translations table.
    """

    def __init__(
        self,
        store: RowStore | None,
        *,
        static_posts: Sequence[Post] = STATIC_POSTS,
        source_locale: str = SOURCE_LOCALE,
        posts_table: str = DEFAULT_POSTS_TABLE,
        translations_table: str = DEFAULT_TRANSLATIONS_TABLE,
    ) -> None:
        self._store = store
        self._static_posts = tuple(static_posts)
        self.source_locale = source_locale
        self.posts_table = posts_table
        self.translations_table = translations_table

    # ── Private helpers ──────────────────────────────────────────

    def _safe_select(self, table: str, **kwargs: object) -> list[dict]:
        if self._store is None:
            return []
        try:
            return self._store.select(table, **kwargs)  # type: ignore[arg-type]
        except StoreError as exc:
            if is_schema_absent(exc):
                logger.debug("Table %s not provisioned yet", table)
            else:
                logger.error("Error fetching %s: %s", table, exc)
            return []
        except Exception:
            logger.error("Unexpected failure querying %s", table, exc_info=True)
            return []

    @staticmethod
    def _parse_rows(rows: list[dict], model: type, label: str) -> list:
        parsed = []
        for raw in rows:
            try:
                parsed.append(model.model_validate(raw))
            except ValidationError:
                logger.warning("Skipping malformed %s row: %r", label, raw.get("slug"))
        return parsed

    # ── Posts ────────────────────────────────────────────────────

    def list_static(self) -> list[Post]:
        """Return the static catalog (already enhanced)."""
        return list(self._static_posts)

    def list_published_db(self) -> list[DBPostRow]:
        """Return published CMS rows, newest first; empty on any failure."""
        rows = self._safe_select(
            self.posts_table,
            filters={"status": PostStatus.PUBLISHED.value},
            order="date.desc",
        )
        return self._parse_rows(rows, DBPostRow, "post")

    def get_published_db_post(self, slug: str) -> DBPostRow | None:
        """Return the published CMS row for ``slug``, or None."""
        rows = self._safe_select(
            self.posts_table,
            filters={"slug": slug, "status": PostStatus.PUBLISHED.value},
            limit=1,
        )
        parsed = self._parse_rows(rows, DBPostRow, "post")
        return parsed[0] if parsed else None

    to_post = staticmethod(to_post)

    # ── Translations ─────────────────────────────────────────────

    def get_translation(self, slug: str, locale: str) -> Translation | None:
        """Return the completed translation of ``slug`` into ``locale``.

        The source locale never has translations.
        """
        if locale == self.source_locale:
            return None
        rows = self._safe_select(
            self.translations_table,
            filters={
                "slug": slug,
                "locale": locale,
                "translation_status": TranslationStatus.COMPLETED.value,
            },
            limit=1,
        )
        parsed: list[Translation] = self._parse_rows(rows, Translation, "translation")
        for translation in parsed:
            if translation.is_completed:
                return translation
        return None

    def get_all_translations_for_locale(self, locale: str) -> dict[str, Translation]:
        """Return completed translations for ``locale`` keyed by slug."""
        if locale == self.source_locale:
            return {}
        rows = self._safe_select(
            self.translations_table,
            filters={
                "locale": locale,
                "translation_status": TranslationStatus.COMPLETED.value,
            },
        )
        parsed: list[Translation] = self._parse_rows(rows, Translation, "translation")
        return {t.slug: t for t in parsed if t.is_completed}

    def get_completed_locales(self, slug: str) -> list[str]:
        """Return every locale with a completed translation of ``slug``."""
        rows = self._safe_select(
            self.translations_table,
            filters={"slug": slug, "translation_status": TranslationStatus.COMPLETED.value},
            columns="locale",
            order="locale.asc",
        )
        locales: list[str] = []
        for row in rows:
            locale = row.get("locale")
            if locale and locale != self.source_locale and locale not in locales:
                locales.append(locale)
        return locales
