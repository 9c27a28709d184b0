"""Blog query facade consumed by the page layer.

Each call reads the sources fresh: static catalog plus published CMS
rows, merged by slug, then overlaid with translations for non-source
locales. A post without a completed translation does not exist in that
locale, so listings there only contain translated posts.
"""

from __future__ import annotations

import logging

from blogserve.config import BlogServeConfig, LocalesConfig, load_config
from blogserve.content.merge import merge_posts
from blogserve.content.models import Post
from blogserve.content.sources import SourceReader
from blogserve.content.translation import overlay
from blogserve.integrations.supabase import SupabaseClient

logger = logging.getLogger(__name__)


class BlogService:
    """List/get operations over the merged, localized catalog.

    Args:
        reader: Source reader for static posts, CMS posts and translations.
        locales: Locales the site serves. Requests for any other locale
            resolve to nothing without querying the store. None accepts
            every locale.
    """

    def __init__(self, reader: SourceReader, *, locales: LocalesConfig | None = None) -> None:
        self._reader = reader
        self._locales = locales

    @property
    def source_locale(self) -> str:
        return self._reader.source_locale

    def is_supported_locale(self, locale: str) -> bool:
        if locale == self.source_locale or self._locales is None:
            return True
        return self._locales.is_supported(locale)

    def _resolve_locale(self, locale: str | None) -> str:
        return locale or self.source_locale

    def _source_catalog(self) -> list[Post]:
        db_posts = [self._reader.to_post(row) for row in self._reader.list_published_db()]
        return merge_posts(self._reader.list_static(), db_posts)

    def _find_source_post(self, slug: str) -> Post | None:
        row = self._reader.get_published_db_post(slug)
        if row is not None:
            return self._reader.to_post(row)
        for post in self._reader.list_static():
            if post.slug == slug:
                return post
        return None

    # ── Listings ─────────────────────────────────────────────────

    def get_all_posts(self, locale: str | None = None) -> list[Post]:
        """Return every post visible in ``locale``, newest first."""
        locale = self._resolve_locale(locale)
        if not self.is_supported_locale(locale):
            logger.debug("Unsupported locale %r", locale)
            return []

        posts = self._source_catalog()
        if locale == self.source_locale:
            return posts

        translations = self._reader.get_all_translations_for_locale(locale)
        return [overlay(p, translations[p.slug]) for p in posts if p.slug in translations]

    def get_recent_posts(self, limit: int = 5, locale: str | None = None) -> list[Post]:
        """Return the ``limit`` newest posts."""
        return self.get_all_posts(locale)[: max(limit, 0)]

    def get_categories(self, locale: str | None = None) -> list[str]:
        """Return the sorted, unique tags of the posts visible in ``locale``."""
        return sorted({tag for post in self.get_all_posts(locale) for tag in post.tags})

    def get_related_posts(self, slug: str, limit: int = 3, locale: str | None = None) -> list[Post]:
        """Return posts ranked by the number of tags shared with ``slug``.

        Posts with equal scores keep their date order.
        """
        posts = self.get_all_posts(locale)
        current = next((p for p in posts if p.slug == slug), None)
        if current is None:
            return []

        current_tags = set(current.tags)
        others = [p for p in posts if p.slug != slug]
        ranked = sorted(
            others,
            key=lambda p: sum(1 for tag in p.tags if tag in current_tags),
            reverse=True,
        )
        return ranked[: max(limit, 0)]

    def get_all_slugs(self) -> list[str]:
        """Return the slugs of every post in the source locale."""
        return [p.slug for p in self._source_catalog()]

    # ── Single posts ─────────────────────────────────────────────

    def get_post_by_slug(self, slug: str, locale: str | None = None) -> Post | None:
        """Return one post in ``locale``, or None.

        Outside the source locale a post without a completed translation
        is reported as missing, exactly like an unknown slug.
        """
        locale = self._resolve_locale(locale)
        if not self.is_supported_locale(locale):
            return None

        post = self._find_source_post(slug)
        if post is None or locale == self.source_locale:
            return post

        translation = self._reader.get_translation(slug, locale)
        if translation is None:
            logger.debug("No completed %s translation for %s", locale, slug)
            return None
        return overlay(post, translation)

    def get_translated_locales(self, slug: str) -> list[str]:
        """Return the source locale plus every locale ``slug`` is translated into."""
        locales = [self.source_locale]
        for locale in self._reader.get_completed_locales(slug):
            if locale not in locales and self.is_supported_locale(locale):
                locales.append(locale)
        return locales


def create_service(config: BlogServeConfig | None = None) -> BlogService:
    """Build a BlogService from configuration.

    Args:
        config: Service configuration; loaded from the usual locations when None.

    Returns:
        A service reading from Supabase when it is configured, otherwise
        serving the static catalog alone.
    """
    cfg = config if config is not None else load_config()
    supabase = cfg.to_supabase_config()
    store = SupabaseClient(supabase) if supabase.is_configured else None
    if store is None:
        logger.info("Supabase not configured, serving static posts only")

    reader = SourceReader(
        store,
        source_locale=cfg.locales.source,
        posts_table=supabase.posts_table,
        translations_table=supabase.translations_table,
    )
    return BlogService(reader, locales=cfg.locales)
