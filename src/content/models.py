"""Content domain models — pure Pydantic v2 data types.

``Post`` is the canonical unit handed to the page layer. ``DBPostRow``
and ``Translation`` mirror rows of the remote posts and translations
tables; the source reader maps them onto ``Post``.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator


class PostStatus(StrEnum):
    """Lifecycle status of a CMS post row."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class TranslationStatus(StrEnum):
    """Status of a translation row."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class FaqItem(BaseModel):
    """A single question/answer pair shown under a post."""

    model_config = ConfigDict(frozen=True)

    question: str
    answer: str


class Post(BaseModel):
    """A post ready for rendering.

    ``content`` is always enhanced HTML. Posts are frozen and their
    collections are tuples, so a post handed to a caller cannot change
    the catalog it came from; use ``model_copy(update=...)`` to derive a
    variant.
    """

    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    description: str = ""
    content: str = ""
    date: str
    updated_at: str | None = None
    author: str = ""
    tags: tuple[str, ...] = ()
    cover_image: str | None = None
    read_time: str = ""
    word_count: int | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    target_keyword: str | None = None
    faq: tuple[FaqItem, ...] | None = None


class DBPostRow(BaseModel):
    """Row of the CMS posts table."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    slug: str
    title: str
    description: str = ""
    content: str = ""
    date: str
    author: str = ""
    tags: list[str] | None = None
    cover_image: str | None = None
    read_time: str = ""
    status: PostStatus = PostStatus.PUBLISHED
    target_keyword: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    word_count: int | None = None
    ai_model: str | None = None
    ai_generated: bool = False
    published_at: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    faq: list[FaqItem] | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        if value is None:
            return None
        return str(value)

    @field_validator("description", "content", "author", "read_time", mode="before")
    @classmethod
    def _null_to_empty(cls, value: object) -> object:
        return "" if value is None else value


class Translation(BaseModel):
    """Locale-specific replacement fields for one post.

    Any field left empty falls back to the source post's value.
    """

    model_config = ConfigDict(extra="ignore")

    slug: str
    locale: str
    title: str | None = None
    description: str | None = None
    content: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    faq: list[FaqItem] | None = None
    word_count: int | None = None
    translation_status: str = TranslationStatus.PENDING

    @property
    def is_completed(self) -> bool:
        return self.translation_status == TranslationStatus.COMPLETED
