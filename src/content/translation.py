"""Translation overlay.

A translated post keeps the source post's identity and metadata and
swaps in whichever translated fields are filled in. Missing or empty
fields fall back one by one, never the whole document.
"""

from __future__ import annotations

from blogserve.content.enhancer import CJK_LOCALES, count_words, enhance
from blogserve.content.models import Post, Translation

OVERLAY_FIELDS = (
    "title",
    "description",
    "content",
    "meta_title",
    "meta_description",
    "faq",
    "word_count",
)


def overlay(post: Post, translation: Translation | None) -> Post:
    """Apply ``translation`` on top of ``post``.

    Translated content is raw CMS output, so it is enhanced here. A CJK
    translation without its own word count is recounted, since the
    source post's count does not carry over to unspaced scripts.
    """
    if translation is None:
        return post

    update: dict[str, object] = {}
    for field in OVERLAY_FIELDS:
        value = getattr(translation, field)
        if not value or (isinstance(value, str) and not value.strip()):
            continue
        if field == "content":
            value = enhance(value)
        elif field == "faq":
            value = tuple(value)
        update[field] = value

    if "word_count" not in update and "content" in update and translation.locale in CJK_LOCALES:
        update["word_count"] = count_words(update["content"], translation.locale)
    return post.model_copy(update=update)
