"""Content domain — post models, enhancement, sources and the query facade.

Static posts and CMS posts are merged by slug, enhanced into display
HTML and overlaid with translations; ``BlogService`` is the entry point
for callers.
"""

from blogserve.content.enhancer import count_words, enhance, extract_first_image
from blogserve.content.merge import merge_posts, sort_by_date
from blogserve.content.models import (
    DBPostRow,
    FaqItem,
    Post,
    PostStatus,
    Translation,
    TranslationStatus,
)
from blogserve.content.service import BlogService, create_service
from blogserve.content.sources import SourceReader
from blogserve.content.translation import overlay

__all__ = [
    "BlogService",
    "DBPostRow",
    "FaqItem",
    "Post",
    "PostStatus",
    "SourceReader",
    "Translation",
    "TranslationStatus",
    "count_words",
    "create_service",
    "enhance",
    "extract_first_image",
    "merge_posts",
    "overlay",
    "sort_by_date",
]
