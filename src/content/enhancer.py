"""Content enhancer — normalizes post bodies into rich display HTML.

Static posts are hand-written Markdown; CMS posts are AI-generated HTML.
``enhance`` converges both on one visual language: headings, lists and
links, plus callout boxes (insight, example, warning), section dividers
and a key-takeaways block picked out by heuristics.

The transformation is lossy on purpose (numbered lists render as
bullets) and must stay stable, since published posts depend on it.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Legacy links
# ---------------------------------------------------------------------------

LEGACY_PREFIX = "/blog"
CURRENT_PREFIX = "/education"
SITE_DOMAIN = "fibalgo.com"

_RELATIVE_LEGACY_LINK = re.compile(
    r"""(href=["']|\]\()""" + re.escape(LEGACY_PREFIX) + r"""(?=[/"'?#)])"""
)
_ABSOLUTE_LEGACY_LINK = re.compile(
    r"https://(www\.)?" + re.escape(SITE_DOMAIN) + re.escape(LEGACY_PREFIX) + r"(?=[/\"'?#)\s]|$)"
)

# ---------------------------------------------------------------------------
# Markdown
# ---------------------------------------------------------------------------

_MARKDOWN_HEADING = re.compile(r"^#{1,3}\s", re.MULTILINE)
_H3 = re.compile(r"^### (.+)$", re.MULTILINE)
_H2 = re.compile(r"^## (.+)$", re.MULTILINE)
_H1 = re.compile(r"^# (.+)$", re.MULTILINE)
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"\*(.+?)\*")
_QUOTE = re.compile(r"^> ?(.+)$", re.MULTILINE)
_BULLET = re.compile(r"^- (.+)$", re.MULTILINE)
_NUMBERED = re.compile(r"^(\d+)\. (.+)$", re.MULTILINE)
_LIST_RUN = re.compile(r"((?:<li>.*</li>\n?)+)")
_MD_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

# ---------------------------------------------------------------------------
# Heuristics
# ---------------------------------------------------------------------------

_CALLOUT_MARKER = re.compile(r'class="callout-|class="key-takeaways"')
_TAG = re.compile(r"<[^>]+>")
_BLOCKQUOTE_TAGS = re.compile(r"</?blockquote[^>]*>")
_P_TAGS = re.compile(r"</?p>")
_EXAMPLE = re.compile(
    r"(\$[\d,]+|BTC|ETH|Bitcoin|Ethereum|January|February|March"
    r"|for example|imagine|scenario|let'?s say)",
    re.IGNORECASE,
)
_CAUTION = re.compile(
    r"\b(caution|warning|danger|risk|avoid|mistake|never|do not|don'?t)\b",
    re.IGNORECASE,
)
_LOSS = re.compile(r"\b(stop.?loss|lose|loss|blow|wipe)\b", re.IGNORECASE)
_TAKEAWAYS = re.compile(
    r"<h2>(.*?(?:Key Takeaway|Summary|Conclusion|Final Thought).*?)</h2>"
    r"\s*(<p>.*?</p>)?\s*(<ul>[\s\S]*?</ul>)",
    re.IGNORECASE,
)
_EMPTY_P = re.compile(r"<p>\s*</p>")
_SPLIT_LIST = re.compile(r"</ul>\s*<ul>")
_IMG_SRC = re.compile(r"""<img[^>]+src=["']([^"']+)["']""", re.IGNORECASE)

INSIGHT_MIN_CHARS = 30
EXAMPLE_MIN_CHARS = 80
EXAMPLE_MIN_H2 = 3
DIVIDER_EVERY = 3

SECTION_DIVIDER = '<div class="section-divider">✦</div>'
TAKEAWAYS_MARKER = "🎯"

CJK_LOCALES = frozenset({"zh", "ja", "ko"})
_CJK_CHAR = re.compile(
    "[\u3000-\u9fff\uf900-\ufaff\U00020000-\U0002fa1f"
    "\uac00-\ud7af\u3040-\u309f\u30a0-\u30ff]"
)


def rewrite_legacy_links(html: str) -> str:
    """Point links at the old ``/blog`` section to ``/education``."""
    html = _RELATIVE_LEGACY_LINK.sub(lambda m: m.group(1) + CURRENT_PREFIX, html)
    return _ABSOLUTE_LEGACY_LINK.sub(
        lambda m: f"https://{m.group(1) or ''}{SITE_DOMAIN}{CURRENT_PREFIX}", html
    )


def is_markdown(text: str) -> bool:
    """A document is Markdown when any line opens with a 1-3 level heading."""
    return _MARKDOWN_HEADING.search(text) is not None


def markdown_to_html(text: str) -> str:
    """Bounded Markdown conversion covering what the static catalog uses."""
    html = _H3.sub(r"<h3>\1</h3>", text)
    html = _H2.sub(r"<h2>\1</h2>", html)
    # The page renders the title itself.
    html = _H1.sub("", html)

    html = _BOLD.sub(r"<strong>\1</strong>", html)
    html = _ITALIC.sub(r"<em>\1</em>", html)

    html = _QUOTE.sub(r"<blockquote>\1</blockquote>", html)

    html = _BULLET.sub(r"<li>\1</li>", html)
    html = _NUMBERED.sub(r"<li>\2</li>", html)
    html = _LIST_RUN.sub(r"<ul>\1</ul>", html)

    html = _MD_LINK.sub(r'<a href="\2">\1</a>', html)

    lines = []
    for line in html.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.startswith("<"):
            lines.append(stripped)
        else:
            lines.append(f"<p>{stripped}</p>")
    return "\n".join(lines)


def has_callouts(html: str) -> bool:
    """Check for callout/key-takeaways markup from an earlier pass or the CMS."""
    return _CALLOUT_MARKER.search(html) is not None


def _callout(kind: str, label: str, body: str) -> str:
    return f'<div class="callout-{kind}"><strong>{label}</strong><p>{body}</p></div>'


def _unwrap_paragraph(line: str) -> str:
    if line.startswith("<p>"):
        line = line[3:]
    if line.endswith("</p>"):
        line = line[:-4]
    return line


def is_example(text: str) -> bool:
    """Heuristic for a concrete, worked-example paragraph (tags stripped)."""
    return len(text) > EXAMPLE_MIN_CHARS and _EXAMPLE.search(text) is not None


def is_warning(line: str) -> bool:
    """Heuristic for a risk disclaimer: a caution term plus a loss term."""
    return _CAUTION.search(line) is not None and _LOSS.search(line) is not None


def add_callouts(html: str) -> str:
    """Single forward pass inserting dividers and callout boxes.

    Per line the checks run blockquote, then example, then warning; the
    first that fires consumes the line. Insight and example callouts are
    one-shot, warnings are not.
    """
    h2_count = 0
    insight_inserted = False
    example_inserted = False
    enhanced: list[str] = []

    for raw_line in html.split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        if line.startswith("<h2>"):
            h2_count += 1
            divider_due = h2_count > 1 and h2_count % DIVIDER_EVERY == 0
            # A re-run over already enhanced HTML must not stack dividers.
            if divider_due and (not enhanced or enhanced[-1] != SECTION_DIVIDER):
                enhanced.append(SECTION_DIVIDER)
            enhanced.append(line)
            continue

        is_paragraph = line.startswith("<p>")

        if line.startswith("<blockquote") and not insight_inserted:
            quote = _P_TAGS.sub("", _BLOCKQUOTE_TAGS.sub("", line)).strip()
            if len(quote) > INSIGHT_MIN_CHARS:
                enhanced.append(_callout("insight", "Key Insight", quote))
                insight_inserted = True
                continue

        if is_paragraph and not example_inserted and h2_count >= EXAMPLE_MIN_H2:
            if is_example(_TAG.sub("", line)):
                enhanced.append(_callout("example", "Real-World Example", _unwrap_paragraph(line)))
                example_inserted = True
                continue

        if is_paragraph and is_warning(line):
            enhanced.append(_callout("warning", "Warning", _unwrap_paragraph(line)))
            continue

        enhanced.append(line)

    return _TAKEAWAYS.sub(_wrap_takeaways, "\n".join(enhanced))


def _wrap_takeaways(match: re.Match[str]) -> str:
    heading, intro, items = match.group(1), match.group(2) or "", match.group(3)
    return (
        f'<div class="key-takeaways"><h3>{TAKEAWAYS_MARKER} {heading}</h3>'
        f"{intro}{items}</div>"
    )


def cleanup(html: str) -> str:
    """Drop empty paragraphs and merge lists split by the conversion."""
    html = _EMPTY_P.sub("", html)
    return _SPLIT_LIST.sub("", html)


def enhance(raw: str) -> str:
    """Turn a raw post body into display HTML.

    Idempotent for content that already carries callout markup; never
    raises for string input.
    """
    if not raw:
        return ""
    html = rewrite_legacy_links(raw)
    if is_markdown(html):
        html = markdown_to_html(html)
    if not has_callouts(html):
        html = add_callouts(html)
    return cleanup(html)


def extract_first_image(html: str) -> str | None:
    """Return the first ``<img>`` source if it is an absolute https URL."""
    match = _IMG_SRC.search(html)
    if match is None:
        return None
    src = match.group(1)
    return src if src.startswith("https://") else None


def count_words(text: str, locale: str = "en") -> int:
    """Count words in an HTML or plain-text body.

    CJK scripts are unspaced, so each CJK character counts as one word
    alongside the whitespace-separated tokens around them.
    """
    plain = _TAG.sub("", text).strip()
    if not plain:
        return 0
    if locale in CJK_LOCALES:
        cjk_chars = len(_CJK_CHAR.findall(plain))
        rest = _CJK_CHAR.sub(" ", plain).split()
        return cjk_chars + len(rest)
    return len(plain.split())
