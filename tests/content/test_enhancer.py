"""Tests for the content enhancer."""

from __future__ import annotations

from blogserve.content.enhancer import (
    SECTION_DIVIDER,
    count_words,
    enhance,
    extract_first_image,
    is_markdown,
    rewrite_legacy_links,
)

QUOTE = "Patience is the most underrated edge in any market"

FOUR_SECTION_DOC = "\n".join(
    [
        "# Trading Guide",
        "",
        "## First Section",
        "",
        f"> {QUOTE}",
        "",
        "Opening paragraph.",
        "",
        "## Second Section",
        "",
        "Second paragraph.",
        "",
        "## Third Section",
        "",
        "Third paragraph.",
        "",
        "## Fourth Section",
        "",
        "Fourth paragraph.",
    ]
)


# ── Legacy links ─────────────────────────────────────────────────────────

class TestLegacyLinks:
    def test_rewrites_relative_href(self):
        out = rewrite_legacy_links('<a href="/blog/smart-money">x</a>')
        assert out == '<a href="/education/smart-money">x</a>'

    def test_rewrites_absolute_domain(self):
        out = rewrite_legacy_links('<a href="https://fibalgo.com/blog/guide">x</a>')
        assert out == '<a href="https://fibalgo.com/education/guide">x</a>'

    def test_rewrites_markdown_link_target(self):
        html = enhance("## Next\n\nRead [the guide](/blog/guide) now.")
        assert '<a href="/education/guide">the guide</a>' in html

    def test_leaves_similar_paths_alone(self):
        html = '<a href="/blogger">x</a> <a href="https://example.com/blog/a">y</a>'
        assert rewrite_legacy_links(html) == html

    def test_runs_for_html_content(self):
        html = enhance('<p>See <a href="/blog/risk">risk</a>.</p>')
        assert 'href="/education/risk"' in html
        assert "/blog/" not in html


# ── Markdown conversion ──────────────────────────────────────────────────

class TestMarkdown:
    def test_detects_markdown_headings(self):
        assert is_markdown("intro\n## Heading")
        assert is_markdown("### Deep")
        assert not is_markdown("<h2>Already HTML</h2>")
        assert not is_markdown("#### Too deep")
        assert not is_markdown("#hashtag")

    def test_headings(self):
        html = enhance("## Section\n\n### Sub")
        assert "<h2>Section</h2>" in html
        assert "<h3>Sub</h3>" in html

    def test_title_heading_is_dropped(self):
        html = enhance("# Page Title\n\n## Section\n\nBody text.")
        assert "Page Title" not in html
        assert "<h1>" not in html

    def test_inline_formatting(self):
        html = enhance("## S\n\nThis is **bold** and *italic*.")
        assert "<p>This is <strong>bold</strong> and <em>italic</em>.</p>" in html

    def test_consecutive_items_share_one_list(self):
        html = enhance("## S\n\n- one\n- two\n- three")
        assert html.count("<ul>") == 1
        assert "<li>one</li>" in html
        assert "<li>three</li>" in html

    def test_numbered_lists_render_as_bullets(self):
        html = enhance("## Steps\n\n1. first\n2. second")
        assert "<ol>" not in html
        assert "<ul><li>first</li>" in html

    def test_lists_split_by_blank_line_are_merged(self):
        html = enhance("## S\n\n- a\n- b\n\n- c")
        assert html.count("<ul>") == 1
        assert "</ul>" in html

    def test_paragraphs_wrap_plain_lines(self):
        html = enhance("## S\n\nFirst line.\n\n\nSecond line.")
        assert "<p>First line.</p>" in html
        assert "<p>Second line.</p>" in html
        assert "<p></p>" not in html

    def test_blank_lines_dropped_when_callouts_already_present(self):
        html = enhance('## A\n\n<div class="callout-tip">x</div>\n\n\nText')
        assert html == '<h2>A</h2>\n<div class="callout-tip">x</div>\n<p>Text</p>'

    def test_existing_tags_are_not_wrapped(self):
        html = enhance('## S\n\n<img src="https://x.example/a.png">')
        assert '<img src="https://x.example/a.png">' in html
        assert '<p><img' not in html

    def test_html_without_headings_passes_through(self):
        assert enhance("Just some text") == "Just some text"
        assert enhance("<p>Hello</p>") == "<p>Hello</p>"


# ── Callouts and dividers ────────────────────────────────────────────────

class TestCallouts:
    def test_divider_only_before_third_heading(self):
        html = enhance(FOUR_SECTION_DOC)
        assert html.count(SECTION_DIVIDER) == 1
        assert f"{SECTION_DIVIDER}\n<h2>Third Section</h2>" in html
        for heading in ("First Section", "Second Section", "Fourth Section"):
            assert f"{SECTION_DIVIDER}\n<h2>{heading}</h2>" not in html

    def test_divider_every_third_heading(self):
        doc = "\n".join(f"## H{i}\n\nText {i}." for i in range(1, 8))
        html = enhance(doc)
        assert html.count(SECTION_DIVIDER) == 2
        assert f"{SECTION_DIVIDER}\n<h2>H3</h2>" in html
        assert f"{SECTION_DIVIDER}\n<h2>H6</h2>" in html

    def test_single_key_insight_from_blockquote(self):
        html = enhance(FOUR_SECTION_DOC)
        assert html.count('class="callout-insight"') == 1
        assert f"<strong>Key Insight</strong><p>{QUOTE}</p>" in html
        assert "<blockquote>" not in html

    def test_only_first_long_blockquote_becomes_insight(self):
        html = enhance(
            "<blockquote>Short one</blockquote>\n"
            "<blockquote><p>The first quote that is long enough to count.</p></blockquote>\n"
            "<blockquote>A second quote that is also long enough to count.</blockquote>"
        )
        assert html.count('class="callout-insight"') == 1
        assert "<blockquote>Short one</blockquote>" in html
        assert "<blockquote>A second quote that is also long enough to count.</blockquote>" in html

    def test_example_requires_three_headings(self):
        paragraph = (
            "<p>For example, a trader buying Bitcoin at $40,000 with a tight stop "
            "can size the position from the distance to the stop.</p>"
        )
        early = enhance(f"<h2>A</h2>\n{paragraph}")
        assert "callout-example" not in early

        late = enhance(f"<h2>A</h2>\n<h2>B</h2>\n<h2>C</h2>\n{paragraph}")
        assert late.count('class="callout-example"') == 1
        assert "<strong>Real-World Example</strong>" in late

    def test_example_is_one_shot(self):
        paragraph = (
            "<p>Imagine a scenario where the market gaps down overnight and your order "
            "fills far below the level you planned for.</p>"
        )
        html = enhance("<h2>A</h2>\n<h2>B</h2>\n<h2>C</h2>\n" + paragraph + "\n" + paragraph)
        assert html.count('class="callout-example"') == 1

    def test_short_example_paragraph_is_ignored(self):
        html = enhance("<h2>A</h2>\n<h2>B</h2>\n<h2>C</h2>\n<p>For example, BTC.</p>")
        assert "callout-example" not in html

    def test_every_warning_paragraph_is_converted(self):
        html = enhance(
            "<h2>Risks</h2>\n"
            "<p>Never trade without a stop-loss, or a single bad move can wipe out your account.</p>\n"
            "<p>Neutral paragraph about chart colors.</p>\n"
            "<p>Avoid over-leveraging, because a small move against you means you lose everything.</p>"
        )
        assert html.count('class="callout-warning"') == 2
        assert "<p>Neutral paragraph about chart colors.</p>" in html

    def test_warning_needs_both_terms(self):
        html = enhance("<h2>R</h2>\n<p>Avoid trading on Fridays.</p>\n<p>A loss is part of trading.</p>")
        assert "callout-warning" not in html

    def test_example_takes_priority_over_warning(self):
        paragraph = (
            "<p>For example, traders who never use a stop-loss during volatile sessions "
            "often lose far more than they planned.</p>"
        )
        html = enhance("<h2>A</h2>\n<h2>B</h2>\n<h2>C</h2>\n" + paragraph)
        assert html.count('class="callout-example"') == 1
        assert "callout-warning" not in html

    def test_key_takeaways_are_wrapped(self):
        html = enhance(
            "## Body\n\nText.\n\n## Key Takeaways\n\nRemember these:\n\n- Size from the stop\n- Cap risk"
        )
        assert '<div class="key-takeaways"><h3>🎯 Key Takeaways</h3><p>Remember these:</p><ul>' in html
        assert "<h2>Key Takeaways</h2>" not in html
        assert html.rstrip().endswith("</ul></div>")

    def test_conclusion_heading_without_intro(self):
        html = enhance("<h2>Conclusion</h2>\n<ul><li>a</li></ul>")
        assert html == '<div class="key-takeaways"><h3>🎯 Conclusion</h3><ul><li>a</li></ul></div>'

    def test_preformatted_content_is_not_enhanced(self):
        html = (
            '<div class="callout-tip"><p>Tip</p></div>\n'
            "<h2>A</h2>\n<h2>B</h2>\n<h2>C</h2>\n"
            "<blockquote>A quote long enough to become an insight box.</blockquote>"
        )
        out = enhance(html)
        assert SECTION_DIVIDER not in out
        assert "callout-insight" not in out


# ── Idempotence and cleanup ──────────────────────────────────────────────

class TestIdempotence:
    def test_enhanced_markdown_is_stable(self):
        once = enhance(FOUR_SECTION_DOC)
        assert enhance(once) == once

    def test_content_with_marker_is_stable(self):
        html = (
            '<div class="key-takeaways"><h3>🎯 Summary</h3><ul><li>x</li></ul></div>\n'
            "<h2>One</h2>\n<p>Text</p>"
        )
        once = enhance(html)
        assert enhance(enhance(once)) == once

    def test_dividers_do_not_stack_on_rerun(self):
        doc = "<h2>A</h2>\n<p>a</p>\n<h2>B</h2>\n<p>b</p>\n<h2>C</h2>\n<p>c</p>"
        once = enhance(doc)
        assert once.count(SECTION_DIVIDER) == 1
        assert enhance(once) == once

    def test_empty_paragraphs_removed_without_callouts(self):
        out = enhance("<p>Hello</p>\n<p> </p>")
        assert "<p>Hello</p>" in out
        assert "<p> </p>" not in out

    def test_empty_input(self):
        assert enhance("") == ""


# ── Helpers ──────────────────────────────────────────────────────────────

class TestExtractFirstImage:
    def test_absolute_https(self):
        html = '<p>x</p><img alt="a" src="https://images.example.com/a.jpg"><img src="https://b/b.jpg">'
        assert extract_first_image(html) == "https://images.example.com/a.jpg"

    def test_relative_source_ignored(self):
        assert extract_first_image('<img src="/images/local.png">') is None

    def test_no_image(self):
        assert extract_first_image("<p>none</p>") is None


class TestCountWords:
    def test_strips_tags(self):
        assert count_words("<p>Hello <strong>big</strong> world</p>") == 3

    def test_empty(self):
        assert count_words("<p> </p>") == 0

    def test_cjk_counts_characters(self):
        assert count_words("<p>こんにちは world</p>", "ja") == 6

    def test_cjk_characters_not_split_for_latin_locales(self):
        assert count_words("こんにちは world", "en") == 2
