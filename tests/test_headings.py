"""Tests for heading extraction and article markup."""

from error_index.core.headings import extract_headings, heading_id
from error_index.output.markup import MarkupRenderer, is_external


def test_heading_id_strips_punctuation():
    assert heading_id("Rate Limits!!") == "rate-limits"
    assert heading_id("What   is  429?") == "what-is-429"
    assert heading_id("snake_case-ok") == "snake_case-ok"


def test_extract_levels_two_and_three_only():
    html = "<h1>Title</h1><h2>Symptoms</h2><h3>Python</h3><h4>Deep</h4>"

    headings = extract_headings(html)

    assert [(h.id, h.text, h.level) for h in headings] == [
        ("symptoms", "Symptoms", 2),
        ("python", "Python", 3),
    ]


def test_existing_id_is_reused():
    headings = extract_headings('<h2 id="custom-anchor">Fix it</h2>')
    assert headings[0].id == "custom-anchor"


def test_colliding_texts_share_identifier():
    headings = extract_headings("<h2>Fix</h2><p>a</p><h2>Fix</h2>")
    assert [h.id for h in headings] == ["fix", "fix"]


def test_class_marked_elements_are_headings():
    html = '<div class="mdx-h3">Nested Step</div><p class="mdx-p">text</p>'
    headings = extract_headings(html)
    assert [(h.id, h.level) for h in headings] == [("nested-step", 3)]


def test_headings_without_identifier_are_skipped():
    assert extract_headings("<h2>!!!</h2><h2>Fix</h2>")[0].id == "fix"
    assert extract_headings("") == []


def test_markup_adds_heading_classes_and_ids():
    html = MarkupRenderer().render("# Title\n\n## Rate Limits!!\n\n### Retry `backoff`\n")

    assert '<h1 class="mdx-h1" id="title">' in html
    assert '<h2 class="mdx-h2" id="rate-limits">' in html
    assert '<h3 class="mdx-h3" id="retry-backoff">' in html
    assert [h.id for h in extract_headings(html)] == ["rate-limits", "retry-backoff"]


def test_markup_marks_external_links():
    html = MarkupRenderer().render("[docs](https://example.com) and [home](/provider/openai)")

    assert 'href="https://example.com" target="_blank" rel="noopener noreferrer"' in html
    assert 'class="mdx-link mdx-link-external"' in html
    assert '<a href="/provider/openai" class="mdx-link">' in html


def test_markup_classes_for_code_lists_and_images():
    source = "Use `retry`.\n\n- one\n- two\n\n![logo](/logos/openai.svg)\n"
    html = MarkupRenderer().render(source)

    assert '<code class="mdx-code-inline">retry</code>' in html
    assert '<ul class="mdx-ul">' in html
    assert '<li class="mdx-li">' in html
    assert '<span class="mdx-image-wrapper"><img' in html
    assert 'loading="lazy"' in html


def test_markup_wraps_tables():
    html = MarkupRenderer().render("| a | b |\n|---|---|\n| 1 | 2 |\n")

    assert html.startswith('<div class="mdx-table-wrapper"><table class="mdx-table">')
    assert "</table>\n</div>" in html


def test_is_external():
    assert is_external("http://a")
    assert is_external("https://a")
    assert not is_external("/local")
    assert not is_external(None)


def test_heading_id_drops_non_ascii_letters():
    assert heading_id("Café Errors") == "caf-errors"
    assert heading_id("Überlastung 529") == "berlastung-529"


def test_markup_and_extractor_agree_on_non_ascii_ids():
    html = MarkupRenderer().render("## Café Errors\n")

    assert 'id="caf-errors"' in html
    assert [h.id for h in extract_headings(html)] == ["caf-errors"]
