"""Tests for the content loader and frontmatter parsing."""

from pathlib import Path

import pytest

from error_index.core.errors import NotFound, ParseError
from error_index.input.frontmatter import build_frontmatter, split_frontmatter
from error_index.input.loader import ContentLoader

from helpers import write_entry


def test_load_all_reads_every_entry_in_slug_order(corpus_dir: Path):
    report = ContentLoader(corpus_dir).load_all()

    assert report.ok
    assert [a.slug for a in report.articles] == ["acme-crash", "anthropic-rate-limit", "openai-timeout"]


def test_frontmatter_fields_are_typed(corpus_dir: Path):
    article = ContentLoader(corpus_dir).load_article("openai-timeout")

    assert article.title == "Timeout Error"
    assert article.provider == "OpenAI"
    assert article.provider_key == "openai"
    assert article.frontmatter.solved is True
    assert article.body.startswith("## Symptoms")
    assert article.source_path == corpus_dir / "openai-timeout.mdx"


def test_unknown_fields_pass_through(corpus_dir: Path):
    article = ContentLoader(corpus_dir).load_article("anthropic-rate-limit")
    assert article.frontmatter.extra == {"tags": [429]}
    assert article.frontmatter.get("tags") == [429]
    assert article.frontmatter.get("title") == "Rate Limit"


def test_load_article_accepts_extension(corpus_dir: Path):
    assert ContentLoader(corpus_dir).load_article("acme-crash.mdx").slug == "acme-crash"


def test_canonical_logo_replaces_author_icon(corpus_dir: Path):
    loader = ContentLoader(corpus_dir)

    assert loader.load_article("anthropic-rate-limit").frontmatter.provider_icon == "/logos/anthropic.svg"
    assert loader.load_article("acme-crash").frontmatter.provider_icon == "/icons/acme.png"


def test_other_extensions_are_ignored(corpus_dir: Path):
    (corpus_dir / "notes.md").write_text("---\ntitle: x\n---\n", encoding="utf-8")
    assert "notes" not in ContentLoader(corpus_dir).list_slugs()


def test_missing_article_raises_not_found_with_suggestions(corpus_dir: Path):
    with pytest.raises(NotFound) as excinfo:
        ContentLoader(corpus_dir).load_article("openai-timout")

    assert excinfo.value.kind == "article"
    assert excinfo.value.suggestions[0] == "openai-timeout"


def test_missing_corpus_raises_not_found(tmp_path: Path):
    with pytest.raises(NotFound):
        ContentLoader(tmp_path / "nope").load_all()


def test_corrupt_article_raises_parse_error_not_not_found(corpus_dir: Path):
    write_entry(corpus_dir, "broken", "title: [unclosed\nprovider: openai")

    with pytest.raises(ParseError) as excinfo:
        ContentLoader(corpus_dir).load_article("broken")
    assert excinfo.value.path.name == "broken.mdx"
    assert "broken.mdx" in str(excinfo.value)


def test_parse_error_is_isolated_in_batch(corpus_dir: Path):
    write_entry(corpus_dir, "broken", "title: [unclosed\nprovider: openai")

    report = ContentLoader(corpus_dir).load_all()

    assert not report.ok
    assert [error.path.name for error in report.errors] == ["broken.mdx"]
    assert len(report.articles) == 3


def test_non_mapping_frontmatter_is_parse_error(tmp_path: Path):
    with pytest.raises(ParseError, match="mapping"):
        split_frontmatter("---\n- a\n- b\n---\nbody", tmp_path / "list.mdx")


def test_unterminated_frontmatter_is_parse_error(tmp_path: Path):
    with pytest.raises(ParseError, match="unterminated"):
        split_frontmatter("---\ntitle: x\nbody without end", tmp_path / "open.mdx")


def test_entry_without_frontmatter_is_all_body(tmp_path: Path):
    data, body = split_frontmatter("# Just text\n", tmp_path / "plain.mdx")
    assert data == {}
    assert body == "# Just text\n"


def test_empty_frontmatter_block():
    data, body = split_frontmatter("---\n---\nbody\n", "empty.mdx")
    assert data == {}
    assert body == "body\n"


@pytest.mark.parametrize(
    "raw,expected",
    [(True, True), (False, False), ("yes", True), ("false", False), (None, False), (1, True)],
)
def test_solved_is_coerced_to_bool(raw, expected):
    assert build_frontmatter({"solved": raw}).solved is expected


def test_missing_title_and_provider_default_to_empty():
    frontmatter = build_frontmatter({})
    assert frontmatter.title == ""
    assert frontmatter.provider == ""
    assert frontmatter.provider_icon is None


def test_empty_provider_is_reported_not_fatal(corpus_dir: Path):
    write_entry(corpus_dir, "orphan", "title: Orphan\nsolved: false")

    report = ContentLoader(corpus_dir).load_all()

    assert "orphan" in [a.slug for a in report.articles]
    assert [(w.kind, w.subject) for w in report.warnings] == [("empty_provider", "orphan")]


def test_duplicate_slug_last_seen_wins(tmp_path: Path):
    content = tmp_path / "content"
    write_entry(content, "Rate-Limit", "title: First\nprovider: groq")
    write_entry(content, "rate-limit", "title: Second\nprovider: groq")

    report = ContentLoader(content).load_all()

    assert [a.title for a in report.articles] == ["Second"]
    assert [w.kind for w in report.warnings] == ["duplicate_slug"]


def test_articles_by_provider_is_case_insensitive(corpus_dir: Path):
    articles = ContentLoader(corpus_dir).articles_by_provider("OPENAI")
    assert [a.slug for a in articles] == ["openai-timeout"]


def test_lookup_resolves_case_duplicates_like_load_all(tmp_path: Path):
    content = tmp_path / "content"
    write_entry(content, "Rate-Limit", "title: First\nprovider: groq")
    write_entry(content, "rate-limit", "title: Second\nprovider: groq")
    loader = ContentLoader(content)

    listed = loader.load_all().articles[0]

    assert loader.load_article("Rate-Limit") == listed
    assert loader.load_article("rate-limit").title == "Second"
    assert loader.load_article("RATE-LIMIT").title == "Second"
