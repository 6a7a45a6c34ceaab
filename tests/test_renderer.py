import io
from pathlib import Path

import pytest
from rich.console import Console

from error_index.config import AppConfig
from error_index.core.errors import BuildFailed, NotFound
from error_index.core.index import build_providers
from error_index.output.renderer import SiteRenderer, toc_items
from error_index.output.routes import article_url, page_path, provider_url, static_params
from error_index.runner import build_site

from helpers import make_article, write_entry


def _quiet_config() -> AppConfig:
    cfg = AppConfig()
    cfg.logging.console = False
    return cfg


def _build(content: Path, output: Path, cfg: AppConfig | None = None):
    return build_site(
        content,
        output,
        cfg or _quiet_config(),
        show_progress=False,
        console=Console(file=io.StringIO()),
    )


def test_routes_use_canonical_provider_key() -> None:
    article = make_article("Timeout Error", " OpenAI ", slug="openai-timeout")

    assert provider_url("OpenAI") == "/provider/openai"
    assert article_url(article) == "/provider/openai/issue/openai-timeout"
    assert page_path(Path("out"), "/") == Path("out/index.html")
    assert page_path(Path("out"), article_url(article)) == Path(
        "out/provider/openai/issue/openai-timeout/index.html"
    )


def test_static_params_skip_articles_without_provider() -> None:
    articles = [make_article("A", "Groq", slug="a"), make_article("B", "", slug="b")]
    assert static_params(articles) == [{"provider": "groq", "slug": "a"}]


def test_build_site_writes_every_page(corpus_dir: Path, tmp_path: Path) -> None:
    output = tmp_path / "site"

    index_path, stats = _build(corpus_dir, output)

    assert index_path == output / "index.html"
    for url in [
        "/provider/openai",
        "/provider/anthropic",
        "/provider/acme",
        "/provider/openai/issue/openai-timeout",
        "/provider/anthropic/issue/anthropic-rate-limit",
        "/provider/acme/issue/acme-crash",
    ]:
        assert page_path(output, url).exists(), url
    assert stats.pages == 7
    assert stats.providers == 3
    assert stats.articles == 3


def test_index_page_lists_providers_and_errors(corpus_dir: Path, tmp_path: Path) -> None:
    index_path, _stats = _build(corpus_dir, tmp_path / "site")
    html = index_path.read_text(encoding="utf-8")

    assert "Browse by Provider" in html
    assert 'href="/provider/anthropic"' in html
    assert 'src="/logos/anthropic.svg"' in html
    assert "Timeout Error" in html
    assert "Solved" in html


def test_article_page_has_breadcrumbs_and_toc(corpus_dir: Path, tmp_path: Path) -> None:
    output = tmp_path / "site"
    _build(corpus_dir, output)

    html = page_path(output, "/provider/openai/issue/openai-timeout").read_text(encoding="utf-8")

    assert '<a href="/provider/openai">OpenAI</a>' in html
    assert "In this article" in html
    assert 'href="#symptoms"' in html
    assert 'href="#fix"' in html
    assert "padding-left: 12px" in html
    assert '<h2 class="mdx-h2" id="symptoms">' in html


def test_article_without_headings_has_no_toc(tmp_path: Path) -> None:
    renderer = SiteRenderer(tmp_path)
    article = make_article("Plain", "openai", slug="plain")

    html = renderer.render_article(article).read_text(encoding="utf-8")

    assert "In this article" not in html


def test_breadcrumb_title_is_truncated(tmp_path: Path) -> None:
    title = "Connection reset while streaming a very long completion response"
    renderer = SiteRenderer(tmp_path)

    html = renderer.render_article(make_article(title, "openai", slug="long")).read_text(encoding="utf-8")

    assert f">{title[:50]}...</a>" in html
    assert f'<h1 class="blog-post-title">{title}</h1>' in html


def test_article_titles_are_escaped(tmp_path: Path) -> None:
    renderer = SiteRenderer(tmp_path)
    article = make_article("Bad <script>alert(1)</script>", "openai", slug="xss")

    html = renderer.render_article(article).read_text(encoding="utf-8")

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html


def test_article_without_provider_has_no_page(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        SiteRenderer(tmp_path).render_article(make_article("Orphan", "", slug="orphan"))


def test_unknown_provider_page_is_not_found(tmp_path: Path) -> None:
    articles = [make_article("A", "openai", slug="a")]
    providers = build_providers(articles)

    with pytest.raises(NotFound):
        SiteRenderer(tmp_path).render_provider("groq", articles, providers)


def test_provider_page_lists_only_its_articles(tmp_path: Path) -> None:
    articles = [
        make_article("Timeout Error", "OpenAI", slug="a"),
        make_article("Rate Limit", "groq", slug="b"),
        make_article("Quota Exceeded", "openai", slug="c"),
    ]
    providers = build_providers(articles)

    html = SiteRenderer(tmp_path).render_provider("openai", articles, providers).read_text(encoding="utf-8")

    assert "OpenAI Errors" in html
    assert "Timeout Error" in html
    assert "Quota Exceeded" in html
    assert "Rate Limit" not in html


def test_build_skips_orphans_and_bad_entries(corpus_dir: Path, tmp_path: Path) -> None:
    write_entry(corpus_dir, "orphan", "title: Orphan")
    write_entry(corpus_dir, "broken", "title: [unclosed")

    _index, stats = _build(corpus_dir, tmp_path / "site")

    assert stats.skipped == 1
    assert stats.parse_errors == 1
    assert stats.warnings == 1
    assert stats.pages == 7


def test_strict_build_fails_on_bad_entry(corpus_dir: Path, tmp_path: Path) -> None:
    write_entry(corpus_dir, "broken", "title: [unclosed")
    cfg = _quiet_config()
    cfg.content.strict = True

    with pytest.raises(BuildFailed) as excinfo:
        _build(corpus_dir, tmp_path / "site", cfg)
    assert [error.path.name for error in excinfo.value.errors] == ["broken.mdx"]


def test_build_writes_jsonl_log(corpus_dir: Path, tmp_path: Path) -> None:
    cfg = _quiet_config()
    cfg.logging.file = True
    output = tmp_path / "site"

    _build(corpus_dir, output, cfg)

    lines = (output / "build.jsonl").read_text(encoding="utf-8").splitlines()
    assert any('"event": "build_complete"' in line for line in lines)


def test_toc_items_indent_by_level() -> None:
    items = toc_items('<h2 id="a">A</h2><h3 id="b">B</h3>')
    assert [(item["id"], item["indent"]) for item in items] == [("a", 0), ("b", 12)]


def test_provider_cannot_write_outside_output_dir(tmp_path: Path) -> None:
    output = tmp_path / "site" / "out"
    renderer = SiteRenderer(output)

    with pytest.raises(ValueError):
        renderer.render_article(make_article("Escape", "../../../pwned", slug="x"))

    assert not list(tmp_path.rglob("pwned"))


def test_page_path_rejects_parent_segments(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        page_path(tmp_path / "out", "/provider/../../elsewhere")
    assert page_path(tmp_path / "out", "/provider/a/issue/b") == tmp_path / "out/provider/a/issue/b/index.html"


def test_build_skips_provider_that_escapes_output(corpus_dir: Path, tmp_path: Path) -> None:
    write_entry(corpus_dir, "escape", "title: Escape\nprovider: ../../../pwned")

    _index, stats = _build(corpus_dir, tmp_path / "site" / "out")

    assert stats.skipped == 1
    assert not list(tmp_path.rglob("pwned"))


def test_listing_card_without_provider_has_no_link(tmp_path: Path) -> None:
    orphan = make_article("Orphan Error", "", slug="orphan")
    linked = make_article("Timeout Error", "openai", slug="timeout")

    html = SiteRenderer(tmp_path).render_index([orphan, linked], build_providers([linked])).read_text(
        encoding="utf-8"
    )

    assert "Orphan Error" in html
    assert "/provider//issue/orphan" not in html
    assert 'class="card card-unlinked"' in html
    assert 'href="/provider/openai/issue/timeout"' in html
