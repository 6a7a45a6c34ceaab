"""URL and output-path conventions for the generated site."""

from __future__ import annotations

from pathlib import Path

from ..core.types import ArticleRecord, normalize_provider


def home_url() -> str:
    return "/"


def provider_url(provider: str) -> str:
    return f"/provider/{normalize_provider(provider)}"


def article_url(article: ArticleRecord) -> str:
    return f"{provider_url(article.provider)}/issue/{article.slug}"


def static_params(articles: list[ArticleRecord]) -> list[dict[str, str]]:
    """Provider/slug pairs of every article page that gets generated.

    Articles without a provider have no page.
    """
    return [
        {"provider": article.provider_key, "slug": article.slug}
        for article in articles
        if article.provider_key
    ]


def page_path(output_dir: Path, url: str) -> Path:
    """Map a site URL to the index.html file that serves it.

    Raises:
        ValueError: If the URL would place the page outside output_dir
    """
    parts = [part for part in url.strip("/").split("/") if part]
    path = output_dir.joinpath(*parts, "index.html")
    root = output_dir.resolve()
    if root not in path.resolve().parents:
        raise ValueError(f"page for {url!r} escapes the output directory")
    return path
