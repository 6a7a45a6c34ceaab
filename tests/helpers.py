"""Builders for articles and on-disk corpora used across tests."""

from __future__ import annotations

from pathlib import Path

from error_index.core.types import ArticleRecord, ErrorFrontmatter


def make_article(title: str, provider: str, slug: str | None = None, **extra) -> ArticleRecord:
    return ArticleRecord(
        slug=slug or title.lower().replace(" ", "-"),
        frontmatter=ErrorFrontmatter(title=title, provider=provider, extra=extra),
        body="",
    )


def write_entry(content_dir: Path, slug: str, header: str, body: str = "## Fix\n\nRetry.\n") -> Path:
    content_dir.mkdir(parents=True, exist_ok=True)
    path = content_dir / f"{slug}.mdx"
    path.write_text(f"---\n{header}\n---\n{body}", encoding="utf-8")
    return path
