"""
Core data types for the error index.

This module defines the fundamental data structures shared by every stage:
- ErrorFrontmatter: Structured header of one article entry
- ArticleRecord: One loaded article (slug, frontmatter, body)
- ProviderAggregate: Per-provider grouping derived from the corpus
- ScoredMatch: An article paired with its relevance score for one query
- Heading / TocState: Table-of-contents data for one rendered article
- LoadReport: Result of loading a whole corpus
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .errors import DataQualityWarning, ParseError


@dataclass(frozen=True)
class ErrorFrontmatter:
    """Structured header of an error article.

    Attributes:
        title: Human readable error title
        provider: Provider identifier (case-insensitive key)
        provider_icon: Optional icon path, possibly replaced by the canonical logo
        solved: Whether the article documents a working fix
        extra: Unrecognized header fields, passed through untouched
    """
    title: str = ""
    provider: str = ""
    provider_icon: str | None = None
    solved: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        if key in ("title", "provider", "provider_icon", "solved"):
            return getattr(self, key)
        return self.extra.get(key, default)


@dataclass(frozen=True)
class ArticleRecord:
    """One article of the corpus.

    Attributes:
        slug: Unique identifier derived from the entry file name
        frontmatter: Parsed header block
        body: Markup following the header block
        source_path: File the record was read from, if any
    """
    slug: str
    frontmatter: ErrorFrontmatter
    body: str = ""
    source_path: Path | None = None

    @property
    def title(self) -> str:
        return self.frontmatter.title

    @property
    def provider(self) -> str:
        return self.frontmatter.provider

    @property
    def provider_key(self) -> str:
        return normalize_provider(self.frontmatter.provider)


@dataclass
class ProviderAggregate:
    """All articles of one provider, keyed case-insensitively.

    Attributes:
        canonical_name: Lowercased, trimmed provider identifier
        display_name: Presentation name from the canonical lookup
        article_count: Number of articles with this provider key
        icon_path: Canonical logo, or the first article's icon
    """
    canonical_name: str
    display_name: str
    article_count: int = 1
    icon_path: str | None = None


@dataclass
class ScoredMatch:
    article: ArticleRecord
    score: float


@dataclass(frozen=True)
class Heading:
    id: str
    text: str
    level: int


@dataclass
class TocState:
    """Headings of the mounted article and the one currently active."""
    headings: list[Heading] = field(default_factory=list)
    active_id: str = ""


@dataclass
class LoadReport:
    """Outcome of loading a corpus.

    Attributes:
        articles: Successfully loaded records, in slug order
        errors: Entries whose header block could not be parsed
        warnings: Data-quality issues found while loading
    """
    articles: list[ArticleRecord] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)
    warnings: list[DataQualityWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def normalize_provider(provider: str | None) -> str:
    """Return the grouping key for a provider identifier."""
    return (provider or "").strip().lower()
