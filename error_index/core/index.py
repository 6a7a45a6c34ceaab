"""
Provider aggregation over the loaded corpus.

Articles are grouped by their provider identifier, lowercased and trimmed,
so "OpenAI" and "openai" count towards the same provider. Articles without
a provider are left out of the aggregate but stay searchable by title.
"""

from __future__ import annotations

from typing import Iterable

from ..providers import ProviderMetadata
from .errors import NotFound
from .types import ArticleRecord, ProviderAggregate, normalize_provider


def build_providers(
    articles: Iterable[ArticleRecord],
    metadata: ProviderMetadata | None = None,
) -> list[ProviderAggregate]:
    """Build the provider aggregate list.

    Args:
        articles: The full article set
        metadata: Canonical provider lookups (display name, logo)

    Returns:
        One ProviderAggregate per provider key, sorted by display name
        case-insensitively. Ties keep first-encounter order.
    """
    metadata = metadata or ProviderMetadata()
    providers: dict[str, ProviderAggregate] = {}

    for article in articles:
        key = normalize_provider(article.provider)
        if not key:
            continue
        existing = providers.get(key)
        if existing is not None:
            existing.article_count += 1
            continue
        icon = metadata.logo_path(key) if metadata.has_logo(key) else article.frontmatter.provider_icon
        providers[key] = ProviderAggregate(
            canonical_name=key,
            display_name=metadata.display_name(article.provider.strip()),
            article_count=1,
            icon_path=icon,
        )

    # dicts preserve insertion order and sorted() is stable
    return sorted(providers.values(), key=lambda item: item.display_name.lower())


def find_provider(providers: list[ProviderAggregate], provider: str) -> ProviderAggregate:
    """Return the aggregate for a provider key.

    Raises:
        NotFound: If no aggregate matches the key
    """
    key = normalize_provider(provider)
    for item in providers:
        if item.canonical_name == key:
            return item
    # Local import keeps the loader out of core's import graph
    from ..input.loader import suggest

    raise NotFound("provider", key, suggest(key, [item.canonical_name for item in providers]))
