"""
Filter pipeline: provider selection + query scoring + threshold + sort.

The pipeline is a pure function of (articles, query, selected provider).
FilterPipeline wraps it with explicit memoisation so callers can re-invoke
it on every input change without recomputing unchanged results.
"""

from __future__ import annotations

from typing import Sequence

from .scoring import score
from .types import ArticleRecord, ScoredMatch, normalize_provider


TITLE_WEIGHT = 0.8
PROVIDER_WEIGHT = 0.2
RELEVANCE_THRESHOLD = 0.1


def score_article(query: str, article: ArticleRecord) -> ScoredMatch:
    """Combine title and provider relevance for one article."""
    title_score = score(query, article.title)
    provider_score = score(query, article.provider)
    return ScoredMatch(
        article=article,
        score=title_score * TITLE_WEIGHT + provider_score * PROVIDER_WEIGHT,
    )


def matches_provider(article: ArticleRecord, selected_provider: str | None) -> bool:
    if not selected_provider:
        return True
    return article.provider_key == normalize_provider(selected_provider)


def rank_articles(
    articles: Sequence[ArticleRecord],
    query: str,
    selected_provider: str | None = None,
) -> list[ScoredMatch]:
    """Score, filter and sort articles for a query.

    Without a query every provider-matching article is returned in input
    order with a neutral score of 1.0. With a query only articles scoring
    above RELEVANCE_THRESHOLD are kept, sorted by descending score; equal
    scores keep their relative input order.
    """
    candidates = [article for article in articles if matches_provider(article, selected_provider)]
    if not (query or "").strip():
        return [ScoredMatch(article=article, score=1.0) for article in candidates]

    scored = [score_article(query, article) for article in candidates]
    kept = [match for match in scored if match.score > RELEVANCE_THRESHOLD]
    kept.sort(key=lambda match: match.score, reverse=True)
    return kept


def filter_articles(
    articles: Sequence[ArticleRecord],
    query: str,
    selected_provider: str | None = None,
) -> list[ArticleRecord]:
    """Return the visible result list for a query and provider selection."""
    return [match.article for match in rank_articles(articles, query, selected_provider)]


class FilterPipeline:
    """Memoised filter recomputation.

    Results are recomputed only when the query, the provider selection or
    the article set changes; otherwise the previous list is returned.
    """

    def __init__(self, articles: Sequence[ArticleRecord]):
        self._articles: Sequence[ArticleRecord] = articles
        self._key: tuple | None = None
        self._snapshot: tuple[ArticleRecord, ...] = ()
        self._results: list[ScoredMatch] = []
        self.recomputations = 0

    @property
    def articles(self) -> Sequence[ArticleRecord]:
        return self._articles

    def set_articles(self, articles: Sequence[ArticleRecord]) -> None:
        self._articles = articles
        self._key = None

    def ranked(self, query: str = "", selected_provider: str | None = None) -> list[ScoredMatch]:
        key = (query, normalize_provider(selected_provider))
        if key != self._key or not _same_items(self._snapshot, self._articles):
            # Items are compared by identity against the next call's sequence
            self._snapshot = tuple(self._articles)
            self._results = rank_articles(self._snapshot, query, selected_provider)
            self._key = key
            self.recomputations += 1
        return list(self._results)

    def results(self, query: str = "", selected_provider: str | None = None) -> list[ArticleRecord]:
        return [match.article for match in self.ranked(query, selected_provider)]

    def summary(self, query: str = "", selected_provider: str | None = None) -> str:
        """Result count line shown above a filtered list."""
        shown = len(self.ranked(query, selected_provider))
        total = len(self._articles)
        plural = "s" if total != 1 else ""
        return f"Showing {shown} of {total} error{plural}"


def _same_items(snapshot: tuple[ArticleRecord, ...], articles: Sequence[ArticleRecord]) -> bool:
    if len(snapshot) != len(articles):
        return False
    return all(old is new for old, new in zip(snapshot, articles))
