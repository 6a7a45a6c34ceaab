"""
Core domain models and business logic.

This package contains data types and the indexing, ranking and TOC logic,
independent of how the corpus is read or how pages are rendered.
"""

from .errors import BuildFailed, DataQualityWarning, ErrorIndexError, NotFound, ParseError
from .types import (
    ArticleRecord,
    ErrorFrontmatter,
    Heading,
    LoadReport,
    ProviderAggregate,
    ScoredMatch,
    TocState,
    normalize_provider,
)

__all__ = [
    "ArticleRecord",
    "ErrorFrontmatter",
    "Heading",
    "LoadReport",
    "ProviderAggregate",
    "ScoredMatch",
    "TocState",
    "normalize_provider",
    "ErrorIndexError",
    "ParseError",
    "NotFound",
    "BuildFailed",
    "DataQualityWarning",
]
