"""
Error Index - browsable, searchable index of provider integration errors.

This package loads a corpus of short error articles (YAML frontmatter +
Markdown body), groups them by provider, ranks them against search
queries, and builds a static site with a table of contents per article.

Main entry point is the CLI via `error-index` commands.

Example:
    $ error-index build -i src/content -o out/
    $ error-index search "rate limit" --provider anthropic
"""

__all__ = [
    "__version__",
    "ContentLoader",
    "FilterPipeline",
    "build_providers",
    "filter_articles",
    "score",
]
__version__ = "0.1.0"

from .core.filtering import FilterPipeline, filter_articles
from .core.index import build_providers
from .core.scoring import score
from .input.loader import ContentLoader
