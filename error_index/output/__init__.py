"""
Page output.

This package renders article bodies and writes the static site pages.
"""

from .markup import MarkupRenderer
from .renderer import SiteRenderer, toc_items
from .routes import article_url, provider_url, static_params

__all__ = [
    "MarkupRenderer",
    "SiteRenderer",
    "toc_items",
    "article_url",
    "provider_url",
    "static_params",
]
