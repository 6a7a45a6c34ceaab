"""Corpus reading: frontmatter parsing and the content loader."""

from .frontmatter import build_frontmatter, split_frontmatter
from .loader import ContentLoader, suggest

__all__ = ["ContentLoader", "build_frontmatter", "split_frontmatter", "suggest"]
