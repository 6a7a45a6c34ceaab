"""
Heading extraction from rendered article markup.

Only level 2 and 3 headings make it into the table of contents; the level 1
heading is the article title. Identifiers already present on an element are
reused, otherwise one is derived from the heading text. Two headings with
the same text get the same identifier.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from .types import Heading


_WHITESPACE_RE = re.compile(r"\s+")
_NON_ID_RE = re.compile(r"[^\w-]", re.ASCII)

TOC_CLASSES = {"mdx-h2": 2, "mdx-h3": 3}
TOC_TAGS = {"h2": 2, "h3": 3}


def heading_id(text: str) -> str:
    """Derive an anchor identifier from heading text.

    Examples:
        >>> heading_id("Rate Limits!!")
        'rate-limits'
        >>> heading_id("Café Errors")
        'caf-errors'
    """
    slug = _WHITESPACE_RE.sub("-", text.lower())
    return _NON_ID_RE.sub("", slug)


def extract_headings(html: str) -> list[Heading]:
    """Collect TOC headings from rendered HTML in document order."""
    soup = BeautifulSoup(html or "", "html.parser")
    headings: list[Heading] = []
    for element in soup.find_all(_is_toc_heading):
        text = element.get_text()
        existing = element.get("id")
        element_id = existing if isinstance(existing, str) and existing else heading_id(text)
        if not element_id:
            continue
        headings.append(Heading(id=element_id, text=text.strip(), level=_level_of(element)))
    return headings


def _is_toc_heading(element: Tag) -> bool:
    if element.name in TOC_TAGS:
        return True
    return any(cls in TOC_CLASSES for cls in element.get("class") or [])


def _level_of(element: Tag) -> int:
    for cls in element.get("class") or []:
        if cls in TOC_CLASSES:
            return TOC_CLASSES[cls]
    return TOC_TAGS[element.name]
