"""
Frontmatter parsing for article entries.

An entry is raw text with an optional YAML header block delimited by
``---`` lines, followed by the markup body:

    ---
    title: Timeout Error
    provider: openai
    solved: true
    ---
    ## Symptoms
    ...
"""

from __future__ import annotations

from pathlib import Path
import re
from typing import Any

import yaml

from ..core.errors import ParseError
from ..core.types import ErrorFrontmatter


# Header block between --- delimiters at the very start of the file
FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)

KNOWN_FIELDS = ("title", "provider", "provider_icon", "solved")
_TRUE_STRINGS = {"true", "yes", "y", "1", "on"}


def split_frontmatter(text: str, path: Path | str) -> tuple[dict[str, Any], str]:
    """Split raw entry text into its header mapping and body.

    Args:
        text: Full entry contents
        path: Entry location, used in error messages

    Returns:
        A tuple of (header mapping, body). Text without a header block
        yields an empty mapping and the whole text as body.

    Raises:
        ParseError: If the header is not valid YAML or not a mapping
    """
    text = text.lstrip("\ufeff")
    match = FRONTMATTER_RE.match(text)
    if not match:
        if text.startswith("---"):
            raise ParseError(path, "unterminated frontmatter block")
        return {}, text

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise ParseError(path, str(exc)) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ParseError(path, f"frontmatter must be a mapping, got {type(data).__name__}")

    return data, text[match.end():]


def build_frontmatter(data: dict[str, Any]) -> ErrorFrontmatter:
    """Map a raw header mapping onto ErrorFrontmatter."""
    icon = data.get("provider_icon")
    return ErrorFrontmatter(
        title=_as_text(data.get("title")),
        provider=_as_text(data.get("provider")),
        provider_icon=str(icon) if icon else None,
        solved=_as_bool(data.get("solved")),
        extra={str(k): v for k, v in data.items() if k not in KNOWN_FIELDS},
    )


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)
