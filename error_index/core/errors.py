"""
Error taxonomy for the error index.

- ParseError: one corpus entry has a malformed header block
- NotFound: a requested slug, provider or corpus does not exist
- DataQualityWarning: recoverable corpus issue, collected and logged
"""

from __future__ import annotations

from pathlib import Path


class ErrorIndexError(Exception):
    """Base class for all error index failures."""


class ParseError(ErrorIndexError):
    """A single entry's header block could not be parsed.

    Attributes:
        path: The offending entry
        cause: The underlying parser message
    """

    def __init__(self, path: Path | str, cause: str):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{self.path.name}: {cause}")


class NotFound(ErrorIndexError):
    """A lookup had no matching record.

    Attributes:
        kind: What was looked up ("article", "provider", "corpus")
        key: The requested key
        suggestions: Close existing keys, best first
    """

    def __init__(self, kind: str, key: str, suggestions: list[str] | None = None):
        self.kind = kind
        self.key = key
        self.suggestions = list(suggestions or [])
        super().__init__(f"{kind} not found: {key}")


class BuildFailed(ErrorIndexError):
    """A strict build found malformed entries."""

    def __init__(self, errors: list[ParseError]):
        self.errors = list(errors)
        super().__init__(f"{len(self.errors)} entry(ies) have invalid frontmatter")


class DataQualityWarning(UserWarning):
    """A recoverable corpus issue.

    Not raised by the loader: instances are collected on the load report
    and logged, and processing continues.
    """

    def __init__(self, kind: str, subject: str, detail: str = ""):
        self.kind = kind
        self.subject = subject
        self.detail = detail
        message = f"{kind}: {subject}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
