"""
Shared utility functions.

This package contains utility code used across multiple
build stages.
"""

from .logging import (
    JsonlFormatter,
    get_logger,
    log_event,
    log_warning,
    record_fields,
    setup_logging,
    truncate_text,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_event",
    "log_warning",
    "truncate_text",
    "JsonlFormatter",
    "record_fields",
]
