from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from ..config import LoggingConfig


ROOT_LOGGER = "error_index"

# Attributes every LogRecord carries; anything else arrived through ``extra``
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def setup_logging(cfg: LoggingConfig, output_dir: Path | None = None) -> logging.Logger:
    """Configure the package logger for one CLI invocation or build.

    Handlers from a previous call are replaced, so repeated builds in one
    process do not duplicate output.
    """
    level = _level_from_string(cfg.level)
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if cfg.console:
        logger.addHandler(_console_handler(level))
    if cfg.file and output_dir is not None:
        logger.addHandler(_file_handler(output_dir / cfg.filename, cfg.format, level))
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def log_event(logger: logging.Logger | None, message: str, **fields: Any) -> None:
    _log(logger, logging.INFO, message, fields)


def log_warning(logger: logging.Logger | None, message: str, **fields: Any) -> None:
    _log(logger, logging.WARNING, message, fields)


def truncate_text(text: str, max_chars: int = 50) -> str:
    """Cut ``text`` to ``max_chars`` characters, marking the cut with "..."."""
    return text if len(text) <= max_chars else f"{text[:max_chars]}..."


class JsonlFormatter(logging.Formatter):
    """One JSON object per line: level, logger, message and structured fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(record_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Fields attached to a record through ``extra``."""
    return {key: value for key, value in record.__dict__.items() if key not in _RECORD_ATTRS}


def _log(logger: logging.Logger | None, level: int, message: str, fields: dict[str, Any]) -> None:
    if logger is not None:
        logger.log(level, message, extra=fields)


def _console_handler(level: int) -> logging.Handler:
    handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def _file_handler(path: Path, fmt: str, level: int) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    if fmt == "jsonl":
        handler.setFormatter(JsonlFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    return handler


def _level_from_string(level: str) -> int:
    value = getattr(logging, level.upper(), None)
    return value if isinstance(value, int) else logging.INFO
