"""Shared fixtures for building small corpora."""

from __future__ import annotations

from pathlib import Path

import pytest

from helpers import write_entry


@pytest.fixture
def corpus_dir(tmp_path: Path) -> Path:
    content = tmp_path / "content"
    write_entry(
        content,
        "openai-timeout",
        "title: Timeout Error\nprovider: OpenAI\nsolved: true",
        "## Symptoms\n\nRequests hang.\n\n## Fix\n\nRaise the timeout.\n\n### Python\n\nUse `timeout=60`.\n",
    )
    write_entry(
        content,
        "anthropic-rate-limit",
        "title: Rate Limit\nprovider: Anthropic\nprovider_icon: /custom/anthropic.png\nsolved: false\ntags: [429]",
    )
    write_entry(
        content,
        "acme-crash",
        "title: Acme Crash\nprovider: acme\nprovider_icon: /icons/acme.png",
    )
    return content
