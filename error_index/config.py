"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ContentConfig: Corpus location and loading behavior
- ProvidersConfig: Provider display-name and logo overrides
- OutputConfig: Static site output settings
- TocConfig: Table-of-contents geometry constants
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


@dataclass
class ContentConfig:
    """Configuration for the article corpus.

    Attributes:
        dir: Directory holding one file per error article
        extension: File extension of article entries
        strict: If True, any malformed entry fails the site build
    """

    dir: str = "src/content"
    extension: str = ".mdx"
    strict: bool = False


@dataclass
class ProvidersConfig:
    """Overrides for canonical provider metadata.

    Attributes:
        display_names: Extra provider key -> display name entries
        logos: Extra provider key -> logo file stem entries
        fallback_logo: Asset used when a provider has no logo
    """

    display_names: dict[str, str] = field(default_factory=dict)
    logos: dict[str, str] = field(default_factory=dict)
    fallback_logo: str = "/file.svg"


@dataclass
class OutputConfig:
    """Configuration for static site output.

    Attributes:
        dir: Output directory for the generated site
        site_title: Heading of the listing page
        site_label: Small label shown above the heading
        site_description: Lead paragraph of the listing page
        clean: Remove the output directory before building
    """

    dir: str = "out"
    site_title: str = "Bifrost Model Error Index"
    site_label: str = "[ BIFROST ERROR INDEX ]"
    site_description: str = "Insights, integration guides, and updates from the Bifrost team."
    clean: bool = False


@dataclass
class TocConfig:
    """Geometry constants for the table-of-contents tracker.

    Attributes:
        padding: Gap added below the fixed banner and navbar
        default_banner_height: Banner height used when no banner is present
        default_navbar_height: Navbar height used when no navbar is present
        window_above: How far above the offset an intersecting heading may sit
        window_below: How far below the offset an intersecting heading may sit
        fallback_slack: Extra distance past the threshold for the fallback pass
        sticky_top: Sticky top position of the panel
        footer_gap: Gap kept between the panel bottom and the footer
        min_height: Smallest panel height
        default_height_margin: Subtracted from the viewport height by default
    """

    padding: float = 24.0
    default_banner_height: float = 40.0
    default_navbar_height: float = 64.0
    window_above: float = 150.0
    window_below: float = 50.0
    fallback_slack: float = 100.0
    sticky_top: float = 96.0
    footer_gap: float = 24.0
    min_height: float = 150.0
    default_height_margin: float = 128.0


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the build log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "build.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    content: ContentConfig = field(default_factory=ContentConfig)
    providers: ProvidersConfig = field(default_factory=ProvidersConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    toc: TocConfig = field(default_factory=TocConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "content": {
            "dir": cfg.content.dir,
            "extension": cfg.content.extension,
            "strict": cfg.content.strict,
        },
        "providers": {
            "display_names": dict(cfg.providers.display_names),
            "logos": dict(cfg.providers.logos),
            "fallback_logo": cfg.providers.fallback_logo,
        },
        "output": {
            "dir": cfg.output.dir,
            "site_title": cfg.output.site_title,
            "site_label": cfg.output.site_label,
            "site_description": cfg.output.site_description,
            "clean": cfg.output.clean,
        },
        "toc": {
            "padding": cfg.toc.padding,
            "default_banner_height": cfg.toc.default_banner_height,
            "default_navbar_height": cfg.toc.default_navbar_height,
            "window_above": cfg.toc.window_above,
            "window_below": cfg.toc.window_below,
            "fallback_slack": cfg.toc.fallback_slack,
            "sticky_top": cfg.toc.sticky_top,
            "footer_gap": cfg.toc.footer_gap,
            "min_height": cfg.toc.min_height,
            "default_height_margin": cfg.toc.default_height_margin,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        content=ContentConfig(**data["content"]),
        providers=ProvidersConfig(**data["providers"]),
        output=OutputConfig(**data["output"]),
        toc=TocConfig(**data["toc"]),
        logging=LoggingConfig(**data["logging"]),
    )
