"""
Static site build orchestration.

This module coordinates the whole workflow:
1. Load the corpus (each malformed entry fails in isolation)
2. Build the provider aggregate
3. Render the listing page
4. Render one page per provider
5. Render one page per article

Supports both progress bar and quiet modes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import shutil

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)

from .config import AppConfig
from .core.errors import BuildFailed, NotFound
from .core.index import build_providers
from .core.types import ArticleRecord, LoadReport, ProviderAggregate
from .input.loader import ContentLoader
from .output.renderer import SiteRenderer
from .providers import ProviderMetadata
from .utils.logging import log_event, log_warning, setup_logging


@dataclass
class BuildStats:
    """Counters collected while building the site.

    Attributes:
        articles: Articles loaded
        parse_errors: Entries skipped for malformed frontmatter
        warnings: Data-quality warnings raised while loading
        providers: Provider pages written
        pages: Total pages written
        skipped: Articles without a provider (no page)
    """
    articles: int = 0
    parse_errors: int = 0
    warnings: int = 0
    providers: int = 0
    pages: int = 0
    skipped: int = 0
    written: list[Path] = field(default_factory=list)


def build_site(
    content_dir: Path,
    output_dir: Path,
    cfg: AppConfig,
    show_progress: bool = True,
    console: Console | None = None,
) -> tuple[Path, BuildStats]:
    """Build the static error index.

    Args:
        content_dir: Directory with the article entries
        output_dir: Directory for the generated site
        cfg: Application configuration
        show_progress: Whether to display progress bars
        console: Rich console for output (creates default if None)

    Returns:
        Path to the generated listing page and the build statistics

    Raises:
        NotFound: If the content directory does not exist
        BuildFailed: In strict mode, if any entry failed to parse
    """
    if cfg.output.clean and output_dir.exists():
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    logger = setup_logging(cfg.logging, output_dir)
    metadata = ProviderMetadata.from_config(cfg.providers)
    loader = ContentLoader(content_dir, cfg.content.extension, metadata)
    renderer = SiteRenderer(output_dir, cfg.output, metadata)
    stats = BuildStats()

    log_event(
        logger,
        "Build start",
        event="build_start",
        content_dir=str(content_dir),
        output=str(output_dir),
    )

    report = loader.load_all()
    _check_report(report, cfg, stats)
    articles = report.articles
    providers = build_providers(articles, metadata)

    if not show_progress:
        index_path = _render_pages(renderer, articles, providers, stats, logger)
    else:
        console = console or Console()
        progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=console,
        )
        with progress:
            task = progress.add_task("Render pages", total=1 + len(providers) + len(articles))
            index_path = _render_pages(
                renderer, articles, providers, stats, logger,
                advance=lambda: progress.advance(task, 1),
            )

    _render_build_stats(stats, console or Console())
    log_event(
        logger,
        "Build complete",
        event="build_complete",
        output=str(index_path),
        pages=stats.pages,
        articles=stats.articles,
        parse_errors=stats.parse_errors,
    )
    return index_path, stats


def _check_report(report: LoadReport, cfg: AppConfig, stats: BuildStats) -> None:
    stats.articles = len(report.articles)
    stats.parse_errors = len(report.errors)
    stats.warnings = len(report.warnings)
    if report.errors and cfg.content.strict:
        raise BuildFailed(report.errors)


def _render_pages(
    renderer: SiteRenderer,
    articles: list[ArticleRecord],
    providers: list[ProviderAggregate],
    stats: BuildStats,
    logger,
    advance=None,
) -> Path:
    def _done(path: Path) -> None:
        stats.pages += 1
        stats.written.append(path)
        if advance is not None:
            advance()

    index_path = renderer.render_index(articles, providers)
    _done(index_path)

    for provider in providers:
        try:
            path = renderer.render_provider(provider.canonical_name, articles, providers)
        except (NotFound, ValueError):
            log_warning(logger, "Provider page skipped", event="provider_skipped", provider=provider.canonical_name)
            if advance is not None:
                advance()
            continue
        stats.providers += 1
        _done(path)

    for article in articles:
        try:
            path = renderer.render_article(article)
        except (NotFound, ValueError):
            stats.skipped += 1
            log_warning(logger, "Article page skipped", event="article_skipped", slug=article.slug)
            if advance is not None:
                advance()
            continue
        _done(path)

    return index_path


def _render_build_stats(stats: BuildStats, console: Console) -> None:
    """Display build statistics to the console."""
    console.print(
        "[bold]Build summary[/bold]: "
        f"articles={stats.articles}, providers={stats.providers}, pages={stats.pages}, "
        f"parse_errors={stats.parse_errors}, warnings={stats.warnings}, skipped={stats.skipped}"
    )
