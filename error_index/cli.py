"""
Command-line interface for the error index.

Uses Typer to provide commands for building the static site, searching
the corpus, listing providers, validating frontmatter and inspecting a
single article.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import AppConfig, load_config
from .core.errors import BuildFailed, NotFound, ParseError
from .core.filtering import rank_articles
from .core.index import build_providers
from .input.loader import ContentLoader
from .output.markup import MarkupRenderer
from .output.renderer import toc_items
from .output.routes import article_url
from .providers import ProviderMetadata
from .runner import build_site
from .utils.logging import setup_logging

app = typer.Typer(add_completion=False)
console = Console()

CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, help="YAML config file.")
CONTENT_OPTION = typer.Option(None, "--content", "-i", help="Content directory.")
LOG_LEVEL_OPTION = typer.Option(None, "--log-level", help="Logging level.")


def _load(config: Path | None, content: Path | None, log_level: str | None) -> tuple[AppConfig, ContentLoader]:
    cfg = load_config(str(config) if config else None)
    if content is not None:
        cfg.content.dir = str(content)
    if log_level:
        cfg.logging.level = log_level
    setup_logging(cfg.logging)
    metadata = ProviderMetadata.from_config(cfg.providers)
    return cfg, ContentLoader(Path(cfg.content.dir), cfg.content.extension, metadata)


def _fail_not_found(exc: NotFound) -> None:
    console.print(f"[red]{escape(str(exc))}[/red]")
    if exc.suggestions:
        console.print(f"Did you mean: {', '.join(exc.suggestions)}?")
    raise typer.Exit(code=1)


@app.command()
def build(
    content: Path | None = CONTENT_OPTION,
    output: Path | None = typer.Option(None, "--output", "-o", help="Output directory."),
    config: Path | None = CONFIG_OPTION,
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    strict: bool | None = typer.Option(
        None, "--strict/--no-strict", help="Fail the build on invalid frontmatter."
    ),
    clean: bool | None = typer.Option(None, "--clean/--no-clean", help="Empty the output directory first."),
    log_level: str | None = LOG_LEVEL_OPTION,
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Build the static error index site."""
    cfg = load_config(str(config) if config else None)

    # Override with CLI options
    if content is not None:
        cfg.content.dir = str(content)
    if output is not None:
        cfg.output.dir = str(output)
    if strict is not None:
        cfg.content.strict = strict
    if clean is not None:
        cfg.output.clean = clean
    if log_level:
        cfg.logging.level = log_level
    if log_file is not None:
        cfg.logging.file = log_file

    try:
        index_path, _stats = build_site(
            Path(cfg.content.dir), Path(cfg.output.dir), cfg, show_progress=progress, console=console
        )
    except NotFound as exc:
        _fail_not_found(exc)
    except BuildFailed as exc:
        for error in exc.errors:
            console.print(f"[red]{escape('[FAIL]')}[/red] {escape(error.path.name)}: {escape(error.cause)}")
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1)
    console.print(f"Site generated: {index_path}")


@app.command()
def search(
    query: str = typer.Argument("", help="Search query; empty lists everything."),
    provider: str | None = typer.Option(None, "--provider", "-p", help="Only this provider."),
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Maximum rows to show."),
    content: Path | None = CONTENT_OPTION,
    config: Path | None = CONFIG_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
):
    """Rank articles against a query."""
    _cfg, loader = _load(config, content, log_level)
    try:
        articles = loader.load_articles()
    except NotFound as exc:
        _fail_not_found(exc)

    matches = rank_articles(articles, query, provider)
    table = Table(title=escape(f"Results for {query!r}") if query.strip() else "All errors")
    table.add_column("Score", justify="right")
    table.add_column("Provider")
    table.add_column("Title")
    table.add_column("URL")
    for match in matches[:limit]:
        article = match.article
        table.add_row(
            f"{match.score:.2f}",
            escape(loader.metadata.display_name(article.provider)),
            escape(article.title),
            article_url(article) if article.provider_key else "",
        )
    console.print(table)

    total = len(articles)
    console.print(f"Showing {len(matches)} of {total} error{'s' if total != 1 else ''}")


@app.command()
def providers(
    content: Path | None = CONTENT_OPTION,
    config: Path | None = CONFIG_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
):
    """List providers with their article counts."""
    _cfg, loader = _load(config, content, log_level)
    try:
        articles = loader.load_articles()
    except NotFound as exc:
        _fail_not_found(exc)

    table = Table(title="Providers")
    table.add_column("Key")
    table.add_column("Name")
    table.add_column("Errors", justify="right")
    table.add_column("Icon")
    for item in build_providers(articles, loader.metadata):
        table.add_row(
            escape(item.canonical_name),
            escape(item.display_name),
            str(item.article_count),
            escape(item.icon_path or ""),
        )
    console.print(table)


@app.command()
def validate(
    content: Path | None = CONTENT_OPTION,
    config: Path | None = CONFIG_OPTION,
):
    """Check that every entry's frontmatter parses."""
    cfg, loader = _load(config, content, "ERROR")
    try:
        report = loader.load_all()
    except NotFound:
        console.print(f"[red]Missing content directory: {cfg.content.dir}[/red]")
        raise typer.Exit(code=1)

    for error in report.errors:
        console.print(f"\n[red]{escape('[FAIL]')}[/red] {escape(error.path.name)}")
        console.print(error.cause, markup=False)
    for warning in report.warnings:
        console.print(f"[yellow]{escape('[WARN]')}[/yellow] {escape(str(warning))}")

    if report.errors:
        console.print(f"\n{len(report.errors)} file(s) have invalid frontmatter.")
        raise typer.Exit(code=1)

    total = len(report.articles) + len(report.errors)
    console.print(f"OK: {total} file(s) parsed successfully.")


@app.command()
def show(
    slug: str = typer.Argument(..., help="Article slug."),
    content: Path | None = CONTENT_OPTION,
    config: Path | None = CONFIG_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
):
    """Show an article's metadata and table of contents."""
    _cfg, loader = _load(config, content, log_level)
    try:
        article = loader.load_article(slug)
    except NotFound as exc:
        _fail_not_found(exc)
    except ParseError as exc:
        console.print(f"[red]Invalid frontmatter in {escape(exc.path.name)}:[/red] {escape(exc.cause)}")
        raise typer.Exit(code=1)

    console.print(f"[bold]{escape(article.title)}[/bold]")
    console.print(f"Provider: {escape(loader.metadata.display_name(article.provider)) or '-'}")
    console.print(f"Solved: {'yes' if article.frontmatter.solved else 'no'}")
    if article.provider_key:
        console.print(f"URL: {article_url(article)}")

    items = toc_items(MarkupRenderer().render(article.body))
    if not items:
        console.print("No table of contents.")
        return
    console.print("\n[bold]In this article[/bold]")
    for item in items:
        indent = "  " if item["level"] == 3 else ""
        console.print(f"{indent}- {item['text']} (#{item['id']})", markup=False)


if __name__ == "__main__":
    app()
