"""
Content loader for the error article corpus.

Reads every entry with the expected extension from the content directory
and turns it into an ArticleRecord. Loading a whole corpus never aborts on a
single bad entry: parse failures are collected on the LoadReport and logged,
and the remaining entries still load.
"""

from __future__ import annotations

from pathlib import Path

from rapidfuzz import fuzz, process

from ..core.errors import DataQualityWarning, NotFound, ParseError
from ..core.types import ArticleRecord, ErrorFrontmatter, LoadReport, normalize_provider
from ..providers import ProviderMetadata
from ..utils.logging import get_logger, log_event, log_warning
from .frontmatter import build_frontmatter, split_frontmatter


logger = get_logger("loader")

SUGGESTION_LIMIT = 3
SUGGESTION_CUTOFF = 60


class ContentLoader:
    """Loads ArticleRecords from a directory of entries.

    The loader keeps no cache: every call reads the corpus again. Callers
    that need caching must add it themselves.
    """

    def __init__(
        self,
        content_dir: Path,
        extension: str = ".mdx",
        metadata: ProviderMetadata | None = None,
    ):
        self.content_dir = Path(content_dir)
        self.extension = extension
        self.metadata = metadata or ProviderMetadata()

    def entry_paths(self) -> list[Path]:
        """Return entry files sorted by name.

        Raises:
            NotFound: If the content directory does not exist
        """
        if not self.content_dir.is_dir():
            raise NotFound("corpus", str(self.content_dir))
        return sorted(
            path
            for path in self.content_dir.iterdir()
            if path.is_file() and path.name.endswith(self.extension)
        )

    def list_slugs(self) -> list[str]:
        return [self._slug_for(path) for path in self.entry_paths()]

    def load_article(self, slug: str) -> ArticleRecord:
        """Load a single article by slug.

        Slugs are matched case-insensitively. When several entries differ
        only by case, the one load_all keeps (last in sorted order) is read.

        Args:
            slug: Entry name, with or without the extension

        Returns:
            The parsed ArticleRecord

        Raises:
            NotFound: If no entry exists for the slug
            ParseError: If the entry exists but its header is malformed
        """
        real_slug = _strip_suffix(slug, self.extension)
        paths = self.entry_paths() if self.content_dir.is_dir() else []
        matching = [path for path in paths if self._slug_for(path).lower() == real_slug.lower()]
        if not matching:
            raise NotFound("article", real_slug, suggest(real_slug, [self._slug_for(p) for p in paths]))
        return self._read(matching[-1])

    def load_all(self) -> LoadReport:
        """Load every entry of the corpus.

        Returns:
            LoadReport with the loaded articles in slug order, plus any
            parse errors and data-quality warnings encountered.
        """
        report = LoadReport()
        by_key: dict[str, int] = {}

        for path in self.entry_paths():
            try:
                article = self._read(path)
            except ParseError as exc:
                report.errors.append(exc)
                log_warning(
                    logger,
                    "Invalid frontmatter",
                    event="parse_error",
                    file=path.name,
                    cause=exc.cause,
                )
                continue

            if not article.provider_key:
                _warn(report, DataQualityWarning("empty_provider", article.slug, "excluded from provider list"))

            key = article.slug.lower()
            if key in by_key:
                previous = report.articles[by_key[key]]
                _warn(
                    report,
                    DataQualityWarning(
                        "duplicate_slug",
                        article.slug,
                        f"{previous.source_path.name if previous.source_path else previous.slug} replaced",
                    ),
                )
                report.articles[by_key[key]] = article
                continue

            by_key[key] = len(report.articles)
            report.articles.append(article)

        log_event(
            logger,
            "Corpus loaded",
            event="corpus_loaded",
            content_dir=str(self.content_dir),
            articles=len(report.articles),
            errors=len(report.errors),
            warnings=len(report.warnings),
        )
        return report

    def load_articles(self) -> list[ArticleRecord]:
        return self.load_all().articles

    def articles_by_provider(self, provider: str) -> list[ArticleRecord]:
        key = normalize_provider(provider)
        return [article for article in self.load_articles() if article.provider_key == key]

    def _read(self, path: Path) -> ArticleRecord:
        try:
            raw = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(path, f"not valid UTF-8: {exc.reason}") from exc
        data, body = split_frontmatter(raw, path)
        frontmatter = self._apply_canonical_icon(build_frontmatter(data))
        return ArticleRecord(
            slug=self._slug_for(path),
            frontmatter=frontmatter,
            body=body,
            source_path=path,
        )

    def _apply_canonical_icon(self, frontmatter: ErrorFrontmatter) -> ErrorFrontmatter:
        # The canonical logo table wins over author-supplied icons.
        if not frontmatter.provider or not self.metadata.has_logo(frontmatter.provider):
            return frontmatter
        return ErrorFrontmatter(
            title=frontmatter.title,
            provider=frontmatter.provider,
            provider_icon=self.metadata.logo_path(frontmatter.provider),
            solved=frontmatter.solved,
            extra=frontmatter.extra,
        )

    def _slug_for(self, path: Path) -> str:
        return _strip_suffix(path.name, self.extension)


def suggest(key: str, candidates: list[str]) -> list[str]:
    """Return up to three candidates that look like ``key``."""
    if not key or not candidates:
        return []
    matches = process.extract(
        key,
        candidates,
        scorer=fuzz.WRatio,
        limit=SUGGESTION_LIMIT,
        score_cutoff=SUGGESTION_CUTOFF,
    )
    return [choice for choice, _score, _index in matches]


def _warn(report: LoadReport, warning: DataQualityWarning) -> None:
    report.warnings.append(warning)
    log_warning(
        logger,
        str(warning),
        event="data_quality",
        kind=warning.kind,
        subject=warning.subject,
    )


def _strip_suffix(name: str, suffix: str) -> str:
    if suffix and name.endswith(suffix):
        return name[: -len(suffix)]
    return name
