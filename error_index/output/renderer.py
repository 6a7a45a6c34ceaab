"""
Static site rendering with Jinja2 templates.

Three page kinds are written, each as ``<url>/index.html``:
- the listing page (provider tags + every error)
- one page per provider
- one page per article, with breadcrumbs and a TOC sidebar
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..config import OutputConfig
from ..core.errors import NotFound
from ..core.headings import extract_headings
from ..core.index import find_provider
from ..core.types import ArticleRecord, ProviderAggregate
from ..providers import ProviderMetadata
from ..utils.logging import truncate_text
from .markup import MarkupRenderer
from .routes import article_url, home_url, page_path, provider_url


BREADCRUMB_TITLE_CHARS = 50
TOC_INDENT = {2: 0, 3: 12}


class SiteRenderer:
    """Renders the listing, provider and article pages."""

    def __init__(
        self,
        output_dir: Path,
        cfg: OutputConfig | None = None,
        metadata: ProviderMetadata | None = None,
        markup: MarkupRenderer | None = None,
    ):
        self.output_dir = Path(output_dir)
        self.cfg = cfg or OutputConfig()
        self.metadata = metadata or ProviderMetadata()
        self.markup = markup or MarkupRenderer()
        self.env = Environment(
            loader=FileSystemLoader(str(Path(__file__).parent.parent / "templates")),
            autoescape=select_autoescape(["html"]),
        )
        self.env.globals.update(
            article_url=article_url,
            provider_url=provider_url,
            display_name=self.metadata.display_name,
            site=self.cfg,
        )

    def render_index(self, articles: list[ArticleRecord], providers: list[ProviderAggregate]) -> Path:
        html = self.env.get_template("index.html").render(
            title=self.cfg.site_title,
            articles=articles,
            providers=providers,
        )
        return self._write(home_url(), html)

    def render_provider(
        self,
        provider: str,
        articles: list[ArticleRecord],
        providers: list[ProviderAggregate],
    ) -> Path:
        """Render one provider page.

        Raises:
            NotFound: If the provider has no aggregate or no articles
            ValueError: If the provider key would escape the output directory
        """
        info = find_provider(providers, provider)
        matching = [article for article in articles if article.provider_key == info.canonical_name]
        if not matching:
            raise NotFound("provider", info.canonical_name)

        html = self.env.get_template("provider.html").render(
            title=f"{info.display_name} Errors",
            provider=info,
            articles=matching,
            providers=providers,
            breadcrumbs=[
                {"label": "Home", "href": home_url()},
                {"label": info.display_name, "href": provider_url(info.canonical_name)},
            ],
        )
        return self._write(provider_url(info.canonical_name), html)

    def render_article(self, article: ArticleRecord) -> Path:
        """Render one article page.

        Raises:
            NotFound: If the article has no provider to file it under
            ValueError: If the provider key would escape the output directory
        """
        if not article.provider_key:
            raise NotFound("article", article.slug)

        body_html = self.markup.render(article.body)
        display = self.metadata.display_name(article.provider)
        html = self.env.get_template("article.html").render(
            title=article.title,
            article=article,
            provider_display=display,
            body_html=body_html,
            toc=toc_items(body_html),
            breadcrumbs=[
                {"label": "Home", "href": home_url()},
                {"label": display, "href": provider_url(article.provider)},
                {
                    "label": truncate_text(article.title, BREADCRUMB_TITLE_CHARS),
                    "href": article_url(article),
                },
            ],
        )
        return self._write(article_url(article), html)

    def _write(self, url: str, html: str) -> Path:
        path = page_path(self.output_dir, url)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
        return path


def toc_items(body_html: str) -> list[dict[str, Any]]:
    """TOC entries for the sidebar of a rendered article."""
    return [
        {
            "id": heading.id,
            "text": heading.text,
            "level": heading.level,
            "indent": TOC_INDENT.get(heading.level, 0),
        }
        for heading in extract_headings(body_html)
    ]
