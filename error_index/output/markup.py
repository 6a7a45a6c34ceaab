"""
Article body rendering (Markdown -> HTML) with markdown-it-py.

Rendering adds what the TOC and the site styles rely on:
- h1-h4 get ``mdx-hN`` classes and ids derived from their text
- external links (``http...``) open in a new tab, internal links stay put
- inline code, lists, tables, quotes and images get ``mdx-*`` classes
"""

from __future__ import annotations

from markdown_it import MarkdownIt
from markdown_it.token import Token

from ..core.headings import heading_id


BLOCK_CLASSES = {
    "paragraph_open": "mdx-p",
    "bullet_list_open": "mdx-ul",
    "ordered_list_open": "mdx-ol",
    "list_item_open": "mdx-li",
    "blockquote_open": "mdx-blockquote",
    "hr": "mdx-hr",
    "table_open": "mdx-table",
    "thead_open": "mdx-thead",
    "tbody_open": "mdx-tbody",
    "tr_open": "mdx-tr",
    "th_open": "mdx-th",
    "td_open": "mdx-td",
}
HEADING_TAGS = {"h1", "h2", "h3", "h4"}


def is_external(href: str | None) -> bool:
    return bool(href) and href.startswith("http")


class MarkupRenderer:
    """Converts article bodies to HTML."""

    def __init__(self) -> None:
        self._md = MarkdownIt("commonmark", {"html": True}).enable("table").enable("strikethrough")
        default_image = self._md.renderer.rules["image"]

        def image_rule(tokens, idx, options, env):
            return f'<span class="mdx-image-wrapper">{default_image(tokens, idx, options, env)}</span>'

        render_token = self._md.renderer.renderToken

        def table_open_rule(tokens, idx, options, env):
            return '<div class="mdx-table-wrapper">' + render_token(tokens, idx, options, env)

        def table_close_rule(tokens, idx, options, env):
            return render_token(tokens, idx, options, env) + "</div>\n"

        self._md.renderer.rules["image"] = image_rule
        self._md.renderer.rules["table_open"] = table_open_rule
        self._md.renderer.rules["table_close"] = table_close_rule

    def render(self, source: str) -> str:
        tokens = self._md.parse(source or "")
        _decorate(tokens)
        return self._md.renderer.render(tokens, self._md.options, {})


def _decorate(tokens: list[Token]) -> None:
    for idx, token in enumerate(tokens):
        if token.type == "heading_open" and token.tag in HEADING_TAGS:
            text = _inline_text(tokens[idx + 1]) if idx + 1 < len(tokens) else ""
            token.attrSet("class", f"mdx-{token.tag}")
            anchor = heading_id(text)
            if anchor and not token.attrGet("id"):
                token.attrSet("id", anchor)
        elif token.type in BLOCK_CLASSES:
            token.attrSet("class", BLOCK_CLASSES[token.type])
        if token.children:
            _decorate_inline(token.children)


def _decorate_inline(children: list[Token]) -> None:
    for child in children:
        if child.type == "link_open":
            href = child.attrGet("href")
            if is_external(str(href) if href is not None else None):
                child.attrSet("target", "_blank")
                child.attrSet("rel", "noopener noreferrer")
                child.attrSet("class", "mdx-link mdx-link-external")
            else:
                child.attrSet("class", "mdx-link")
        elif child.type == "code_inline":
            child.attrSet("class", "mdx-code-inline")
        elif child.type == "image":
            child.attrSet("class", "mdx-image")
            src = child.attrGet("src")
            if src is not None and str(src).startswith("/"):
                child.attrSet("loading", "lazy")


def _inline_text(token: Token) -> str:
    if token.type != "inline":
        return ""
    if not token.children:
        return token.content
    return "".join(child.content for child in token.children if child.type in ("text", "code_inline"))
