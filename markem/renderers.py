"""Markdown conversion for Markem.

This module wraps mistune to turn preprocessed Markdown into an HTML
fragment plus the document's front-matter metadata. Every call builds its
own parser, so conversions share no state.

Key classes:
- ConvertedMarkdown: HTML body and metadata of one document.
- MarkdownRenderer: Converts Markdown text to ConvertedMarkdown.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import mistune
import yaml

FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)

MARKDOWN_PLUGINS = ["strikethrough", "footnotes", "table", "task_lists", "url"]


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter from content.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (frontmatter dict, remaining content).
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1)) or {}
        if not isinstance(data, dict):
            return {}, text
        return data, text[match.end() :]
    except yaml.YAMLError:
        return {}, text


def _generate_heading_id(text: str) -> str:
    """Generate a URL-friendly ID from heading text.

    Args:
        text: The heading text.

    Returns:
        URL-friendly slug suitable for anchor links.
    """
    slug = re.sub(r"<[^>]+>", "", text).lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-")


class _PageRenderer(mistune.HTMLRenderer):
    """HTML renderer with heading anchors and syntax highlighting."""

    def __init__(self):
        super().__init__(escape=False)
        self._heading_id_counts: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs) -> str:
        """Render a heading with an id derived from its text.

        Repeated headings get -1, -2, ... suffixes so ids stay unique.
        """
        base_id = _generate_heading_id(text)

        if base_id in self._heading_id_counts:
            self._heading_id_counts[base_id] += 1
            heading_id = f"{base_id}-{self._heading_id_counts[base_id]}"
        else:
            self._heading_id_counts[base_id] = 0
            heading_id = base_id

        return f'<h{level} id="{heading_id}">{text}</h{level}>\n'

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block with Pygments syntax highlighting.

        Args:
            code: The code content.
            info: Language identifier (e.g., 'python', 'javascript').

        Returns:
            HTML string with highlighted code.
        """
        if info:
            info = info.split()[0]
            try:
                from pygments import highlight
                from pygments.formatters import HtmlFormatter
                from pygments.lexers import get_lexer_by_name
                from pygments.util import ClassNotFound

                try:
                    lexer = get_lexer_by_name(info, stripall=True)
                except ClassNotFound:
                    lexer = None
                if lexer is not None:
                    formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                    return highlight(code, lexer, formatter)
            except ImportError:
                pass
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        lang_class = f' class="language-{info}"' if info else ""
        return f"<pre><code{lang_class}>{escaped}</code></pre>\n"


@dataclass(frozen=True)
class ConvertedMarkdown:
    """Result of converting one Markdown document.

    Attributes:
        html: HTML fragment for the document body.
        metadata: Front-matter key/value pairs.
    """

    html: str
    metadata: dict[str, Any] = field(default_factory=dict)


class MarkdownRenderer:
    """Converts Markdown to HTML.

    Supports front matter, fenced code blocks, tables, task lists,
    strikethrough, footnotes, bare URL autolinking, heading ids and raw HTML.
    Single newlines inside a paragraph become line breaks.
    """

    def __init__(self, plugins: list[str] | None = None, hard_wrap: bool = True):
        self.plugins = list(plugins or MARKDOWN_PLUGINS)
        self.hard_wrap = hard_wrap

    def convert(self, text: str) -> ConvertedMarkdown:
        """Convert a Markdown document.

        Args:
            text: Preprocessed Markdown source, front matter included.

        Returns:
            ConvertedMarkdown with the HTML body and the front-matter metadata.
        """
        metadata, body = extract_frontmatter(text)
        markdown = mistune.create_markdown(
            renderer=_PageRenderer(),
            hard_wrap=self.hard_wrap,
            plugins=self.plugins,
        )
        return ConvertedMarkdown(html=markdown(body), metadata=metadata)
