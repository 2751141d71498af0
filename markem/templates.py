"""Template rendering engine for Markem.

This module uses Jinja2 to render document bodies and layouts. Templates
can include other templates by path relative to the site root, and get a
read-only ``util`` helper for listing directories of the site.

Key classes:
- TemplateEngine: Renders template strings against a context.
- SiteUtils: Helper exposed to templates as ``util``.
- IndexEntry: One entry returned by ``util.index()``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateSyntaxError, select_autoescape
from markupsafe import Markup

from .errors import RenderError
from .utils import titleize

__all__ = ["IndexEntry", "SiteUtils", "TemplateEngine"]


@dataclass(frozen=True)
class IndexEntry:
    """A directory entry as seen by templates.

    Attributes:
        name: File or directory name.
        type: "file" or "dir".
        size: Size in bytes.
        created: Creation (or metadata change) time.
        modified: Last modification time.
        title: Human-friendly title derived from the name.
    """

    name: str
    type: str
    size: int
    created: datetime
    modified: datetime
    title: str


class SiteUtils:
    """Read-only helpers for templates, scoped to the site root.

    Attributes:
        root: Absolute path of the site root.
    """

    def __init__(self, root: Path):
        self._root = root.resolve()

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, relative: str) -> Path:
        target = (self._root / relative).resolve()
        if target != self._root and self._root not in target.parents:
            raise ValueError(f"Path escapes the site root: {relative}")
        return target

    def join(self, *parts: str) -> str:
        """Join path segments onto the site root.

        Args:
            *parts: Path segments relative to the site root.

        Returns:
            Absolute path string.

        Raises:
            ValueError: If the result lies outside the site root.
        """
        return str(self._resolve(os.path.join(*parts) if parts else "."))

    def index(self, relative_dir: str = ".") -> list[IndexEntry]:
        """List a directory of the site.

        Args:
            relative_dir: Directory relative to the site root.

        Returns:
            Entries sorted by name.

        Raises:
            ValueError: If the directory lies outside the site root.
        """
        dir_path = self._resolve(relative_dir)
        entries: list[IndexEntry] = []
        for path in sorted(dir_path.iterdir(), key=lambda p: p.name):
            stat = path.stat()
            entries.append(
                IndexEntry(
                    name=path.name,
                    type="file" if path.is_file() else "dir",
                    size=stat.st_size,
                    created=datetime.fromtimestamp(stat.st_ctime),
                    modified=datetime.fromtimestamp(stat.st_mtime),
                    title=titleize(path.name),
                )
            )
        return entries


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        site_root: Directory templates are loaded from for includes.
        env: Jinja2 environment.
        util: SiteUtils instance handed to every document.
    """

    def __init__(self, site_root: Path):
        """Initialize the template engine.

        Args:
            site_root: Root of the source tree; include paths resolve against it.
        """
        self.site_root = site_root
        self.env = Environment(
            loader=FileSystemLoader(str(site_root)),
            autoescape=select_autoescape(["html", "xml"]),
            enable_async=False,
            keep_trailing_newline=True,
        )
        self.util = SiteUtils(site_root)

    def render_string(self, template: str, context: dict[str, Any]) -> str:
        """Render a template string.

        Args:
            template: Template string to render.
            context: Variables to make available in the template.

        Returns:
            Rendered string.
        """
        tmpl = self.env.from_string(template)
        return tmpl.render(**context)

    def render_document(
        self,
        body_html: str,
        layout: str,
        context: dict[str, Any],
        source_path: Path | None = None,
    ) -> str:
        """Render a converted document inside its layout.

        The body is rendered first as a template of its own; the result is
        handed to the layout as ``child``.

        Args:
            body_html: HTML produced by Markdown conversion.
            layout: Composed layout template.
            context: Config, metadata and helpers for both templates.
            source_path: Document path used in error messages.

        Returns:
            The full page HTML.

        Raises:
            RenderError: If either template fails to compile or render.
        """
        try:
            child = self.render_string(body_html, context)
            return self.render_string(layout, {**context, "child": Markup(child)})
        except TemplateSyntaxError as exc:
            raise RenderError(
                f"Template syntax error on line {exc.lineno}: {exc.message}",
                source_path,
                exc,
            ) from exc
        except Exception as exc:
            raise RenderError(_format_error_message(exc), source_path, exc) from exc


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    error_msg = str(exc)

    if error_type == "UndefinedError":
        return f"Undefined variable: {error_msg}"
    if error_type == "TemplateNotFound":
        return f"Template not found: {error_msg}"
    if error_type == "TypeError":
        return f"Type error: {error_msg}"

    return f"{error_type}: {error_msg}"
