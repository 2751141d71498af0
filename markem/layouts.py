"""Layout composition for Markem.

Layouts are Jinja templates that surround a document. A directory can carry
two layout files:

- +layout.jinja: a fragment spliced into the inherited layout wherever the
  inherited layout outputs ``{{ child }}``.
- +layout.new.jinja: a replacement that discards the inherited layout for
  this directory and everything below it.

The composed layout is used for the directory's own documents and handed
down to its subdirectories.
"""

from __future__ import annotations

import re
from pathlib import Path

from .errors import RenderError

LAYOUT_FILENAME = "+layout.jinja"
LAYOUT_REPLACEMENT_FILENAME = "+layout.new.jinja"

IDENTITY_LAYOUT = "{{ child }}"

# {{ child }}, {{- child -}} and {{ child | safe }} all mark the child slot
CHILD_MARKER_RE = re.compile(r"\{\{-?\s*child\s*(?:\|\s*safe\s*)?-?\}\}")


def splice_layout(layout: str, fragment: str) -> str:
    """Substitute every child marker in layout with the full fragment text.

    Args:
        layout: Outer layout template.
        fragment: Inner layout template.

    Returns:
        The composed template.
    """
    return CHILD_MARKER_RE.sub(lambda _: fragment, layout)


def _read_optional(path: Path) -> str | None:
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise RenderError(f"Layout is not valid UTF-8: {exc}", path, exc) from exc


class LayoutComposer:
    """Composes the layout template for a directory."""

    def compose(self, inherited: str | None, dir_path: Path) -> str:
        """Resolve the layout used in a directory.

        Args:
            inherited: Layout composed by the parent directory, or None at the root.
            dir_path: Directory being processed.

        Returns:
            The layout template for documents in this directory and the
            layout inherited by its subdirectories.
        """
        fragment = _read_optional(dir_path / LAYOUT_FILENAME)
        replacement = _read_optional(dir_path / LAYOUT_REPLACEMENT_FILENAME)

        layout = replacement if replacement is not None else inherited
        if layout is not None and fragment is not None:
            return splice_layout(layout, fragment)
        if layout is not None:
            return layout
        if fragment is not None:
            return fragment
        return IDENTITY_LAYOUT
