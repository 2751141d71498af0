"""Utility functions for Markem.

Small path and string helpers shared by the walker, writer and templates.

Key functions:
    is_markdown: Check if a path is a Markdown file.
    is_control_file: Check if a name is a directory control file.
    html_name: Swap a Markdown file name's extension for .html.
    titleize: Convert a file name to a human-readable title.
    remove_path: Remove a file, symlink or directory tree.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path

CONTROL_PREFIX = "+"
MARKDOWN_SUFFIX = ".md"
HTML_SUFFIX = ".html"

_EXTENSION_RE = re.compile(r"\.\w+$")
_WORD_START_RE = re.compile(r"\b[a-z]")


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .md extension (case-insensitive).
    """
    return path.suffix.lower() == MARKDOWN_SUFFIX


def is_control_file(name: str) -> bool:
    """Check if a directory entry is a control file (config or layout)."""
    return name.startswith(CONTROL_PREFIX)


def html_name(name: str) -> str:
    """Replace a trailing Markdown extension with .html.

    Examples:
        >>> html_name("guide.md")
        'guide.html'
    """
    return str(Path(name).with_suffix(HTML_SUFFIX))


def titleize(filename: str) -> str:
    """Convert a file name to a human-readable title.

    Strips the extension, turns underscores into spaces and upper-cases the
    first letter of every word. The rest of each word is left alone.

    Args:
        filename: File name with or without extension.

    Returns:
        Title string.

    Examples:
        >>> titleize("getting_started.md")
        'Getting Started'

        >>> titleize("API_notes.txt")
        'API Notes'
    """
    base = _EXTENSION_RE.sub("", filename)
    base = base.replace("_", " ")
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), base)


def remove_path(path: Path) -> None:
    """Remove whatever exists at path.

    Directories are removed recursively; files and symlinks (including
    symlinks to directories) are unlinked.

    Args:
        path: Path to remove. Missing paths are ignored.
    """
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)
