"""Output tree data model for Markem.

The walker produces an in-memory tree of DirectoryNode objects that mirrors
the source directory. Pages are held as text, assets only as references to
the source file so nothing is read into memory until write time.

Key classes:
- RenderedFile: A finished HTML page.
- AssetRef: A non-Markdown file copied verbatim at write time.
- DirectoryNode: One directory of the output tree.
- DirectoryContext: Config and layout inherited by a directory.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

EMPTY_CONFIG: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class RenderedFile:
    """A rendered HTML page.

    Attributes:
        name: Output file name (source name with .md replaced by .html).
        text: Final HTML.
    """

    name: str
    text: str


@dataclass(frozen=True)
class AssetRef:
    """A static file to copy byte for byte.

    Attributes:
        name: File name in the output directory.
        source: Absolute path to the original file.
    """

    name: str
    source: Path


@dataclass
class DirectoryNode:
    """One directory of the output tree.

    Attributes:
        name: A single path segment, never a full path.
        files: Rendered pages in this directory.
        dirs: Child directories.
        assets: Static files in this directory.
    """

    name: str
    files: list[RenderedFile] = field(default_factory=list)
    dirs: list[DirectoryNode] = field(default_factory=list)
    assets: list[AssetRef] = field(default_factory=list)

    def page_count(self) -> int:
        """Return the number of pages in this node and all descendants."""
        return len(self.files) + sum(d.page_count() for d in self.dirs)

    def asset_count(self) -> int:
        """Return the number of assets in this node and all descendants."""
        return len(self.assets) + sum(d.asset_count() for d in self.dirs)


@dataclass(frozen=True)
class DirectoryContext:
    """Values a directory inherits from its parent.

    Each level builds a new context for its children; a parent's context is
    never modified.

    Attributes:
        config: Read-only merged configuration.
        layout: Composed layout template, or None above the root.
    """

    config: Mapping[str, Any] = field(default_factory=lambda: EMPTY_CONFIG)
    layout: str | None = None
