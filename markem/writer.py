"""Output tree writer for Markem.

Materializes a DirectoryNode tree on disk. Each directory is removed and
recreated before its pages and assets are written, so files from a
previous build never survive. The remove-then-write sequence is not
atomic: a crash part way through leaves an incomplete output tree, and the
next build starts over from scratch.

Key classes:
- TreeWriter: Writes a DirectoryNode tree below a parent directory.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path

import click

from .content import DirectoryNode
from .utils import remove_path


def _echo_progress(kind: str, path: Path) -> None:
    click.echo(f"{kind}   {path}", err=True)


class TreeWriter:
    """Writes an output tree to the filesystem.

    Progress is reported one line per directory (D), page (P) and asset (A).

    Attributes:
        progress: Called with the kind tag and path of every written entry.
    """

    def __init__(self, progress: Callable[[str, Path], None] | None = None):
        self.progress = progress or _echo_progress

    def write(self, node: DirectoryNode, parent_dir: Path | None = None) -> Path:
        """Write node and its descendants.

        Args:
            node: Directory node to write.
            parent_dir: Directory to create node in; the current working
                directory when omitted.

        Returns:
            Path of the directory written for node.
        """
        dir_path = parent_dir / node.name if parent_dir is not None else Path(node.name)

        remove_path(dir_path)
        dir_path.mkdir(parents=True)
        self.progress("D", dir_path)

        for page in node.files:
            page_path = dir_path / page.name
            page_path.write_text(page.text, encoding="utf-8")
            self.progress("P", page_path)

        for asset in node.assets:
            asset_path = dir_path / asset.name
            shutil.copyfile(asset.source, asset_path)
            self.progress("A", asset_path)

        for child in node.dirs:
            self.write(child, dir_path)

        return dir_path
