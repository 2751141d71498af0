"""Site building functionality for Markem.

A build walks the source tree into an in-memory output tree, then writes
that tree to the output root, replacing whatever a previous build left
there.

Key functions:
- resolve_root: Validates the source root argument.
- build_site: Builds the whole site.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .content import DirectoryNode
from .errors import FatalArgumentError
from .walker import DEFAULT_OUTPUT_NAME, TreeWalker
from .writer import TreeWriter


@dataclass
class BuildResult:
    """Result of a site build.

    Attributes:
        tree: The output tree that was written.
        output_dir: Directory the site was written to.
    """

    tree: DirectoryNode
    output_dir: Path


def resolve_root(argument: str | None, cwd: Path | None = None) -> Path:
    """Turn the source root argument into an absolute directory path.

    Args:
        argument: Path given on the command line, absolute or relative.
        cwd: Directory relative paths are resolved against.

    Returns:
        Absolute path of the source root.

    Raises:
        FatalArgumentError: If the argument is missing or is not a directory.
    """
    if not argument:
        raise FatalArgumentError("Missing path to directory!")
    root = Path(argument)
    if not root.is_absolute():
        root = (cwd or Path.cwd()) / root
    if not root.exists():
        raise FatalArgumentError(f"Directory doesn't exist: {root}", root)
    if not root.is_dir():
        raise FatalArgumentError(f"Not a directory: {root}", root)
    return root


def build_site(
    site_root: Path,
    output_parent: Path | None = None,
    output_name: str = DEFAULT_OUTPUT_NAME,
    walker: TreeWalker | None = None,
    writer: TreeWriter | None = None,
) -> BuildResult:
    """Build the entire site.

    Nothing is written until the whole source tree has been processed, so
    configuration and rendering errors leave the previous output in place. An
    output directory inside the source tree is skipped by the walk.

    Args:
        site_root: Root of the source tree.
        output_parent: Directory the output root is created in; defaults to
            the current working directory.
        output_name: Name of the output root directory.
        walker: Optional custom tree walker.
        writer: Optional custom tree writer.

    Returns:
        BuildResult with the output tree and the output directory.
    """
    output_parent = output_parent or Path.cwd()
    walker = walker or TreeWalker(
        site_root, output_name=output_name, output_dir=output_parent / output_name
    )
    writer = writer or TreeWriter()
    tree = walker.walk()
    output_dir = writer.write(tree, output_parent)
    return BuildResult(tree=tree, output_dir=output_dir)
