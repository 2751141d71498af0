"""Source tree traversal for Markem.

The walker visits the source tree depth first. For every directory it
resolves the configuration and layout inherited from its parent, renders
the Markdown documents it contains, registers everything else as static
assets and recurses into subdirectories. The result is an in-memory
DirectoryNode tree that the writer materializes.

Key classes:
- TreeWalker: Builds the output tree for a source directory.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import click

from .config import ConfigMerger
from .content import AssetRef, DirectoryContext, DirectoryNode, RenderedFile
from .errors import RenderError, SyntaxExpansionError, UnsupportedEntryError
from .html_utils import postprocess_html
from .layouts import LayoutComposer
from .renderers import MarkdownRenderer
from .syntax import SyntaxRegistry, preprocess_markdown
from .templates import TemplateEngine
from .utils import html_name, is_control_file, is_markdown

DEFAULT_OUTPUT_NAME = "dist"


def report_unsupported(error: UnsupportedEntryError) -> None:
    """Print a skipped entry to stderr."""
    click.echo(click.style(f"Skipped: {error.message}", fg="yellow"), err=True)


class TreeWalker:
    """Builds a DirectoryNode tree from a source directory.

    Attributes:
        site_root: Root of the source tree.
        output_name: Name given to the root node.
        config_merger: Resolves each directory's configuration.
        layout_composer: Resolves each directory's layout.
        markdown: Converts Markdown documents.
        engine: Renders documents and layouts.
        syntax_registry: Custom syntax rules, None for the built-in rules.
        on_unsupported: Called for entries that are skipped.
        output_dir: Build output directory; skipped when it lies inside the
            source tree.
    """

    def __init__(
        self,
        site_root: Path,
        output_name: str = DEFAULT_OUTPUT_NAME,
        config_merger: ConfigMerger | None = None,
        layout_composer: LayoutComposer | None = None,
        markdown: MarkdownRenderer | None = None,
        engine: TemplateEngine | None = None,
        syntax_registry: SyntaxRegistry | None = None,
        on_unsupported: Callable[[UnsupportedEntryError], None] | None = None,
        output_dir: Path | None = None,
    ):
        self.site_root = site_root
        self.output_name = output_name
        self.output_dir = output_dir.resolve() if output_dir is not None else None
        self.config_merger = config_merger or ConfigMerger()
        self.layout_composer = layout_composer or LayoutComposer()
        self.markdown = markdown or MarkdownRenderer()
        self.engine = engine or TemplateEngine(site_root)
        self.syntax_registry = syntax_registry
        self.on_unsupported = on_unsupported or report_unsupported

    def walk(self) -> DirectoryNode:
        """Process the whole source tree starting at the site root."""
        return self.process_directory(self.site_root, DirectoryContext())

    def process_directory(
        self, dir_path: Path, inherited: DirectoryContext | None = None
    ) -> DirectoryNode:
        """Build the output node for one directory and its descendants.

        Args:
            dir_path: Directory to process.
            inherited: Config and layout received from the parent directory.

        Returns:
            DirectoryNode for the directory, named with the output root name
            when dir_path is the site root.

        Raises:
            ConfigParseError: If a +config.yaml file is malformed.
            RenderError: If a document fails to convert or render.
        """
        inherited = inherited or DirectoryContext()
        context = DirectoryContext(
            config=self.config_merger.merge(inherited.config, dir_path),
            layout=self.layout_composer.compose(inherited.layout, dir_path),
        )
        name = self.output_name if dir_path == self.site_root else dir_path.name
        node = DirectoryNode(name=name)

        for path in sorted(dir_path.iterdir(), key=lambda p: p.name):
            if is_control_file(path.name) or self._is_output_dir(path):
                continue
            if path.is_file():
                if is_markdown(path):
                    node.files.append(self.render_document(path, context))
                else:
                    node.assets.append(AssetRef(name=path.name, source=path.absolute()))
            elif path.is_dir() and not path.is_symlink():
                node.dirs.append(self.process_directory(path, context))
            else:
                kind = "Symlinked directory" if path.is_dir() else "Invalid file type"
                self.on_unsupported(
                    UnsupportedEntryError(f"{kind} in {dir_path}: {path.name}", path)
                )
        return node

    def _is_output_dir(self, path: Path) -> bool:
        return (
            self.output_dir is not None
            and not path.is_symlink()
            and path.resolve() == self.output_dir
        )

    def render_document(self, path: Path, context: DirectoryContext) -> RenderedFile:
        """Render one Markdown document through its directory's layout.

        Args:
            path: Markdown file.
            context: Config and composed layout of the containing directory.

        Returns:
            RenderedFile named after the document with an .html extension.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise RenderError(f"Document is not valid UTF-8: {exc}", path, exc) from exc
        try:
            preprocessed = preprocess_markdown(text, self.syntax_registry)
        except SyntaxExpansionError as exc:
            raise SyntaxExpansionError(exc.message, path, exc) from exc
        try:
            converted = self.markdown.convert(preprocessed)
        except Exception as exc:
            raise RenderError(f"Markdown conversion failed: {exc}", path, exc) from exc

        data = {**context.config, **converted.metadata, "util": self.engine.util}
        rendered = self.engine.render_document(
            converted.html, context.layout or "", data, source_path=path
        )
        return RenderedFile(name=html_name(path.name), text=postprocess_html(rendered))
