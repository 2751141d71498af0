"""Command-line interface for Markem.

Usage: ``markem ROOT`` builds the site found in ROOT into ./dist.
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__
from .errors import FatalArgumentError, MarkemError


@click.command()
@click.version_option(version=__version__, prog_name="markem")
@click.argument("root", required=False)
def cli(root: str | None):
    """Build the Markdown tree in ROOT into the dist directory."""
    cwd = Path.cwd()
    from .build import build_site, resolve_root

    try:
        site_root = resolve_root(root, cwd)
    except FatalArgumentError as exc:
        click.echo(exc.message, err=True)
        raise SystemExit(1) from None

    try:
        result = build_site(site_root, cwd)
    except MarkemError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        if exc.source_path is not None:
            rel_path = _display_path(exc.source_path, site_root)
            click.echo(click.style(f"  File: {rel_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None

    click.echo(
        f"Built {result.tree.page_count()} pages and {result.tree.asset_count()} assets "
        f"into {result.output_dir}"
    )


def _display_path(path: Path, site_root: Path) -> Path:
    """Show paths inside the site root relative to it."""
    try:
        return path.relative_to(site_root)
    except ValueError:
        return path


def main():
    """Entry point for the CLI application."""
    cli()
