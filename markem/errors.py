"""Error taxonomy for Markem.

Every error the build can raise derives from MarkemError, which carries the
offending path so the CLI can point the user at the file to fix.

Key classes:
- FatalArgumentError: The source root argument is missing or invalid.
- ConfigParseError: A directory configuration file could not be parsed.
- RenderError: Markdown conversion or template rendering failed.
- UnsupportedEntryError: A directory entry is neither a file nor a directory.
- SyntaxExpansionError: A custom syntax rule kept matching its own output.
"""

from __future__ import annotations

from pathlib import Path


class MarkemError(Exception):
    """Base error for build failures with file context.

    Attributes:
        message: Human-readable error message.
        source_path: Path to the file or directory that caused the error.
        original_error: The original exception that was caught, if any.
    """

    def __init__(
        self,
        message: str,
        source_path: Path | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.source_path = source_path
        self.original_error = original_error
        if source_path is None:
            super().__init__(message)
        else:
            super().__init__(f"{source_path}: {message}")


class FatalArgumentError(MarkemError):
    """The source root is missing, does not exist or is not a directory."""


class ConfigParseError(MarkemError):
    """A +config.yaml file is not valid YAML or not a mapping."""


class RenderError(MarkemError):
    """A document failed Markdown conversion or template rendering."""


class UnsupportedEntryError(MarkemError):
    """A directory entry that is neither a regular file nor a directory."""


class SyntaxExpansionError(MarkemError):
    """A custom syntax rule did not reach a fixed point."""
