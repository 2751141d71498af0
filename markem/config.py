"""Directory configuration cascade for Markem.

Each directory may hold a +config.yaml file. Its top-level keys are laid
over the configuration inherited from the parent directory to produce the
configuration seen by the directory's documents and subdirectories.

Key classes:
- ConfigMerger: Loads a directory's config file and overlays it.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from .errors import ConfigParseError

CONFIG_FILENAME = "+config.yaml"


def load_directory_config(dir_path: Path) -> dict[str, Any] | None:
    """Load the +config.yaml file of a directory.

    Args:
        dir_path: Directory to look in.

    Returns:
        The parsed mapping, an empty dict for an empty file, or None when the
        directory has no config file.

    Raises:
        ConfigParseError: If the file is not valid YAML or not a mapping.
    """
    config_path = dir_path / CONFIG_FILENAME
    if not config_path.is_file():
        return None
    try:
        text = config_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigParseError(f"Not valid UTF-8: {exc}", config_path, exc) from exc
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigParseError(f"Invalid YAML: {exc}", config_path, exc) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigParseError(
            f"Expected a mapping at the top level, got {type(loaded).__name__}",
            config_path,
        )
    return loaded


class ConfigMerger:
    """Merges directory configuration into the inherited configuration.

    Only top-level keys are overlaid: a nested mapping declared by a child
    directory replaces the ancestor's mapping of the same name wholesale.
    """

    def merge(self, inherited: Mapping[str, Any], dir_path: Path) -> Mapping[str, Any]:
        """Compute the configuration for a directory.

        Args:
            inherited: Configuration received from the parent directory.
            dir_path: Directory being processed.

        Returns:
            A new read-only mapping when the directory has a config file,
            otherwise the inherited mapping itself.
        """
        loaded = load_directory_config(dir_path)
        if loaded is None:
            return inherited
        merged = dict(inherited)
        merged.update(loaded)
        return MappingProxyType(merged)
