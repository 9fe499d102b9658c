"""Comparison configuration: process defaults and option files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import yaml

from .exceptions import ConfigError
from .models import ComparisonOptions

logger = logging.getLogger(__name__)

_default_options = ComparisonOptions()


def get_default_options() -> ComparisonOptions:
    """Return an independent snapshot of the process-wide default options."""
    return _default_options.clone()


def set_default_options(options: ComparisonOptions):
    """Replace the process-wide default options."""
    global _default_options
    if not isinstance(options, ComparisonOptions):
        raise ConfigError(
            f"default options must be ComparisonOptions, got {type(options).__name__}"
        )
    _default_options = options.clone()


def reset_default_options():
    set_default_options(ComparisonOptions())


def options_from_config(data: dict, source: str = None) -> tuple[ComparisonOptions, list[str]]:
    """
    Split configuration data into options and ignore paths.

    Args:
        data: Mapping of option names plus an optional ``ignore_paths`` list
        source: Where the data came from, for error messages

    Returns:
        Tuple of (options, ignore_paths)
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("configuration must be a mapping", source)

    data = dict(data)
    ignore_paths = data.pop("ignore_paths", None) or []
    if not isinstance(ignore_paths, list) or not all(
        isinstance(p, str) and p.strip() for p in ignore_paths
    ):
        raise ConfigError("ignore_paths must be a list of non-empty strings", source)

    return ComparisonOptions.from_dict(data, source), ignore_paths


def load_options(path: Union[str, Path]) -> tuple[ComparisonOptions, list[str]]:
    """
    Load options and ignore paths from a YAML or JSON file.

    Example file::

        value_comparison: semantic
        null_comparison: strict
        max_differences: 25
        ignore_paths:
          - $.meta.etag
          - items.updatedAt

    Returns:
        Tuple of (options, ignore_paths)
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()

    # YAML also handles JSON since JSON is valid YAML
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse configuration file: {e}", str(path)) from e

    logger.debug("Loaded comparison options from %s", path)
    return options_from_config(data, str(path))
