"""yaml_loader — the single YAML entry point for importgate.

Wraps PyYAML's ``safe_load`` so that encoding and safe-parsing choices are
made in one place.  Project and policy files must be mappings; malformed
YAML is converted into a :class:`ConfigurationError` so the CLI reports it
like any other configuration mistake.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

import yaml

from importgate.exceptions import ConfigurationError


def load_yaml(path: Union[str, Path]) -> Optional[Any]:
    """Load a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file contains invalid YAML.
    """
    with open(path, "r", encoding="utf-8") as fh:
        return yaml.safe_load(fh)


def load_yaml_string(text: str) -> Optional[Any]:
    """Parse a YAML string.

    Raises:
        yaml.YAMLError: If the string contains invalid YAML.
    """
    return yaml.safe_load(text)


def load_mapping(path: Union[str, Path]) -> dict[str, Any]:
    """Load a YAML file that must contain a mapping.

    An empty file yields an empty mapping.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed mapping.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the YAML is invalid or not a mapping.
    """
    try:
        data = load_yaml(path)
    except yaml.YAMLError as exc:
        raise ConfigurationError([str(exc)], path=str(path)) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            [f"Top level must be a mapping, got {type(data).__name__}"],
            path=str(path),
        )
    return data
