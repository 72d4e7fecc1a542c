"""project — ``.importgate.yaml`` discovery and loading.

The project file has two sections: ``policy`` (the ordering policy, see
:mod:`importgate.lib.policy`) and ``logging`` (the JSONL check log).  Both
are validated before any file is checked.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from importgate.exceptions import ConfigurationError
from importgate.lib import config
from importgate.lib.policy import OrderingPolicy
from importgate.lib.yaml_loader import load_mapping


@dataclass(frozen=True)
class LoggingConfig:
    """Check-log settings.

    Attributes:
        enabled: Whether to append JSONL entries.
        directory: Directory receiving the log file.
    """

    enabled: bool = False
    directory: str = ""

    @property
    def log_dir(self) -> str:
        """Directory to log into, or an empty string when disabled."""
        return self.directory if self.enabled else ""


@dataclass(frozen=True)
class ProjectConfig:
    """A loaded project configuration."""

    policy: OrderingPolicy
    logging: LoggingConfig
    path: Optional[str] = None


def validate_project_config(data: Any) -> list[str]:
    """Validate the top-level structure of a project config.

    The policy section is validated separately by
    :func:`importgate.lib.policy.validate_policy`.

    Args:
        data: The parsed YAML content.

    Returns:
        List of validation error messages. Empty if valid.
    """
    errors: list[str] = []

    if not isinstance(data, dict):
        errors.append(f"Project config must be a mapping, got {type(data).__name__}")
        return errors

    allowed = config.get_list("project.allowed_keys")
    for key in data:
        if key not in allowed:
            errors.append(
                config.get_str("messages.config_unknown_key").format(
                    key=key, expected=", ".join(allowed)
                )
            )

    if "policy" not in data:
        errors.append("Missing required key: 'policy'")

    logging_section = data.get("logging")
    if logging_section is not None:
        if not isinstance(logging_section, dict):
            errors.append(
                f"'logging' must be a mapping, got {type(logging_section).__name__}"
            )
        else:
            enabled = logging_section.get("enabled")
            if enabled is not None and not isinstance(enabled, bool):
                errors.append(
                    f"logging.enabled must be a boolean, got {type(enabled).__name__}"
                )
            directory = logging_section.get("directory")
            if directory is not None and not isinstance(directory, str):
                errors.append(
                    f"logging.directory must be a string, got {type(directory).__name__}"
                )

    return errors


def project_config_from_dict(
    data: Any, *, path: Optional[str] = None
) -> ProjectConfig:
    """Build a ProjectConfig from a parsed mapping.

    Raises:
        ConfigurationError: If the project or policy section is invalid.
    """
    errors = validate_project_config(data)
    if errors:
        raise ConfigurationError(errors, path=path)

    logging_section = data.get("logging") or {}
    directory = logging_section.get("directory") or config.get_str(
        "defaults.log_directory"
    )
    if path is not None and not Path(directory).is_absolute():
        directory = str(Path(path).parent / directory)
    logging = LoggingConfig(
        enabled=logging_section.get(
            "enabled", config.get_bool("defaults.logging_enabled")
        ),
        directory=directory,
    )
    policy = OrderingPolicy.from_dict(data["policy"], path=path)
    return ProjectConfig(policy=policy, logging=logging, path=path)


def load_project_config(path: Union[str, Path]) -> ProjectConfig:
    """Load and validate a project config file.

    Raises:
        ConfigurationError: If the file is missing or invalid.
    """
    if not Path(path).is_file():
        msg = config.get_str("messages.config_not_found").format(path=path)
        raise ConfigurationError([msg], path=str(path))
    return project_config_from_dict(load_mapping(path), path=str(path))


def find_project_config(start: Union[str, Path, None] = None) -> Optional[Path]:
    """Look for ``.importgate.yaml`` in ``start`` and its parents.

    Args:
        start: Directory to start from; defaults to the working directory.

    Returns:
        Path of the first config found, or None.
    """
    filename = config.get_str("filenames.project_config")
    directory = Path(start or Path.cwd()).resolve()
    for candidate in [directory, *directory.parents]:
        path = candidate / filename
        if path.is_file():
            return path
    return None
