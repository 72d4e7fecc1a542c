"""config — lazy-loaded, typed accessor for importgate defaults.

Every tool-level constant (option spellings, message templates, exit codes,
output labels) is read from ``config/defaults.yaml`` through this module.
The file is parsed on first access and the mapping is cached for the rest of
the process.  Typed getters fail loudly when a key is missing or holds the
wrong kind of value, so a broken defaults file surfaces at the call-site
instead of as a confusing downstream error.

Design notes:
    The cache is a module-level sentinel shared by every caller.  ``reset()``
    exists only so tests can force a fresh read.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml

_DEFAULTS: Optional[dict[str, Any]] = None

_CONFIG_FILE = Path(__file__).resolve().parent.parent / "config" / "defaults.yaml"


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_defaults() -> dict[str, Any]:
    """Load and cache defaults.yaml.

    Returns:
        The full configuration mapping.

    Raises:
        FileNotFoundError: If defaults.yaml is missing from the package.
        TypeError: If the file does not hold a YAML mapping.
    """
    global _DEFAULTS  # noqa: PLW0603
    if _DEFAULTS is None:
        with open(_CONFIG_FILE, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
        if not isinstance(data, dict):
            msg = f"defaults.yaml must be a YAML mapping, got {type(data).__name__}"
            raise TypeError(msg)
        _DEFAULTS = data
    return _DEFAULTS


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


def get(dotted_key: str) -> Any:
    """Look up a nested value by dotted path, e.g. ``"messages.wrong_order"``.

    Raises:
        KeyError: If any segment of the path is missing.
    """
    node: Any = load_defaults()
    for part in dotted_key.split("."):
        if not isinstance(node, dict) or part not in node:
            msg = f"Config key not found: {dotted_key!r} (missing segment: {part!r})"
            raise KeyError(msg)
        node = node[part]
    return node


def _typed(dotted_key: str, expected: type) -> Any:
    value = get(dotted_key)
    # bool is an int subclass; an int key must not accept true/false.
    if expected is int and isinstance(value, bool):
        value_ok = False
    else:
        value_ok = isinstance(value, expected)
    if not value_ok:
        msg = (
            f"Expected {expected.__name__} for {dotted_key!r}, "
            f"got {type(value).__name__}"
        )
        raise TypeError(msg)
    return value


def get_str(dotted_key: str) -> str:
    """Return a string value; raises TypeError for any other type."""
    return _typed(dotted_key, str)


def get_int(dotted_key: str) -> int:
    """Return an integer value; raises TypeError for any other type."""
    return _typed(dotted_key, int)


def get_bool(dotted_key: str) -> bool:
    """Return a boolean value; raises TypeError for any other type."""
    return _typed(dotted_key, bool)


def get_list(dotted_key: str) -> list[Any]:
    """Return a list value; raises TypeError for any other type."""
    return _typed(dotted_key, list)


# ---------------------------------------------------------------------------
# Test utilities
# ---------------------------------------------------------------------------


def reset() -> None:
    """Clear the cached defaults (used by tests)."""
    global _DEFAULTS  # noqa: PLW0603
    _DEFAULTS = None
