"""Custom exceptions for importgate.

Violations found in a file are findings, not errors, and never surface as
exceptions.  The classes here cover the three ways a check cannot run at
all, plus the programming-defect signal raised when the core's own
guarantees are broken.

Exceptions:
    ConfigurationError — The ordering policy or project configuration is
        malformed.  Raised before any file is checked.
    PatternError — A ``/regex/`` token in the policy fails to compile.
        Subclasses ConfigurationError because patterns are static policy.
    InvariantViolation — The classifier or checker produced a state that
        should be structurally impossible.  Never caught by the engine.
    ImportgateParseError — LibCST cannot parse a source file.
"""

from __future__ import annotations

import re
from typing import Optional

from importgate.lib import config


class ConfigurationError(ValueError):
    """Raised when an ordering policy or project config is invalid.

    Collects every problem found in one pass so that the user can fix the
    whole file at once rather than one error per run.
    """

    def __init__(self, errors: list[str], path: Optional[str] = None) -> None:
        """Initialize with validation errors.

        Args:
            errors: Human-readable problems, one per entry.
            path: The configuration file the errors came from, if any.
        """
        self.errors = list(errors)
        self.path = path
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Build a header line followed by one indented line per error."""
        location = f" in {self.path}" if self.path else ""
        header = config.get_str("messages.config_invalid").format(location=location)
        return "\n".join([header] + [f"  - {err}" for err in self.errors])


class PatternError(ConfigurationError):
    """Raised when a regular-expression token fails to compile."""

    def __init__(self, token: str, original_error: re.error) -> None:
        """Initialize with the offending token.

        Args:
            token: The delimited pattern as written in the policy.
            original_error: The compilation error from :mod:`re`.
        """
        self.token = token
        self.original_error = original_error
        msg = config.get_str("messages.pattern_error")
        super().__init__([msg.format(token=token, error=original_error)])


class InvariantViolation(RuntimeError):
    """Raised when an internal consistency guarantee does not hold."""


class ImportgateParseError(Exception):
    """Raised when LibCST cannot parse a source file.

    A file that cannot be parsed is reported as an error instead of passing
    silently with zero collected imports.
    """

    def __init__(self, filepath: str, original_error: Exception) -> None:
        """Initialize with parse error details.

        Args:
            filepath: Path to the file that failed parsing.
            original_error: The underlying parse exception.
        """
        self.filepath = filepath
        self.original_error = original_error
        msg = config.get_str("messages.parse_error")
        super().__init__(msg.format(filepath=filepath, error=original_error))
