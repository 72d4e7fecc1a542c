"""Unit tests for importgate.exceptions custom exception classes."""

from __future__ import annotations

import re

from importgate.exceptions import (
    ConfigurationError,
    ImportgateParseError,
    InvariantViolation,
    PatternError,
)


class TestConfigurationError:
    """Tests for the configuration error."""

    def test_inherits_from_value_error(self):
        """ConfigurationError is a subclass of ValueError."""
        assert issubclass(ConfigurationError, ValueError)

    def test_errors_accessible(self):
        """Every error is stored on the exception."""
        err = ConfigurationError(["first", "second"])
        assert err.errors == ["first", "second"]
        assert err.path is None

    def test_message_lists_errors(self):
        """The message has a header and one line per error."""
        err = ConfigurationError(["first", "second"], path="cfg.yaml")
        lines = str(err).splitlines()
        assert lines[0] == "Invalid importgate configuration in cfg.yaml:"
        assert lines[1:] == ["  - first", "  - second"]

    def test_message_without_path(self):
        """Without a path the header has no location."""
        err = ConfigurationError(["only"])
        assert str(err).splitlines()[0] == "Invalid importgate configuration:"


class TestPatternError:
    """Tests for the regex compilation error."""

    def test_is_configuration_error(self):
        """PatternError is a ConfigurationError."""
        assert issubclass(PatternError, ConfigurationError)

    def test_stores_token_and_error(self):
        """Token and original error are stored."""
        original = re.error("missing )")
        err = PatternError("/(/", original)
        assert err.token == "/(/"
        assert err.original_error is original
        assert "/(/" in err.errors[0]


class TestInvariantViolation:
    """Tests for the internal defect signal."""

    def test_is_runtime_error(self):
        """InvariantViolation is not a configuration problem."""
        assert issubclass(InvariantViolation, RuntimeError)
        assert not issubclass(InvariantViolation, ConfigurationError)


class TestImportgateParseError:
    """Tests for the parse error exception."""

    def test_inherits_from_exception(self):
        """ImportgateParseError is a subclass of Exception."""
        assert issubclass(ImportgateParseError, Exception)

    def test_stores_filepath(self):
        """File path is stored on the exception."""
        err = ImportgateParseError("test.py", SyntaxError("bad syntax"))
        assert err.filepath == "test.py"

    def test_stores_original_error(self):
        """Original error is stored on the exception."""
        original = SyntaxError("bad syntax")
        err = ImportgateParseError("test.py", original)
        assert err.original_error is original

    def test_message(self):
        """The message names the file and the cause."""
        err = ImportgateParseError("test.py", SyntaxError("bad syntax"))
        assert str(err) == "Failed to parse test.py: bad syntax"
