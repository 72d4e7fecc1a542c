"""Unit tests for importgate.lib.config defaults accessor."""

from __future__ import annotations

import pytest

from importgate.lib import config


class TestLoadDefaults:
    """Tests for config loading and caching."""

    def test_loads_successfully(self) -> None:
        """defaults.yaml loads without error."""
        data = config.load_defaults()
        assert isinstance(data, dict)

    def test_cached_on_second_call(self) -> None:
        """Second call returns the same dict object (cached)."""
        first = config.load_defaults()
        second = config.load_defaults()
        assert first is second

    def test_reset_clears_cache(self) -> None:
        """reset() forces a fresh load on next call."""
        first = config.load_defaults()
        config.reset()
        second = config.load_defaults()
        assert first is not second
        assert first == second


class TestGet:
    """Tests for the dot-notation accessor."""

    def test_top_level_key(self) -> None:
        """Access a top-level mapping."""
        assert isinstance(config.get("messages"), dict)

    def test_nested_key(self) -> None:
        """Access a nested value."""
        assert config.get("tokens.everything_else") == "everything-else"

    def test_missing_key_raises(self) -> None:
        """Missing key raises KeyError."""
        with pytest.raises(KeyError, match="nonexistent"):
            config.get("nonexistent.key")

    def test_empty_key_raises(self) -> None:
        """Empty string key raises KeyError."""
        with pytest.raises(KeyError):
            config.get("")

    def test_descending_into_scalar_raises(self) -> None:
        """A path through a scalar raises KeyError."""
        with pytest.raises(KeyError):
            config.get("statuses.passed.deeper")


class TestTypedAccessors:
    """Tests for get_str, get_int, get_bool, get_list."""

    def test_get_str(self) -> None:
        """get_str returns a string."""
        assert config.get_str("statuses.failed") == "failed"

    def test_get_str_wrong_type(self) -> None:
        """get_str raises TypeError when value is not a string."""
        with pytest.raises(TypeError, match="Expected str"):
            config.get_str("statuses")

    def test_get_int(self) -> None:
        """get_int returns an integer."""
        assert config.get_int("defaults.max_fix_passes") == 50

    def test_get_int_rejects_bool(self) -> None:
        """Booleans are not accepted as integers."""
        with pytest.raises(TypeError, match="Expected int"):
            config.get_int("defaults.logging_enabled")

    def test_get_bool(self) -> None:
        """get_bool returns a boolean."""
        assert config.get_bool("defaults.logging_enabled") is False

    def test_get_list(self) -> None:
        """get_list returns a list."""
        assert config.get_list("project.allowed_keys") == ["policy", "logging"]

    def test_get_list_wrong_type(self) -> None:
        """get_list raises TypeError when value is not a list."""
        with pytest.raises(TypeError, match="Expected list"):
            config.get_list("statuses.passed")


class TestDefaultsContent:
    """The shipped defaults hold what the tool relies on."""

    def test_exit_codes(self) -> None:
        """Exit codes distinguish clean, violations and errors."""
        assert config.get_int("exit_codes.ok") == 0
        assert config.get_int("exit_codes.violations") == 1
        assert config.get_int("exit_codes.error") == 2

    def test_option_spellings(self) -> None:
        """Policy option keys use their hyphenated spellings."""
        options = config.get("options")
        assert options["empty_lines"] == "empty-line-between-groups"
        assert options["ignore_members_sort"] == "ignore-members-sort"

    @pytest.mark.parametrize(
        "key", ["wrong_order", "missing_blank_line", "wrong_member_order"]
    )
    def test_violation_templates(self, key: str) -> None:
        """Every violation kind has a message and a fix hint."""
        assert config.get_str(f"messages.{key}")
        assert config.get_str(f"messages.fix_{key}")
