"""policy — the immutable ordering policy and its validation.

A policy arrives as a plain mapping (usually the ``policy`` section of
``.importgate.yaml``) using the option spellings from ``defaults.yaml``::

    order: ["__future__", stdlib, everything-else, "/^\\./"]
    groups:
      stdlib: [os, sys, "/^typing/"]
    empty-line-between-groups: true
    ignore-members-sort: false

``validate_policy`` reports every structural problem at once;
``OrderingPolicy.from_dict`` raises :class:`ConfigurationError` with those
problems, then resolves every token into a pattern variant.  The resulting
object is frozen and safe to share between concurrent checks.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional

from importgate.exceptions import ConfigurationError
from importgate.lib import config
from importgate.lib.patterns import GroupRef, Pattern, is_regex_token, parse_pattern

_SWITCHES = (
    "empty_lines",
    "ignore_alphabetical_sort",
    "ignore_in_group_sort",
    "ignore_members_sort",
)


def _option(name: str) -> str:
    return config.get_str(f"options.{name}")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_policy(data: Any) -> list[str]:
    """Validate the structure of a policy mapping.

    Args:
        data: The parsed policy content.

    Returns:
        List of validation error messages. Empty if valid.
    """
    errors: list[str] = []
    wrong_type = config.get_str("messages.config_wrong_type")

    if not isinstance(data, dict):
        errors.append(f"Policy must be a mapping, got {type(data).__name__}")
        return errors

    order_key = _option("order")
    groups_key = _option("groups")
    switch_keys = [_option(name) for name in _SWITCHES]
    known = [order_key, groups_key] + switch_keys

    for key in data:
        if key not in known:
            errors.append(
                config.get_str("messages.config_unknown_key").format(
                    key=key, expected=", ".join(known)
                )
            )

    order = data.get(order_key)
    if (
        not isinstance(order, list)
        or not order
        or not all(isinstance(token, str) for token in order)
    ):
        errors.append(config.get_str("messages.config_missing_order"))

    groups = data.get(groups_key, {})
    if groups is None:
        groups = {}
    if not isinstance(groups, dict):
        errors.append(
            wrong_type.format(
                key=groups_key, expected="a mapping", actual=type(groups).__name__
            )
        )
        groups = {}

    for name, sub_patterns in groups.items():
        if not isinstance(name, str):
            errors.append(
                wrong_type.format(
                    key=f"{groups_key} name {name!r}",
                    expected="a string",
                    actual=type(name).__name__,
                )
            )
            continue
        if not isinstance(sub_patterns, list):
            errors.append(
                wrong_type.format(
                    key=f"{groups_key}.{name}",
                    expected="a list of strings",
                    actual=type(sub_patterns).__name__,
                )
            )
            continue
        for sub in sub_patterns:
            if not isinstance(sub, str):
                errors.append(
                    wrong_type.format(
                        key=f"{groups_key}.{name}",
                        expected="a list of strings",
                        actual=f"an entry of type {type(sub).__name__}",
                    )
                )
            elif not is_regex_token(sub) and sub in groups:
                errors.append(
                    config.get_str("messages.config_group_reference").format(
                        group=name, name=sub
                    )
                )

    for key in switch_keys:
        if key in data and not isinstance(data[key], bool):
            errors.append(
                wrong_type.format(
                    key=key, expected="a boolean", actual=type(data[key]).__name__
                )
            )

    return errors


# ---------------------------------------------------------------------------
# Policy model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OrderingPolicy:
    """A validated, fully resolved ordering policy.

    Attributes:
        order: Raw group tokens, in priority order.
        patterns: ``order`` resolved into pattern variants.
        groups: Read-only mapping of group name to resolved sub-patterns.
        empty_lines: Require a blank line before the first import of a group.
        ignore_alphabetical_sort: Skip alphabetical order between statements.
        ignore_in_group_sort: Skip sub-pattern order inside named groups.
        ignore_members_sort: Skip name order inside a single statement.
    """

    order: tuple[str, ...]
    patterns: tuple[Pattern, ...]
    groups: Mapping[str, tuple[Pattern, ...]]
    empty_lines: bool = False
    ignore_alphabetical_sort: bool = False
    ignore_in_group_sort: bool = False
    ignore_members_sort: bool = False

    @classmethod
    def from_dict(
        cls, data: Any, *, path: Optional[str] = None
    ) -> OrderingPolicy:
        """Build a policy from a raw mapping.

        Args:
            data: Parsed policy mapping.
            path: Source file of the mapping, used in error messages.

        Returns:
            The resolved policy.

        Raises:
            ConfigurationError: If the mapping is structurally invalid.
            PatternError: If a regular-expression token does not compile.
        """
        errors = validate_policy(data)
        if errors:
            raise ConfigurationError(errors, path=path)

        raw_groups: dict[str, list[str]] = data.get(_option("groups")) or {}
        names = frozenset(raw_groups)
        groups = {
            name: tuple(parse_pattern(sub, names) for sub in subs)
            for name, subs in raw_groups.items()
        }
        order = tuple(data[_option("order")])
        switches = {name: data.get(_option(name), False) for name in _SWITCHES}

        return cls(
            order=order,
            patterns=tuple(parse_pattern(token, names) for token in order),
            groups=MappingProxyType(groups),
            **switches,
        )

    @property
    def everything_else_index(self) -> int:
        """Slot for statements that match no token.

        The explicit position of the everything-else token, or
        ``len(order)`` when the token is absent.
        """
        token = config.get_str("tokens.everything_else")
        if token in self.order:
            return self.order.index(token)
        return len(self.order)

    def sub_patterns(self, pattern: Pattern) -> Optional[tuple[Pattern, ...]]:
        """Return a group's sub-patterns if ``pattern`` refers to a group."""
        if isinstance(pattern, GroupRef):
            return self.groups[pattern.name]
        return None

    def token_for(self, group_index: int) -> str:
        """Return the ``order`` token behind a group index, for display."""
        if group_index < len(self.order):
            return self.order[group_index]
        return config.get_str("formatting.unmatched_token")
