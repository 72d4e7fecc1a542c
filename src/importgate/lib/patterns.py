"""patterns — group tokens resolved into matchable patterns.

Policy files spell patterns as plain strings: ``"/^atoms/"`` is a regular
expression, ``"everything-else"`` is the catch-all slot, a key of
``groups`` names a composite group, and anything else is a literal module
source.  ``parse_pattern`` turns a string into one of the variants below
exactly once, when the policy is built, so checking a file never re-parses
or re-compiles a pattern.
"""

from __future__ import annotations

import re
from collections.abc import Collection
from dataclasses import dataclass
from typing import Union

from importgate.exceptions import PatternError
from importgate.lib import config


@dataclass(frozen=True)
class Literal:
    """Matches a source identifier exactly."""

    value: str

    def matches(self, source: str) -> bool:
        return self.value == source


@dataclass(frozen=True)
class Regex:
    """Matches when the compiled expression is found anywhere in the source."""

    token: str
    compiled: re.Pattern[str]

    def matches(self, source: str) -> bool:
        return self.compiled.search(source) is not None


@dataclass(frozen=True)
class GroupRef:
    """Names an entry of ``groups``; never matches on its own."""

    name: str

    def matches(self, source: str) -> bool:
        return False


Pattern = Union[Literal, Regex, GroupRef]


def is_regex_token(token: str) -> bool:
    """Return True for the delimited ``/.../`` form."""
    delim = config.get_str("tokens.regex_delimiter")
    return len(token) >= 2 and token.startswith(delim) and token.endswith(delim)


def parse_pattern(token: str, group_names: Collection[str] = ()) -> Pattern:
    """Resolve a pattern string into its tagged variant.

    Args:
        token: The pattern as written in the policy.
        group_names: Keys of the policy's ``groups`` mapping.

    Returns:
        A Regex for ``/.../`` tokens, a GroupRef for group names, otherwise
        a Literal.

    Raises:
        PatternError: If a regular-expression token does not compile.
    """
    if is_regex_token(token):
        try:
            return Regex(token, re.compile(token[1:-1]))
        except re.error as exc:
            raise PatternError(token, exc) from exc
    if token in group_names:
        return GroupRef(token)
    return Literal(token)


def matches(source: str, pattern: Union[str, Pattern]) -> bool:
    """Return True if ``source`` belongs to ``pattern``.

    Accepts an already-resolved pattern or a raw string.  A raw string is
    resolved without group context, so group names only behave as group
    references once a policy has resolved them.
    """
    if isinstance(pattern, str):
        pattern = parse_pattern(pattern)
    return pattern.matches(source)
