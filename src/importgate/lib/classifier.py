"""classifier — map import statements onto the policy's groups.

Each statement gets a ``group_index`` (the first ``order`` token whose
pattern matches its source) and, inside named composite groups, a
``sub_index`` (the first matching sub-pattern).  Classification is a pure
function of the statement's source and the policy.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from importgate.lib.models import Classification, ImportStatement
from importgate.lib.patterns import Pattern
from importgate.lib.policy import OrderingPolicy


def _first_match(source: str, patterns: Sequence[Pattern]) -> Optional[int]:
    for index, pattern in enumerate(patterns):
        if pattern.matches(source):
            return index
    return None


def classify(statement: ImportStatement, policy: OrderingPolicy) -> Classification:
    """Classify one statement.

    Args:
        statement: The statement to place.
        policy: The resolved ordering policy.

    Returns:
        The statement's group index and optional sub-pattern index.
    """
    source = statement.source
    for group_index, pattern in enumerate(policy.patterns):
        subs = policy.sub_patterns(pattern)
        if subs is None:
            if pattern.matches(source):
                return Classification(group_index)
            continue
        sub_index = _first_match(source, subs)
        if sub_index is not None:
            return Classification(group_index, sub_index)
    return Classification(policy.everything_else_index)


def classify_all(
    statements: Sequence[ImportStatement], policy: OrderingPolicy
) -> list[Classification]:
    """Classify a whole statement sequence, preserving order."""
    return [classify(statement, policy) for statement in statements]
