"""checker — detect ordering violations in a classified statement sequence.

All three ordering checks share one backward scan.  For the statement at
position ``i`` with key ``k`` the scan looks at positions before ``i`` and
picks the earliest one holding the smallest key strictly greater than
``k``.  If there is one, statement ``i`` belongs in front of it.

Design notes:
    Scanning only backwards means every reported reference is a statement
    that physically precedes the offender, so a fix always moves a
    statement up and two fixes can never ask to move statements around
    each other.  Equal keys are never reported, which keeps the original
    relative order of ties.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Callable, Optional

from importgate.lib import config
from importgate.lib.members import check_members
from importgate.lib.models import (
    Classification,
    ImportStatement,
    Violation,
    ViolationKind,
)
from importgate.lib.policy import OrderingPolicy


# ---------------------------------------------------------------------------
# Backward scan
# ---------------------------------------------------------------------------


def backward_target(
    keys: Sequence[Any],
    index: int,
    eligible: Optional[Callable[[int], bool]] = None,
) -> Optional[int]:
    """Find the statement that ``keys[index]`` must move in front of.

    Args:
        keys: Sort keys in document order.
        index: Position of the statement being checked.
        eligible: Optional filter on candidate positions.

    Returns:
        The earliest position before ``index`` holding the smallest key
        strictly greater than ``keys[index]``, or None.
    """
    current = keys[index]
    target: Optional[int] = None
    for j in range(index):
        if eligible is not None and not eligible(j):
            continue
        key = keys[j]
        if key > current and (target is None or key < keys[target]):
            target = j
    return target


def _name_key(statement: ImportStatement) -> tuple[int, str]:
    # Statements without bindings sort after every named statement.
    name = statement.first_name
    if name is None:
        return (1, "")
    return (0, name)


def _has_line_between(previous: ImportStatement, current: ImportStatement) -> bool:
    return abs(previous.end.line - current.start.line) > 1


# ---------------------------------------------------------------------------
# Violation builders
# ---------------------------------------------------------------------------


def _wrong_order(
    statements: Sequence[ImportStatement], index: int, reference: int
) -> Violation:
    statement = statements[index]
    place = statements[reference]
    return Violation(
        kind=ViolationKind.WRONG_ORDER,
        index=index,
        statement=statement,
        template=config.get_str("messages.wrong_order"),
        data={"current": statement.source, "previous": place.source},
        reference_index=reference,
        reference=place,
    )


def _missing_blank_line(
    statements: Sequence[ImportStatement], index: int
) -> Violation:
    statement = statements[index]
    return Violation(
        kind=ViolationKind.MISSING_BLANK_LINE,
        index=index,
        statement=statement,
        template=config.get_str("messages.missing_blank_line"),
        data={"source": statement.source},
    )


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def check_groups(
    statements: Sequence[ImportStatement],
    classifications: Sequence[Classification],
    policy: OrderingPolicy,
) -> list[Violation]:
    """Cross-group order and blank lines between groups."""
    violations: list[Violation] = []
    keys = [c.group_index for c in classifications]
    seen_groups: set[int] = set()

    for i, group_index in enumerate(keys):
        target = backward_target(keys, i)
        if target is not None:
            violations.append(_wrong_order(statements, i, target))

        first_in_group = group_index not in seen_groups
        seen_groups.add(group_index)
        if (
            policy.empty_lines
            and first_in_group
            and i > 0
            and not _has_line_between(statements[i - 1], statements[i])
        ):
            violations.append(_missing_blank_line(statements, i))

    return violations


def partition(classifications: Sequence[Classification]) -> list[list[int]]:
    """Group statement positions by group index, in ascending group order."""
    buckets: dict[int, list[int]] = {}
    for i, c in enumerate(classifications):
        buckets.setdefault(c.group_index, []).append(i)
    return [buckets[g] for g in sorted(buckets)]


def check_sub_order(
    statements: Sequence[ImportStatement],
    classifications: Sequence[Classification],
    members: Sequence[int],
    policy: OrderingPolicy,
) -> list[Violation]:
    """Sub-pattern order inside one named group."""
    if policy.ignore_in_group_sort:
        return []
    violations: list[Violation] = []
    subs = [classifications[i].sub_index for i in members]

    for pos, sub in enumerate(subs):
        if sub is None:
            continue
        target = backward_target(
            subs, pos, eligible=lambda j: subs[j] is not None
        )
        if target is not None:
            violations.append(_wrong_order(statements, members[pos], members[target]))

    return violations


def check_alphabetical(
    statements: Sequence[ImportStatement],
    classifications: Sequence[Classification],
    members: Sequence[int],
    policy: OrderingPolicy,
) -> list[Violation]:
    """Alphabetical order by first bound name inside one group.

    Statements placed by a sub-pattern only compete with statements placed
    by the same sub-pattern.
    """
    if policy.ignore_alphabetical_sort:
        return []
    violations: list[Violation] = []
    keys = [_name_key(statements[i]) for i in members]
    subs = [classifications[i].sub_index for i in members]

    for pos, member in enumerate(members):
        if statements[member].first_name is None:
            continue
        sub = subs[pos]
        target = backward_target(
            keys,
            pos,
            eligible=lambda j: sub is None or subs[j] == sub,
        )
        if target is not None:
            violations.append(_wrong_order(statements, member, members[target]))

    return violations


def check_order(
    statements: Sequence[ImportStatement],
    classifications: Sequence[Classification],
    policy: OrderingPolicy,
) -> list[Violation]:
    """Run every check over one file's statements.

    Args:
        statements: Import statements in document order.
        classifications: One classification per statement.
        policy: The resolved ordering policy.

    Returns:
        Violations without planned edits, sorted by reported position.
    """
    violations = check_groups(statements, classifications, policy)

    for members in partition(classifications):
        violations.extend(check_sub_order(statements, classifications, members, policy))
        for i in members:
            member_violation = check_members(i, statements[i], policy)
            if member_violation is not None:
                violations.append(member_violation)
        violations.extend(
            check_alphabetical(statements, classifications, members, policy)
        )

    violations.sort(key=lambda v: (v.position.line, v.position.column))
    return violations
