"""members — alphabetical order of the names bound by one statement.

Only named bindings are sorted; a default binding always stays first.
Names compare by code point, so ``Zeta`` sorts before ``alpha``.
"""

from __future__ import annotations

from typing import Optional

from importgate.lib import config
from importgate.lib.models import Binding, ImportStatement, Violation, ViolationKind
from importgate.lib.policy import OrderingPolicy


def sorted_bindings(statement: ImportStatement) -> list[Binding]:
    """Return the statement's named bindings sorted by local name."""
    return sorted(statement.named_bindings, key=lambda binding: binding.name)


def first_misplaced(statement: ImportStatement) -> Optional[Binding]:
    """Return the first named binding that is not where sorting puts it."""
    named = statement.named_bindings
    for actual, expected in zip(named, sorted_bindings(statement)):
        if actual.name != expected.name:
            return actual
    return None


def check_members(
    index: int, statement: ImportStatement, policy: OrderingPolicy
) -> Optional[Violation]:
    """Report the first out-of-order binding of a statement, if any.

    Args:
        index: Position of the statement in the checked sequence.
        statement: The statement to inspect.
        policy: Supplies the ``ignore-members-sort`` switch.

    Returns:
        A wrong-member-order violation, or None.
    """
    if policy.ignore_members_sort:
        return None
    binding = first_misplaced(statement)
    if binding is None:
        return None
    return Violation(
        kind=ViolationKind.WRONG_MEMBER_ORDER,
        index=index,
        statement=statement,
        template=config.get_str("messages.wrong_member_order"),
        data={"specifier": binding.name, "source": statement.source},
        binding=binding,
    )
