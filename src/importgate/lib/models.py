"""Data models for import statements, classifications, and violations.

Typed, frozen dataclasses shared by every stage of a check.  Statements are
produced by a collector (or built directly by a caller), read by the core,
and never mutated.  Statements never point back at their container; every
stage works on an index into the statement sequence instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from importgate.lib import config
from importgate.lib.formatter import inject_variables

Range = tuple[int, int]


# ---------------------------------------------------------------------------
# Statement model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Position:
    """A location in a document: 1-based line, 0-based column."""

    line: int
    column: int


@dataclass(frozen=True)
class Binding:
    """One local name bound by an import statement.

    Attributes:
        name: The local name, used as the sort key.
        text: Exact source text of the binding (``"path as p"``).
        range: ``(start, end)`` character offsets, end exclusive.
        is_default: True for a leading default binding, which is never
            reordered by member sorting.
    """

    name: str
    text: str
    range: Range
    is_default: bool = False


@dataclass(frozen=True)
class ImportStatement:
    """A single module-import statement in document order.

    Attributes:
        source: The module-source identifier (``"os.path"``, ``"..utils"``).
        text: Literal source text of the statement.
        bindings: Bound names in source order; the first may be a default.
        start: Position of the first character.
        end: Position just past the last character.
        range: ``(start, end)`` character offsets, end exclusive.
    """

    source: str
    text: str
    bindings: tuple[Binding, ...]
    start: Position
    end: Position
    range: Range

    @property
    def default_binding(self) -> Optional[Binding]:
        """Return the default binding, if the statement has one."""
        if self.bindings and self.bindings[0].is_default:
            return self.bindings[0]
        return None

    @property
    def named_bindings(self) -> tuple[Binding, ...]:
        """Return the bindings that take part in member sorting."""
        if self.default_binding is not None:
            return self.bindings[1:]
        return self.bindings

    @property
    def first_name(self) -> Optional[str]:
        """Return the name used for alphabetical ordering between statements."""
        if self.bindings:
            return self.bindings[0].name
        return None


@dataclass(frozen=True)
class Classification:
    """Where a statement falls in the ordering policy.

    Attributes:
        group_index: Position of the matching ``order`` token, or of the
            everything-else slot.
        sub_index: Position of the matching sub-pattern when the group is a
            named composite group, else None.
    """

    group_index: int
    sub_index: Optional[int] = None


# ---------------------------------------------------------------------------
# Violation model
# ---------------------------------------------------------------------------


class ViolationKind(str, Enum):
    """The three classes of ordering violation."""

    WRONG_ORDER = "wrong-statement-order"
    MISSING_BLANK_LINE = "missing-blank-line"
    WRONG_MEMBER_ORDER = "wrong-member-order"

    @property
    def config_key(self) -> str:
        """Suffix under ``messages.`` holding this kind's templates."""
        return {
            ViolationKind.WRONG_ORDER: "wrong_order",
            ViolationKind.MISSING_BLANK_LINE: "missing_blank_line",
            ViolationKind.WRONG_MEMBER_ORDER: "wrong_member_order",
        }[self]


@dataclass(frozen=True)
class TextEdit:
    """Replace ``range`` of the original document with ``text``."""

    range: Range
    text: str


@dataclass(frozen=True)
class Violation:
    """A detected deviation from the ordering policy.

    Attributes:
        kind: Which rule was broken.
        index: Index of the offending statement in the checked sequence.
        statement: The offending statement.
        template: Message template with ``{name}`` placeholders.
        data: Placeholder values (``current``, ``previous``, ``source``,
            ``specifier``).
        reference_index: For wrong order, index of the statement this one
            must move before.
        reference: The statement at ``reference_index``.
        binding: For member order, the first out-of-place binding.
        edits: Planned text edits; empty until the fix planner runs.
    """

    kind: ViolationKind
    index: int
    statement: ImportStatement
    template: str
    data: dict[str, str] = field(default_factory=dict)
    reference_index: Optional[int] = None
    reference: Optional[ImportStatement] = None
    binding: Optional[Binding] = None
    edits: tuple[TextEdit, ...] = ()

    @property
    def message(self) -> str:
        """Return the template rendered with its data."""
        return inject_variables(self.template, self.data)

    @property
    def fix_hint(self) -> str:
        """Return a short human instruction for fixing the violation."""
        tpl = config.get_str(f"messages.fix_{self.kind.config_key}")
        return inject_variables(tpl, self.data)

    @property
    def position(self) -> Position:
        """Return where the violation is reported."""
        if self.binding is not None:
            return _offset_position(self.statement, self.binding.range[0])
        return self.statement.start

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible representation."""
        pos = self.position
        return {
            "kind": self.kind.value,
            "line": pos.line,
            "column": pos.column,
            "source": self.statement.source,
            "message": self.message,
            "fix": self.fix_hint,
            "fixable": bool(self.edits),
        }


def _offset_position(statement: ImportStatement, offset: int) -> Position:
    """Translate an offset inside ``statement`` into a line/column position."""
    prefix = statement.text[: max(0, offset - statement.range[0])]
    newlines = prefix.count("\n")
    if newlines == 0:
        return Position(statement.start.line, statement.start.column + len(prefix))
    return Position(
        statement.start.line + newlines, len(prefix) - prefix.rfind("\n") - 1
    )
