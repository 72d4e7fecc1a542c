"""fixer — plan and apply text edits for ordering violations.

Planning turns each violation into range-based :class:`TextEdit` objects
against the original document:

* wrong order: copy the statement in front of its reference statement and
  remove the original together with its line break;
* missing blank line: insert one line break in front of the statement;
* member order: rewrite the named-binding span with the names sorted, unless
  a comment sits inside the span (no edit is planned then).

Applying follows a conservative single pass.  The edits of one violation
are merged into one edit covering all of them.  Merged edits are applied in
document order, and any edit that starts at or before the end of the last
applied edit is skipped; the caller re-checks and runs another pass to pick
those up.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from importgate.lib.members import sorted_bindings
from importgate.lib.models import TextEdit, Violation, ViolationKind


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


def plan_edits(violation: Violation, newline: str = "\n") -> tuple[TextEdit, ...]:
    """Return the edits that fix a single violation.

    Args:
        violation: A violation produced by the checker.
        newline: Line break used by the document.

    Returns:
        Edits expressed against the original document.
    """
    statement = violation.statement
    start, end = statement.range

    if violation.kind is ViolationKind.WRONG_ORDER:
        if violation.reference is None:
            return ()
        place = violation.reference.range[0]
        return (
            TextEdit((place, place), statement.text + newline),
            TextEdit((start, end + len(newline)), ""),
        )

    if violation.kind is ViolationKind.MISSING_BLANK_LINE:
        return (TextEdit((start, start), newline),)

    if violation.kind is ViolationKind.WRONG_MEMBER_ORDER:
        named = statement.named_bindings
        if not named:
            return ()
        span = (named[0].range[0], named[-1].range[1])
        # A flat rewrite of the span would drop comments between bindings.
        if "#" in statement.text[span[0] - start : span[1] - start]:
            return ()
        text = ", ".join(binding.text for binding in sorted_bindings(statement))
        return (TextEdit(span, text),)

    return ()


def attach_fixes(
    violations: Sequence[Violation], newline: str = "\n"
) -> list[Violation]:
    """Return copies of ``violations`` carrying their planned edits."""
    return [
        dataclasses.replace(v, edits=plan_edits(v, newline)) for v in violations
    ]


# ---------------------------------------------------------------------------
# Applying
# ---------------------------------------------------------------------------


@dataclass
class FixOutcome:
    """Result of one application pass."""

    text: str
    applied: int = 0
    skipped: int = 0


def merge_edits(text: str, edits: Sequence[TextEdit]) -> Optional[TextEdit]:
    """Combine edits into one edit spanning all of them.

    Text between the individual edits is carried over unchanged.
    """
    if not edits:
        return None
    ordered = sorted(edits, key=lambda e: e.range)
    start = ordered[0].range[0]
    end = max(e.range[1] for e in ordered)
    parts: list[str] = []
    cursor = start
    for edit in ordered:
        if edit.range[0] > cursor:
            parts.append(text[cursor : edit.range[0]])
        parts.append(edit.text)
        cursor = max(cursor, edit.range[1])
    return TextEdit((start, min(end, len(text))), "".join(parts))


def apply_fixes(text: str, violations: Sequence[Violation]) -> FixOutcome:
    """Apply the non-conflicting fixes of ``violations`` to ``text``.

    Args:
        text: The original document the edits were planned against.
        violations: Violations with planned edits.

    Returns:
        The edited text with counts of applied and skipped fixes.
    """
    merged = [
        edit
        for edit in (merge_edits(text, v.edits) for v in violations)
        if edit is not None
    ]
    merged.sort(key=lambda e: e.range)

    outcome = FixOutcome(text="")
    parts: list[str] = []
    last_end = -1
    cursor = 0
    for edit in merged:
        start, end = edit.range
        if start <= last_end:
            outcome.skipped += 1
            continue
        parts.append(text[cursor:start])
        parts.append(edit.text)
        cursor = end
        last_end = end
        outcome.applied += 1
    parts.append(text[cursor:])
    outcome.text = "".join(parts)
    return outcome
