"""importgate engine — thin orchestrator for import-order checks.

Composes the library modules to check a statement sequence or a Python
source string against an ordering policy and return structured results.
This is the main entry point for programmatic usage.

Design notes:
    The engine never parses source itself; it delegates to
    lib/collector for statement extraction, lib/classifier and
    lib/checker for detection, and lib/fixer for edit planning and
    application.  Each call allocates its own buffers, so one policy can be
    shared by any number of concurrent checks.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

import libcst as cst

from importgate.exceptions import ImportgateParseError, InvariantViolation
from importgate.lib import config
from importgate.lib.checker import check_order
from importgate.lib.classifier import classify_all
from importgate.lib.collector import ImportCollection, collect_imports
from importgate.lib.fixer import apply_fixes, attach_fixes
from importgate.lib.logger import log_check
from importgate.lib.models import (
    Classification,
    ImportStatement,
    Violation,
    ViolationKind,
)
from importgate.lib.policy import OrderingPolicy


@dataclass
class CheckResult:
    """Result of checking (and optionally fixing) one file."""

    status: str
    filepath: str = ""
    violations: list[Violation] = field(default_factory=list)
    statement_count: int = 0
    check_ms: int = 0
    fixed_source: Optional[str] = None
    fixes_applied: int = 0

    @property
    def passed(self) -> bool:
        return not self.violations


def _verify(
    statements: Sequence[ImportStatement],
    classifications: Sequence[Classification],
    policy: OrderingPolicy,
) -> None:
    """Raise InvariantViolation if classification broke its guarantees."""
    if len(classifications) != len(statements):
        msg = config.get_str("messages.invariant_count").format(
            actual=len(classifications), expected=len(statements)
        )
        raise InvariantViolation(msg)
    limit = len(policy.order)
    for index, c in enumerate(classifications):
        if not isinstance(c.group_index, int) or not 0 <= c.group_index <= limit:
            msg = config.get_str("messages.invariant_group_index").format(
                index=index, group_index=c.group_index, limit=limit
            )
            raise InvariantViolation(msg)


def check_statements(
    statements: Sequence[ImportStatement],
    policy: OrderingPolicy,
    *,
    newline: str = "\n",
) -> list[Violation]:
    """Check one file's import statements against a policy.

    Args:
        statements: Import statements in document order.
        policy: The resolved ordering policy.
        newline: Line break used when planning edits.

    Returns:
        Violations sorted by position, each carrying its planned edits.
        Empty when the sequence is empty or compliant.
    """
    if not statements:
        return []
    classifications = classify_all(statements, policy)
    _verify(statements, classifications, policy)
    violations = check_order(statements, classifications, policy)
    return attach_fixes(violations, newline)


def _pass_fixes(violations: Sequence[Violation]) -> list[Violation]:
    """Select the violations one fix pass applies.

    While any statement is out of order, group starts are not final, so
    missing-blank-line fixes wait for a later pass.
    """
    if any(v.kind is ViolationKind.WRONG_ORDER for v in violations):
        blank = ViolationKind.MISSING_BLANK_LINE
        return [v for v in violations if v.kind is not blank]
    return list(violations)


def collect(source: str, filepath: str) -> ImportCollection:
    """Collect statements, wrapping LibCST failures in ImportgateParseError."""
    try:
        return collect_imports(source)
    except cst.ParserSyntaxError as exc:
        raise ImportgateParseError(filepath, exc) from exc


def check_source(
    source: str,
    filepath: str,
    policy: OrderingPolicy,
    *,
    log_dir: str = "",
) -> CheckResult:
    """Check a Python source string.

    Args:
        source: Python source code.
        filepath: Path used in output and logs.
        policy: The resolved ordering policy.
        log_dir: JSONL log directory; empty disables logging.

    Returns:
        CheckResult with status, violations and timing.

    Raises:
        ImportgateParseError: If the source cannot be parsed.
    """
    start = time.time()
    collection = collect(source, filepath)
    violations = check_statements(
        collection.statements, policy, newline=collection.newline
    )
    check_ms = int((time.time() - start) * 1000)

    status = config.get_str(
        "statuses.failed" if violations else "statuses.passed"
    )
    log_check(
        log_dir,
        filepath,
        status,
        violations,
        len(collection.statements),
        source,
        check_ms,
    )
    return CheckResult(
        status=status,
        filepath=filepath,
        violations=violations,
        statement_count=len(collection.statements),
        check_ms=check_ms,
    )


def fix_source(
    source: str,
    filepath: str,
    policy: OrderingPolicy,
    *,
    log_dir: str = "",
) -> CheckResult:
    """Fix a Python source string, repeating passes until it settles.

    Each pass re-collects the statements from the current text, checks
    them, and applies every non-conflicting fix.  Missing blank lines are
    only fixed in a pass where no statement is out of order.  Fixing stops
    when a pass applies nothing or after ``defaults.max_fix_passes`` passes.

    Returns:
        CheckResult describing the violations that remain, with
        ``fixed_source`` holding the final text.

    Raises:
        ImportgateParseError: If the source (or a fixed pass) cannot be parsed.
    """
    start = time.time()
    max_passes = config.get_int("defaults.max_fix_passes")
    text = source
    applied_total = 0

    for _ in range(max_passes):
        collection = collect(text, filepath)
        violations = check_statements(
            collection.statements, policy, newline=collection.newline
        )
        if not violations:
            break
        outcome = apply_fixes(text, _pass_fixes(violations))
        if outcome.applied == 0:
            break
        text = outcome.text
        applied_total += outcome.applied

    collection = collect(text, filepath)
    violations = check_statements(
        collection.statements, policy, newline=collection.newline
    )
    check_ms = int((time.time() - start) * 1000)
    status = config.get_str(
        "statuses.failed" if violations else "statuses.passed"
    )
    log_check(
        log_dir,
        filepath,
        status,
        violations,
        len(collection.statements),
        text,
        check_ms,
        fixed=applied_total > 0,
    )
    return CheckResult(
        status=status,
        filepath=filepath,
        violations=violations,
        statement_count=len(collection.statements),
        check_ms=check_ms,
        fixed_source=text,
        fixes_applied=applied_total,
    )
