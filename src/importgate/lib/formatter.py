"""formatter — human and JSON rendering of check results.

Message templates use ``{name}`` placeholders filled by simple string
replacement, so unknown placeholders and stray braces pass through
untouched.  Stderr output is a ``file:line:column`` header per violation
followed by the offending source line, the message and a fix hint.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from importgate.lib import config

if TYPE_CHECKING:
    from importgate.engine import CheckResult
    from importgate.lib.models import Classification, ImportStatement, Violation
    from importgate.lib.policy import OrderingPolicy


# ---------------------------------------------------------------------------
# Variable injection
# ---------------------------------------------------------------------------


def inject_variables(template: str, variables: dict[str, Any]) -> str:
    """Replace {variable} placeholders in a template string.

    Args:
        template: String containing {key} placeholders.
        variables: Mapping of key names to replacement values.

    Returns:
        Template with all recognized placeholders replaced.
    """
    result = template
    for key, val in variables.items():
        result = result.replace(f"{{{key}}}", str(val))
    return result


# ---------------------------------------------------------------------------
# Stderr formatting
# ---------------------------------------------------------------------------


def format_violation_stderr(violation: Violation, filepath: str) -> str:
    """Format a single violation for stderr output.

    Args:
        violation: The violation to render.
        filepath: Path shown in the header line.

    Returns:
        Formatted multi-line string.
    """
    pos = violation.position
    file_line_tpl = config.get_str("formatting.file_line_template")
    fix_prefix = config.get_str("messages.fix_prefix")

    first_line = violation.statement.text.splitlines()[0] if violation.statement.text else ""
    parts = [
        "  " + file_line_tpl.format(filepath=filepath, line=pos.line, column=pos.column),
        f"    {first_line}",
        f"  {violation.message}",
    ]
    if violation.edits:
        parts.append(f"  {fix_prefix}{violation.fix_hint}")
    return "\n".join(parts)


def format_summary_stderr(results: Sequence[CheckResult]) -> str:
    """Format the summary footer for a batch of checked files."""
    bar = config.get_str("formatting.summary_bar_char") * config.get_int(
        "formatting.summary_bar_width"
    )
    total = sum(len(r.violations) for r in results)
    fixable = sum(1 for r in results for v in r.violations if v.edits)

    parts = [bar, f"  {config.get_str('labels.files')} {len(results)}"]
    if total:
        parts.append(
            f"  {config.get_str('labels.violations')} {total} "
            f"({fixable} {config.get_str('labels.fixable')})"
        )
    else:
        parts.append(f"  {config.get_str('labels.clean')}")
    parts.append(bar)
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# JSON formatting
# ---------------------------------------------------------------------------


def format_violations_json(results: Sequence[CheckResult]) -> dict[str, Any]:
    """Format check results as a JSON-compatible dict."""
    status_failed = config.get_str("statuses.failed")
    status_passed = config.get_str("statuses.passed")
    files = [
        {
            "file": r.filepath,
            "status": r.status,
            "violations": [v.to_dict() for v in r.violations],
        }
        for r in results
    ]
    total = sum(len(r.violations) for r in results)
    return {
        "status": status_failed if total else status_passed,
        "files": files,
        "summary": {
            "files": len(results),
            "violations": total,
            "fixable": sum(1 for r in results for v in r.violations if v.edits),
        },
    }


# ---------------------------------------------------------------------------
# Classification table
# ---------------------------------------------------------------------------


def format_classification(
    statements: Sequence[ImportStatement],
    classifications: Sequence[Classification],
    policy: OrderingPolicy,
) -> str:
    """Render one row per statement showing where the policy places it."""
    header = config.get_str("formatting.classification_header")
    row = config.get_str("formatting.classification_row")
    lines = [header.format(line="line", source="source", token="token")]
    for statement, c in zip(statements, classifications):
        lines.append(
            row.format(
                line=statement.start.line,
                source=statement.source,
                token=policy.token_for(c.group_index),
                group_index=c.group_index,
                sub_index="-" if c.sub_index is None else c.sub_index,
            )
        )
    return "\n".join(lines)
