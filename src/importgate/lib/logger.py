"""logger — JSONL check log for tracking import-order results over time.

When logging is enabled in ``.importgate.yaml`` every checked file appends
one JSON line to the check log inside the configured directory.  An entry
records the file, pass/fail status, each violation's kind and line, the
number of imports collected, a truncated SHA-256 of the source, and how long
the check took.  File name and formatting constants come from
``config/defaults.yaml``.
"""

from __future__ import annotations

import datetime
import hashlib
import json
import os
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from importgate.lib import config

if TYPE_CHECKING:
    from importgate.lib.models import Violation


def log_check(
    log_dir: str,
    filepath: str,
    status: str,
    violations: Sequence[Violation],
    statement_count: int,
    source: str,
    check_ms: int,
    *,
    fixed: bool = False,
) -> None:
    """Append a JSONL entry for one checked file.

    Args:
        log_dir: Directory holding the log file; nothing is written if empty.
        filepath: Path to the checked file.
        status: 'passed' or 'failed'.
        violations: Violations found in the file.
        statement_count: Number of import statements collected.
        source: The source text that was checked.
        check_ms: Check duration in milliseconds.
        fixed: Whether the run rewrote the file.
    """
    if not log_dir:
        return
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, config.get_str("filenames.check_log"))

    hash_prefix = config.get_str("formatting.hash_prefix")
    hash_trunc = config.get_int("defaults.hash_truncation_length")
    separators = tuple(config.get_list("formatting.json_separators"))

    entry: dict[str, Any] = {
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "event": "fix" if fixed else "check",
        "file": filepath,
        "status": status,
        "violations": [
            {"kind": v.kind.value, "line": v.position.line} for v in violations
        ],
        "imports": statement_count,
        "code_hash": hash_prefix + hashlib.sha256(source.encode()).hexdigest()[:hash_trunc],
        "check_ms": check_ms,
    }

    with open(log_path, "a", encoding="utf-8") as fh:
        fh.write(json.dumps(entry, separators=separators) + "\n")
