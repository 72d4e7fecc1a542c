"""importgate — policy-driven import order checking and fixing.

Stable public API:
    check_statements: Check a sequence of ImportStatement records.
    check_source: Check a Python source string.
    fix_source: Fix a Python source string.
    OrderingPolicy: The validated ordering policy.
    ImportStatement, Binding, Position: Statement records.
    Violation, ViolationKind: Reported findings.
    ConfigurationError, PatternError, InvariantViolation,
    ImportgateParseError: Exceptions.
"""

__version__ = "0.1.0"

from importgate.engine import CheckResult, check_source, check_statements, fix_source
from importgate.exceptions import (
    ConfigurationError,
    ImportgateParseError,
    InvariantViolation,
    PatternError,
)
from importgate.lib.models import Binding, ImportStatement, Position, Violation, ViolationKind
from importgate.lib.policy import OrderingPolicy

__all__ = [
    "__version__",
    "check_statements",
    "check_source",
    "fix_source",
    "CheckResult",
    "OrderingPolicy",
    "ImportStatement",
    "Binding",
    "Position",
    "Violation",
    "ViolationKind",
    "ConfigurationError",
    "PatternError",
    "InvariantViolation",
    "ImportgateParseError",
]
