"""Shared fixtures and document builders for the importgate test suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import pytest
import yaml

from importgate.lib import config
from importgate.lib.models import Binding, ImportStatement, Position
from importgate.lib.policy import OrderingPolicy


FIXTURES_DIR = Path(__file__).parent / "fixtures"

IGNORE_ALL = {
    "ignore-in-group-sort": True,
    "ignore-alphabetical-sort": True,
    "ignore-members-sort": True,
}


# ---------------------------------------------------------------------------
# Synthetic documents
#
# Core tests work on plain statement records rather than Python source so
# that sources such as "atoms/UserCard" can be used freely.  Each row renders
# as one line, "from <source> import <names>" or "import <source>", and
# parse_document reads that format back after fixes are applied.
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Row:
    """One synthetic import line."""

    source: str
    names: tuple[str, ...] = ()
    default: Optional[str] = None

    def render(self) -> str:
        bound = ([self.default] if self.default else []) + list(self.names)
        if not bound:
            return f"import {self.source}"
        return f"from {self.source} import {', '.join(bound)}"


def stmt(source: str, *names: str, default: Optional[str] = None) -> Row:
    """Describe a synthetic statement."""
    return Row(source, names, default)


BLANK = None


@dataclass
class Document:
    """Synthetic document text plus the statements read from it."""

    text: str
    statements: list[ImportStatement]
    defaults: dict[str, str] = field(default_factory=dict)

    def reparse(self, text: str) -> Document:
        return parse_document(text, self.defaults)

    @property
    def sources(self) -> list[str]:
        return [s.source for s in self.statements]


def parse_document(text: str, defaults: Optional[dict[str, str]] = None) -> Document:
    """Read statements back from the synthetic line format."""
    defaults = defaults or {}
    statements: list[ImportStatement] = []
    offset = 0
    for lineno, line in enumerate(text.split("\n"), start=1):
        if line.startswith("from "):
            head, _, names = line[len("from "):].partition(" import ")
            cursor = offset + len("from ") + len(head) + len(" import ")
            bindings = []
            for i, name in enumerate(names.split(", ")):
                bindings.append(
                    Binding(
                        name=name,
                        text=name,
                        range=(cursor, cursor + len(name)),
                        is_default=i == 0 and defaults.get(head) == name,
                    )
                )
                cursor += len(name) + len(", ")
            source = head
        elif line.startswith("import "):
            source = line[len("import "):]
            bindings = []
        else:
            offset += len(line) + 1
            continue
        statements.append(
            ImportStatement(
                source=source,
                text=line,
                bindings=tuple(bindings),
                start=Position(lineno, 0),
                end=Position(lineno, len(line)),
                range=(offset, offset + len(line)),
            )
        )
        offset += len(line) + 1
    return Document(text, statements, dict(defaults))


def build_document(*rows: Optional[Row]) -> Document:
    """Render rows (``BLANK`` for an empty line) into a Document."""
    lines = ["" if row is None else row.render() for row in rows]
    defaults = {row.source: row.default for row in rows if row is not None and row.default}
    return parse_document("\n".join(lines) + "\n", defaults)


def make_policy(**options: Any) -> OrderingPolicy:
    """Build a policy from keyword options spelled with underscores."""
    data = {key.replace("_", "-"): value for key, value in options.items()}
    return OrderingPolicy.from_dict(data)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _fresh_config():
    """Give every test a freshly loaded defaults mapping."""
    config.reset()
    yield
    config.reset()


@pytest.fixture()
def python_policy() -> OrderingPolicy:
    """A realistic policy for Python sources."""
    return OrderingPolicy.from_dict(
        {
            "order": ["__future__", "stdlib", "everything-else", "/^\\./"],
            "groups": {"stdlib": ["/^(os|sys|re|json|typing)(\\.|$)/"]},
            "empty-line-between-groups": True,
        }
    )


@pytest.fixture()
def tmp_project(tmp_path: Path) -> Path:
    """Create a temporary project directory with a .importgate.yaml."""
    project: dict[str, Any] = {
        "policy": {
            "order": ["__future__", "stdlib", "everything-else", "/^\\./"],
            "groups": {"stdlib": ["/^(os|sys|re|json|typing)(\\.|$)/"]},
            "empty-line-between-groups": True,
        },
        "logging": {"enabled": False},
    }
    with open(tmp_path / ".importgate.yaml", "w", encoding="utf-8") as fh:
        yaml.dump(project, fh, default_flow_style=False)
    return tmp_path


@pytest.fixture()
def unsorted_source() -> str:
    """Source with an alphabetical swap and a missing blank line."""
    return (FIXTURES_DIR / "unsorted_imports.py").read_text(encoding="utf-8")


@pytest.fixture()
def sorted_source() -> str:
    """Source that satisfies the python_policy fixture."""
    return (FIXTURES_DIR / "sorted_imports.py").read_text(encoding="utf-8")
