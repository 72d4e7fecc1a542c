"""collector — extract module-level import statements from Python source.

The source is parsed once with LibCST and a single MetadataWrapper resolves
positions for every node, the same single-parse approach the rest of the
tool relies on.  The result is a sequence of :class:`ImportStatement`
records that the order checker consumes; nothing downstream ever touches
the CST.

Mapping Python imports onto statements:

    import a.b as c, d        source "a.b", bindings "a.b as c" (c), "d"
    from pkg import x, y as z source "pkg", bindings "x", "y as z" (z)
    from ..utils import *     source "..utils", no bindings

Only imports that are the sole statement on a module-level line are
collected.  Imports inside blocks or sharing a line with other statements
cannot be moved line-wise and are ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

import libcst as cst
from libcst.helpers import get_full_name_for_node
from libcst.metadata import CodeRange, MetadataWrapper, PositionProvider

from importgate.lib.models import Binding, ImportStatement, Position

_NEWLINE = re.compile(r"\r\n|\r|\n")

ImportNode = Union[cst.Import, cst.ImportFrom]


@dataclass(frozen=True)
class ImportCollection:
    """Statements of one document plus the document's line break style."""

    statements: tuple[ImportStatement, ...]
    newline: str = "\n"


class _LineIndex:
    """Translate libcst line/column positions into character offsets."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.starts = [0] + [m.end() for m in _NEWLINE.finditer(source)]

    def offset(self, line: int, column: int) -> int:
        return self.starts[line - 1] + column

    def line_end(self, line: int) -> int:
        """Offset of the line terminator ending ``line`` (or end of text)."""
        match = _NEWLINE.search(self.source, self.starts[line - 1])
        return match.start() if match else len(self.source)


def _source_of(node: ImportNode) -> str:
    if isinstance(node, cst.Import):
        return get_full_name_for_node(node.names[0].name) or ""
    dots = "." * len(node.relative)
    module = get_full_name_for_node(node.module) if node.module is not None else ""
    return dots + (module or "")


def _binding_name(node: ImportNode, alias: cst.ImportAlias) -> str:
    if alias.asname is not None and isinstance(alias.asname.name, cst.Name):
        return alias.asname.name.value
    return get_full_name_for_node(alias.name) or ""


class _Collector:
    """Builds statements from a resolved module."""

    def __init__(self, source: str, wrapper: MetadataWrapper) -> None:
        self.source = source
        self.index = _LineIndex(source)
        self.positions = wrapper.resolve(PositionProvider)
        self.module = wrapper.module

    def _span(self, code_range: CodeRange) -> tuple[int, int]:
        return (
            self.index.offset(code_range.start.line, code_range.start.column),
            self.index.offset(code_range.end.line, code_range.end.column),
        )

    def _binding(self, node: ImportNode, alias: cst.ImportAlias) -> Binding:
        start, end = self._span(self.positions[alias])
        text = self.source[start:end]
        # Trim a trailing comma in case the recorded range includes it.
        trimmed = text.rstrip().rstrip(",").rstrip()
        return Binding(
            name=_binding_name(node, alias),
            text=trimmed,
            range=(start, start + len(trimmed)),
        )

    def _statement(self, node: ImportNode) -> ImportStatement:
        code_range = self.positions[node]
        start = self.index.offset(code_range.start.line, code_range.start.column)
        end_line = code_range.end.line
        end = self.index.line_end(end_line)
        bindings: tuple[Binding, ...] = ()
        if not isinstance(node.names, cst.ImportStar):
            bindings = tuple(self._binding(node, alias) for alias in node.names)
        return ImportStatement(
            source=_source_of(node),
            text=self.source[start:end],
            bindings=bindings,
            start=Position(code_range.start.line, code_range.start.column),
            end=Position(end_line, end - self.index.starts[end_line - 1]),
            range=(start, end),
        )

    def collect(self) -> list[ImportStatement]:
        statements: list[ImportStatement] = []
        for line in self.module.body:
            if not isinstance(line, cst.SimpleStatementLine) or len(line.body) != 1:
                continue
            node = line.body[0]
            if isinstance(node, (cst.Import, cst.ImportFrom)):
                statements.append(self._statement(node))
        return statements


def collect_imports(source: str) -> ImportCollection:
    """Parse ``source`` and return its module-level import statements.

    Args:
        source: Python source text.

    Returns:
        Statements in document order and the module's newline style.

    Raises:
        libcst.ParserSyntaxError: If the source cannot be parsed.
    """
    wrapper = MetadataWrapper(cst.parse_module(source))
    statements = _Collector(source, wrapper).collect()
    return ImportCollection(tuple(statements), wrapper.module.default_newline)
