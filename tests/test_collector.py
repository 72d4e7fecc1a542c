"""Tests for importgate.lib.collector on real Python source."""

from __future__ import annotations

import libcst as cst
import pytest

from importgate.lib.collector import collect_imports
from importgate.lib.models import Position


def _statements(source: str):
    return collect_imports(source).statements


class TestSources:
    """Tests for the module-source identifier."""

    def test_plain_import(self):
        """'import x' uses the module name."""
        [s] = _statements("import os\n")
        assert s.source == "os"

    def test_dotted_import(self):
        """Dotted names are kept whole."""
        [s] = _statements("import os.path\n")
        assert s.source == "os.path"

    def test_multi_name_import_uses_first(self):
        """'import a, b' is identified by its first module."""
        [s] = _statements("import sys, os\n")
        assert s.source == "sys"

    def test_from_import(self):
        """'from x import y' uses the module after 'from'."""
        [s] = _statements("from collections import OrderedDict\n")
        assert s.source == "collections"

    def test_relative_import(self):
        """Leading dots are part of the source."""
        [s] = _statements("from ..pkg.mod import x\n")
        assert s.source == "..pkg.mod"

    def test_bare_relative_import(self):
        """'from . import x' has source '.'."""
        [s] = _statements("from . import x\n")
        assert s.source == "."


class TestBindings:
    """Tests for bound names and their text."""

    def test_import_names(self):
        """Each module in 'import a, b' is a binding."""
        [s] = _statements("import sys, os\n")
        assert [b.name for b in s.bindings] == ["sys", "os"]
        assert [b.text for b in s.bindings] == ["sys", "os"]

    def test_alias_uses_local_name(self):
        """Aliases sort by the local name and keep their full text."""
        [s] = _statements("import os.path as osp, sys\n")
        assert [b.name for b in s.bindings] == ["osp", "sys"]
        assert s.bindings[0].text == "os.path as osp"

    def test_from_alias(self):
        """'from x import a as b' binds 'b'."""
        [s] = _statements("from pkg import a, b as c\n")
        assert [b.name for b in s.bindings] == ["a", "c"]
        assert s.bindings[1].text == "b as c"

    def test_binding_ranges(self):
        """Binding ranges index into the source text."""
        source = "from pkg import alpha, beta\n"
        [s] = _statements(source)
        for binding in s.bindings:
            start, end = binding.range
            assert source[start:end] == binding.text

    def test_star_import(self):
        """Star imports bind nothing."""
        [s] = _statements("from pkg import *\n")
        assert s.bindings == ()
        assert s.first_name is None

    def test_never_default(self):
        """Python imports have no default binding."""
        [s] = _statements("from pkg import b, a\n")
        assert s.default_binding is None
        assert len(s.named_bindings) == 2


class TestPositions:
    """Tests for statement text, ranges, and positions."""

    def test_single_line(self):
        """A one-line import spans its physical line."""
        source = '"""Doc."""\nimport os\n'
        [s] = _statements(source)
        assert s.text == "import os"
        assert s.start == Position(2, 0)
        assert s.end == Position(2, 9)
        assert source[s.range[0]:s.range[1]] == "import os"

    def test_trailing_comment(self):
        """A trailing comment travels with its statement."""
        source = "import os  # noqa\n"
        [s] = _statements(source)
        assert s.text == "import os  # noqa"

    def test_parenthesized(self):
        """Parenthesised imports span several lines."""
        source = "from pkg import (\n    beta,\n    alpha,\n)\nimport os\n"
        first, second = _statements(source)
        assert first.start.line == 1
        assert first.end.line == 4
        assert first.text == "from pkg import (\n    beta,\n    alpha,\n)"
        assert [b.text for b in first.bindings] == ["beta", "alpha"]
        assert second.start.line == 5

    def test_crlf(self):
        """Offsets and newline style follow CRLF sources."""
        source = "import sys\r\nimport os\r\n"
        collection = collect_imports(source)
        assert collection.newline == "\r\n"
        second = collection.statements[1]
        assert second.range == (12, 21)
        assert second.text == "import os"

    def test_lf_newline(self):
        """LF sources report LF."""
        assert collect_imports("import os\n").newline == "\n"


class TestSkipped:
    """Imports the collector leaves alone."""

    def test_nested_imports(self):
        """Imports inside blocks are not collected."""
        source = "import os\n\nif True:\n    import sys\n\ndef f():\n    import re\n"
        assert [s.source for s in _statements(source)] == ["os"]

    def test_shared_line(self):
        """Imports sharing a line with another statement are not collected."""
        source = "import os; import sys\nx = 1; import re\nimport json\n"
        assert [s.source for s in _statements(source)] == ["json"]

    def test_no_imports(self):
        """A module without imports yields nothing."""
        assert _statements("x = 1\n") == ()

    def test_empty_source(self):
        """Empty source yields nothing."""
        assert _statements("") == ()

    def test_document_order(self):
        """Statements come back in document order across other code."""
        source = "import b\nx = 1\nimport a\n"
        assert [s.source for s in _statements(source)] == ["b", "a"]


class TestParseErrors:
    """Unparseable source surfaces LibCST's error."""

    def test_syntax_error(self):
        """Broken source raises ParserSyntaxError."""
        with pytest.raises(cst.ParserSyntaxError):
            collect_imports("import (\n")
