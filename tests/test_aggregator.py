"""
Tests cho core.metrics.aggregator - Directory tree va totals.
"""

import os

from core.metrics.aggregator import aggregate
from core.metrics.types import EntryKind, FileMetrics

ROOT = os.path.join(os.sep, "proj")


def _p(*parts: str) -> str:
    return os.path.join(ROOT, *parts)


def _file(path: str, lines: int, tokens: int = 0) -> FileMetrics:
    return FileMetrics(path=path, line_count=lines, token_count=tokens, indicator="⚪")


def _entries(*files: FileMetrics):
    return [(f.path, f) for f in files]


class TestAggregate:
    """Test aggregate()."""

    def test_empty_root_still_present(self):
        result = aggregate(ROOT, [])
        assert list(result) == [ROOT]
        assert result[ROOT].total_line_count == 0
        assert result[ROOT].children == []

    def test_nested_totals(self):
        """a.txt (2 lines) + sub/b.txt (1 line): root = 3, sub = 1."""
        a = _file(_p("a.txt"), 2, 2)
        b = _file(_p("sub", "b.txt"), 1, 1)

        result = aggregate(ROOT, _entries(a, b))

        assert result[ROOT].total_line_count == 3
        assert result[ROOT].total_token_count == 3
        assert result[_p("sub")].total_line_count == 1
        assert result[_p("sub")].find_child(b.path) is b

    def test_root_children_directories_and_files(self):
        a = _file(_p("a.txt"), 2)
        b = _file(_p("sub", "b.txt"), 1)

        result = aggregate(ROOT, _entries(a, b))
        kinds = {c.path: c.kind for c in result[ROOT].children}

        assert kinds == {a.path: EntryKind.FILE, _p("sub"): EntryKind.DIRECTORY}

    def test_deep_chain_creates_intermediate_directories(self):
        deep = _file(_p("a", "b", "c", "d.py"), 10)

        result = aggregate(ROOT, _entries(deep))

        for directory in (ROOT, _p("a"), _p("a", "b"), _p("a", "b", "c")):
            assert result[directory].total_line_count == 10
        assert result[_p("a")].find_child(_p("a", "b")) is result[_p("a", "b")]

    def test_no_duplicate_children(self):
        """Nhieu file chung parent: parent chi duoc gan mot lan."""
        files = [_file(_p("pkg", f"m{i}.py"), i) for i in range(5)]

        result = aggregate(ROOT, _entries(*files))

        pkg_paths = [c.path for c in result[ROOT].children]
        assert pkg_paths == [_p("pkg")]
        assert len(result[_p("pkg")].children) == 5
        assert result[_p("pkg")].total_line_count == sum(range(5))

    def test_ignores_files_outside_root(self):
        inside = _file(_p("a.py"), 3)
        outside = _file(os.path.join(os.sep, "other", "x.py"), 100)
        sibling = _file(ROOT + "2" + os.sep + "y.py", 50)

        result = aggregate(ROOT, _entries(inside, outside, sibling))

        assert result[ROOT].total_line_count == 3
        assert len(result[ROOT].children) == 1

    def test_totals_equal_sum_of_descendants(self):
        files = [
            _file(_p("a.py"), 1, 2),
            _file(_p("x", "b.py"), 3, 4),
            _file(_p("x", "y", "c.py"), 5, 6),
            _file(_p("z", "d.py"), 7, 8),
        ]

        result = aggregate(ROOT, _entries(*files))

        assert result[ROOT].total_line_count == 16
        assert result[ROOT].total_token_count == 20
        assert result[_p("x")].total_line_count == 8
        assert result[_p("x", "y")].total_token_count == 6

    def test_input_order_does_not_matter(self):
        files = [_file(_p("x", "b.py"), 3), _file(_p("a.py"), 1), _file(_p("x", "c.py"), 2)]

        forward = aggregate(ROOT, _entries(*files))
        backward = aggregate(ROOT, list(reversed(_entries(*files))))

        assert forward[ROOT].total_line_count == backward[ROOT].total_line_count == 6
        assert forward[_p("x")].total_line_count == backward[_p("x")].total_line_count
