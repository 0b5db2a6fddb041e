"""Indentation-driven file excerpt tests."""

from __future__ import annotations

from contextgen.rendering.content import build_excerpt, detect_tab_width, filter_by_indent_depth
from contextgen.schemas.options import ContentOptions

_SOURCE = (
    "class A:\n"
    "    def f(self):\n"
    "        return 1\n"
    "    def g(self):\n"
    "        return 2\n"
)


def test_depth_filter_collapses_hidden_lines_into_ellipsis() -> None:
    excerpt = build_excerpt(_SOURCE, ContentOptions(indent_depth=1, context_padding=0))
    assert excerpt.lines == (
        "class A:",
        "    def f(self):",
        "        ...",
        "    def g(self):",
    )
    assert excerpt.depth_filtered
    assert not excerpt.truncated


def test_context_padding_keeps_neighbouring_lines() -> None:
    excerpt = build_excerpt(_SOURCE, ContentOptions(indent_depth=1, context_padding=1))
    assert excerpt.lines == (
        "class A:",
        "    def f(self):",
        "        return 1",
        "    def g(self):",
        "        return 2",
    )


def test_unlimited_depth_keeps_everything() -> None:
    excerpt = build_excerpt("a\r\n  b\r\n", ContentOptions(indent_depth=-1))
    assert excerpt.lines == ("a", "  b", "")
    assert not excerpt.depth_filtered


def test_line_cap_truncates() -> None:
    text = "\n".join(f"line {i}" for i in range(10))
    excerpt = build_excerpt(text, ContentOptions(indent_depth=-1, max_lines_per_file=3))
    assert excerpt.lines == ("line 0", "line 1", "line 2")
    assert excerpt.truncated


def test_tabs_are_expanded_with_configured_width() -> None:
    excerpt = build_excerpt("a:\n\tb\n", ContentOptions(indent_depth=-1, tab_width=2))
    assert excerpt.lines[1] == "  b"


def test_detect_tab_width() -> None:
    assert detect_tab_width("a\n  b\n    c\n", 4) == 2
    assert detect_tab_width("a\n    b\n", 2) == 4
    assert detect_tab_width("a\n\tb\n", 8) == 8
    assert detect_tab_width("no indentation\n", 4) == 4


def test_filter_by_indent_depth_zero() -> None:
    lines = ["def f():", "    pass", "", "x = 1"]
    assert filter_by_indent_depth(lines, 0, 4, 0) == ["def f():", "    ...", "x = 1"]
