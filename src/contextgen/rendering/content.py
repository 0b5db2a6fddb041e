"""Language-agnostic file excerpts driven by indentation depth."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from contextgen.schemas.options import ContentOptions

ELLIPSIS = "..."
TAB_WIDTH_CANDIDATES = (2, 4, 8)
MAX_LINES_INSPECTED = 200


@dataclass(frozen=True)
class Excerpt:
    """Lines kept from one file plus the notes to print under the block."""

    lines: tuple[str, ...]
    truncated: bool
    depth_filtered: bool


def build_excerpt(text: str, options: ContentOptions) -> Excerpt:
    """Expand tabs, filter by indentation depth and apply the per-file line cap."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    tab_width = options.tab_width if options.tab_width > 0 else 4
    if options.detect_tab_width:
        detected = detect_tab_width(text, tab_width)
        if detected in TAB_WIDTH_CANDIDATES:
            tab_width = detected

    lines = [line.expandtabs(tab_width) for line in text.split("\n")]
    kept = filter_by_indent_depth(lines, options.indent_depth, tab_width, options.context_padding)

    truncated = False
    if options.max_lines_per_file > 0 and len(kept) > options.max_lines_per_file:
        kept = kept[: options.max_lines_per_file]
        truncated = True

    return Excerpt(
        lines=tuple(kept),
        truncated=truncated,
        depth_filtered=options.indent_depth >= 0,
    )


def detect_tab_width(text: str, fallback: int) -> int:
    """Guess the indentation unit from leading spaces; tabs force the fallback."""
    if "\t" in text:
        return fallback

    counts: Counter[int] = Counter()
    inspected = 0
    for raw in text.split("\n"):
        if inspected >= MAX_LINES_INSPECTED:
            break
        if not raw.strip():
            continue
        leading = len(raw) - len(raw.lstrip(" "))
        if leading > 0:
            counts[leading] += 1
            inspected += 1

    for candidate in TAB_WIDTH_CANDIDATES:
        if counts[candidate]:
            return candidate
    return fallback


def filter_by_indent_depth(
    lines: list[str], indent_depth: int, tab_width: int, context_padding: int
) -> list[str]:
    """Keep lines at most ``indent_depth`` levels deep, padded with context.

    Padding is applied around core lines only (non-recursive). Gaps between
    kept fragments collapse into a single ``...`` line indented one level
    deeper than the cut-off.
    """
    if indent_depth < 0:
        return list(lines)

    count = len(lines)
    core = [False] * count
    for index, line in enumerate(lines):
        if not line.strip():
            continue
        leading = len(line) - len(line.lstrip(" "))
        level = leading // tab_width if tab_width > 0 else 0
        core[index] = level <= indent_depth

    kept = list(core)
    if context_padding > 0:
        for index in (i for i, is_core in enumerate(core) if is_core):
            low = max(0, index - context_padding)
            high = min(count - 1, index + context_padding)
            for neighbour in range(low, high + 1):
                kept[neighbour] = True

    ellipsis_line = " " * max(0, (indent_depth + 1) * tab_width) + ELLIPSIS
    result: list[str] = []
    previous_kept = True
    for index, line in enumerate(lines):
        if kept[index]:
            if not previous_kept and result:
                result.append(ellipsis_line)
            result.append(line)
        previous_kept = kept[index]
    return result
