"""Runtime option contracts consumed by the scan, render and history stages."""

from __future__ import annotations

from dataclasses import dataclass

from contextgen.constants import DEFAULT_IGNORE_FILE_NAME
from contextgen.schemas.enums import GitIgnoreMode, HistoryDetail


@dataclass(frozen=True)
class TreeScanOptions:
    """Options controlling how a directory tree is scanned and built.

    ``max_depth`` of 0 yields the bare root node, 1 adds the root's direct
    entries, and -1 means unlimited. ``include_globs`` of ``None``
    includes everything.
    """

    max_depth: int = 4
    include_globs: tuple[str, ...] | None = None
    exclude_globs: tuple[str, ...] | None = None
    sort_directories_first: bool = True
    collapse_single_child_directories: bool = True
    max_items_per_directory: int | None = None
    git_ignore: GitIgnoreMode = GitIgnoreMode.ROOT_ONLY
    git_ignore_file_name: str = DEFAULT_IGNORE_FILE_NAME
    directories_only: bool = False


@dataclass(frozen=True)
class IgnoreLoadingOptions:
    """Which ignore strategy to use and which file name to look for."""

    mode: GitIgnoreMode = GitIgnoreMode.ROOT_ONLY
    file_name: str = DEFAULT_IGNORE_FILE_NAME

    @classmethod
    def from_scan_options(cls, options: TreeScanOptions) -> "IgnoreLoadingOptions":
        return cls(
            mode=options.git_ignore,
            file_name=options.git_ignore_file_name or DEFAULT_IGNORE_FILE_NAME,
        )


@dataclass(frozen=True)
class ContentOptions:
    """Options controlling file-content excerpts beneath file nodes.

    Excerpting is language-agnostic and driven by indentation depth.
    ``include`` of ``None`` selects every rendered file; an empty tuple selects none.
    """

    enabled: bool = False
    indent_depth: int = 1
    tab_width: int = 4
    detect_tab_width: bool = True
    max_lines_per_file: int = 300
    show_line_numbers: bool = False
    context_padding: int = 1
    max_files: int | None = None
    include: tuple[str, ...] | None = None


@dataclass(frozen=True)
class HistoryOptions:
    """Options controlling recent commit history collection and rendering."""

    enabled: bool = True
    last: int = 20
    max_body_lines: int = 6
    detail: HistoryDetail = HistoryDetail.TITLES_ONLY
    include_merges: bool = False
