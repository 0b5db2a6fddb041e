"""Markdown rendering of directory trees and commit history."""

from __future__ import annotations

import logging
import os

from contextgen.filesystem import FileSystem
from contextgen.filtering.path_filter import PathMatcher
from contextgen.rendering.content import ELLIPSIS, build_excerpt
from contextgen.schemas.enums import HistoryDetail
from contextgen.schemas.history import CommitInfo
from contextgen.schemas.options import ContentOptions, HistoryOptions
from contextgen.schemas.tree import DirectoryNode, FileNode, TreeNode

LOGGER = logging.getLogger(__name__)

UNREADABLE_NOTE = "⟂ content not displayed (binary/unreadable)"


class MarkdownTreeRenderer:
    """Render a tree as nested Markdown bullets, optionally with file excerpts.

    File content is rendered only when ``content.enabled`` is set, a filesystem
    and scan root are bound, and ``content_matcher`` accepts the file. The
    global ``content.max_files`` cap is applied in rendering order.
    """

    def __init__(
        self,
        fs: FileSystem | None = None,
        root_path: str = "",
        content: ContentOptions | None = None,
        content_matcher: PathMatcher | None = None,
    ) -> None:
        self.fs = fs
        self.root_path = root_path
        self.content = content or ContentOptions()
        self.content_matcher = content_matcher

    def render(self, root: DirectoryNode) -> str:
        lines = [f"/{root.name}/"]
        budget = _ContentBudget(self.content.max_files)
        self._render_children(root.children, 0, lines, budget)
        return "\n".join(lines) + "\n"

    def _render_children(
        self,
        nodes: tuple[TreeNode, ...],
        level: int,
        lines: list[str],
        budget: "_ContentBudget",
    ) -> None:
        indent = "  " * level
        for node in nodes:
            if isinstance(node, DirectoryNode):
                lines.append(f"{indent}- {node.name}/")
                self._render_children(node.children, level + 1, lines, budget)
                continue
            lines.append(f"{indent}- {node.name}")
            if self.fs is not None and self._wants_content(node) and budget.take():
                self._render_file_content(self.fs, node, level + 1, lines)

    def _wants_content(self, node: FileNode) -> bool:
        if not self.content.enabled or not self.root_path:
            return False
        if node.is_placeholder or self.content_matcher is None:
            return False
        return self.content_matcher.is_match(node.relative_path, False)

    def _render_file_content(
        self, fs: FileSystem, node: FileNode, level: int, lines: list[str]
    ) -> None:
        absolute = os.path.join(self.root_path, *node.relative_path.split("/"))
        try:
            text = fs.read_text(absolute)
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.debug("Cannot read %s for content rendering: %s", absolute, exc)
            _append_note(lines, level, UNREADABLE_NOTE)
            return

        excerpt = build_excerpt(text, self.content)
        fence_indent = "  " * level + "  "
        lines.append(f"{fence_indent}```")
        for number, line in enumerate(excerpt.lines, start=1):
            lines.append(f"{number}: {line}" if self.content.show_line_numbers else line)
        lines.append(f"{fence_indent}```")

        if excerpt.depth_filtered:
            _append_note(
                lines,
                level,
                f"{ELLIPSIS} (lines deeper than level {self.content.indent_depth} hidden)",
            )
        if excerpt.truncated:
            _append_note(
                lines, level, f"{ELLIPSIS} (truncated to {self.content.max_lines_per_file} lines)"
            )


class MarkdownHistoryRenderer:
    """Render the recent-changes block; empty string when there are no commits."""

    def render(self, commits: list[CommitInfo], options: HistoryOptions) -> str:
        if not commits:
            return ""
        lines = [f"## Recent Changes (last {options.last})"]
        for commit in commits:
            lines.append(f"- {commit.title}")
            if options.detail == HistoryDetail.TITLE_AND_BODY:
                lines.extend(f"  {body_line}" for body_line in commit.body_lines)
        return "\n".join(lines)


class _ContentBudget:
    def __init__(self, limit: int | None) -> None:
        self.remaining = limit

    def take(self) -> bool:
        if self.remaining is None:
            return True
        if self.remaining <= 0:
            return False
        self.remaining -= 1
        return True


def _append_note(lines: list[str], level: int, note: str) -> None:
    lines.append("  " * level + "  " + note)
