"""Depth-bounded directory traversal producing a pruned, immutable node tree."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from contextgen.filesystem import FileSystem
from contextgen.filtering.path_filter import PathFilter
from contextgen.schemas.options import TreeScanOptions
from contextgen.schemas.tree import DirectoryNode, FileNode, TreeNode, placeholder_node

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraversalResult:
    """Pruned children of one directory plus whether its subtree holds an included file."""

    children: tuple[TreeNode, ...]
    has_included_file: bool


class TreeBuilder:
    """Walk a filesystem depth-first and keep what the path filter allows.

    A directory is kept when it is explicitly included, when any file below it
    is included, or when it still has children after pruning. This keeps the
    minimal directory spine down to files selected by file-only include globs.
    """

    def __init__(self, fs: FileSystem, path_filter: PathFilter) -> None:
        self.fs = fs
        self.path_filter = path_filter

    def build(self, root_path: str, options: TreeScanOptions) -> DirectoryNode:
        """Build the tree for ``root_path``; raises FileNotFoundError if it cannot be listed."""
        walk = _Walk(self.fs, self.path_filter, root_path, options)
        result = walk.children_of(root_path, depth=0)
        return DirectoryNode(
            name=self.fs.file_name(os.path.normpath(root_path)),
            relative_path="",
            children=result.children,
        )


class _Walk:
    """State of a single traversal; never shared between scans."""

    def __init__(
        self,
        fs: FileSystem,
        path_filter: PathFilter,
        root_path: str,
        options: TreeScanOptions,
    ) -> None:
        self.fs = fs
        self.path_filter = path_filter
        self.root_path = root_path
        self.options = options

    def children_of(self, absolute_path: str, depth: int) -> TraversalResult:
        options = self.options
        if options.max_depth >= 0 and depth >= options.max_depth:
            if depth == 0:
                # still fail loudly on a missing root
                self._list(absolute_path, depth)
            return TraversalResult(children=(), has_included_file=False)

        listing = self._list(absolute_path, depth)
        if listing is None:
            return TraversalResult(children=(), has_included_file=False)
        directories, files = listing

        included_files = [
            path for path in files if self.path_filter.should_include_file(self.relative(path))
        ]
        traversable = [
            path
            for path in directories
            if self.path_filter.can_traverse_directory(self.relative(path))
        ]

        children: list[TreeNode] = []
        has_included_file = bool(included_files)

        for directory in traversable:
            relative = self.relative(directory)
            sub = self.children_of(directory, depth + 1)
            keep = (
                sub.has_included_file
                or bool(sub.children)
                or self.path_filter.should_include_directory(relative)
            )
            if not keep:
                continue
            children.append(self._directory_node(directory, relative, sub.children))
            has_included_file = has_included_file or sub.has_included_file

        if not options.directories_only:
            children.extend(
                FileNode(name=self.fs.file_name(path), relative_path=self.relative(path))
                for path in included_files
            )

        if options.sort_directories_first:
            children.sort(key=_sort_key)

        cap = options.max_items_per_directory
        if cap is not None and len(children) > cap:
            omitted = len(children) - cap
            children = children[:cap] + [placeholder_node(omitted)]

        return TraversalResult(children=tuple(children), has_included_file=has_included_file)

    def relative(self, absolute_path: str) -> str:
        """Forward-slash path relative to the scan root; the root itself is ``""``."""
        relative = os.path.relpath(absolute_path, self.root_path).replace("\\", "/")
        if relative.startswith("./"):
            relative = relative[2:]
        return "" if relative == "." else relative

    def _directory_node(
        self, absolute_path: str, relative: str, children: tuple[TreeNode, ...]
    ) -> DirectoryNode:
        node = DirectoryNode(
            name=self.fs.file_name(absolute_path), relative_path=relative, children=children
        )
        if (
            self.options.collapse_single_child_directories
            and len(children) == 1
            and isinstance(children[0], DirectoryNode)
        ):
            only = children[0]
            node = DirectoryNode(
                name=f"{node.name}/{only.name}",
                relative_path=only.relative_path,
                children=only.children,
            )
        return node

    def _list(self, absolute_path: str, depth: int) -> tuple[list[str], list[str]] | None:
        try:
            return list(self.fs.list_directories(absolute_path)), list(
                self.fs.list_files(absolute_path)
            )
        except OSError as exc:
            if depth == 0:
                raise
            LOGGER.warning("Skipping unreadable directory %s: %s", absolute_path, exc)
            return None


def _sort_key(node: TreeNode) -> tuple[bool, str]:
    return isinstance(node, FileNode), node.name.casefold()
