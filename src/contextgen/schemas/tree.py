"""Immutable directory tree contracts handed to renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from contextgen.constants import ELLIPSIS_RELATIVE_PATH


@dataclass(frozen=True)
class FileNode:
    """Leaf node. ``relative_path`` is relative to the scan root with '/'."""

    name: str
    relative_path: str

    @property
    def is_placeholder(self) -> bool:
        return self.relative_path == ELLIPSIS_RELATIVE_PATH


@dataclass(frozen=True)
class DirectoryNode:
    """Directory node; the scan root uses relative path ``""``."""

    name: str
    relative_path: str
    children: tuple["TreeNode", ...] = field(default_factory=tuple)


TreeNode = Union[DirectoryNode, FileNode]


def placeholder_node(omitted: int) -> FileNode:
    """Synthetic node standing in for entries dropped by a per-directory cap."""
    return FileNode(name=f"… (+{omitted} more)", relative_path=ELLIPSIS_RELATIVE_PATH)


def iter_files(node: DirectoryNode):
    """Yield file nodes depth-first in rendering order, skipping placeholders."""
    for child in node.children:
        if isinstance(child, DirectoryNode):
            yield from iter_files(child)
        elif not child.is_placeholder:
            yield child
