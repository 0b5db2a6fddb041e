"""Schema contract exports."""

from contextgen.schemas.enums import GitIgnoreMode, HistoryDetail, OutputFormat
from contextgen.schemas.history import CommitInfo
from contextgen.schemas.options import (
    ContentOptions,
    HistoryOptions,
    IgnoreLoadingOptions,
    TreeScanOptions,
)
from contextgen.schemas.tree import DirectoryNode, FileNode, TreeNode

__all__ = [
    "CommitInfo",
    "ContentOptions",
    "DirectoryNode",
    "FileNode",
    "GitIgnoreMode",
    "HistoryDetail",
    "HistoryOptions",
    "IgnoreLoadingOptions",
    "OutputFormat",
    "TreeNode",
    "TreeScanOptions",
]
