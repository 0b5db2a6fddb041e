"""Tree traversal exports."""

from contextgen.tree.builder import TraversalResult, TreeBuilder

__all__ = ["TraversalResult", "TreeBuilder"]
