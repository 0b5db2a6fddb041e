"""Plain-text tree rendering."""

from __future__ import annotations

from contextgen.schemas.tree import DirectoryNode, TreeNode


class PlainTextTreeRenderer:
    """Two-space indented listing; directories carry a trailing slash."""

    def render(self, root: DirectoryNode) -> str:
        lines = [f"/{root.name}"]
        _render_children(root.children, 0, lines)
        return "\n".join(lines) + "\n"


def _render_children(nodes: tuple[TreeNode, ...], level: int, lines: list[str]) -> None:
    indent = "  " * level
    for node in nodes:
        if isinstance(node, DirectoryNode):
            lines.append(f"{indent}{node.name}/")
            _render_children(node.children, level + 1, lines)
        else:
            lines.append(f"{indent}{node.name}")
