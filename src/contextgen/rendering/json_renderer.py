"""JSON tree rendering."""

from __future__ import annotations

from typing import Any

import orjson

from contextgen.schemas.tree import DirectoryNode, TreeNode


class JsonTreeRenderer:
    """Indented JSON of ``{type, name, relativePath, children}`` nodes."""

    def render(self, root: DirectoryNode) -> str:
        return orjson.dumps(node_to_dict(root), option=orjson.OPT_INDENT_2).decode("utf-8")


def node_to_dict(node: TreeNode) -> dict[str, Any]:
    """Serialize a node (recursively for directories) into JSON-ready data."""
    if isinstance(node, DirectoryNode):
        return {
            "type": "directory",
            "name": node.name,
            "relativePath": node.relative_path,
            "children": [node_to_dict(child) for child in node.children],
        }
    payload: dict[str, Any] = {
        "type": "file",
        "name": node.name,
        "relativePath": node.relative_path,
    }
    if node.is_placeholder:
        payload["placeholder"] = True
    return payload
