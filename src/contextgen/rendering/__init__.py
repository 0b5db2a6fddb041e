"""Renderer exports."""

from contextgen.rendering.json_renderer import JsonTreeRenderer
from contextgen.rendering.markdown import MarkdownHistoryRenderer, MarkdownTreeRenderer
from contextgen.rendering.plain import PlainTextTreeRenderer

__all__ = [
    "JsonTreeRenderer",
    "MarkdownHistoryRenderer",
    "MarkdownTreeRenderer",
    "PlainTextTreeRenderer",
]
