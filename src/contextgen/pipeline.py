"""End-to-end context generation: ignore rules, filtered tree, rendering, history."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from contextgen.config.mapper import MappedConfig
from contextgen.filesystem import FileSystem, LocalFileSystem
from contextgen.filtering.glob_matcher import GlobPathMatcher
from contextgen.filtering.ignore_loader import IgnoreRuleProvider
from contextgen.filtering.path_filter import PathFilter
from contextgen.history.git import GitHistoryProvider
from contextgen.rendering.json_renderer import JsonTreeRenderer
from contextgen.rendering.markdown import MarkdownHistoryRenderer, MarkdownTreeRenderer
from contextgen.rendering.plain import PlainTextTreeRenderer
from contextgen.schemas.enums import OutputFormat
from contextgen.schemas.options import ContentOptions, IgnoreLoadingOptions
from contextgen.schemas.tree import DirectoryNode
from contextgen.tree.builder import TreeBuilder

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedContext:
    """Rendered document plus the tree it was produced from."""

    tree: DirectoryNode
    text: str
    commit_count: int


class ContextGenerator:
    """Wire the scan, render and history stages for one configured root."""

    def __init__(
        self,
        *,
        fs: FileSystem | None = None,
        history_provider: GitHistoryProvider | None = None,
    ) -> None:
        self.fs = fs or LocalFileSystem()
        self.history_provider = history_provider or GitHistoryProvider()

    def build_tree(self, mapped: MappedConfig) -> DirectoryNode:
        """Load ignore rules for the root and build the filtered tree."""
        ignore_rules = IgnoreRuleProvider(self.fs).load(
            mapped.root, IgnoreLoadingOptions.from_scan_options(mapped.tree)
        )
        LOGGER.debug("Loaded %d ignore rules for %s", len(ignore_rules), mapped.root)
        path_filter = PathFilter.from_options(mapped.tree, ignore_rules)
        return TreeBuilder(self.fs, path_filter).build(mapped.root, mapped.tree)

    def generate(
        self, mapped: MappedConfig, output_format: OutputFormat = OutputFormat.MARKDOWN
    ) -> GeneratedContext:
        """Render the tree; Markdown output also carries content excerpts and history."""
        tree = self.build_tree(mapped)

        if output_format == OutputFormat.JSON:
            return GeneratedContext(tree=tree, text=JsonTreeRenderer().render(tree), commit_count=0)
        if output_format == OutputFormat.PLAIN:
            return GeneratedContext(
                tree=tree, text=PlainTextTreeRenderer().render(tree), commit_count=0
            )

        renderer = MarkdownTreeRenderer(
            fs=self.fs,
            root_path=mapped.root,
            content=mapped.content,
            content_matcher=content_matcher(mapped.content),
        )
        text = renderer.render(tree)

        commits = self.history_provider.get_recent_commits(mapped.history, mapped.root)
        history_block = MarkdownHistoryRenderer().render(commits, mapped.history)
        if history_block:
            text = f"{text}\n{history_block}\n"
        return GeneratedContext(tree=tree, text=text, commit_count=len(commits))


def content_matcher(options: ContentOptions) -> GlobPathMatcher | None:
    """Matcher selecting files that get excerpts; ``None`` when nothing qualifies."""
    if not options.enabled:
        return None
    if options.include is not None and not options.include:
        return None
    return GlobPathMatcher(options.include)
