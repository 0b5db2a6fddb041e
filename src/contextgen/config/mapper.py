"""Map a validated config file onto engine options, collecting diagnostics."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from contextgen.config.models import ContentConfig, ContextConfig, HistoryConfig
from contextgen.constants import CONFIG_SCHEMA_VERSION, DEFAULT_IGNORE_FILE_NAME
from contextgen.schemas.enums import (
    GitIgnoreMode,
    HistoryDetail,
    normalize_git_ignore_mode,
    normalize_history_detail,
)
from contextgen.schemas.options import ContentOptions, HistoryOptions, TreeScanOptions

DEFAULT_MAX_DEPTH = 4


@dataclass(frozen=True)
class MappedConfig:
    """Effective options for one run plus the non-fatal issues found while mapping."""

    tree: TreeScanOptions
    history: HistoryOptions
    content: ContentOptions
    root: str
    diagnostics: tuple[str, ...] = field(default_factory=tuple)


def map_config(
    config: ContextConfig,
    profile: str | None = None,
    config_dir: Path | None = None,
    root_override: str | None = None,
) -> MappedConfig:
    """Apply the selected profile and normalize every value into engine options."""
    diagnostics: list[str] = []

    if config.version is not None and config.version != CONFIG_SCHEMA_VERSION:
        diagnostics.append(
            f"Unsupported config version {config.version}; expected {CONFIG_SCHEMA_VERSION}."
        )

    effective = _apply_profile(config, profile, diagnostics)
    tree = _map_tree(effective, diagnostics)
    history = _map_history(effective.history or HistoryConfig(), diagnostics)
    content = _map_content(effective.content or ContentConfig(), diagnostics)
    root = _resolve_root(effective.root, config_dir, root_override)

    return MappedConfig(
        tree=tree,
        history=history,
        content=content,
        root=root,
        diagnostics=tuple(diagnostics),
    )


def expand_shorthand(globs: list[str] | tuple[str, ...] | None) -> tuple[str, ...] | None:
    """Expand config shorthands and drop duplicates, preserving first occurrence.

    ``dir/`` selects a whole subtree anywhere, ``*.ext`` matches at any depth and
    a bare name matches that name anywhere. Anything else is kept verbatim.
    """
    if globs is None:
        return None
    expanded: list[str] = []
    seen: set[str] = set()
    for raw in globs:
        glob = raw.strip().replace("\\", "/")
        if not glob:
            continue
        if glob.endswith("/") and "/" not in glob[:-1] and not _has_wildcard(glob):
            glob = f"**/{glob[:-1]}/**"
        elif glob.startswith("*.") and "/" not in glob:
            glob = f"**/{glob}"
        elif "/" not in glob and not _has_wildcard(glob):
            glob = f"**/{glob}"
        if glob not in seen:
            seen.add(glob)
            expanded.append(glob)
    return tuple(expanded)


def _apply_profile(
    config: ContextConfig, profile: str | None, diagnostics: list[str]
) -> ContextConfig:
    if not profile:
        return config
    profiles = config.profiles or {}
    selected = profiles.get(profile)
    if selected is None:
        diagnostics.append(f"Profile '{profile}' not found; using root configuration.")
        return config

    values = {
        name: getattr(config, name)
        for name in ContextConfig.model_fields
        if name not in {"profiles", "history", "content"}
    }
    for name in values:
        override = getattr(selected, name)
        if override is not None:
            values[name] = override

    history = (config.history or HistoryConfig()).merged_with(selected.history)
    content = (config.content or ContentConfig()).merged_with(selected.content)
    return ContextConfig(**values, history=history, content=content)


def _map_tree(config: ContextConfig, diagnostics: list[str]) -> TreeScanOptions:
    max_depth = DEFAULT_MAX_DEPTH if config.max_depth is None else config.max_depth
    if max_depth < -1:
        diagnostics.append(f"maxDepth {max_depth} is below -1; using -1 (unlimited).")
        max_depth = -1

    git_ignore = GitIgnoreMode.ROOT_ONLY
    if config.git_ignore is not None:
        try:
            git_ignore = normalize_git_ignore_mode(config.git_ignore)
        except ValueError:
            diagnostics.append(f"Unknown gitIgnore '{config.git_ignore}'; using RootOnly.")

    max_items = config.max_items_per_directory
    if max_items is not None and max_items < 0:
        diagnostics.append(f"maxItemsPerDirectory {max_items} is negative; ignoring.")
        max_items = None

    return TreeScanOptions(
        max_depth=max_depth,
        include_globs=expand_shorthand(config.include),
        exclude_globs=expand_shorthand(config.exclude),
        sort_directories_first=_or(config.sort_directories_first, True),
        collapse_single_child_directories=_or(config.collapse_single_child_directories, True),
        max_items_per_directory=max_items,
        git_ignore=git_ignore,
        git_ignore_file_name=config.git_ignore_file_name or DEFAULT_IGNORE_FILE_NAME,
        directories_only=_or(config.directories_only, False),
    )


def _map_history(config: HistoryConfig, diagnostics: list[str]) -> HistoryOptions:
    defaults = HistoryOptions()

    last = _or(config.last, defaults.last)
    if last < 0:
        diagnostics.append(f"history.last {last} is negative; using 0.")
        last = 0

    max_body_lines = _or(config.max_body_lines, defaults.max_body_lines)
    if max_body_lines < 0:
        diagnostics.append(f"history.maxBodyLines {max_body_lines} is negative; using 0.")
        max_body_lines = 0

    detail = defaults.detail
    if config.detail is not None:
        try:
            detail = normalize_history_detail(config.detail)
        except ValueError:
            diagnostics.append(f"Unknown history.detail '{config.detail}'; using TitlesOnly.")
            detail = HistoryDetail.TITLES_ONLY

    return HistoryOptions(
        enabled=_or(config.enabled, defaults.enabled),
        last=last,
        max_body_lines=max_body_lines,
        detail=detail,
        include_merges=_or(config.include_merges, defaults.include_merges),
    )


def _map_content(config: ContentConfig, diagnostics: list[str]) -> ContentOptions:
    defaults = ContentOptions()

    indent_depth = _or(config.indent_depth, defaults.indent_depth)
    if indent_depth < -1:
        diagnostics.append(f"content.indentDepth {indent_depth} is below -1; using -1.")
        indent_depth = -1

    tab_width = _or(config.tab_width, defaults.tab_width)
    if tab_width < 1:
        diagnostics.append(f"content.tabWidth {tab_width} is below 1; using 4.")
        tab_width = 4

    max_lines = _or(config.max_lines_per_file, defaults.max_lines_per_file)
    if max_lines < -1:
        diagnostics.append(f"content.maxLinesPerFile {max_lines} is below -1; using -1.")
        max_lines = -1

    padding = _or(config.context_padding, defaults.context_padding)
    if padding < 0:
        diagnostics.append(f"content.contextPadding {padding} is negative; using 0.")
        padding = 0

    max_files = config.max_files
    if max_files is not None and max_files < 0:
        diagnostics.append(f"content.maxFiles {max_files} is negative; ignoring.")
        max_files = None

    return ContentOptions(
        enabled=_or(config.enabled, defaults.enabled),
        indent_depth=indent_depth,
        tab_width=tab_width,
        detect_tab_width=_or(config.detect_tab_width, defaults.detect_tab_width),
        max_lines_per_file=max_lines,
        show_line_numbers=_or(config.show_line_numbers, defaults.show_line_numbers),
        context_padding=padding,
        max_files=max_files,
        include=expand_shorthand(config.include),
    )


def _resolve_root(
    config_root: str | None, config_dir: Path | None, root_override: str | None
) -> str:
    if root_override:
        return os.path.abspath(root_override)
    if config_root:
        base = config_dir or Path.cwd()
        return os.path.abspath(os.path.join(base, config_root))
    return os.path.abspath(".")


def _has_wildcard(glob: str) -> bool:
    return any(char in glob for char in "*?[")


def _or(value, default):
    return default if value is None else value
