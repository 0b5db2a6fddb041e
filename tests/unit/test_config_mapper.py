"""Config-to-options mapping tests."""

from __future__ import annotations

import os
from pathlib import Path

from contextgen.config.mapper import expand_shorthand, map_config
from contextgen.config.models import ContextConfig
from contextgen.schemas.enums import GitIgnoreMode, HistoryDetail
from contextgen.schemas.options import ContentOptions, HistoryOptions, TreeScanOptions


def test_empty_config_maps_to_defaults() -> None:
    mapped = map_config(ContextConfig())
    assert mapped.tree == TreeScanOptions()
    assert mapped.history == HistoryOptions()
    assert mapped.content == ContentOptions()
    assert mapped.root == os.path.abspath(".")
    assert mapped.diagnostics == ()


def test_shorthand_expansion_and_dedupe() -> None:
    assert expand_shorthand(["src/", "*.py", "Makefile", "docs/**/*.md", "*.py", " "]) == (
        "**/src/**",
        "**/*.py",
        "**/Makefile",
        "docs/**/*.md",
    )
    assert expand_shorthand(None) is None


def test_out_of_range_values_are_normalized_with_diagnostics() -> None:
    config = ContextConfig.model_validate(
        {
            "version": 2,
            "maxDepth": -5,
            "gitIgnore": "sometimes",
            "maxItemsPerDirectory": -1,
            "history": {"last": -3, "maxBodyLines": -1, "detail": "verbose"},
            "content": {
                "indentDepth": -4,
                "tabWidth": 0,
                "maxLinesPerFile": -9,
                "contextPadding": -2,
                "maxFiles": -1,
            },
        }
    )

    mapped = map_config(config)

    assert mapped.tree.max_depth == -1
    assert mapped.tree.git_ignore == GitIgnoreMode.ROOT_ONLY
    assert mapped.tree.max_items_per_directory is None
    assert mapped.history.last == 0
    assert mapped.history.max_body_lines == 0
    assert mapped.history.detail == HistoryDetail.TITLES_ONLY
    assert mapped.content.indent_depth == -1
    assert mapped.content.tab_width == 4
    assert mapped.content.max_lines_per_file == -1
    assert mapped.content.context_padding == 0
    assert mapped.content.max_files is None
    assert len(mapped.diagnostics) == 12
    assert any("version 2" in diagnostic for diagnostic in mapped.diagnostics)


def test_git_ignore_mode_is_case_insensitive() -> None:
    mapped = map_config(ContextConfig.model_validate({"gitIgnore": "nested"}))
    assert mapped.tree.git_ignore == GitIgnoreMode.NESTED
    assert mapped.diagnostics == ()


def test_profile_overrides_field_by_field() -> None:
    config = ContextConfig.model_validate(
        {
            "maxDepth": 2,
            "exclude": ["bin/"],
            "history": {"last": 5},
            "profiles": {
                "ci": {"maxDepth": 8, "history": {"detail": "TitleAndBody"}},
            },
        }
    )

    mapped = map_config(config, profile="ci")

    assert mapped.tree.max_depth == 8
    assert mapped.tree.exclude_globs == ("**/bin/**",)
    assert mapped.history.last == 5
    assert mapped.history.detail == HistoryDetail.TITLE_AND_BODY
    assert mapped.diagnostics == ()


def test_unknown_profile_falls_back_to_root_config() -> None:
    config = ContextConfig.model_validate({"maxDepth": 3})
    mapped = map_config(config, profile="missing")
    assert mapped.tree.max_depth == 3
    assert mapped.diagnostics == ("Profile 'missing' not found; using root configuration.",)


def test_root_resolution_priority(tmp_path: Path) -> None:
    config = ContextConfig.model_validate({"root": "project"})
    assert map_config(config, config_dir=tmp_path).root == str(tmp_path / "project")
    assert map_config(config, config_dir=tmp_path, root_override=str(tmp_path / "other")).root == (
        str(tmp_path / "other")
    )
