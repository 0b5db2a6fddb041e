"""Pydantic models for the JSON/YAML context configuration file.

All fields are optional: omitted values fall back to defaults during mapping,
and out-of-range values are normalized there with a diagnostic rather than
rejected here.
"""

from __future__ import annotations

from pydantic import Field

from contextgen.schemas.base import StrictSchemaModel


class HistoryConfig(StrictSchemaModel):
    """Recent commit history block."""

    enabled: bool | None = None
    last: int | None = None
    max_body_lines: int | None = None
    detail: str | None = None
    include_merges: bool | None = None

    def merged_with(self, override: "HistoryConfig | None") -> "HistoryConfig":
        return _merge(self, override)


class ContentConfig(StrictSchemaModel):
    """File content excerpts beneath file nodes."""

    enabled: bool | None = None
    indent_depth: int | None = None
    tab_width: int | None = None
    detect_tab_width: bool | None = None
    max_lines_per_file: int | None = None
    show_line_numbers: bool | None = None
    context_padding: int | None = None
    max_files: int | None = None
    include: list[str] | None = None

    def merged_with(self, override: "ContentConfig | None") -> "ContentConfig":
        return _merge(self, override)


class ContextConfig(StrictSchemaModel):
    """Root configuration; ``profiles`` hold named partial overrides."""

    version: int | None = None
    root: str | None = None
    max_depth: int | None = None
    include: list[str] | None = None
    exclude: list[str] | None = None
    git_ignore: str | None = None
    git_ignore_file_name: str | None = None
    sort_directories_first: bool | None = None
    collapse_single_child_directories: bool | None = None
    max_items_per_directory: int | None = None
    directories_only: bool | None = None
    profiles: dict[str, ContextConfig] | None = Field(default=None)
    history: HistoryConfig | None = None
    content: ContentConfig | None = None


def _merge(base, override):
    """Field-wise merge: values set on ``override`` win, the rest come from ``base``."""
    if override is None:
        return base
    values = base.model_dump()
    values.update(
        {
            name: getattr(override, name)
            for name in type(override).model_fields
            if getattr(override, name) is not None
        }
    )
    return type(base).model_validate(values)
