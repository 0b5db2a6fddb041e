"""Enum definitions for scan and render options."""

from __future__ import annotations

from enum import Enum


class GitIgnoreMode(str, Enum):
    NONE = "None"
    ROOT_ONLY = "RootOnly"
    NESTED = "Nested"


class HistoryDetail(str, Enum):
    TITLES_ONLY = "TitlesOnly"
    TITLE_AND_BODY = "TitleAndBody"


class OutputFormat(str, Enum):
    MARKDOWN = "markdown"
    PLAIN = "plain"
    JSON = "json"


GIT_IGNORE_ALIASES: dict[str, GitIgnoreMode] = {
    "none": GitIgnoreMode.NONE,
    "off": GitIgnoreMode.NONE,
    "rootonly": GitIgnoreMode.ROOT_ONLY,
    "root_only": GitIgnoreMode.ROOT_ONLY,
    "root-only": GitIgnoreMode.ROOT_ONLY,
    "root": GitIgnoreMode.ROOT_ONLY,
    "nested": GitIgnoreMode.NESTED,
}

HISTORY_DETAIL_ALIASES: dict[str, HistoryDetail] = {
    "titlesonly": HistoryDetail.TITLES_ONLY,
    "titles_only": HistoryDetail.TITLES_ONLY,
    "titles": HistoryDetail.TITLES_ONLY,
    "titleandbody": HistoryDetail.TITLE_AND_BODY,
    "title_and_body": HistoryDetail.TITLE_AND_BODY,
    "body": HistoryDetail.TITLE_AND_BODY,
}


def normalize_git_ignore_mode(raw_value: str | GitIgnoreMode) -> GitIgnoreMode:
    """Normalize gitignore mode labels into canonical enum values."""
    if isinstance(raw_value, GitIgnoreMode):
        return raw_value
    normalized = GIT_IGNORE_ALIASES.get(raw_value.strip().lower())
    if normalized is None:
        raise ValueError(f"Unsupported gitIgnore mode: {raw_value}")
    return normalized


def normalize_history_detail(raw_value: str | HistoryDetail) -> HistoryDetail:
    """Normalize history detail labels into canonical enum values."""
    if isinstance(raw_value, HistoryDetail):
        return raw_value
    normalized = HISTORY_DETAIL_ALIASES.get(raw_value.strip().lower())
    if normalized is None:
        raise ValueError(f"Unsupported history detail: {raw_value}")
    return normalized
