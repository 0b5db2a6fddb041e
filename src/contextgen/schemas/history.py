"""Commit history contracts."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CommitInfo:
    """Minimal commit information used for the recent-changes block."""

    hash: str
    author_name: str
    author_email: str
    date_iso: str
    title: str
    body_lines: tuple[str, ...] = field(default_factory=tuple)
