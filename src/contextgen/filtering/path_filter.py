"""Composite visibility policy: include globs, then ignore rules, then exclude globs."""

from __future__ import annotations

from typing import Protocol

from contextgen.filtering.glob_matcher import GlobPathMatcher
from contextgen.filtering.ignore_rules import EMPTY_RULE_SET, IgnoreRuleSet
from contextgen.schemas.options import TreeScanOptions


class PathMatcher(Protocol):
    """Returns True when a root-relative path should be kept."""

    def is_match(self, relative_path: str, is_directory: bool) -> bool:
        """Match a normalized relative path."""


class PathFilter:
    """Single decision point consumed by the tree builder.

    A path is rendered only if all three stages pass. Traversal ignores the
    include stage so that file-only include globs still reach nested matches.
    """

    def __init__(
        self,
        include_matcher: PathMatcher | None = None,
        exclude_matcher: PathMatcher | None = None,
        ignore_rules: IgnoreRuleSet = EMPTY_RULE_SET,
    ) -> None:
        self.include_matcher = include_matcher
        self.exclude_matcher = exclude_matcher
        self.ignore_rules = ignore_rules

    @classmethod
    def from_options(
        cls,
        options: TreeScanOptions,
        ignore_rules: IgnoreRuleSet = EMPTY_RULE_SET,
    ) -> "PathFilter":
        """Build the include/exclude matchers described by scan options."""
        include = GlobPathMatcher(options.include_globs) if options.include_globs else None
        exclude = (
            GlobPathMatcher(None, options.exclude_globs) if options.exclude_globs else None
        )
        return cls(include_matcher=include, exclude_matcher=exclude, ignore_rules=ignore_rules)

    def should_include_file(self, relative_path: str) -> bool:
        return self._passes(_normalize(relative_path), is_directory=False, use_include=True)

    def should_include_directory(self, relative_path: str) -> bool:
        return self._passes(_normalize(relative_path), is_directory=True, use_include=True)

    def can_traverse_directory(self, relative_path: str) -> bool:
        return self._passes(_normalize(relative_path), is_directory=True, use_include=False)

    def _passes(self, path: str, *, is_directory: bool, use_include: bool) -> bool:
        if (
            use_include
            and self.include_matcher is not None
            and not self.include_matcher.is_match(path, is_directory)
        ):
            return False
        if self.ignore_rules.is_ignored(path, is_directory):
            return False
        if self.exclude_matcher is not None and not self.exclude_matcher.is_match(
            path, is_directory
        ):
            return False
        return True


def _normalize(relative_path: str) -> str:
    path = relative_path.replace("\\", "/")
    if path.startswith("./"):
        path = path[2:]
    return path
