"""Order-sensitive, scope-aware ignore rule evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from contextgen.filtering.patterns import (
    CompiledPattern,
    Pattern,
    compile_pattern,
    normalize_relative_path,
    parse_pattern_lines,
)


@dataclass(frozen=True)
class IgnoreRule:
    """A compiled pattern bound to the directory whose ignore file declared it."""

    compiled: CompiledPattern
    scope: str = ""

    @property
    def pattern(self) -> Pattern:
        return self.compiled.pattern

    def applies_to(self, path: str) -> bool:
        """True when ``path`` lies inside this rule's scope."""
        if not self.scope:
            return True
        return path == self.scope or path.startswith(self.scope + "/")

    def scope_relative(self, path: str) -> str:
        if not self.scope:
            return path
        if path == self.scope:
            return ""
        return path[len(self.scope) + 1 :]


class IgnoreRuleSet:
    """Immutable ordered rules with gitignore semantics (last matching rule wins).

    The set is a pure per-path predicate: it has no memory of ancestor
    decisions. Re-including a path below an ignored directory is prevented by
    the traversal, which never descends into ignored directories.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[IgnoreRule] = ()) -> None:
        self._rules: tuple[IgnoreRule, ...] = tuple(rules)

    @classmethod
    def from_patterns(
        cls, scoped_patterns: Iterable[tuple[str, Pattern]]
    ) -> "IgnoreRuleSet":
        """Compile ``(scope, pattern)`` pairs given in declaration order."""
        return cls(
            IgnoreRule(compiled=compile_pattern(pattern), scope=_normalize_scope(scope))
            for scope, pattern in scoped_patterns
        )

    @classmethod
    def from_text(cls, content: str, scope: str = "") -> "IgnoreRuleSet":
        """Compile the rules of a single ignore file."""
        return cls.from_patterns((scope, pattern) for pattern in parse_pattern_lines(content))

    @classmethod
    def from_sources(cls, sources: Sequence[tuple[str, str]]) -> "IgnoreRuleSet":
        """Compile ``(scope, text)`` ignore-file sources, parents before children."""
        return cls.from_patterns(
            (scope, pattern)
            for scope, content in sources
            for pattern in parse_pattern_lines(content)
        )

    @property
    def rules(self) -> tuple[IgnoreRule, ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __bool__(self) -> bool:
        return bool(self._rules)

    def __repr__(self) -> str:
        return f"IgnoreRuleSet(rules={len(self._rules)})"

    def is_ignored(self, relative_path: str, is_directory: bool) -> bool:
        """Return True if ``relative_path`` is ignored by this rule set."""
        rule = self.matching_rule(relative_path, is_directory)
        if rule is None:
            return False
        return not rule.pattern.is_negation

    def matching_rule(self, relative_path: str, is_directory: bool) -> IgnoreRule | None:
        """Return the last declared rule that matches ``relative_path``, if any."""
        if not self._rules or not relative_path:
            return None
        path = normalize_relative_path(relative_path)
        for rule in reversed(self._rules):
            if rule.pattern.is_directory_only and not is_directory:
                continue
            if not rule.applies_to(path):
                continue
            candidate = rule.scope_relative(path)
            if candidate and rule.compiled.matches(candidate, is_directory):
                return rule
        return None


EMPTY_RULE_SET = IgnoreRuleSet()


def _normalize_scope(scope: str) -> str:
    scope = normalize_relative_path(scope)
    return "" if scope in (".", "/") else scope.strip("/")
