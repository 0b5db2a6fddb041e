"""Path-visibility engine exports."""

from contextgen.filtering.glob_matcher import GlobPathMatcher
from contextgen.filtering.ignore_loader import IgnoreRuleProvider
from contextgen.filtering.ignore_rules import EMPTY_RULE_SET, IgnoreRule, IgnoreRuleSet
from contextgen.filtering.path_filter import PathFilter, PathMatcher
from contextgen.filtering.patterns import (
    CompiledPattern,
    Pattern,
    compile_pattern,
    parse_pattern_line,
    parse_pattern_lines,
)

__all__ = [
    "CompiledPattern",
    "EMPTY_RULE_SET",
    "GlobPathMatcher",
    "IgnoreRule",
    "IgnoreRuleProvider",
    "IgnoreRuleSet",
    "PathFilter",
    "PathMatcher",
    "Pattern",
    "compile_pattern",
    "parse_pattern_line",
    "parse_pattern_lines",
]
