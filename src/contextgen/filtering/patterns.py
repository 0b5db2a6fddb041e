"""Glob pattern parsing and compilation for the ignore-file dialect.

Supported tokens: ``**`` (crosses ``/``), ``*`` and ``?`` (never cross ``/``),
character classes ``[...]``, ``[!...]`` and ``[^...]``, and backslash escapes.
A leading ``/`` anchors a pattern to its scope root, a trailing ``/`` restricts
it to directories and a leading ``!`` negates it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator

LOGGER = logging.getLogger(__name__)

_UNANCHORED_PREFIX = "(?:^|.*/)"
_ANCHORED_PREFIX = "^"
_DIRECTORY_SUFFIX = "(?:/.*)?$"
_REGEX_SPECIALS = frozenset(".+()[]{}|^$\\")


@dataclass(frozen=True)
class Pattern:
    """A normalized glob body plus the markers stripped from the raw line."""

    text: str
    is_anchored: bool = False
    is_directory_only: bool = False
    is_negation: bool = False
    original: str = ""


@dataclass(frozen=True)
class CompiledPattern:
    """A pattern with its compiled regex; ``regex`` is None when compilation failed."""

    pattern: Pattern
    regex: re.Pattern[str] | None = field(compare=False, repr=False)

    @property
    def is_negation(self) -> bool:
        return self.pattern.is_negation

    @property
    def is_directory_only(self) -> bool:
        return self.pattern.is_directory_only

    def matches(self, candidate: str, is_directory: bool) -> bool:
        if self.regex is None:
            return False
        if self.pattern.is_directory_only and not is_directory:
            return False
        return self.regex.match(candidate) is not None


def normalize_pattern(text: str) -> str:
    """Strip a ``./`` prefix and collapse duplicate slashes."""
    if text.startswith("./"):
        text = text[2:]
    return re.sub(r"/{2,}", "/", text)


def normalize_relative_path(path: str) -> str:
    """Normalize a candidate path to the engine's relative form."""
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def parse_pattern_line(raw_line: str) -> Pattern | None:
    """Parse one ignore-file line; returns None for blanks, comments and empty bodies."""
    line = raw_line.rstrip("\r")
    if not line.strip():
        return None

    escaped_literal = False
    if line.startswith("\\#") or line.startswith("\\!"):
        line = line[1:]
        escaped_literal = True

    if not escaped_literal and line.startswith("#"):
        return None

    line = line.strip()
    if not line:
        return None

    is_negation = False
    if not escaped_literal and line.startswith("!"):
        is_negation = True
        line = line[1:]
        if not line:
            return None

    is_directory_only = line.endswith("/")
    if is_directory_only:
        line = line.rstrip("/")

    is_anchored = line.startswith("/")
    if is_anchored:
        line = line.lstrip("/")

    line = normalize_pattern(line)
    if not line:
        return None

    return Pattern(
        text=line,
        is_anchored=is_anchored,
        is_directory_only=is_directory_only,
        is_negation=is_negation,
        original=raw_line,
    )


def parse_pattern_lines(content: str) -> list[Pattern]:
    """Parse ignore-file text into patterns in declaration order."""
    if not content:
        return []
    return [
        pattern
        for pattern in (parse_pattern_line(line) for line in content.split("\n"))
        if pattern is not None
    ]


def translate_glob(body: str) -> str:
    """Translate a glob body (no anchors, no markers) into a regex fragment."""
    return "".join(_iter_regex_tokens(body))


def build_regex_source(pattern: Pattern) -> str:
    prefix = _ANCHORED_PREFIX if pattern.is_anchored else _UNANCHORED_PREFIX
    suffix = _DIRECTORY_SUFFIX if pattern.is_directory_only else "$"
    return prefix + translate_glob(pattern.text) + suffix


def compile_pattern(pattern: Pattern, *, ignore_case: bool = False) -> CompiledPattern:
    """Compile a parsed pattern; failures degrade to a matcher that matches nothing."""
    source = build_regex_source(pattern)
    flags = re.IGNORECASE if ignore_case else 0
    try:
        regex = re.compile(source, flags)
    except re.error as exc:
        LOGGER.warning(
            "Ignoring uncompilable pattern %r: %s", pattern.original or pattern.text, exc
        )
        regex = None
    return CompiledPattern(pattern=pattern, regex=regex)


def compile_glob(glob: str, *, ignore_case: bool = False) -> CompiledPattern | None:
    """Parse and compile a single pattern line in one step."""
    pattern = parse_pattern_line(glob)
    if pattern is None:
        return None
    return compile_pattern(pattern, ignore_case=ignore_case)


def _iter_regex_tokens(body: str) -> Iterator[str]:
    i = 0
    length = len(body)
    while i < length:
        char = body[i]

        if char == "\\":
            if i + 1 < length:
                yield re.escape(body[i + 1])
                i += 2
            else:
                yield re.escape(char)
                i += 1
            continue

        if char == "*":
            if body.startswith("**", i):
                yield from _double_star(body, i)
                i += 2
                # "**/" consumes its slash as part of the zero-or-more segment group
                if i < length and body[i] == "/" and _starts_segment(body, i - 2):
                    i += 1
                continue
            yield "[^/]*"
            i += 1
            continue

        if char == "?":
            yield "[^/]"
            i += 1
            continue

        if char == "[":
            end = _class_end(body, i)
            if end < 0:
                yield re.escape("[")
                i += 1
                continue
            yield _translate_class(body[i + 1 : end])
            i = end + 1
            continue

        yield re.escape(char) if char in _REGEX_SPECIALS else char
        i += 1


def _starts_segment(body: str, index: int) -> bool:
    return index == 0 or body[index - 1] == "/"


def _double_star(body: str, index: int) -> Iterator[str]:
    after = index + 2
    at_start = _starts_segment(body, index)
    if at_start and after < len(body) and body[after] == "/":
        # "**/" at a segment start matches zero or more whole segments
        yield "(?:.*/)?"
    else:
        yield ".*"


def _class_end(body: str, start: int) -> int:
    i = start + 1
    if i < len(body) and body[i] in "!^":
        i += 1
    # a leading ']' is a literal member of the class
    if i < len(body) and body[i] == "]":
        i += 1
    while i < len(body):
        if body[i] == "\\":
            i += 2
            continue
        if body[i] == "]":
            return i
        i += 1
    return -1


def _translate_class(members: str) -> str:
    negate = bool(members) and members[0] in "!^"
    if negate:
        members = members[1:]
    out: list[str] = []
    i = 0
    while i < len(members):
        char = members[i]
        if char == "\\" and i + 1 < len(members):
            out.append("\\" + members[i + 1])
            i += 2
            continue
        if char in "\\[]^":
            out.append("\\" + char)
        else:
            out.append(char)
        i += 1
    if negate:
        return "[^/" + "".join(out) + "]"
    # classes stay within one path segment
    return "(?!/)[" + "".join(out) + "]"
