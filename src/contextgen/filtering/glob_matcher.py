"""Include/exclude glob matching for user-supplied pattern lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from pathspec import PathSpec
from pathspec.pattern import RegexPattern

from contextgen.filtering.patterns import (
    Pattern,
    compile_pattern,
    normalize_pattern,
    normalize_relative_path,
)

DEFAULT_INCLUDE_GLOBS = ("**/*",)
DIRECTORY_PROBE_NAME = "__probe__"
_GLOB_CHARS = frozenset("*?[")


@dataclass(frozen=True)
class FolderExclusionIndex:
    """Excluded folder names and path prefixes derived from ``.../name/**`` excludes.

    Answers whole-subtree exclusion directly, which also covers empty folders
    that a probe-based check cannot prove excluded. ``names`` hold folder
    paths that may appear at any depth (``**/obj/**``, ``obj``); ``prefixes``
    hold root-anchored folder paths (``build/output/**``).
    """

    names: frozenset[str] = field(default_factory=frozenset)
    prefixes: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_globs(
        cls, exclude_globs: Iterable[str], *, ignore_case: bool
    ) -> "FolderExclusionIndex":
        names: set[str] = set()
        prefixes: set[str] = set()
        for glob in exclude_globs:
            folder, anywhere = _folder_of(glob)
            if not folder or _has_glob(folder):
                continue
            if ignore_case:
                folder = folder.casefold()
            (names if anywhere else prefixes).add(folder)
        return cls(names=frozenset(names), prefixes=frozenset(prefixes))

    def __bool__(self) -> bool:
        return bool(self.names or self.prefixes)

    def excludes(self, folder_path: str) -> bool:
        trimmed = folder_path.strip("/")
        if not trimmed:
            return False
        for prefix in self.prefixes:
            if trimmed == prefix or trimmed.startswith(prefix + "/"):
                return True
        wrapped = f"/{trimmed}/"
        return any(f"/{name}/" in wrapped for name in self.names)


class GlobPathMatcher:
    """Include-then-exclude matcher over root-relative paths.

    Includes are OR-ed together (default ``**/*``); excludes are OR-ed
    together. ``is_match`` returns True when a path is included and not
    excluded. Directories are tested by probing the directory path and a
    synthetic file beneath it, after a fast folder-exclusion check.
    """

    def __init__(
        self,
        include_globs: Iterable[str] | None = None,
        exclude_globs: Iterable[str] | None = None,
        *,
        ignore_case: bool = True,
    ) -> None:
        self.ignore_case = ignore_case
        includes = normalize_globs(include_globs or ())
        excludes = normalize_globs(exclude_globs or ())
        self.include_globs: tuple[str, ...] = includes or DEFAULT_INCLUDE_GLOBS
        self.exclude_globs: tuple[str, ...] = excludes
        self._include_spec = build_path_spec(self._fold(glob) for glob in self.include_globs)
        self._exclude_spec = build_path_spec(self._fold(glob) for glob in self.exclude_globs)
        self._folder_index = FolderExclusionIndex.from_globs(
            self.exclude_globs, ignore_case=ignore_case
        )

    @property
    def has_excludes(self) -> bool:
        return bool(self.exclude_globs)

    def is_match(self, relative_path: str, is_directory: bool) -> bool:
        path = self._fold(normalize_relative_path(relative_path))
        if is_directory:
            return self._directory_matches(path)
        if not self._include_spec.match_file(path):
            return False
        if not self.has_excludes:
            return True
        return not self._exclude_spec.match_file(path)

    def _directory_matches(self, path: str) -> bool:
        if self._folder_index.excludes(path):
            return False
        probe = f"{path}/{DIRECTORY_PROBE_NAME}" if path else DIRECTORY_PROBE_NAME
        if not (self._include_spec.match_file(probe) or self._include_spec.match_file(path)):
            return False
        if not self.has_excludes:
            return True
        return not (
            self._exclude_spec.match_file(probe) and self._exclude_spec.match_file(path)
        )

    def _fold(self, value: str) -> str:
        return value.casefold() if self.ignore_case else value


def build_path_spec(globs: Iterable[str]) -> PathSpec:
    """Compile globs into a PathSpec whose patterns match whole paths only.

    Unlike gitignore patterns, ``**/*.cs`` matches the path ``a/b.cs`` but not
    ``b.cs/readme.md``; only a trailing ``/**`` reaches below a directory. A
    leading or inner ``/`` anchors the glob to the root, a leading ``!``
    negates it, and the last matching glob wins.
    """
    patterns: list[RegexPattern] = []
    for glob in globs:
        compiled = _compile_path_glob(glob)
        if compiled is not None:
            patterns.append(compiled)
    return PathSpec(patterns)


def _compile_path_glob(glob: str) -> RegexPattern | None:
    include = True
    if glob.startswith("!"):
        include = False
        glob = glob[1:]
    anchored = "/" in glob.rstrip("/")
    body = normalize_pattern(glob.lstrip("/"))
    if not body:
        return None
    compiled = compile_pattern(Pattern(text=body, is_anchored=anchored, original=glob))
    if compiled.regex is None:
        return None
    return RegexPattern(compiled.regex, include)


def normalize_globs(globs: Iterable[str]) -> tuple[str, ...]:
    """Trim, use forward slashes, drop blanks and expand ``dir/`` to ``dir/**``."""
    normalized: list[str] = []
    for raw in globs:
        glob = raw.replace("\\", "/").strip()
        if not glob:
            continue
        if glob.endswith("/"):
            glob += "**"
        normalized.append(glob)
    return tuple(normalized)


def _folder_of(glob: str) -> tuple[str, bool]:
    """Folder path a glob excludes wholesale, and whether it may sit at any depth."""
    glob = glob.replace("\\", "/")
    if glob.startswith("!"):
        return "", False
    if glob.endswith("/**"):
        body = glob[:-3]
    elif not _has_glob(glob) and not glob.endswith("/"):
        body = glob
    else:
        return "", False

    anchored = body.startswith("/")
    body = body.lstrip("/")
    if body.startswith("**/"):
        return body[3:], True
    # an inner separator anchors the glob to the root
    return body, not anchored and "/" not in glob.strip("/")


def _has_glob(text: str) -> bool:
    return any(char in _GLOB_CHARS for char in text)
