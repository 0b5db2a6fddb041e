"""Shared fixtures: an in-memory FileSystem for scan-core tests."""

from __future__ import annotations

import posixpath
from typing import Callable

import pytest


class MemoryFileSystem:
    """FileSystem over a ``{"/abs/path": "text"}`` mapping; directories are implied."""

    def __init__(self, files: dict[str, str], extra_dirs: tuple[str, ...] = ()) -> None:
        self.files = dict(files)
        self.directories: set[str] = set()
        for path in list(self.files) + list(extra_dirs):
            parent = path if path in extra_dirs else posixpath.dirname(path)
            while parent and parent != "/":
                self.directories.add(parent)
                parent = posixpath.dirname(parent)
        self.unreadable: set[str] = set()
        self.reads: list[str] = []

    def list_directories(self, path: str) -> list[str]:
        self._require_dir(path)
        return sorted(d for d in self.directories if posixpath.dirname(d) == path)

    def list_files(self, path: str) -> list[str]:
        self._require_dir(path)
        return sorted(f for f in self.files if posixpath.dirname(f) == path)

    def file_name(self, path: str) -> str:
        return posixpath.basename(path)

    def file_exists(self, path: str) -> bool:
        return path in self.files

    def read_text(self, path: str) -> str:
        self.reads.append(path)
        if path in self.unreadable:
            raise PermissionError(path)
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    def _require_dir(self, path: str) -> None:
        if path in self.unreadable:
            raise PermissionError(path)
        if path not in self.directories:
            raise FileNotFoundError(path)


@pytest.fixture
def memory_fs() -> Callable[..., MemoryFileSystem]:
    """Factory building a MemoryFileSystem from a path-to-text mapping."""
    return MemoryFileSystem
