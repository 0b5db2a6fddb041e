"""Filesystem accessor used by the tree builder, ignore loader and renderers."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Protocol


class FileSystem(Protocol):
    """Narrow filesystem contract the scan core depends on."""

    def list_directories(self, path: str) -> Iterable[str]:
        """Return full paths of the immediate subdirectories of ``path``."""

    def list_files(self, path: str) -> Iterable[str]:
        """Return full paths of the immediate files of ``path``."""

    def file_name(self, path: str) -> str:
        """Return the final path segment."""

    def file_exists(self, path: str) -> bool:
        """Return whether ``path`` is an existing file."""

    def read_text(self, path: str) -> str:
        """Read a whole file as text."""


class LocalFileSystem:
    """FileSystem implementation backed by pathlib.

    Symlinked directories are reported neither as directories nor as files so
    that traversal can never loop.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def list_directories(self, path: str) -> list[str]:
        return [
            str(entry)
            for entry in self._entries(path)
            if entry.is_dir() and not entry.is_symlink()
        ]

    def list_files(self, path: str) -> list[str]:
        return [str(entry) for entry in self._entries(path) if entry.is_file()]

    def file_name(self, path: str) -> str:
        return Path(path).name

    def file_exists(self, path: str) -> bool:
        return Path(path).is_file()

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding=self.encoding)

    @staticmethod
    def _entries(path: str) -> list[Path]:
        directory = Path(path)
        if not directory.is_dir():
            raise FileNotFoundError(f"Directory not found: {directory}")
        return sorted(directory.iterdir())
