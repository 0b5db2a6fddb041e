"""Discovery and loading of ignore files for a scan root."""

from __future__ import annotations

import logging
import os
from collections import deque

from contextgen.constants import DEFAULT_IGNORE_FILE_NAME
from contextgen.filesystem import FileSystem
from contextgen.filtering.ignore_rules import EMPTY_RULE_SET, IgnoreRuleSet
from contextgen.schemas.enums import GitIgnoreMode
from contextgen.schemas.options import IgnoreLoadingOptions

LOGGER = logging.getLogger(__name__)


class IgnoreRuleProvider:
    """Load and compile ignore rules through a FileSystem accessor.

    Never raises for missing or unreadable ignore files; those contribute no
    rules and an empty rule set is returned when nothing was found.
    """

    def __init__(self, fs: FileSystem) -> None:
        self.fs = fs

    def load(self, root_path: str, options: IgnoreLoadingOptions) -> IgnoreRuleSet:
        if options.mode == GitIgnoreMode.NONE:
            return EMPTY_RULE_SET

        file_name = (options.file_name or "").strip() or DEFAULT_IGNORE_FILE_NAME
        if options.mode == GitIgnoreMode.ROOT_ONLY:
            sources = self._read_source(root_path, root_path, file_name)
        else:
            sources = self._collect_nested(root_path, file_name)

        if not sources:
            return EMPTY_RULE_SET
        rule_set = IgnoreRuleSet.from_sources(sources)
        LOGGER.debug(
            "Loaded %d ignore rules from %d file(s) under %s",
            len(rule_set),
            len(sources),
            root_path,
        )
        return rule_set if rule_set else EMPTY_RULE_SET

    def _collect_nested(self, root_path: str, file_name: str) -> list[tuple[str, str]]:
        # breadth-first so that parent scopes are declared before their children
        sources: list[tuple[str, str]] = []
        known_rules = EMPTY_RULE_SET
        queue: deque[str] = deque([root_path])
        while queue:
            directory = queue.popleft()
            found = self._read_source(root_path, directory, file_name)
            if found:
                sources.extend(found)
                known_rules = IgnoreRuleSet.from_sources(sources)
            try:
                children = sorted(self.fs.list_directories(directory))
            except OSError as exc:
                LOGGER.warning("Cannot list %s while collecting ignore files: %s", directory, exc)
                continue
            # rules inside an ignored directory can never apply: it is not traversed
            queue.extend(
                child
                for child in children
                if not known_rules.is_ignored(relative_scope(root_path, child), True)
            )
        return sources

    def _read_source(
        self, root_path: str, directory: str, file_name: str
    ) -> list[tuple[str, str]]:
        ignore_path = os.path.join(directory, file_name)
        if not self.fs.file_exists(ignore_path):
            return []
        try:
            content = self.fs.read_text(ignore_path)
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("Skipping unreadable ignore file %s: %s", ignore_path, exc)
            return []
        if not content.strip():
            return []
        return [(relative_scope(root_path, directory), content)]


def relative_scope(root_path: str, directory: str) -> str:
    """Forward-slash path of ``directory`` relative to ``root_path``; root is ``""``."""
    relative = os.path.relpath(directory, root_path).replace("\\", "/").strip("/")
    return "" if relative == "." else relative
