"""Recent commit history read from ``git log``."""

from __future__ import annotations

import logging
from pathlib import Path

from contextgen.history.process import ProcessRunner, SubprocessRunner
from contextgen.schemas.history import CommitInfo
from contextgen.schemas.options import HistoryOptions

LOGGER = logging.getLogger(__name__)

UNIT_SEPARATOR = "\x1f"
PRETTY_FORMAT = "%H%x1f%an%x1f%ae%x1f%cI%x1f%s%x1f%b"
GIT_TIMEOUT_SECONDS = 10.0
# hash, author, email, date and subject share the record's first line
_HEADER_SEPARATORS = 4


class GitHistoryProvider:
    """Collect recent commits; returns an empty list when git is unusable here."""

    def __init__(self, runner: ProcessRunner | None = None) -> None:
        self.runner = runner or SubprocessRunner()

    def get_recent_commits(
        self, options: HistoryOptions, working_directory: Path | str
    ) -> list[CommitInfo]:
        if not options.enabled or options.last <= 0:
            return []
        result = self.runner.run(
            build_log_command(options),
            Path(working_directory),
            timeout_seconds=GIT_TIMEOUT_SECONDS,
        )
        if result.status != "completed":
            LOGGER.info("Commit history unavailable: %s", result.error)
            return []
        return parse_log_output(result.stdout, options.max_body_lines)


def build_log_command(options: HistoryOptions) -> list[str]:
    cmd = ["git", "log", f"--max-count={max(0, options.last)}"]
    if not options.include_merges:
        cmd.append("--no-merges")
    cmd.extend(["--date=iso-strict", f"--pretty=format:{PRETTY_FORMAT}"])
    return cmd


def parse_log_output(stdout: str, max_body_lines: int) -> list[CommitInfo]:
    """Split ``git log`` output into commits.

    Bodies may span lines and contain blank lines, so a record starts at any
    line carrying at least four unit separators.
    """
    commits: list[CommitInfo] = []
    buffer: list[str] = []

    for line in stdout.replace("\r\n", "\n").split("\n"):
        if line.count(UNIT_SEPARATOR) >= _HEADER_SEPARATORS and buffer:
            _flush(buffer, max_body_lines, commits)
            buffer = []
        buffer.append(line)
    _flush(buffer, max_body_lines, commits)
    return commits


def _flush(buffer: list[str], max_body_lines: int, commits: list[CommitInfo]) -> None:
    if not buffer:
        return
    parts = "\n".join(buffer).split(UNIT_SEPARATOR, 5)
    if len(parts) < 6:
        return
    body_lines = [line.rstrip() for line in parts[5].split("\n") if line.strip()]
    commits.append(
        CommitInfo(
            hash=parts[0].strip(),
            author_name=parts[1].strip(),
            author_email=parts[2].strip(),
            date_iso=parts[3].strip(),
            title=parts[4].strip(),
            body_lines=tuple(body_lines[: max(0, max_body_lines)]),
        )
    )
