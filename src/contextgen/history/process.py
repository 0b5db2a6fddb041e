"""External command execution with a hard wall-clock timeout."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol

ProcessStatus = Literal["completed", "failed", "unavailable"]


@dataclass(frozen=True)
class ProcessResult:
    """Normalized command execution result."""

    status: ProcessStatus
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None


class ProcessRunner(Protocol):
    """Runs a command and never raises for command-level failures."""

    def run(
        self, cmd: list[str], cwd: Path, timeout_seconds: float | None = None
    ) -> ProcessResult:
        """Run ``cmd`` in ``cwd``."""


class SubprocessRunner:
    """ProcessRunner backed by ``subprocess.run``; a timeout kills the child."""

    def __init__(self, default_timeout_seconds: float = 15.0) -> None:
        self.default_timeout_seconds = default_timeout_seconds

    def run(
        self, cmd: list[str], cwd: Path, timeout_seconds: float | None = None
    ) -> ProcessResult:
        if not cmd or shutil.which(cmd[0]) is None:
            return ProcessResult(
                status="unavailable",
                error=f"{cmd[0] if cmd else '<empty>'} not found",
            )
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=timeout_seconds or self.default_timeout_seconds,
                cwd=cwd,
            )
        except subprocess.TimeoutExpired:
            return ProcessResult(status="failed", error=f"{cmd[0]} timed out")
        except OSError as exc:
            return ProcessResult(status="unavailable", error=str(exc))

        if result.returncode != 0:
            return ProcessResult(
                status="failed",
                exit_code=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr.strip(),
                error=result.stderr.strip() or f"{cmd[0]} failed",
            )
        return ProcessResult(
            status="completed",
            exit_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr.strip(),
        )
