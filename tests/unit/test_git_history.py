"""Commit history collection and parsing tests."""

from __future__ import annotations

import subprocess
from pathlib import Path

import contextgen.history.process as process_module
from contextgen.history.git import (
    GIT_TIMEOUT_SECONDS,
    PRETTY_FORMAT,
    UNIT_SEPARATOR,
    GitHistoryProvider,
    build_log_command,
    parse_log_output,
)
from contextgen.history.process import ProcessResult, SubprocessRunner
from contextgen.schemas.options import HistoryOptions


def _record(commit_hash: str, title: str, body: str = "") -> str:
    fields = [commit_hash, "Ada", "ada@example.com", "2024-01-01T00:00:00+00:00", title, body]
    return UNIT_SEPARATOR.join(fields)


class _FakeRunner:
    def __init__(self, result: ProcessResult) -> None:
        self.result = result
        self.calls: list[tuple[list[str], Path, float | None]] = []

    def run(
        self, cmd: list[str], cwd: Path, timeout_seconds: float | None = None
    ) -> ProcessResult:
        self.calls.append((cmd, cwd, timeout_seconds))
        return self.result


def test_build_log_command() -> None:
    cmd = build_log_command(HistoryOptions(last=5))
    assert cmd == [
        "git",
        "log",
        "--max-count=5",
        "--no-merges",
        "--date=iso-strict",
        f"--pretty=format:{PRETTY_FORMAT}",
    ]
    assert "--no-merges" not in build_log_command(HistoryOptions(include_merges=True))


def test_parse_log_output_handles_multiline_bodies() -> None:
    stdout = (
        _record("abc", "Fix parser", "First line\n\nSecond line  \n")
        + "\n"
        + _record("def", "Add renderer")
    )
    commits = parse_log_output(stdout, max_body_lines=6)

    assert [commit.hash for commit in commits] == ["abc", "def"]
    assert commits[0].title == "Fix parser"
    assert commits[0].author_email == "ada@example.com"
    assert commits[0].body_lines == ("First line", "Second line")
    assert commits[1].body_lines == ()


def test_parse_log_output_caps_body_lines() -> None:
    commits = parse_log_output(_record("abc", "Title", "one\ntwo\nthree"), max_body_lines=1)
    assert commits[0].body_lines == ("one",)
    assert parse_log_output("", max_body_lines=3) == []


def test_provider_skips_git_when_disabled() -> None:
    runner = _FakeRunner(ProcessResult(status="completed"))
    provider = GitHistoryProvider(runner)
    assert provider.get_recent_commits(HistoryOptions(enabled=False), "/repo") == []
    assert provider.get_recent_commits(HistoryOptions(last=0), "/repo") == []
    assert runner.calls == []


def test_provider_parses_successful_run() -> None:
    runner = _FakeRunner(ProcessResult(status="completed", stdout=_record("abc", "Fix")))
    commits = GitHistoryProvider(runner).get_recent_commits(HistoryOptions(), "/repo")

    assert [commit.title for commit in commits] == ["Fix"]
    cmd, cwd, timeout = runner.calls[0]
    assert cmd[:2] == ["git", "log"]
    assert cwd == Path("/repo")
    assert timeout == GIT_TIMEOUT_SECONDS


def test_provider_returns_empty_on_failure() -> None:
    runner = _FakeRunner(ProcessResult(status="failed", exit_code=128, error="not a repo"))
    assert GitHistoryProvider(runner).get_recent_commits(HistoryOptions(), "/repo") == []


def test_subprocess_runner_reports_missing_binary(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setattr(process_module.shutil, "which", lambda _name: None)
    result = SubprocessRunner().run(["git", "log"], Path("/tmp"))
    assert result.status == "unavailable"


def test_subprocess_runner_maps_exit_codes(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setattr(process_module.shutil, "which", lambda _name: "/usr/bin/git")
    monkeypatch.setattr(
        process_module.subprocess,
        "run",
        lambda *args, **kwargs: subprocess.CompletedProcess(
            args=args, returncode=128, stdout="", stderr="fatal: not a git repository\n"
        ),
    )
    result = SubprocessRunner().run(["git", "log"], Path("/tmp"))
    assert result.status == "failed"
    assert result.exit_code == 128
    assert result.error == "fatal: not a git repository"


def test_subprocess_runner_maps_timeout(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    def _timeout(*args, **kwargs):  # type: ignore[no-untyped-def]
        raise subprocess.TimeoutExpired(cmd="git", timeout=kwargs["timeout"])

    monkeypatch.setattr(process_module.shutil, "which", lambda _name: "/usr/bin/git")
    monkeypatch.setattr(process_module.subprocess, "run", _timeout)
    result = SubprocessRunner().run(["git", "log"], Path("/tmp"), timeout_seconds=0.5)
    assert result.status == "failed"
    assert result.error == "git timed out"
