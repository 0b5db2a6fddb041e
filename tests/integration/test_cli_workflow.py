"""CLI workflow tests over real temporary repositories."""

from __future__ import annotations

from pathlib import Path

import orjson
import pytest
from typer.testing import CliRunner

from contextgen.cli import app
from contextgen.config.loader import PROFILE_ENV_VAR


def _write_repo(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    files = {
        ".gitignore": "*.log\nbuild/\n",
        "src/main.py": "print('hi')\n",
        "src/debug.log": "",
        "build/out.bin": "",
        "README.md": "# Demo\n",
    }
    for relative, content in files.items():
        path = repo / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return repo


@pytest.fixture
def repo(tmp_path: Path, monkeypatch) -> Path:  # type: ignore[no-untyped-def]
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(PROFILE_ENV_VAR, raising=False)
    return _write_repo(tmp_path)


def test_render_plain_respects_gitignore(repo: Path) -> None:
    result = CliRunner().invoke(app, ["render", str(repo), "--format", "plain"])
    assert result.exit_code == 0, result.output
    assert result.stdout == "/repo\nsrc/\n  main.py\n.gitignore\nREADME.md\n"


def test_render_without_gitignore_shows_everything(repo: Path) -> None:
    result = CliRunner().invoke(
        app, ["render", str(repo), "--format", "plain", "--gitignore", "none"]
    )
    assert result.exit_code == 0, result.output
    assert "build/" in result.stdout
    assert "debug.log" in result.stdout


def test_render_json(repo: Path) -> None:
    result = CliRunner().invoke(app, ["render", str(repo), "--format", "json"])
    assert result.exit_code == 0, result.output
    payload = orjson.loads(result.stdout)
    assert payload["name"] == "repo"
    assert [child["name"] for child in payload["children"]] == ["src", ".gitignore", "README.md"]


def test_render_markdown_with_content(repo: Path) -> None:
    result = CliRunner().invoke(
        app,
        [
            "render",
            str(repo),
            "--content",
            "--content-include",
            "*.py",
            "--history-last",
            "0",
        ],
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.startswith("/repo/\n- src/\n  - main.py\n      ```\n")
    assert "print('hi')" in result.stdout
    assert "# Demo" not in result.stdout


def test_render_flags_override_config(repo: Path, tmp_path: Path) -> None:
    config_path = tmp_path / "contextgen.yaml"
    config_path.write_text(
        """
root: repo
exclude:
  - src/
profiles:
  docs:
    include:
      - "*.md"
""".strip(),
        encoding="utf-8",
    )

    from_profile = CliRunner().invoke(
        app, ["render", "--config", str(config_path), "--profile", "docs", "--format", "plain"]
    )
    assert from_profile.exit_code == 0, from_profile.output
    assert from_profile.stdout == "/repo\nREADME.md\n"

    overridden = CliRunner().invoke(
        app,
        [
            "render",
            "--config",
            str(config_path),
            "--format",
            "plain",
            "--exclude",
            "*.md",
            "--directories-only",
        ],
    )
    assert overridden.exit_code == 0, overridden.output
    assert overridden.stdout == "/repo\nsrc/\n"


def test_render_writes_output_file(repo: Path, tmp_path: Path) -> None:
    target = tmp_path / "out" / "context.md"
    result = CliRunner().invoke(
        app, ["render", str(repo), "--history-last", "0", "--output", str(target)]
    )
    assert result.exit_code == 0, result.output
    assert target.read_text(encoding="utf-8").startswith("/repo/\n- src/\n")


def test_render_missing_root_fails(repo: Path) -> None:
    result = CliRunner().invoke(app, ["render", str(repo / "missing")])
    assert result.exit_code == 1
    assert "Render failed" in result.output


def test_render_rejects_unknown_gitignore_mode(repo: Path) -> None:
    result = CliRunner().invoke(app, ["render", str(repo), "--gitignore", "sometimes"])
    assert result.exit_code == 2


def test_validate_config_reports_diagnostics(tmp_path: Path) -> None:
    config_path = tmp_path / "contextgen.json"
    config_path.write_text('{"maxDepth": -3, "gitIgnore": "nested"}', encoding="utf-8")

    result = CliRunner().invoke(app, ["validate-config", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert "Effective Options" in result.output
    assert "Nested" in result.output
    assert "below -1" in result.output


def test_validate_config_fails_for_missing_file(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        app, ["validate-config", "--config", str(tmp_path / "absent.json")]
    )
    assert result.exit_code == 1
    assert "Configuration validation failed" in result.output
