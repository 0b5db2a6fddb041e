"""CLI for contextgen."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from contextgen.config import (
    DEFAULT_CONFIG_PATH,
    ContextConfig,
    MappedConfig,
    expand_shorthand,
    load_context_config,
    map_config,
    resolve_profile,
)
from contextgen.constants import PACKAGE_VERSION
from contextgen.pipeline import ContextGenerator
from contextgen.schemas.enums import (
    OutputFormat,
    normalize_git_ignore_mode,
    normalize_history_detail,
)

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Render filtered directory trees with gitignore semantics for LLM context.",
)
console = Console()
err_console = Console(stderr=True)


@app.command()
def version() -> None:
    """Print the contextgen version."""
    typer.echo(PACKAGE_VERSION)


@app.command("validate-config")
def validate_config(
    config: Path = typer.Option(
        DEFAULT_CONFIG_PATH, "--config", help="Path to a JSON or YAML config file."
    ),
    profile: str | None = typer.Option(None, "--profile", help="Profile name to apply."),
) -> None:
    """Validate a config file and print the effective options."""
    try:
        config_model, config_dir = load_context_config(config)
        mapped = map_config(
            config_model, profile=resolve_profile(profile), config_dir=config_dir
        )
    except Exception as exc:  # noqa: BLE001
        console.print(f"[red]Configuration validation failed:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    table = Table(title="Effective Options")
    table.add_column("Setting")
    table.add_column("Value")
    for name, value in _effective_rows(mapped):
        table.add_row(name, value)
    console.print(table)
    _print_diagnostics(mapped.diagnostics, console)


@app.command("render")
def render(
    root: Path | None = typer.Argument(None, help="Directory to render."),
    config: Path | None = typer.Option(
        None, "--config", help="Path to a JSON or YAML config file."
    ),
    profile: str | None = typer.Option(None, "--profile", help="Profile name to apply."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.MARKDOWN, "--format", case_sensitive=False, help="Output format."
    ),
    max_depth: int | None = typer.Option(
        None, "--max-depth", help="Depth limit; -1 means unlimited."
    ),
    include: list[str] | None = typer.Option(
        None, "--include", help="Include glob (repeatable)."
    ),
    exclude: list[str] | None = typer.Option(
        None, "--exclude", help="Exclude glob (repeatable)."
    ),
    gitignore: str | None = typer.Option(
        None, "--gitignore", help="Ignore file handling: none, root or nested."
    ),
    directories_only: bool = typer.Option(
        False, "--directories-only", help="Render directories only."
    ),
    no_collapse: bool = typer.Option(
        False, "--no-collapse", help="Keep single-child directory chains expanded."
    ),
    no_sort: bool = typer.Option(False, "--no-sort", help="Keep listing order."),
    max_items: int | None = typer.Option(
        None, "--max-items", help="Maximum entries shown per directory."
    ),
    content: bool | None = typer.Option(
        None, "--content/--no-content", help="Render file excerpts under file nodes."
    ),
    content_include: list[str] | None = typer.Option(
        None, "--content-include", help="Glob selecting files that get excerpts (repeatable)."
    ),
    history_last: int | None = typer.Option(
        None, "--history-last", help="Number of recent commits; 0 disables history."
    ),
    history_detail: str | None = typer.Option(
        None, "--history-detail", help="History detail: titles or body."
    ),
    output: Path | None = typer.Option(None, "--output", help="Write output to this file."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """Render the filtered tree of ROOT (default: config root or the current directory)."""
    _configure_logging(verbose)
    try:
        mapped = _load_mapped(config, profile, str(root) if root else None)
        mapped = _apply_cli_overrides(
            mapped,
            max_depth=max_depth,
            include=include,
            exclude=exclude,
            gitignore=gitignore,
            directories_only=directories_only,
            no_collapse=no_collapse,
            no_sort=no_sort,
            max_items=max_items,
            content=content,
            content_include=content_include,
            history_last=history_last,
            history_detail=history_detail,
        )
        _print_diagnostics(mapped.diagnostics, err_console)
        generated = ContextGenerator().generate(mapped, output_format)
    except typer.BadParameter:
        raise
    except Exception as exc:  # noqa: BLE001
        err_console.print(f"[red]Render failed:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if output is None:
        typer.echo(generated.text, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(generated.text, encoding="utf-8")
    err_console.print(f"[green]Wrote[/green] {output}")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_mapped(
    config: Path | None, profile: str | None, root_override: str | None
) -> MappedConfig:
    selected_profile = resolve_profile(profile)
    if config is None and not DEFAULT_CONFIG_PATH.exists():
        return map_config(ContextConfig(), profile=selected_profile, root_override=root_override)
    config_model, config_dir = load_context_config(config)
    return map_config(
        config_model,
        profile=selected_profile,
        config_dir=config_dir,
        root_override=root_override,
    )


def _apply_cli_overrides(
    mapped: MappedConfig,
    *,
    max_depth: int | None,
    include: list[str] | None,
    exclude: list[str] | None,
    gitignore: str | None,
    directories_only: bool,
    no_collapse: bool,
    no_sort: bool,
    max_items: int | None,
    content: bool | None,
    content_include: list[str] | None,
    history_last: int | None,
    history_detail: str | None,
) -> MappedConfig:
    tree_changes: dict[str, object] = {}
    if max_depth is not None:
        if max_depth < -1:
            raise typer.BadParameter("--max-depth must be -1 or greater.")
        tree_changes["max_depth"] = max_depth
    if include:
        tree_changes["include_globs"] = expand_shorthand(include)
    if exclude:
        tree_changes["exclude_globs"] = expand_shorthand(exclude)
    if gitignore is not None:
        try:
            tree_changes["git_ignore"] = normalize_git_ignore_mode(gitignore)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
    if directories_only:
        tree_changes["directories_only"] = True
    if no_collapse:
        tree_changes["collapse_single_child_directories"] = False
    if no_sort:
        tree_changes["sort_directories_first"] = False
    if max_items is not None:
        if max_items < 0:
            raise typer.BadParameter("--max-items must not be negative.")
        tree_changes["max_items_per_directory"] = max_items

    content_changes: dict[str, object] = {}
    if content is not None:
        content_changes["enabled"] = content
    if content_include:
        content_changes["include"] = expand_shorthand(content_include)

    history_changes: dict[str, object] = {}
    if history_last is not None:
        history_changes["last"] = max(0, history_last)
    if history_detail is not None:
        try:
            history_changes["detail"] = normalize_history_detail(history_detail)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc

    return dataclasses.replace(
        mapped,
        tree=dataclasses.replace(mapped.tree, **tree_changes),
        content=dataclasses.replace(mapped.content, **content_changes),
        history=dataclasses.replace(mapped.history, **history_changes),
    )


def _effective_rows(mapped: MappedConfig) -> list[tuple[str, str]]:
    tree = mapped.tree
    return [
        ("root", mapped.root),
        ("maxDepth", str(tree.max_depth)),
        ("include", _join(tree.include_globs)),
        ("exclude", _join(tree.exclude_globs)),
        ("gitIgnore", tree.git_ignore.value),
        ("gitIgnoreFileName", tree.git_ignore_file_name),
        ("sortDirectoriesFirst", str(tree.sort_directories_first)),
        ("collapseSingleChildDirectories", str(tree.collapse_single_child_directories)),
        ("maxItemsPerDirectory", _or_dash(tree.max_items_per_directory)),
        ("directoriesOnly", str(tree.directories_only)),
        ("content.enabled", str(mapped.content.enabled)),
        ("content.include", _join(mapped.content.include)),
        ("history.last", str(mapped.history.last)),
        ("history.detail", mapped.history.detail.value),
    ]


def _print_diagnostics(diagnostics: tuple[str, ...], target: Console) -> None:
    for diagnostic in diagnostics:
        target.print(f"[yellow]warning:[/yellow] {escape(diagnostic)}", highlight=False)


def _join(values: tuple[str, ...] | None) -> str:
    return ", ".join(values) if values else "-"


def _or_dash(value: int | None) -> str:
    return "-" if value is None else str(value)
