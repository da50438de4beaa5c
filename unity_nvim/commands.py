"""Editor commands: installations, opening files and project file sync."""

from __future__ import annotations

import json
import subprocess
from typing import TYPE_CHECKING, Annotated

import typer
from rich.table import Table

import unity_nvim._cli_options as opts
from unity_nvim._command_setup import setup_command
from unity_nvim._output import error, info, success, warn
from unity_nvim.cli import app
from unity_nvim.core.utils import console
from unity_nvim.editor import bootstrap
from unity_nvim.unity import UnityNotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable


@app.command("installations")
def list_installations(
    json_output: bool = opts.JSON_OUTPUT,
    project_path: str = opts.PROJECT_PATH,
    unity_path: str | None = opts.UNITY_PATH,
    preferences_path: str | None = opts.PREFERENCES_PATH,
    user_extensions: str | None = opts.USER_EXTENSIONS,
    log_level: str = opts.LOG_LEVEL,
) -> None:
    """List Neovim installations found on this machine.

    The current external script editor (if it is one of them) is marked.
    """
    ctx = setup_command(
        project_path=project_path,
        unity_path=unity_path,
        preferences_path=preferences_path,
        user_extensions=user_extensions,
        log_level=log_level,
    )
    current = ctx.registry.current_editor_installation
    installations = ctx.editor.installations

    if json_output:
        data = [
            {"name": inst.name, "path": inst.path, "is_current": inst.path == current}
            for inst in installations
        ]
        print(json.dumps({"installations": data}))
        return

    if not installations:
        warn("No Neovim installations found")
        return

    table = Table(title="Neovim Installations")
    table.add_column("Name", style="cyan")
    table.add_column("Path", style="dim")
    table.add_column("Notes")
    for inst in installations:
        notes = "[bold yellow]← current[/bold yellow]" if inst.path == current else ""
        table.add_row(inst.name, inst.path, notes)
    console.print(table)


@app.command("resolve")
def resolve(
    editor_path: Annotated[str, typer.Argument(help="Path of an editor binary")],
    project_path: str = opts.PROJECT_PATH,
    unity_path: str | None = opts.UNITY_PATH,
    preferences_path: str | None = opts.PREFERENCES_PATH,
    user_extensions: str | None = opts.USER_EXTENSIONS,
    log_level: str = opts.LOG_LEVEL,
) -> None:
    """Show the installation an editor path resolves to.

    Exits with status 1 when the path is not a Neovim binary.
    """
    ctx = setup_command(
        project_path=project_path,
        unity_path=unity_path,
        preferences_path=preferences_path,
        user_extensions=user_extensions,
        log_level=log_level,
    )
    found, installation = ctx.editor.try_get_installation_for_path(editor_path)
    if not found or installation is None:
        error(f"Not a Neovim installation: {editor_path}")
    console.print(f"[cyan]{installation.name}[/cyan] {installation.path}")


@app.command("use")
def use(
    editor_path: Annotated[str, typer.Argument(help="Path of the Neovim binary to open files with")],
    generate: Annotated[
        bool,
        typer.Option("--generate/--no-generate", help="Generate missing project files through Unity"),
    ] = True,
    project_path: str = opts.PROJECT_PATH,
    unity_path: str | None = opts.UNITY_PATH,
    preferences_path: str | None = opts.PREFERENCES_PATH,
    user_extensions: str | None = opts.USER_EXTENSIONS,
    log_level: str = opts.LOG_LEVEL,
) -> None:
    """Make a Neovim binary the external script editor.

    Missing project files are generated afterwards, unless `--no-generate`.
    """
    ctx = setup_command(
        project_path=project_path,
        unity_path=unity_path,
        preferences_path=preferences_path,
        user_extensions=user_extensions,
        log_level=log_level,
    )
    match = ctx.registry.editor_for_path(editor_path)
    if match is None:
        error(f"Not a Neovim installation: {editor_path}")
    editor, installation = match
    ctx.registry.current_editor_installation = installation.path
    editor.initialize(installation.path)
    success(f"Using {installation.name} at {installation.path}")
    if generate:
        _run_sync("Generating missing project files", bootstrap, ctx.registry, ctx.editor)


@app.command("open")
def open_file(
    path: Annotated[
        str,
        typer.Argument(help="File to open. Omit to open the project"),
    ] = "",
    line: Annotated[int, typer.Option("--line", "-l", help="Line to jump to (-1 for the first)")] = -1,
    column: Annotated[int, typer.Option("--column", help="Column to jump to (-1 for none)")] = -1,
    project_path: str = opts.PROJECT_PATH,
    unity_path: str | None = opts.UNITY_PATH,
    preferences_path: str | None = opts.PREFERENCES_PATH,
    user_extensions: str | None = opts.USER_EXTENSIONS,
    log_level: str = opts.LOG_LEVEL,
) -> None:
    """Open a file in the running Neovim.

    Neovim must be listening on the server in the argument template, e.g.
    `nvim --listen /tmp/nvim.unity`.
    """
    ctx = setup_command(
        project_path=project_path,
        unity_path=unity_path,
        preferences_path=preferences_path,
        user_extensions=user_extensions,
        log_level=log_level,
    )
    if not ctx.editor.default_app:
        error("No external script editor configured. Run `unity-nvim use <path>` first")
    try:
        opened = ctx.editor.open_project(path, line, column)
    except OSError as e:
        error(f"Failed to open editor: {e}")
    if not opened:
        error(f"Unsupported or missing file: {path}")
    success(f"Opened {path or 'project'} in Neovim")


def _run_sync(action: str, func: Callable[..., object], *args: object) -> None:
    """Run a sync function, turning Unity failures into CLI errors."""
    info(f"{action}...")
    try:
        func(*args)
    except UnityNotFoundError as e:
        error(str(e))
    except subprocess.CalledProcessError as e:
        error(f"Unity exited with status {e.returncode}")


@app.command("regenerate")
def regenerate(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Regenerate even if the solution exists"),
    ] = False,
    project_path: str = opts.PROJECT_PATH,
    unity_path: str | None = opts.UNITY_PATH,
    preferences_path: str | None = opts.PREFERENCES_PATH,
    user_extensions: str | None = opts.USER_EXTENSIONS,
    log_level: str = opts.LOG_LEVEL,
) -> None:
    """Generate the project files if the solution is missing."""
    ctx = setup_command(
        project_path=project_path,
        unity_path=unity_path,
        preferences_path=preferences_path,
        user_extensions=user_extensions,
        log_level=log_level,
    )
    generation = ctx.editor.project_generation
    if force:
        _run_sync("Regenerating project files", generation.sync)
    elif generation.solution_exists():
        info("Solution already exists")
        return
    else:
        _run_sync("Generating project files", ctx.editor.create_if_does_not_exist)
    success("Project files generated")


@app.command("sync")
def sync(
    added: Annotated[list[str] | None, typer.Option("--added", help="Added asset")] = None,
    deleted: Annotated[list[str] | None, typer.Option("--deleted", help="Deleted asset")] = None,
    moved: Annotated[list[str] | None, typer.Option("--moved", help="Moved asset (new path)")] = None,
    moved_from: Annotated[
        list[str] | None,
        typer.Option("--moved-from", help="Moved asset (old path)"),
    ] = None,
    imported: Annotated[list[str] | None, typer.Option("--imported", help="Reimported asset")] = None,
    project_path: str = opts.PROJECT_PATH,
    unity_path: str | None = opts.UNITY_PATH,
    preferences_path: str | None = opts.PREFERENCES_PATH,
    user_extensions: str | None = opts.USER_EXTENSIONS,
    log_level: str = opts.LOG_LEVEL,
) -> None:
    """Update the project files for changed assets."""
    ctx = setup_command(
        project_path=project_path,
        unity_path=unity_path,
        preferences_path=preferences_path,
        user_extensions=user_extensions,
        log_level=log_level,
    )
    _run_sync(
        "Syncing changed assets",
        ctx.editor.sync_if_needed,
        added or [],
        deleted or [],
        moved or [],
        moved_from or [],
        imported or [],
    )
    success("Project files up to date")


@app.command("sync-all")
def sync_all(
    project_path: str = opts.PROJECT_PATH,
    unity_path: str | None = opts.UNITY_PATH,
    preferences_path: str | None = opts.PREFERENCES_PATH,
    user_extensions: str | None = opts.USER_EXTENSIONS,
    log_level: str = opts.LOG_LEVEL,
) -> None:
    """Refresh the asset database and regenerate all project files."""
    ctx = setup_command(
        project_path=project_path,
        unity_path=unity_path,
        preferences_path=preferences_path,
        user_extensions=user_extensions,
        log_level=log_level,
    )
    _run_sync("Refreshing assets and regenerating project files", ctx.editor.sync_all)
    success("Project files regenerated")
