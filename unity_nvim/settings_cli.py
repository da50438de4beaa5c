"""CLI commands for the editor settings."""

from __future__ import annotations

import json
from typing import Annotated

import typer
from rich.table import Table

import unity_nvim._cli_options as opts
from unity_nvim._command_setup import setup_command
from unity_nvim._output import error, success
from unity_nvim.cli import app as main_app
from unity_nvim.core.utils import console
from unity_nvim.unity import ProjectGenerationFlag

app = typer.Typer(
    name="settings",
    help="""Show and change the Neovim editor settings.

Settings are stored in the preferences file, the same keys the Unity
package keeps in EditorPrefs.
""",
    rich_markup_mode="markdown",
    no_args_is_help=True,
)
main_app.add_typer(app, name="settings")

_PACKAGE_SOURCES = {
    "embedded": ProjectGenerationFlag.EMBEDDED,
    "local": ProjectGenerationFlag.LOCAL,
    "registry": ProjectGenerationFlag.REGISTRY,
    "git": ProjectGenerationFlag.GIT,
    "built-in": ProjectGenerationFlag.BUILT_IN,
    "local-tarball": ProjectGenerationFlag.LOCAL_TARBALL,
    "unknown": ProjectGenerationFlag.UNKNOWN,
}


@app.command("show")
def show(
    json_output: bool = opts.JSON_OUTPUT,
    project_path: str = opts.PROJECT_PATH,
    unity_path: str | None = opts.UNITY_PATH,
    preferences_path: str | None = opts.PREFERENCES_PATH,
    user_extensions: str | None = opts.USER_EXTENSIONS,
    log_level: str = opts.LOG_LEVEL,
) -> None:
    """Show the current settings."""
    ctx = setup_command(
        project_path=project_path,
        unity_path=unity_path,
        preferences_path=preferences_path,
        user_extensions=user_extensions,
        log_level=log_level,
    )
    editor = ctx.editor
    flag = editor.project_generation_flag
    packages = {name: value in flag for name, value in _PACKAGE_SOURCES.items()}

    if json_output:
        data = {
            "arguments": editor.arguments,
            "extensions": editor.handled_extensions,
            "default_app": editor.default_app,
            "packages": packages,
        }
        print(json.dumps(data))
        return

    table = Table(title="Neovim Editor Settings", show_header=False)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_row("External Script Editor", editor.default_app or "[dim]not set[/dim]")
    table.add_row("External Script Editor Args", editor.arguments.replace("[", r"\["))
    table.add_row("Extensions handled", editor.handled_extensions_string)
    for name, enabled in packages.items():
        status = "[green]✓[/green]" if enabled else "[red]✗[/red]"
        table.add_row(f"Generate .csproj files for {name} packages", status)
    console.print(table)


@app.command("set-arguments")
def set_arguments(
    arguments: Annotated[
        str,
        typer.Argument(help="Argument template. {0} is the file, {1} the line, {2} the column"),
    ],
    project_path: str = opts.PROJECT_PATH,
    unity_path: str | None = opts.UNITY_PATH,
    preferences_path: str | None = opts.PREFERENCES_PATH,
    user_extensions: str | None = opts.USER_EXTENSIONS,
    log_level: str = opts.LOG_LEVEL,
) -> None:
    """Set the arguments passed to the external script editor."""
    ctx = setup_command(
        project_path=project_path,
        unity_path=unity_path,
        preferences_path=preferences_path,
        user_extensions=user_extensions,
        log_level=log_level,
    )
    try:
        arguments.format("", 1, 0)
    except (IndexError, KeyError, ValueError) as e:
        error(f"Invalid argument template: {e}")
    ctx.editor.arguments = arguments
    success("Arguments updated")


@app.command("reset-arguments")
def reset_arguments(
    project_path: str = opts.PROJECT_PATH,
    unity_path: str | None = opts.UNITY_PATH,
    preferences_path: str | None = opts.PREFERENCES_PATH,
    user_extensions: str | None = opts.USER_EXTENSIONS,
    log_level: str = opts.LOG_LEVEL,
) -> None:
    """Restore the default argument template."""
    ctx = setup_command(
        project_path=project_path,
        unity_path=unity_path,
        preferences_path=preferences_path,
        user_extensions=user_extensions,
        log_level=log_level,
    )
    ctx.editor.reset_arguments()
    success(f"Arguments reset to: {ctx.editor.arguments}")


@app.command("set-extensions")
def set_extensions(
    extensions: Annotated[
        str,
        typer.Argument(help="Semicolon separated extensions, e.g. 'cs;shader;json'"),
    ],
    project_path: str = opts.PROJECT_PATH,
    unity_path: str | None = opts.UNITY_PATH,
    preferences_path: str | None = opts.PREFERENCES_PATH,
    user_extensions: str | None = opts.USER_EXTENSIONS,
    log_level: str = opts.LOG_LEVEL,
) -> None:
    """Set the file extensions opened in Neovim."""
    ctx = setup_command(
        project_path=project_path,
        unity_path=unity_path,
        preferences_path=preferences_path,
        user_extensions=user_extensions,
        log_level=log_level,
    )
    ctx.editor.handled_extensions_string = extensions
    success(f"Handling: {', '.join(ctx.editor.handled_extensions)}")


@app.command("toggle-package")
def toggle_package(
    source: Annotated[
        str,
        typer.Argument(help=f"Package source: {', '.join(_PACKAGE_SOURCES)}"),
    ],
    project_path: str = opts.PROJECT_PATH,
    unity_path: str | None = opts.UNITY_PATH,
    preferences_path: str | None = opts.PREFERENCES_PATH,
    user_extensions: str | None = opts.USER_EXTENSIONS,
    log_level: str = opts.LOG_LEVEL,
) -> None:
    """Turn .csproj generation for a package source on or off."""
    flag = _PACKAGE_SOURCES.get(source.lower())
    if flag is None:
        error(f"Unknown package source: {source}")
    ctx = setup_command(
        project_path=project_path,
        unity_path=unity_path,
        preferences_path=preferences_path,
        user_extensions=user_extensions,
        log_level=log_level,
    )
    ctx.editor.toggle_project_generation(flag)
    state = "on" if flag in ctx.editor.project_generation_flag else "off"
    success(f"Project generation for {source} packages is {state}")
