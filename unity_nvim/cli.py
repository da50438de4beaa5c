"""Shared CLI functionality for unity-nvim."""

from __future__ import annotations

from typing import Annotated

import typer

from .config import load_config
from .core.utils import console

app = typer.Typer(
    name="unity-nvim",
    help="Use Neovim as the external script editor of a Unity project.",
    add_completion=True,
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_file: Annotated[
        str | None,
        typer.Option("--config", "-c", help="Path to config file"),
    ] = None,
) -> None:
    """Use Neovim as the external script editor of a Unity project."""
    if ctx.invoked_subcommand is None:
        console.print("[bold red]No command specified.[/bold red]")
        console.print("[bold yellow]Running --help for your convenience.[/bold yellow]")
        console.print(ctx.get_help())
        raise typer.Exit
    import dotenv  # noqa: PLC0415

    dotenv.load_dotenv()
    set_config_defaults(ctx, config_file)


def _subcommands(command: object) -> dict | None:
    """Subcommands of *command*, or None when it is not a group."""
    return getattr(command, "commands", None)


def _command_defaults(
    command: object,
    wildcard_config: dict,
    command_config: dict,
) -> dict:
    """Build the default map for *command*, recursing into groups."""
    defaults = {**wildcard_config, **{k: v for k, v in command_config.items() if not isinstance(v, dict)}}
    subcommands = _subcommands(command)
    if subcommands is None:
        return defaults
    return {
        **defaults,
        **{
            name: _command_defaults(sub, defaults, command_config.get(name.replace("-", "_"), {}))
            for name, sub in subcommands.items()
        },
    }


def set_config_defaults(ctx: typer.Context, config_file: str | None) -> None:
    """Set the default values for the subcommands based on the config file.

    Values in ``[defaults]`` apply to every command; a section named after a
    command (``[open]``, ``[settings.show]``) overrides them for that command.
    """
    config = load_config(config_file)
    wildcard_config = config.get("defaults", {})
    subcommands = _subcommands(ctx.command)
    if subcommands is None:
        ctx.default_map = wildcard_config
        return

    ctx.default_map = {
        name: _command_defaults(sub, wildcard_config, config.get(name.replace("-", "_"), {}))
        for name, sub in subcommands.items()
    }


# Import commands from other modules to register them
from . import commands, settings_cli  # noqa: E402, F401
