"""Console output helpers for the CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from unity_nvim.core.utils import console, err_console


def error(msg: str) -> NoReturn:
    """Print an error message and exit."""
    err_console.print(f"[bold red]Error:[/bold red] {msg}")
    raise typer.Exit(1)


def success(msg: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]✓[/bold green] {msg}")


def info(msg: str) -> None:
    """Print an info message."""
    console.print(f"[dim]→[/dim] {msg}")


def warn(msg: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning:[/yellow] {msg}")
