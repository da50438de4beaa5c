"""Shared CLI options for unity-nvim commands."""

from __future__ import annotations

import typer

PROJECT_PATH = typer.Option(
    ".",
    "--project",
    "-p",
    help="Root directory of the Unity project.",
)
UNITY_PATH = typer.Option(
    None,
    "--unity-path",
    help="Unity editor binary used to generate project files. Defaults to $UNITY_PATH.",
)
PREFERENCES_PATH = typer.Option(
    None,
    "--prefs",
    help="Preferences file. Defaults to ~/.config/unity-nvim/prefs.json.",
)
USER_EXTENSIONS = typer.Option(
    None,
    "--user-extensions",
    help="Semicolon separated extensions Unity generates project entries for (e.g. 'txt;xml').",
)
LOG_LEVEL = typer.Option(
    "warning",
    "--log-level",
    help="Set logging level.",
    case_sensitive=False,
)
JSON_OUTPUT = typer.Option(
    False,  # noqa: FBT003
    "--json",
    help="Output as JSON.",
)
