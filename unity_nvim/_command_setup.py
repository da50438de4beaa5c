"""Common command setup: settings, logging and the wired editor."""

from __future__ import annotations

from typing import NamedTuple

from pydantic import ValidationError
from rich.markup import escape

from unity_nvim._output import error
from unity_nvim.config import Settings
from unity_nvim.core.utils import setup_rich_logging
from unity_nvim.editor import CodeEditorRegistry, NvimScriptEditor, bootstrap, create_nvim_editor
from unity_nvim.preferences import JsonPreferences


class CommandContext(NamedTuple):
    """Everything a command needs."""

    settings: Settings
    registry: CodeEditorRegistry
    editor: NvimScriptEditor


def setup_command(
    *,
    project_path: str,
    unity_path: str | None,
    preferences_path: str | None,
    user_extensions: str | None,
    log_level: str,
) -> CommandContext:
    """Common setup for editor commands."""
    values: dict[str, object] = {
        "project_path": project_path,
        "unity_path": unity_path,
        "preferences_path": preferences_path,
        "log_level": log_level,
    }
    if user_extensions is not None:
        values["user_extensions"] = user_extensions
    try:
        settings = Settings.model_validate(values)
    except ValidationError as e:
        error(escape(str(e)))

    setup_rich_logging(settings.log_level)

    preferences = JsonPreferences(settings.preferences_path)
    registry = CodeEditorRegistry(preferences)
    editor = create_nvim_editor(
        settings.project_path,
        preferences,
        unity_path=settings.unity_path,
        user_extensions=settings.user_extensions,
    )
    bootstrap(registry, editor, create_project_files=False)
    return CommandContext(settings, registry, editor)
