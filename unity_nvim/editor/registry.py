"""Registry of external code editors and wiring of the Neovim editor."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from unity_nvim.constants import DEFAULT_USER_EXTENSIONS, PREF_DEFAULT_APP
from unity_nvim.unity import AssemblyNameProvider, ProjectGeneration, UnityBatchMode

from .discovery import NvimDiscovery
from .nvim import NvimScriptEditor, is_nvim_installation

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from unity_nvim.preferences import Preferences

    from .base import ExternalCodeEditor, Installation

logger = logging.getLogger(__name__)


class CodeEditorRegistry:
    """Editors known to the host, in registration order."""

    def __init__(self, preferences: Preferences) -> None:
        self._preferences = preferences
        self._editors: list[ExternalCodeEditor] = []

    @property
    def editors(self) -> list[ExternalCodeEditor]:
        """Registered editors."""
        return list(self._editors)

    def register(self, editor: ExternalCodeEditor) -> None:
        """Add *editor* to the registry."""
        if editor in self._editors:
            return
        logger.debug("Registered %s", type(editor).__name__)
        self._editors.append(editor)

    @property
    def current_editor_installation(self) -> str:
        """Path of the external script editor chosen in the host."""
        return self._preferences.get_string(PREF_DEFAULT_APP, "")

    @current_editor_installation.setter
    def current_editor_installation(self, path: str) -> None:
        self._preferences.set_string(PREF_DEFAULT_APP, path)

    def editor_for_path(self, path: str) -> tuple[ExternalCodeEditor, Installation] | None:
        """Return the first editor claiming *path*, with its installation."""
        for editor in self._editors:
            found, installation = editor.try_get_installation_for_path(path)
            if found and installation is not None:
                return editor, installation
        return None

    def current_editor(self) -> ExternalCodeEditor | None:
        """Return the editor for the current installation, if any claims it."""
        match = self.editor_for_path(self.current_editor_installation)
        return match[0] if match else None


def create_nvim_editor(
    project_directory: Path,
    preferences: Preferences,
    *,
    unity_path: str | None = None,
    user_extensions: Sequence[str] = DEFAULT_USER_EXTENSIONS,
    discovery: NvimDiscovery | None = None,
) -> NvimScriptEditor:
    """Build the Neovim editor with its Unity collaborators."""
    unity = UnityBatchMode(project_directory, unity_path)
    generation = ProjectGeneration(
        project_directory,
        AssemblyNameProvider(project_directory, preferences),
        unity,
    )
    return NvimScriptEditor(
        discovery or NvimDiscovery(),
        generation,
        preferences,
        unity,
        user_extensions=user_extensions,
    )


def bootstrap(
    registry: CodeEditorRegistry,
    editor: NvimScriptEditor,
    *,
    create_project_files: bool = True,
) -> NvimScriptEditor:
    """Register *editor* and generate missing project files if Neovim is current.

    Nothing registers itself at import time; callers wire editors here.
    """
    registry.register(editor)
    if create_project_files and is_nvim_installation(registry.current_editor_installation):
        editor.create_if_does_not_exist()
    return editor
