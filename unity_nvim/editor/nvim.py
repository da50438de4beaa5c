"""Neovim script editor adapter."""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from pathlib import Path, PureWindowsPath
from typing import TYPE_CHECKING

from unity_nvim.constants import (
    BUILTIN_EXTENSIONS,
    CUSTOM_EXTENSIONS,
    DEFAULT_ARGUMENT,
    DEFAULT_USER_EXTENSIONS,
    INSTALLATION_NAME,
    PREF_ARGUMENTS,
    PREF_DEFAULT_APP,
    PREF_EXTENSIONS,
    SUPPORTED_FILE_NAMES,
)

from .base import ExternalCodeEditor, Installation, PackageInfoCache

if TYPE_CHECKING:
    from collections.abc import Sequence

    from unity_nvim.preferences import Preferences
    from unity_nvim.unity import ProjectGenerationFlag

    from .base import AssetDatabase, ProjectGenerator
    from .discovery import NvimDiscovery

logger = logging.getLogger(__name__)


def _file_name(path: str) -> str:
    """Lowercased file name of *path* with spaces removed, for either separator."""
    return PureWindowsPath(path.lower()).name.replace(" ", "")


def is_nvim_installation(path: str | None) -> bool:
    """Check whether *path* points at a Neovim binary or app bundle."""
    if not path:
        return False
    return _file_name(path) in SUPPORTED_FILE_NAMES


def _dedupe(items: Sequence[str]) -> list[str]:
    """Remove duplicates, keeping the first occurrence."""
    return list(dict.fromkeys(items))


class NvimScriptEditor(ExternalCodeEditor):
    """Neovim as the external script editor of a Unity project.

    Files are opened in an already running Neovim through its remote control
    server (``nvim --listen /tmp/nvim.unity``).
    """

    def __init__(
        self,
        discovery: NvimDiscovery,
        project_generation: ProjectGenerator,
        preferences: Preferences,
        asset_database: AssetDatabase | None = None,
        *,
        user_extensions: Sequence[str] = DEFAULT_USER_EXTENSIONS,
        platform: str | None = None,
    ) -> None:
        self._discovery = discovery
        self._project_generation = project_generation
        self._preferences = preferences
        self._asset_database = asset_database
        self._user_extensions = tuple(user_extensions)
        self._platform = platform or sys.platform
        self._arguments: str | None = None

    # --- Settings ---

    @property
    def arguments(self) -> str:
        """Remote control argument template."""
        if self._arguments is None:
            self._arguments = self._preferences.get_string(PREF_ARGUMENTS, DEFAULT_ARGUMENT)
        return self._arguments

    @arguments.setter
    def arguments(self, value: str) -> None:
        self._arguments = value
        self._preferences.set_string(PREF_ARGUMENTS, value)

    def reset_arguments(self) -> None:
        """Restore the default argument template."""
        self.arguments = DEFAULT_ARGUMENT

    @property
    def default_extensions(self) -> list[str]:
        """Extensions handled when the user has not configured any."""
        return _dedupe([*BUILTIN_EXTENSIONS, *self._user_extensions, *CUSTOM_EXTENSIONS])

    @property
    def handled_extensions_string(self) -> str:
        """Semicolon separated extensions, as stored in the preferences."""
        return self._preferences.get_string(PREF_EXTENSIONS, ";".join(self.default_extensions))

    @handled_extensions_string.setter
    def handled_extensions_string(self, value: str) -> None:
        self._preferences.set_string(PREF_EXTENSIONS, value)

    @property
    def handled_extensions(self) -> list[str]:
        """Extensions this editor opens, without leading dots or wildcards."""
        return [ext.lstrip(".*") for ext in self.handled_extensions_string.split(";") if ext]

    def supports_extension(self, path: str) -> bool:
        """Check whether files like *path* are opened in Neovim."""
        extension = Path(path).suffix
        if not extension:
            return False
        return extension.lstrip(".") in self.handled_extensions

    @property
    def project_generation_flag(self) -> ProjectGenerationFlag:
        """Package sources that get project files."""
        return self._project_generation.assembly_name_provider.project_generation_flag

    def toggle_project_generation(self, preference: ProjectGenerationFlag) -> None:
        """Turn project generation for a package source on or off."""
        self._project_generation.assembly_name_provider.toggle_project_generation(preference)

    @property
    def default_app(self) -> str:
        """The external script editor configured in the host."""
        return self._preferences.get_string(PREF_DEFAULT_APP, "")

    @property
    def project_generation(self) -> ProjectGenerator:
        """The collaborator generating the project files."""
        return self._project_generation

    # --- Installations ---

    @property
    def installations(self) -> list[Installation]:
        """Neovim installations found on this machine."""
        return self._discovery.list_installations()

    def try_get_installation_for_path(self, editor_path: str) -> tuple[bool, Installation | None]:
        """Return the installation for *editor_path* if it is a Neovim binary."""
        if _file_name(editor_path) not in SUPPORTED_FILE_NAMES:
            return False, None

        for installation in self.installations:
            if installation.path == editor_path:
                return True, installation
        return True, Installation(name=INSTALLATION_NAME, path=editor_path)

    # --- Opening files ---

    def format_arguments(self, path: str, line: int, column: int) -> str:
        """Fill the argument template with the file path, line and column."""
        quoted = shlex.quote(path) if path else ""
        return self.arguments.format(quoted, line, column)

    def launch_command(self, arguments: str) -> list[str]:
        """Return the command that hands *arguments* to the default app."""
        args = shlex.split(arguments)
        if self._platform == "darwin":
            return ["open", "-n", self.default_app, "--args", *args]
        return [self.default_app, *args]

    def open_project(self, path: str = "", line: int = -1, column: int = -1) -> bool:
        """Open *path* at *line* in the running Neovim.

        An empty path (Assets > Open C# Project) skips the file checks.
        Returns ``False`` for unsupported or missing files. The spawned
        process is not waited on.
        """
        if path and (not self.supports_extension(path) or not Path(path).is_file()):
            logger.debug("Not opening %s: unsupported or missing", path)
            return False

        if line == -1:
            line = 1
        if column == -1:
            column = 0

        cmd = self.launch_command(self.format_arguments(path, line, column))
        logger.info("Running: %s", shlex.join(cmd))
        subprocess.Popen(cmd, **self._popen_kwargs())  # noqa: S603
        return True

    def _popen_kwargs(self) -> dict[str, object]:
        """Hide the console window when the default app is a .cmd launcher."""
        if self._platform != "win32" or not self.default_app.lower().endswith(".cmd"):
            return {}
        startupinfo = subprocess.STARTUPINFO()  # type: ignore[attr-defined]
        startupinfo.dwFlags |= subprocess.STARTF_USESHOWWINDOW  # type: ignore[attr-defined]
        startupinfo.wShowWindow = 0  # SW_HIDE
        return {
            "startupinfo": startupinfo,
            "creationflags": subprocess.CREATE_NO_WINDOW,  # type: ignore[attr-defined]
        }

    # --- Project files ---

    def create_if_does_not_exist(self) -> None:
        """Generate the project files if the solution is missing."""
        if not self._project_generation.solution_exists():
            self._project_generation.sync()

    def _reset_package_info_cache(self) -> None:
        provider = self._project_generation.assembly_name_provider
        if isinstance(provider, PackageInfoCache):
            provider.reset_package_info_cache()

    def sync_if_needed(
        self,
        added_files: Sequence[str],
        deleted_files: Sequence[str],
        moved_files: Sequence[str],
        moved_from_files: Sequence[str],
        imported_files: Sequence[str],
    ) -> None:
        """Update the project files for changed assets."""
        self._reset_package_info_cache()
        affected = _dedupe([*added_files, *deleted_files, *moved_files, *moved_from_files])
        self._project_generation.sync_if_needed(affected, list(imported_files))

    def sync_all(self) -> None:
        """Refresh the asset database and regenerate all project files."""
        self._reset_package_info_cache()
        if self._asset_database is not None:
            self._asset_database.refresh()
        self._project_generation.sync()

    def initialize(self, editor_installation_path: str) -> None:
        """Nothing to set up when Neovim becomes the current editor."""
        logger.debug("Initialized with %s", editor_installation_path)
