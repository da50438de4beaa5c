"""Unity project collaborators: package settings, batch mode and project generation."""

from __future__ import annotations

import json
import logging
import os
import shutil
import subprocess
from enum import Flag, auto
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from unity_nvim.constants import (
    PREF_PROJECT_GENERATION_FLAG,
    SCRIPT_EXTENSIONS,
    SYNC_SOLUTION_METHOD,
    UNITY_PATH_ENV,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from unity_nvim.preferences import Preferences

logger = logging.getLogger(__name__)


class UnityNotFoundError(RuntimeError):
    """Raised when no Unity editor binary is configured."""


class ProjectGenerationFlag(Flag):
    """Package sources whose assemblies get project files."""

    NONE = 0
    EMBEDDED = auto()
    LOCAL = auto()
    REGISTRY = auto()
    GIT = auto()
    BUILT_IN = auto()
    LOCAL_TARBALL = auto()
    UNKNOWN = auto()


# packages-lock.json "source" values
_SOURCE_FLAGS = {
    "embedded": ProjectGenerationFlag.EMBEDDED,
    "local": ProjectGenerationFlag.LOCAL,
    "registry": ProjectGenerationFlag.REGISTRY,
    "git": ProjectGenerationFlag.GIT,
    "builtin": ProjectGenerationFlag.BUILT_IN,
    "local-tarball": ProjectGenerationFlag.LOCAL_TARBALL,
}


class AssemblyNameProvider:
    """Decides which packages of a project get project files."""

    def __init__(self, project_directory: Path, preferences: Preferences) -> None:
        self.project_directory = project_directory
        self._preferences = preferences
        self._package_sources: dict[str, str] | None = None

    @property
    def project_generation_flag(self) -> ProjectGenerationFlag:
        """Package sources currently enabled."""
        return ProjectGenerationFlag(self._preferences.get_int(PREF_PROJECT_GENERATION_FLAG, 0))

    def toggle_project_generation(self, preference: ProjectGenerationFlag) -> None:
        """Flip *preference* on or off."""
        flag = self.project_generation_flag ^ preference
        self._preferences.set_int(PREF_PROJECT_GENERATION_FLAG, flag.value)

    def package_sources(self) -> dict[str, str]:
        """Map package names to their source, read from Packages/packages-lock.json."""
        if self._package_sources is None:
            self._package_sources = self._read_packages_lock()
        return self._package_sources

    def _read_packages_lock(self) -> dict[str, str]:
        lock_file = self.project_directory / "Packages" / "packages-lock.json"
        if not lock_file.exists():
            return {}
        try:
            data = json.loads(lock_file.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read %s: %s", lock_file, e)
            return {}
        dependencies = data.get("dependencies", {}) if isinstance(data, dict) else {}
        return {
            name: info.get("source", "")
            for name, info in dependencies.items()
            if isinstance(info, dict)
        }

    def reset_package_info_cache(self) -> None:
        """Forget the package sources so the lock file is read again."""
        self._package_sources = None

    def is_package_included(self, name: str) -> bool:
        """Check whether project files are generated for package *name*."""
        source = self.package_sources().get(name)
        if source is None:
            return False
        flag = _SOURCE_FLAGS.get(source, ProjectGenerationFlag.UNKNOWN)
        return flag in self.project_generation_flag

    def included_packages(self) -> list[str]:
        """Return the names of all packages that get project files."""
        return sorted(name for name in self.package_sources() if self.is_package_included(name))

    @staticmethod
    def package_name_for_path(path: str) -> str | None:
        """Name of the package *path* belongs to, or None for project assets."""
        parts = PurePosixPath(path.replace("\\", "/")).parts
        if len(parts) > 2 and parts[0] == "Packages":
            return parts[1]
        if len(parts) > 3 and parts[:2] == ("Library", "PackageCache"):
            return parts[2].split("@", 1)[0]
        return None

    def is_path_included(self, path: str) -> bool:
        """Check whether *path* is part of the generated solution."""
        name = self.package_name_for_path(path)
        return name is None or self.is_package_included(name)


class UnityBatchMode:
    """Runs the Unity editor in batch mode against a project."""

    def __init__(self, project_directory: Path, unity_path: str | None = None) -> None:
        self.project_directory = project_directory
        self._unity_path = unity_path

    def get_executable(self) -> str | None:
        """Get the path to the Unity executable."""
        candidate = self._unity_path or os.environ.get(UNITY_PATH_ENV)
        if candidate:
            return candidate
        return shutil.which("Unity") or shutil.which("unity-editor")

    def command(self, *args: str) -> list[str]:
        """Return the batch mode command line with extra *args* appended."""
        exe = self.get_executable()
        if exe is None:
            msg = f"Unity is not installed; set {UNITY_PATH_ENV} or --unity-path"
            raise UnityNotFoundError(msg)
        return [
            exe,
            "-batchmode",
            "-nographics",
            "-quit",
            "-projectPath",
            str(self.project_directory),
            *args,
        ]

    def run(self, *args: str) -> None:
        """Run Unity and wait for it to exit."""
        cmd = self.command(*args)
        logger.info("Running: %s", " ".join(cmd))
        subprocess.run(cmd, check=True)

    def refresh(self) -> None:
        """Open and close the project, which reimports changed assets."""
        self.run()


class ProjectGeneration:
    """Generates the solution and project files through Unity."""

    def __init__(
        self,
        project_directory: Path,
        assembly_name_provider: AssemblyNameProvider,
        unity: UnityBatchMode,
    ) -> None:
        self.project_directory = project_directory
        self.assembly_name_provider = assembly_name_provider
        self.unity = unity

    @property
    def solution_file(self) -> Path:
        """Path of the solution file Unity writes."""
        return self.project_directory / f"{self.project_directory.resolve().name}.sln"

    def solution_exists(self) -> bool:
        """Check whether the solution file has been generated."""
        return self.solution_file.exists()

    def sync(self) -> None:
        """Regenerate all project files."""
        logger.info("Generating project files for %s", self.project_directory)
        self.unity.run("-executeMethod", SYNC_SOLUTION_METHOD)

    def sync_if_needed(self, affected_files: Sequence[str], reimported_files: Sequence[str]) -> bool:
        """Regenerate project files when a script in the solution changed.

        Scripts of packages whose source is not enabled are ignored.
        Returns whether a sync was run.
        """
        changed = [*affected_files, *reimported_files]
        if not any(
            Path(path).suffix.lower() in SCRIPT_EXTENSIONS and self.assembly_name_provider.is_path_included(path)
            for path in changed
        ):
            logger.debug("No script changes among %d files, skipping sync", len(changed))
            return False
        self.sync()
        return True
