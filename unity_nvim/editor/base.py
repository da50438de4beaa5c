"""Base classes for external code editor adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True)
class Installation:
    """A discovered editor binary."""

    name: str
    path: str


@runtime_checkable
class PackageInfoCache(Protocol):
    """Something holding cached package information that can be dropped."""

    def reset_package_info_cache(self) -> None: ...


class ProjectGenerator(Protocol):
    """Generates the IDE project files for a Unity project."""

    @property
    def assembly_name_provider(self) -> Any: ...

    def solution_exists(self) -> bool: ...

    def sync(self) -> None: ...

    def sync_if_needed(self, affected_files: Sequence[str], reimported_files: Sequence[str]) -> bool: ...


class AssetDatabase(Protocol):
    """Refreshes the Unity asset database."""

    def refresh(self) -> None: ...


class ExternalCodeEditor(ABC):
    """Abstract base class for external code editors a Unity project can use."""

    @property
    @abstractmethod
    def installations(self) -> list[Installation]:
        """Installations of this editor found on the machine."""

    @abstractmethod
    def try_get_installation_for_path(self, editor_path: str) -> tuple[bool, Installation | None]:
        """Return whether *editor_path* belongs to this editor, and its installation."""

    @abstractmethod
    def open_project(self, path: str = "", line: int = -1, column: int = -1) -> bool:
        """Open *path* at *line* and *column*. An empty path opens the project."""

    @abstractmethod
    def create_if_does_not_exist(self) -> None:
        """Generate the project files if they are missing."""

    @abstractmethod
    def sync_if_needed(
        self,
        added_files: Sequence[str],
        deleted_files: Sequence[str],
        moved_files: Sequence[str],
        moved_from_files: Sequence[str],
        imported_files: Sequence[str],
    ) -> None:
        """Update the project files after assets changed."""

    @abstractmethod
    def sync_all(self) -> None:
        """Refresh the asset database and regenerate all project files."""

    def initialize(self, editor_installation_path: str) -> None:  # noqa: B027
        """Called by the host when this editor becomes the current one."""

    def __repr__(self) -> str:  # noqa: D105
        return f"<{self.__class__.__name__}>"
