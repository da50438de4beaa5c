"""Discovery of Neovim installations on disk."""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from unity_nvim.constants import INSTALLATION_NAME

from .base import Installation

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

logger = logging.getLogger(__name__)

_SEPARATORS = ("/", "\\")


class DiscoveryState(Enum):
    """Where a discovery object is in its scan lifecycle."""

    NOT_SCANNED = "not-scanned"
    SCANNED_EMPTY = "scanned-empty"
    SCANNED = "scanned"


def _env_dir(name: str) -> str | None:
    """Get a directory environment variable with forward slashes."""
    value = os.environ.get(name)
    return value.replace("\\", "/") if value else None


def candidate_paths(platform: str | None = None) -> list[str]:
    """Return the ordered candidate installation paths for *platform*."""
    platform = platform or sys.platform
    if platform == "darwin":
        return [
            "/Applications/Neovim.app",
            "/Applications/Nvim.app",
        ]
    if platform == "win32":
        candidates = []
        if program_files := _env_dir("ProgramFiles"):
            candidates += [
                f"{program_files}/Neovim/bin/nvim.exe",
                f"{program_files}/Neovim/bin/nvim-qt.exe",
            ]
        if local_app_data := _env_dir("LOCALAPPDATA"):
            candidates += [
                f"{local_app_data}/Programs/Neovim/bin/nvim.exe",
                f"{local_app_data}/Programs/Neovim/bin/nvim-qt.exe",
            ]
        return candidates
    return [
        "/usr/local/bin/nvim",
        "/usr/bin/nvim",
        "/opt/nvim/bin/nvim",
        "/snap/bin/nvim",
    ]


def installation_exists(path: str, platform: str | None = None) -> bool:
    """Check whether an installation exists. App bundles are directories on macOS."""
    if (platform or sys.platform) == "darwin":
        return Path(path).is_dir()
    return Path(path).is_file()


def longest_common_prefix(paths: Sequence[str]) -> str:
    """Return the longest leading substring shared by all *paths*."""
    first = paths[0]
    base_length = len(first)
    for path in paths[1:]:
        base_length = min(base_length, len(path))
        for i in range(base_length):
            if path[i] != first[i]:
                base_length = i
                break
    return first[:base_length]


def name_installations(paths: Sequence[str]) -> list[Installation]:
    """Give each existing installation path a display name.

    A single path is plain "Nvim". Several paths are told apart by what
    follows their common prefix, e.g. "Nvim (stable/bin/nvim)". Two paths
    where either suffix has no separator fall back to the single-path case.
    """
    if not paths:
        return []
    if len(paths) == 1:
        return [Installation(name=INSTALLATION_NAME, path=paths[0])]

    lcp = longest_common_prefix(paths)
    suffixes = [path[len(lcp) :] for path in paths]
    if len(paths) == 2 and any(not any(sep in suffix for sep in _SEPARATORS) for suffix in suffixes):
        return [Installation(name=INSTALLATION_NAME, path=paths[0])]

    return [
        Installation(name=f"{INSTALLATION_NAME} ({suffix})", path=path)
        for path, suffix in zip(paths, suffixes, strict=True)
    ]


class NvimDiscovery:
    """Finds Neovim installations, scanning once and remembering the result.

    An empty scan is not final: the next call scans again, so an editor
    installed while the host is running is still picked up.
    """

    def __init__(
        self,
        candidates: Sequence[str] | None = None,
        exists: Callable[[str], bool] | None = None,
    ) -> None:
        self._candidates = list(candidates) if candidates is not None else None
        self._exists = exists or installation_exists
        self._installations: list[Installation] = []
        self.state = DiscoveryState.NOT_SCANNED

    def list_installations(self) -> list[Installation]:
        """Return the installations found by the first successful scan."""
        if self.state is DiscoveryState.SCANNED:
            logger.debug("Using %d cached installations", len(self._installations))
            return list(self._installations)

        self._installations = self._scan()
        self.state = DiscoveryState.SCANNED if self._installations else DiscoveryState.SCANNED_EMPTY
        return list(self._installations)

    def _scan(self) -> list[Installation]:
        candidates = self._candidates if self._candidates is not None else candidate_paths()
        existing = [path for path in candidates if self._exists(path)]
        logger.debug("Found %d of %d candidate Neovim paths", len(existing), len(candidates))
        return name_installations(existing)
