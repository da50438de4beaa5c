"""Shared test fixtures and configuration."""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING

import pytest

from unity_nvim.editor.discovery import NvimDiscovery
from unity_nvim.editor.nvim import NvimScriptEditor
from unity_nvim.preferences import InMemoryPreferences

if TYPE_CHECKING:
    from collections.abc import Sequence


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Set default timeout for all tests."""
    for item in items:
        with contextlib.suppress(AttributeError):
            item.add_marker(pytest.mark.timeout(3))


class FakeAssemblyNameProvider:
    """Records package info cache resets."""

    def __init__(self) -> None:
        self.resets = 0
        self.project_generation_flag = 0

    def reset_package_info_cache(self) -> None:
        self.resets += 1


class FakeProjectGeneration:
    """Records the calls the editor makes to its project generator."""

    def __init__(self, *, solution_exists: bool = True) -> None:
        self.assembly_name_provider: object = FakeAssemblyNameProvider()
        self._solution_exists = solution_exists
        self.calls: list[tuple] = []

    def solution_exists(self) -> bool:
        return self._solution_exists

    def sync(self) -> None:
        self.calls.append(("sync",))

    def sync_if_needed(self, affected_files: Sequence[str], reimported_files: Sequence[str]) -> bool:
        self.calls.append(("sync_if_needed", list(affected_files), list(reimported_files)))
        return True


class FakeAssetDatabase:
    """Counts refreshes."""

    def __init__(self) -> None:
        self.refreshes = 0

    def refresh(self) -> None:
        self.refreshes += 1


@pytest.fixture
def preferences() -> InMemoryPreferences:
    """Empty in-memory preferences."""
    return InMemoryPreferences()


@pytest.fixture
def project_generation() -> FakeProjectGeneration:
    """A project generator whose solution already exists."""
    return FakeProjectGeneration()


@pytest.fixture
def asset_database() -> FakeAssetDatabase:
    """An asset database that counts refreshes."""
    return FakeAssetDatabase()


@pytest.fixture
def nvim_editor(
    preferences: InMemoryPreferences,
    project_generation: FakeProjectGeneration,
    asset_database: FakeAssetDatabase,
) -> NvimScriptEditor:
    """A Linux Neovim editor with no installations on disk."""
    return NvimScriptEditor(
        NvimDiscovery(candidates=[]),
        project_generation,
        preferences,
        asset_database,
        platform="linux",
    )
