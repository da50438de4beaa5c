"""External code editor adapters."""

from __future__ import annotations

from .base import ExternalCodeEditor, Installation
from .discovery import DiscoveryState, NvimDiscovery, longest_common_prefix, name_installations
from .nvim import NvimScriptEditor, is_nvim_installation
from .registry import CodeEditorRegistry, bootstrap, create_nvim_editor

__all__ = [
    "CodeEditorRegistry",
    "DiscoveryState",
    "ExternalCodeEditor",
    "Installation",
    "NvimDiscovery",
    "NvimScriptEditor",
    "bootstrap",
    "create_nvim_editor",
    "is_nvim_installation",
    "longest_common_prefix",
    "name_installations",
]
