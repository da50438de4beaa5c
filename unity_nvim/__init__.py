"""Use Neovim as the external script editor of a Unity project."""

from __future__ import annotations

__version__ = "0.1.0"
