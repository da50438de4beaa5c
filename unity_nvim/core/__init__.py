"""Shared utilities for unity-nvim."""
