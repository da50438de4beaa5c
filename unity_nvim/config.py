"""Pydantic settings model and config file loading."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, field_validator

from unity_nvim.constants import DEFAULT_USER_EXTENSIONS
from unity_nvim.core.utils import console

# --- Config File Loading ---

CONFIG_PATH = Path.home() / ".config" / "unity-nvim" / "config.toml"
CONFIG_PATH_2 = Path("unity-nvim-config.toml")


def _replace_dashed_keys_recursive(d: dict[str, Any]) -> dict[str, Any]:
    """Recursively replace dashed keys with underscores in a dictionary."""
    new_dict = {}
    for k, v in d.items():
        new_key = k.replace("-", "_")
        if isinstance(v, dict):
            new_dict[new_key] = _replace_dashed_keys_recursive(v)
        else:
            new_dict[new_key] = v
    return new_dict


def load_config(config_path_str: str | None = None) -> dict[str, Any]:
    """Load the TOML configuration file and process it for nested structures."""
    # Determine which config path to use
    if config_path_str:
        config_path = Path(config_path_str)
    elif CONFIG_PATH.exists():
        config_path = CONFIG_PATH
    elif CONFIG_PATH_2.exists():
        config_path = CONFIG_PATH_2
    else:
        return {}

    if config_path.exists():
        try:
            with config_path.open("rb") as f:
                return _replace_dashed_keys_recursive(tomllib.load(f))
        except tomllib.TOMLDecodeError as e:
            console.print(
                f"[bold red]Error parsing config file {config_path}: {e}[/bold red]",
            )
            return {}

    # Report error only if an explicit path was given
    console.print(
        f"[bold red]Config file not found at {config_path_str}[/bold red]",
    )
    return {}


# --- Pydantic Models for Configuration ---


class Settings(BaseModel):
    """Settings shared by all commands."""

    project_path: Path = Path()
    unity_path: str | None = None
    preferences_path: Path | None = None
    log_level: str = "warning"
    user_extensions: list[str] = list(DEFAULT_USER_EXTENSIONS)

    @field_validator("project_path", mode="before")
    @classmethod
    def _expand_project_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser()

    @field_validator("preferences_path", mode="before")
    @classmethod
    def _expand_preferences_path(cls, v: str | Path | None) -> Path | None:
        return Path(v).expanduser() if v else None

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        level = v.lower()
        if level not in ("debug", "info", "warning", "error", "critical"):
            msg = f"Unknown log level: {v}"
            raise ValueError(msg)
        return level

    @field_validator("user_extensions", mode="before")
    @classmethod
    def _split_extensions(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            return [ext for ext in v.split(";") if ext]
        return v
