"""Test the config loading."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from pydantic import ValidationError
import typer
from typer import Context
from typer.testing import CliRunner

from unity_nvim.cli import _command_defaults, app, set_config_defaults
from unity_nvim.config import Settings, load_config

runner = CliRunner(env={"NO_COLOR": "1", "TERM": "dumb"})


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Provides a config file with dashed keys and per-command sections."""
    config_content = f"""
[defaults]
log-level = "INFO"
preferences-path = "{(tmp_path / "prefs.json").as_posix()}"

[settings.show]
log-level = "ERROR"
"""
    config_path = tmp_path / "config.toml"
    config_path.write_text(config_content)
    return config_path


def test_config_loader_key_replacement(config_file: Path) -> None:
    """Test that dashed keys are replaced with underscores, also when nested."""
    config = load_config(str(config_file))
    assert config["defaults"]["log_level"] == "INFO"
    assert config["settings"]["show"]["log_level"] == "ERROR"


def test_missing_explicit_config(tmp_path: Path) -> None:
    """An explicit path that does not exist gives an empty config."""
    assert load_config(str(tmp_path / "nope.toml")) == {}


def test_invalid_toml(tmp_path: Path) -> None:
    """A file that is not TOML gives an empty config."""
    config_path = tmp_path / "broken.toml"
    config_path.write_text("[defaults\n")
    assert load_config(str(config_path)) == {}


def test_no_config_files() -> None:
    """Without any config file the config is empty."""
    with (
        patch("unity_nvim.config.CONFIG_PATH", Path("/nonexistent/config.toml")),
        patch("unity_nvim.config.CONFIG_PATH_2", Path("/nonexistent/unity-nvim-config.toml")),
    ):
        assert load_config() == {}


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self) -> None:
        """Defaults point at the current directory."""
        settings = Settings()
        assert settings.project_path == Path()
        assert settings.unity_path is None
        assert settings.log_level == "warning"
        assert "txt" in settings.user_extensions

    def test_normalizes(self) -> None:
        """Paths are expanded, levels lowercased and extensions split."""
        settings = Settings(
            project_path="~/Game",
            preferences_path="",
            log_level="DEBUG",
            user_extensions="txt;;xml",
        )
        assert settings.project_path == Path.home() / "Game"
        assert settings.preferences_path is None
        assert settings.log_level == "debug"
        assert settings.user_extensions == ["txt", "xml"]

    def test_rejects_unknown_log_level(self) -> None:
        """Unknown log levels are errors."""
        with pytest.raises(ValidationError):
            Settings(log_level="loud")


def test_config_defaults_reach_commands(config_file: Path, tmp_path: Path) -> None:
    """Values from [defaults] become command option defaults."""
    result = runner.invoke(app, ["--config", str(config_file), "settings", "set-extensions", "cs;json"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "prefs.json").exists()


def test_config_section_overrides_defaults(config_file: Path) -> None:
    """A command section overrides [defaults]; an invalid level there is reported."""
    config_file.write_text(config_file.read_text().replace('"ERROR"', '"LOUD"'))
    result = runner.invoke(app, ["--config", str(config_file), "settings", "show"])
    assert result.exit_code == 1
    assert "Unknown log level" in result.output


def test_set_config_defaults_nests_groups(config_file: Path) -> None:
    """Group sections nest under the group; dashed command names match."""
    config_file.write_text(config_file.read_text() + '\n[sync-all]\nunity-path = "/opt/Unity"\n')
    ctx = Context(command=typer.main.get_command(app))
    set_config_defaults(ctx, str(config_file))
    assert ctx.default_map["open"]["log_level"] == "INFO"
    assert ctx.default_map["sync-all"]["unity_path"] == "/opt/Unity"
    assert ctx.default_map["settings"]["show"]["log_level"] == "ERROR"
    assert ctx.default_map["settings"]["set-arguments"]["log_level"] == "INFO"


def test_command_defaults_detects_groups_by_subcommands() -> None:
    """Anything with a ``commands`` mapping is treated as a group."""
    leaf = SimpleNamespace(name="show")
    group = SimpleNamespace(name="settings", commands={"show": leaf, "set-arguments": leaf})
    defaults = _command_defaults(
        group,
        {"log_level": "warning"},
        {"project_path": "/game", "show": {"log_level": "error"}},
    )
    assert defaults["project_path"] == "/game"
    assert defaults["show"] == {"log_level": "error", "project_path": "/game"}
    assert defaults["set-arguments"] == {"log_level": "warning", "project_path": "/game"}
    assert _command_defaults(leaf, {"log_level": "info"}, {}) == {"log_level": "info"}
