"""Tests for the console output helpers."""

from __future__ import annotations

import pytest
import typer

from unity_nvim._output import error, info, success


def test_info_prints_message_as_is(capsys: pytest.CaptureFixture[str]) -> None:
    """Info messages get an arrow and no extra styling."""
    info("Running: nvim --remote x")
    assert capsys.readouterr().out.strip() == "→ Running: nvim --remote x"


def test_success(capsys: pytest.CaptureFixture[str]) -> None:
    """Success messages get a check mark."""
    success("Arguments updated")
    assert "✓ Arguments updated" in capsys.readouterr().out


def test_error_exits() -> None:
    """Errors exit with status 1."""
    with pytest.raises(typer.Exit) as exc_info:
        error("boom")
    assert exc_info.value.exit_code == 1
