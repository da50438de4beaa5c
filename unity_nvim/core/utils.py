"""Console and logging helpers shared by the CLI commands."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()
err_console = Console(stderr=True)


def setup_rich_logging(log_level: str = "warning", *, console: Console | None = None) -> None:
    """Configure logging to use Rich for consistent, pretty output.

    Args:
        log_level: Logging level (debug, info, warning, error).
        console: Optional Rich console to use (defaults to the error console).

    """
    level = getattr(logging, log_level.upper(), logging.WARNING)
    rich_console = console or err_console

    handler = RichHandler(
        console=rich_console,
        show_time=True,
        show_level=True,
        show_path=False,  # Don't show file:line - too verbose
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
