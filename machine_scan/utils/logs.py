"""Logging setup for the command-line interface."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(console: Console, verbose: bool = False, quiet: bool = False) -> None:
    """Route library logging through rich on stderr."""
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR

    handler = RichHandler(
        console=Console(stderr=True, no_color=console.no_color),
        show_time=False,
        show_path=False,
    )
    root = logging.getLogger("machine_scan")
    root.handlers = [handler]
    root.setLevel(level)
    root.propagate = False
