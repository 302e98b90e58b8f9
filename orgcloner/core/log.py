"""Logging setup: one RichHandler on the root logger."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

DATE_FORMAT = "%H:%M:%S"


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route log records through rich so they print above the live display.

    Idempotent: a second call only adjusts the level.
    """
    level = logging.DEBUG if verbose else logging.INFO
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if any(isinstance(h, RichHandler) for h in root_logger.handlers):
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
        log_time_format=DATE_FORMAT,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
