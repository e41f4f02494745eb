"""Define utility functions and diagnostics sinks to simplify logging to the CLI."""

from __future__ import annotations

import logging
from typing import Protocol

from rich.console import Console

logger = logging.getLogger(__name__)
console = Console()


def log_info(message: str) -> None:
    """Log the given string to standard output."""
    logger.info(message)


class Context(Protocol):
    """A diagnostics sink receiving formatted messages about planning events."""

    def log_event(self, message: str, *args: object) -> None:
        """Record a printf-style message; delivery is not guaranteed."""
        ...


class LoggingContext:
    """A diagnostics sink that forwards planning events to a standard logger."""

    def __init__(self, event_logger: logging.Logger | None = None, level: int = logging.DEBUG):
        """Initialize the sink with the logger and level used for every event."""
        self.logger = event_logger or logger
        self.level = level

    def log_event(self, message: str, *args: object) -> None:
        """Forward a printf-style message to the logger."""
        self.logger.log(self.level, message, *args)
