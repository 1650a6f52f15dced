"""Logging setup for the CLI entry point.

Records go to stderr through a :class:`rich.logging.RichHandler` that
shares the stderr console — stdout is reserved for Assuan replies.
"""

from __future__ import annotations

import logging

from pinentry_rofi.cli.console import get_rich_console

LOGGER_NAME: str = "pinentry_rofi"
DEFAULT_LEVEL: str = "WARNING"

_HANDLER_ATTR = "_pinentry_rofi_handler"


def parse_level(value: str | None, default: int = logging.WARNING) -> int:
    """Map a level name or number to a :mod:`logging` level."""
    if not value:
        return default
    value = value.strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


def configure_logging(level: str | None = None) -> logging.Logger:
    """Install the Rich stderr handler on the package logger.

    Calling it again only adjusts the level.
    """
    from rich.logging import RichHandler

    logger = logging.getLogger(LOGGER_NAME)
    resolved = parse_level(level)
    logger.setLevel(resolved)
    logger.propagate = False

    for existing in logger.handlers:
        if getattr(existing, _HANDLER_ATTR, False):
            existing.setLevel(resolved)
            return logger

    handler = RichHandler(
        console=get_rich_console(),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    setattr(handler, _HANDLER_ATTR, True)
    logger.addHandler(handler)
    return logger
