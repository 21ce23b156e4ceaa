"""Shared logger initialization for the CLI.

Usage:
    from asanacli.utils.logger import get_logger
    log = get_logger(__name__)
    log.info("message")
"""
from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# stderr, so --json output on stdout stays parseable
_DEFAULT_HANDLER = RichHandler(
    console=Console(stderr=True), rich_tracebacks=True, show_path=False
)

_FORMAT = "%(message)s"  # rich handler already adds time & level


def configure_logging(level: Optional[int] = None) -> None:
    """Idempotently configure root logger with the rich handler."""
    root = logging.getLogger()
    if _DEFAULT_HANDLER in root.handlers:
        if level is not None:
            root.setLevel(level)
        return
    root.setLevel(logging.WARNING if level is None else level)
    _DEFAULT_HANDLER.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(_DEFAULT_HANDLER)


def get_logger(name: str = __name__, level: Optional[int] = None) -> logging.Logger:
    """Return a module-level logger (configuring root on first call)."""
    configure_logging()
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
