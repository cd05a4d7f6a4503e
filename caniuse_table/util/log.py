"""Logging setup for the command line entry point."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from ..constants import ENV_DEBUG

PACKAGE_LOGGER = "caniuse_table"


def debug_enabled() -> bool:
    """Check debug mode env flag."""
    return os.environ.get(ENV_DEBUG, "").strip() == "1"


def reset_logging() -> None:
    """Detach the handlers installed by configure_logging."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Route package logs to stderr through rich."""
    reset_logging()
    logger = logging.getLogger(PACKAGE_LOGGER)
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose or debug_enabled() else logging.INFO)
    return logger
