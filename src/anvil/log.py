"""Loguru sink setup for the command line."""

from __future__ import annotations

import sys

from loguru import logger

from anvil.config import settings


def configure_logging(verbose: bool | None = None) -> None:
    """Replace loguru's default sink with a single stderr sink.

    Verbose output (plugin resolution and loading details) is emitted at
    DEBUG level and only shown when ``verbose`` is set.
    """
    if verbose is None:
        verbose = settings.verbose
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format=settings.log_format,
        colorize=None,
    )
