"""Centralized logging configuration for subcue.

This module provides consistent logging setup for the CLI and for library
callers that want the same format. Configuration respects the
``SUBCUE_LOG_LEVEL`` environment variable and provides sensible defaults.
"""

from __future__ import annotations

import logging
import sys
from typing import Literal

from subcue.utils.constant import LOG_LEVEL

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: LogLevel | None, verbose: bool, quiet: bool) -> int:
    """Pick the effective numeric log level.

    Args:
        level: Explicit level name; wins over the flags.
        verbose: Request DEBUG output.
        quiet: Request CRITICAL-only output.

    Returns:
        int: A ``logging`` level constant.
    """
    if level is not None:
        return getattr(logging, level.upper())
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.CRITICAL
    return getattr(logging, LOG_LEVEL, logging.INFO)


def configure_logging(
    *,
    level: LogLevel | None = None,
    verbose: bool = False,
    quiet: bool = False,
    format_string: str | None = None,
) -> None:
    """Configure centralized logging for the application.

    This should be called once at application startup (CLI entry). Library
    code only ever obtains loggers and never configures handlers itself.

    Args:
        level: Explicit log level (overrides verbose/quiet).
        verbose: Enable verbose logging (DEBUG level).
        quiet: Suppress everything below CRITICAL, including skipped-block
            warnings.
        format_string: Custom log format (uses default if None).

    Examples:
        >>> # CLI verbose mode
        >>> configure_logging(verbose=True)

        >>> # Production quiet mode
        >>> configure_logging(quiet=True)
    """
    log_level = _resolve_level(level, verbose, quiet)

    if format_string is None:
        format_string = _DEFAULT_FORMAT

    logging.basicConfig(
        level=log_level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,  # stdout carries decoded output
        force=True,  # Reconfigure even if already configured
    )

    if not quiet:
        logger = logging.getLogger(__name__)
        logger.debug("Logging configured: level=%s", logging.getLevelName(log_level))


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__ of calling module).

    Returns:
        Configured logger instance.

    Examples:
        >>> logger = get_logger(__name__)
        >>> logger.info("Decoding started")
    """
    return logging.getLogger(name)
