"""Logging configuration for hoopsql.

Log records go to stderr through Rich so they never mix with query
results printed on stdout.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "hoopsql"


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: str | Path | None = None,
    level: str | None = None,
) -> logging.Logger:
    """Configure the ``hoopsql`` logger with a rich handler.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to also write logs to
        level: Explicit level name, used when neither flag is set

    Returns:
        The configured ``hoopsql`` logger
    """
    if quiet:
        resolved = logging.ERROR
    elif verbose:
        resolved = logging.DEBUG
    elif level:
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING
    else:
        resolved = logging.WARNING

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handlers.append(file_handler)

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    handlers[0].setFormatter(logging.Formatter("%(message)s"))
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(resolved)
    logger.propagate = False

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the ``hoopsql`` namespace.

    Args:
        name: Module name (e.g., ``hoopsql.runner`` or ``runner``)
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
