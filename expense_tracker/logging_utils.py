"""Mini README: Application-wide logging helpers for the expense tracker.

Structure:
    * configure_root_logger - one-time handler setup, later calls adjust level.
    * get_logger - factory returning module loggers with baseline configuration.

Usage:
    Modules declare ``LOGGER = get_logger(__name__)`` at import time, which
    installs the handler at WARNING so a plain ``expense list`` prints only the
    listing. The ``expense`` entry point later calls ``configure_root_logger``
    with ``EXPENSE_TRACKER_LOG_LEVEL``; because module loggers already exist by
    then, repeat calls adjust the root level instead of returning early. Set
    the level to DEBUG to trace each store operation and connection, or INFO
    to see inserts, deletions and schema creation. Records go to stderr and
    never mix with the expense listings on stdout.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False
DEFAULT_LEVEL = logging.WARNING


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Install the stderr handler once and apply ``level`` when given."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        if level is not None:
            root_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(DEFAULT_LEVEL if level is None else level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
