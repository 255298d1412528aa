"""Minimal logging utilities for gomin.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from gomin.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsing file")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "gomin." prefix.

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'gomin.mymodule'
    """
    if not (name == "gomin" or name.startswith("gomin.")):
        name = f"gomin.{name}"
    return logging.getLogger(name)
