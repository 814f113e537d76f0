"""Minimal logging utilities for spanmark.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications opt in with
``logging.getLogger("spanmark").setLevel(logging.DEBUG)``.

Example:
    >>> from spanmark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("cache bypass for %d chars", 1200)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "spanmark." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("cache")
        >>> logger.name
        'spanmark.cache'
    """
    if not (name == "spanmark" or name.startswith("spanmark.")):
        name = f"spanmark.{name}"
    return logging.getLogger(name)
