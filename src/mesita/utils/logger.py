"""Logging helpers for mesita.

Wraps the standard library logging so every mesita logger lives under the
``mesita`` namespace and can be configured in one place.

Example:
    >>> from mesita.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("scanning table at line %d", 3)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance under the "mesita." prefix

    Example:
        >>> get_logger("lint").name
        'mesita.lint'
    """
    if not (name == "mesita" or name.startswith("mesita.")):
        name = f"mesita.{name}"
    return logging.getLogger(name)
