"""
Logging Configuration
Library modules only create loggers under the ``dubins_atsp`` namespace;
an application calls setup_logging() once to get the edge warnings and, at
DEBUG, the per-pair geometry traces.
"""

import logging
import sys

from beartype.typing import Optional, Union

__all__ = ["LOGGER_NAME", "setup_logging"]

LOGGER_NAME = "dubins_atsp"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# traces come from several helpers of the same module
_DEBUG_FORMAT = "%(asctime)s - %(name)s.%(funcName)s - %(levelname)s - %(message)s"


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        value = getattr(logging, level.strip().upper(), None)
        if not isinstance(value, int):
            raise ValueError(f"Unknown logging level: {level!r}")
        return value
    return level


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach handlers to the package logger, replacing any from an earlier call.

    Args:
        level: Level number or name ("DEBUG" also traces circle centers,
            separations and candidate lengths)
        log_file: Also write to this file, truncated first

    Returns:
        The package logger
    """
    level = _resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_DEBUG_FORMAT if level <= logging.DEBUG else _FORMAT, datefmt="%H:%M:%S")
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %d handler(s) at %s", len(handlers), logging.getLevelName(level))
    return logger
