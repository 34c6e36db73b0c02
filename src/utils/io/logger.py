"""Centralized logging facade.

Every module reports through :class:`Logger` instead of creating its own
``logging.Logger``. Output goes to a single named logger whose level is taken
from the ``LOG_LEVEL`` environment variable, and re-applied by
:class:`ParameterLoader` once ``.env`` has been loaded.
"""

import logging
import os
import sys
from typing import Optional

_LOGGER_NAME = "market_sessions"
_SUCCESS_LEVEL = 25
_SEPARATOR = "-" * 72

logging.addLevelName(_SUCCESS_LEVEL, "SUCCESS")


def _parse_level(name: Optional[str]) -> Optional[int]:
    """Return the numeric level for *name*, ``INFO`` when blank, ``None`` if unknown."""
    if name is None or len(name.strip()) == 0:
        return logging.INFO
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else None


def _build_logger() -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(_parse_level(os.getenv("LOG_LEVEL")) or logging.INFO)
    return logger


class Logger:
    """Static wrappers around the shared application logger."""

    _LOGGER = _build_logger()

    @staticmethod
    def set_level(name: Optional[str]) -> None:
        """Apply a level by name; unknown names fall back to ``INFO`` with a warning."""
        level = _parse_level(name)
        if level is None:
            Logger._LOGGER.setLevel(logging.INFO)
            Logger._LOGGER.warning(f"Unknown LOG_LEVEL '{name}', using INFO")
            return
        Logger._LOGGER.setLevel(level)

    @staticmethod
    def level() -> int:
        """Return the numeric level currently in effect."""
        return Logger._LOGGER.level

    @staticmethod
    def debug(message: str) -> None:
        """Log a diagnostic message."""
        Logger._LOGGER.debug(message)

    @staticmethod
    def info(message: str) -> None:
        """Log an informational message."""
        Logger._LOGGER.info(message)

    @staticmethod
    def success(message: str) -> None:
        """Log the successful completion of a step."""
        Logger._LOGGER.log(_SUCCESS_LEVEL, message)

    @staticmethod
    def warning(message: str) -> None:
        """Log a recoverable problem."""
        Logger._LOGGER.warning(message)

    @staticmethod
    def error(message: str) -> None:
        """Log an error."""
        Logger._LOGGER.error(message)

    @staticmethod
    def separator() -> None:
        """Log a visual separator line."""
        Logger._LOGGER.info(_SEPARATOR)
