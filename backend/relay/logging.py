"""
Logging configuration.

Console output only, with a terse format for INFO and a located format
(module.function:line) for everything else.
"""

import logging
import sys
from typing import Any, Optional

from .settings import app_settings

DATE_FMT = "%Y-%m-%d %H:%M:%S"


class HumanReadableFormatter(logging.Formatter):
    """Picks a format string based on the record level."""

    INFO_FMT = "%(asctime)s - %(levelname)s: %(message)s"
    ERROR_FMT = (
        "%(asctime)s - %(levelname)s: "
        "%(module)s.%(funcName)s:%(lineno)d - %(message)s"
    )

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._info = logging.Formatter(self.INFO_FMT, datefmt=DATE_FMT)
        self._located = logging.Formatter(self.ERROR_FMT, datefmt=DATE_FMT)

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.INFO:
            return self._info.format(record)
        return self._located.format(record)


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger with a single console handler.

    Args:
        level: Log level name. Defaults to ``app_settings.log_level``.

    Returns:
        The configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, (level or app_settings.log_level).upper()))

    # Clear existing handlers to avoid duplicates on repeated setup
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(HumanReadableFormatter())
    logger.addHandler(console_handler)

    return logger
