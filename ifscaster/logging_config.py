"""
Logging Configuration
Attaches console (and optionally file) output to the 'ifscaster' logger.
Modules log through logging.getLogger(__name__) and inherit these handlers.
"""
import logging
import sys
from typing import Optional, Union

from ifscaster.errors import ConfigError

LOGGER_NAME = "ifscaster"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    """Turn "debug", "INFO", 10 ... into a logging level number."""
    if isinstance(level, int):
        return level
    number = logging.getLevelName(str(level).upper())
    if not isinstance(number, int):
        raise ConfigError(f"unknown log level: {level!r}")
    return number


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the package logger.

    Args:
        level: Logging level as a number or a name such as "DEBUG".
        log_file: Optional path; the file is truncated on each start.
    """
    level = resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # calling twice (tests, restarts) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized at %s.", logging.getLevelName(level))
    return logger
