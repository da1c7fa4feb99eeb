# pstr Logging
#
# Thin layer over the standard library logging package.
# The library itself only emits DEBUG records under the "pstr" logger;
# log_init() is for programs (the pstr CLI, the acceptance suite) that
# want those records on the console.

import logging
import os
import sys
from typing import Optional

# ============================================================================
# Log Levels
# ============================================================================

LOG_DEBUG: int = 0
LOG_INFO: int = 1
LOG_WARN: int = 2
LOG_ERROR: int = 3
LOG_FATAL: int = 4

_level_names = ["DEBUG", "INFO", "WARN", "ERROR", "FATAL"]
_level_prefixes = ["[DEBUG] ", "[INFO]  ", "[WARN]  ", "[ERROR] ", "[FATAL] "]

_stdlib_levels = [logging.DEBUG, logging.INFO, logging.WARNING,
                  logging.ERROR, logging.CRITICAL]

ROOT_LOGGER = "pstr"
ENV_LOG_LEVEL = "PSTR_LOG_LEVEL"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())

_console_handler: Optional[logging.Handler] = None


class PrefixFormatter(logging.Formatter):
    """Formats records as "[LEVEL] logger: message"."""

    def format(self, record: logging.LogRecord) -> str:
        level = _from_stdlib(record.levelno)
        message = record.getMessage()
        if record.exc_info:
            message = message + "\n" + self.formatException(record.exc_info)
        return f"{_level_prefixes[level]}{record.name}: {message}"


def _from_stdlib(levelno: int) -> int:
    level = LOG_DEBUG
    for i, stdlib_level in enumerate(_stdlib_levels):
        if levelno >= stdlib_level:
            level = i
    return level


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the pstr namespace."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")

# ============================================================================
# Configuration
# ============================================================================

def log_level_name(level: int) -> str:
    if 0 <= level <= LOG_FATAL:
        return _level_names[level]
    return "UNKNOWN"


def log_parse_level(name: str) -> int:
    """Parse a level name (DEBUG, INFO, WARN, ERROR, FATAL).

    Case-insensitive; WARNING and CRITICAL are accepted as aliases.
    Returns -1 if the name is unknown.
    """
    upper = name.strip().upper()
    if upper == "WARNING":
        upper = "WARN"
    elif upper == "CRITICAL":
        upper = "FATAL"
    if upper in _level_names:
        return _level_names.index(upper)
    return -1


def log_set_level(level: int):
    """Set the minimum level recorded by the pstr logger (clamped)."""
    if level < LOG_DEBUG:
        level = LOG_DEBUG
    if level > LOG_FATAL:
        level = LOG_FATAL
    logging.getLogger(ROOT_LOGGER).setLevel(_stdlib_levels[level])


def log_get_level() -> int:
    return _from_stdlib(logging.getLogger(ROOT_LOGGER).getEffectiveLevel())


def log_init(level: Optional[int] = None, stream=None) -> logging.Handler:
    """Attach a console handler to the pstr logger.

    When level is None the PSTR_LOG_LEVEL environment variable is used,
    falling back to WARN. Calling again replaces the previous handler.
    """
    global _console_handler

    if level is None:
        level = log_parse_level(os.environ.get(ENV_LOG_LEVEL, "WARN"))
        if level < 0:
            level = LOG_WARN

    logger = logging.getLogger(ROOT_LOGGER)
    if _console_handler is not None:
        logger.removeHandler(_console_handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(PrefixFormatter())
    logger.addHandler(handler)
    _console_handler = handler

    log_set_level(level)
    return handler


def log_deinit():
    """Detach the console handler installed by log_init()."""
    global _console_handler
    if _console_handler is not None:
        logging.getLogger(ROOT_LOGGER).removeHandler(_console_handler)
        _console_handler = None
