"""Logging setup for the tabular agent.

Everything logs under the ``tabular_agent`` logger hierarchy to stderr, so
stdout stays free for tool results in the CLI. The level comes from the CLI
flag when given, else from ``Settings.log_level`` (``TABULAR_AGENT_LOG_LEVEL``).
"""

import logging
import sys

PACKAGE_LOGGER = "tabular_agent"
DEFAULT_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: str | None) -> int:
    name = (level or DEFAULT_LEVEL).upper()
    numeric_level = getattr(logging, name, None)
    if not isinstance(numeric_level, int):
        print(f"Warning: Invalid log level '{name}', using {DEFAULT_LEVEL}", file=sys.stderr)
        return logging.WARNING
    return numeric_level


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the package logger.

    Safe to call more than once: the stderr handler is installed the first
    time and only its level changes afterwards.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR). Defaults to WARNING.

    Returns:
        The ``tabular_agent`` logger.
    """
    numeric_level = _resolve_level(level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(numeric_level)

    # httpx logs every catalog request at INFO
    logging.getLogger("httpx").setLevel(
        numeric_level if numeric_level <= logging.DEBUG else logging.WARNING
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Module logger, e.g. ``get_logger(__name__)``."""
    return logging.getLogger(name)
