"""Console logging for the verman CLI.

Library modules log through ``logging.getLogger(__name__)``; the CLI calls
:func:`setup_logging` once to route the ``verman`` logger to a Rich handler
on stderr.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "verman"
LOG_LEVEL_ENV_VAR = "VERMAN_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def resolve_log_level(level_name: str | None = None) -> int:
    """Resolve a level name (argument, then ``VERMAN_LOG_LEVEL``, then WARNING) to a logging level.

    Unknown names fall back to WARNING.
    """
    name = (level_name or os.environ.get(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.WARNING
    return level


def setup_logging(level_name: str | None = None) -> logging.Logger:
    """Attach a single RichHandler to the ``verman`` logger.

    Removes handlers left by a previous call and stops propagation to the
    root logger.

    Args:
        level_name: Case-insensitive level name, e.g. "debug".

    Returns:
        The configured ``verman`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.propagate = False

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    level = resolve_log_level(level_name)
    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=level < logging.INFO,
        show_path=False,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler.setLevel(level)

    logger.addHandler(console_handler)
    logger.setLevel(level)
    return logger
