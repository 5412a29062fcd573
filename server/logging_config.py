"""Logging configuration for the server process.

The flowforge library only creates module loggers; handlers and levels are
set up here, once, when the app starts.
"""

import logging
import os
import sys


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger with an ISO timestamp format.

    Args:
        level: log level name; defaults to LOG_LEVEL from the environment, or INFO
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    # remove existing handlers so reloads do not duplicate output
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    root_logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
