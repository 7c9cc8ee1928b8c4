"""Logging configuration for yt2mp3."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Per-request chatter from the HTTP stack
NOISY_LOGGERS = ["httpx", "httpcore", "uvicorn.access"]


def setup_logging(level: str = "INFO", name: Optional[str] = None) -> logging.Logger:
    """
    Configure a logger (the root logger by default) to write to stdout.

    Calling it again only changes the level; no second handler is added.

    Args:
        level: Log level name; unknown names fall back to INFO
        name: Logger name

    Returns:
        The configured logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(log_level)
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.setLevel(log_level)
    logger.addHandler(handler)

    return logger


def silence_noisy_loggers():
    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
