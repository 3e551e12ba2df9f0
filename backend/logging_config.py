"""Logging setup for the service."""

import logging

from config import LOG_LEVEL

LOGGER_NAME = "padlock"


def setup_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """Attach a console handler to the application logger.

    Safe to call more than once; existing handlers are replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(console_handler)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the application logger for *name*."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
