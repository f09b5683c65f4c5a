"""
Logging configuration
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Setup the package logger with standard format

    Args:
        level: Level name such as "DEBUG" or "INFO"

    Returns:
        The ``ticketify`` logger; module loggers propagate to it
    """
    logger = logging.getLogger("ticketify")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Reconfiguring only adjusts the level.
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
