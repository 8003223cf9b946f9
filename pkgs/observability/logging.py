"""Logging configuration for the recurrence explorer."""

import logging
import sys

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}

FORMATS = {
    "structured": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    "plain": '%(levelname)s - %(message)s',
}


def setup_logging(level: str = "INFO", format_type: str = "structured") -> logging.Logger:
    """Route all loggers to stdout and return the 'RecurrenceCore' logger."""
    log_level = LEVELS.get(str(level).upper(), logging.INFO)
    formatter = logging.Formatter(FORMATS.get(format_type, FORMATS["plain"]))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logger = logging.getLogger('RecurrenceCore')
    logger.setLevel(log_level)
    return logger
