"""Logging configuration for the ECC console."""

import logging.config
from typing import Dict, Any


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration dictionary.

    Args:
        level: Level for the ``ecc_console`` logger
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "transition": {
                "format": "%(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG",
                "formatter": "detailed" if level == "DEBUG" else "default",
                "stream": "ext://sys.stdout",
            },
            "transition_console": {
                "class": "logging.StreamHandler",
                "level": "INFO",
                "formatter": "transition",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "ecc_console": {
                "level": level,
                "handlers": ["console"],
                "propagate": False,
            },
            "ecc_console.transitions": {
                "level": "INFO",
                "handlers": ["transition_console"],
                "propagate": False,
            },
        },
        "root": {
            "level": "WARNING",
            "handlers": ["console"],
        },
    }


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    logging.config.dictConfig(get_logging_config(level))

    logger = logging.getLogger(__name__)
    logger.debug("Logging configuration initialized")
