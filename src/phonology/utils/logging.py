"""
Logging configuration for the phonology toolkit.

This module provides centralized logging setup with structured logging support
and consistent formatting across all components, plus the diagnostics channel
used to report rejected definitions and failed segment operations.
"""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from phonology.utils.config import get_settings
from phonology.utils.errors import PhonologyError

DIAGNOSTICS_LOGGER = "phonology.diagnostics"


def setup_logging(
    name: str | None = None,
    level: str | None = None,
    structured: bool = False,
    log_file: Path | None = None
) -> logging.Logger:
    """Setup logging configuration.

    Args:
        name: Logger name (defaults to calling module)
        level: Logging level (INFO, DEBUG, etc.)
        structured: Enable JSON structured logging
        log_file: Optional log file path

    Returns:
        Configured logger instance
    """
    if name is None:
        name = __name__

    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    if level is None:
        level = "INFO"

    logger.setLevel(getattr(logging, level.upper()))

    if structured:
        formatter = JsonFormatter(
            fmt='%(asctime)s %(name)s %(levelname)s %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def configure_root_logging(
    level: str = "INFO",
    structured: bool = False,
    log_file: Path | None = None
) -> None:
    """Configure root logging for the entire application.

    Args:
        level: Root logging level
        structured: Enable JSON structured logging
        log_file: Optional log file path
    """
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
            "structured": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "structured" if structured else "standard",
                "stream": "ext://sys.stderr"
            }
        },
        "root": {
            "level": level,
            "handlers": ["console"]
        },
        "loggers": {
            "phonology": {
                "level": level,
                "handlers": ["console"],
                "propagate": False
            }
        }
    }

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        config["handlers"]["file"] = {
            "class": "logging.FileHandler",
            "level": level,
            "formatter": "structured" if structured else "standard",
            "filename": str(log_file)
        }
        config["root"]["handlers"].append("file")
        config["loggers"]["phonology"]["handlers"].append("file")

    logging.config.dictConfig(config)


class LoggerMixin:
    """Mixin class to add logging capabilities to any class."""

    @property
    def logger(self) -> logging.Logger:
        """Get logger for this class."""
        return logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")


def diagnostic(error: PhonologyError, **extra: Any) -> PhonologyError:
    """Report a recoverable failure on the diagnostics logger.

    The record carries the error code and context as extra fields, so the
    JSON formatter renders them as keys. Nothing is logged when diagnostics
    are disabled in settings. The error is returned for chaining.
    """
    if get_settings().diagnostics_enabled:
        logging.getLogger(DIAGNOSTICS_LOGGER).warning(
            error.message,
            extra={"error_code": error.error_code, "error_context": error.context, **extra},
        )
    return error

