"""Logging configuration for the HEIC to JPEG converter.

All modules log through child loggers of the ``heic_jpeg`` namespace.
The shell calls ``setup_logging`` once at startup; the library itself never
configures handlers. The default level comes from ``HEIC_LOG_LEVEL`` and
falls back to INFO.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

from .constants import ENV_LOG_LEVEL

if TYPE_CHECKING:
    from pathlib import Path

ROOT_LOGGER_NAME = "heic_jpeg"


class PlatformIndependentFormatter(logging.Formatter):
    """Formatter that normalizes line endings to LF.

    Diagnostic text captured from external tools may carry CRLF endings;
    this keeps log output consistent across platforms.
    """

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        return formatted.replace("\r\n", "\n").replace("\r", "\n")


def _parse_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")
    return numeric_level


def get_level_from_env(default: int = logging.INFO) -> int:
    """Read the log level from ``HEIC_LOG_LEVEL``.

    Unknown level names are ignored and ``default`` is returned.
    """
    level_name = os.getenv(ENV_LOG_LEVEL)
    if not level_name:
        return default
    try:
        return _parse_level(level_name)
    except ValueError:
        return default


def setup_logging(
    level: int | str | None = None,
    verbose: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Set up logging for the ``heic_jpeg`` package.

    Args:
        level: Base logging level; None reads ``HEIC_LOG_LEVEL`` (default INFO)
        verbose: Enable verbose logging (forces DEBUG and a detailed format)
        log_file: Optional path to an additional log file

    Returns:
        The configured package logger
    """
    if verbose:
        effective_level = logging.DEBUG
    elif level is None:
        effective_level = get_level_from_env()
    else:
        effective_level = _parse_level(level)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(effective_level)
    logger.handlers.clear()

    if verbose:
        format_string = (
            "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
        )
    else:
        format_string = "%(asctime)s - %(levelname)s - %(message)s"
    formatter = PlatformIndependentFormatter(format_string, datefmt="%Y-%m-%d %H:%M:%S")

    # stderr keeps stdout free for command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(effective_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(effective_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Failed to set up file logging: {e}")

    logger.debug(
        f"Logging configured: level={logging.getLevelName(effective_level)}, "
        f"verbose={verbose}, log_file={log_file}"
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger under the ``heic_jpeg`` namespace.

    Args:
        name: Name of the module (typically __name__)
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def log_operation_start(logger: logging.Logger, operation: str, **context: object) -> None:
    """Log the start of an operation with context."""
    context_str = ", ".join(f"{k}={v}" for k, v in context.items())
    logger.info(f"Starting {operation}: {context_str}")


def log_operation_complete(
    logger: logging.Logger,
    operation: str,
    duration: float | None = None,
    **context: object,
) -> None:
    """Log the successful completion of an operation with context."""
    context_str = ", ".join(f"{k}={v}" for k, v in context.items())
    status = "completed successfully"
    if duration is not None:
        logger.info(f"{operation.capitalize()} {status} in {duration:.2f}s: {context_str}")
    else:
        logger.info(f"{operation.capitalize()} {status}: {context_str}")
