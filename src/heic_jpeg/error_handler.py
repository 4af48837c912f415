"""Turn pipeline errors into failed conversion results."""

from __future__ import annotations

import logging
import traceback
from typing import Any

from .errors import (
    AppError,
    ConfigError,
    ConversionFailedError,
    ErrorCategory,
    FileIOError,
    FileTooLargeError,
    InvalidHeicFileError,
    InvalidPathError,
    MissingFileError,
    SaveFailedError,
    TempFileError,
)
from .logging_config import get_logger
from .models import ConversionResult, ConversionStatus


class ErrorHandler:
    """Handle errors with appropriate logging and user feedback.

    Every error is classified, logged with its context and converted into a
    ``ConversionResult`` with FAILED status, so a front-end always receives
    a result carrying the error kind and a readable message.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize the error handler.

        Args:
            logger: Optional logger instance. If None, creates a default logger.
        """
        self.logger = logger or get_logger(__name__)

    def handle_error(self, error: Exception, context: dict[str, Any]) -> ConversionResult:
        """Log ``error`` and return a FAILED result describing it.

        Args:
            error: The exception that occurred
            context: Context information (e.g., input_path, operation)

        Returns:
            ConversionResult with FAILED status and error message
        """
        category = self._classify_error(error)
        self._log_error(error, category, context)

        if isinstance(error, AppError):
            kind = error.kind
            message = str(error)
        else:
            kind = None
            message = f"Unexpected error: {error}"

        return ConversionResult(
            input_path=str(context.get("input_path", "")),
            output_path=None,
            status=ConversionStatus.FAILED,
            error_kind=kind,
            error_message=message,
            processing_time=context.get("processing_time", 0.0),
        )

    def _classify_error(self, error: Exception) -> ErrorCategory:
        """Classify error into category for appropriate handling."""
        if isinstance(error, InvalidPathError):
            return ErrorCategory.SECURITY
        if isinstance(error, (MissingFileError, FileTooLargeError, InvalidHeicFileError)):
            return ErrorCategory.INPUT_VALIDATION
        if isinstance(error, (ConversionFailedError, SaveFailedError, TempFileError, FileIOError)):
            return ErrorCategory.PROCESSING
        if isinstance(error, ConfigError):
            return ErrorCategory.CONFIGURATION
        return ErrorCategory.UNKNOWN

    def _log_error(
        self, error: Exception, category: ErrorCategory, context: dict[str, Any]
    ) -> None:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        self.logger.error(
            f"Error [{category.value}]: {type(error).__name__}: {error}",
            extra={"context": context_str},
        )

        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                f"Stack trace for error in {context.get('input_path', 'unknown')}:\n"
                f"{''.join(traceback.format_exception(type(error), error, error.__traceback__))}"
            )
