"""Conversion orchestrator for the HEIC to JPEG converter.

Runs one request through the pipeline:

1. Load fresh conversion settings
2. Resolve the path string to a canonical regular file
3. Check extension, size and magic bytes, in that order
4. Generate a unique output path and dispatch to the backend

Nothing is re-validated between the magic-byte read and the backend's own
read of the input; a file swapped on disk in between is not detected.
"""

from __future__ import annotations

from time import perf_counter
from typing import TYPE_CHECKING

from .config import load_settings
from .constants import BYTES_PER_MB
from .converter import select_backend
from .error_handler import ErrorHandler
from .errors import AppError
from .filesystem import FileSystemHandler
from .logging_config import get_logger, log_operation_complete, log_operation_start
from .models import ConversionJob, ConversionResult, ConversionStatus
from .validation import ContentValidator

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable
    from pathlib import Path

    from .converter import ConversionBackend
    from .models import ConversionSettings


class ConversionOrchestrator:
    """Validate and convert single HEIC files."""

    def __init__(
        self,
        backend: ConversionBackend | None = None,
        settings_loader: Callable[[], ConversionSettings] = load_settings,
        filesystem: FileSystemHandler | None = None,
        logger: logging.Logger | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            backend: Conversion backend (default: ``select_backend()``)
            settings_loader: Called once per request for fresh settings
            filesystem: File system handler (default: platform temp directory)
            logger: Optional logger instance
        """
        self.logger = logger or get_logger(__name__)
        self.backend = backend or select_backend()
        self.settings_loader = settings_loader
        self.filesystem = filesystem or FileSystemHandler()
        self.validator = ContentValidator()
        self.error_handler = ErrorHandler(self.logger)

    def convert(self, file_path: str) -> Path:
        """Validate ``file_path`` and convert it to a JPEG in the temp directory.

        Args:
            file_path: Untrusted path string supplied by the caller

        Returns:
            Path of the new JPEG; the caller owns the file

        Raises:
            AppError: The first validation or conversion error encountered
        """
        start_time = perf_counter()
        log_operation_start(self.logger, "conversion", file=file_path)
        settings = self.settings_loader()
        self.logger.debug(
            f"Using config: max_file_size={settings.max_file_size_mb}MB, "
            f"jpeg_quality={settings.jpeg_quality}"
        )

        resolved = self.filesystem.validate_path_safety(file_path)

        self.validator.validate_extension(resolved.path)
        file_size = self.validator.measure_file_size(resolved.path)
        self.logger.debug(f"File size: {file_size // BYTES_PER_MB}MB")
        self.validator.validate_file_size(file_size, settings.max_file_size_bytes)
        self.validator.validate_magic_bytes(resolved.path)

        job = ConversionJob(
            input=resolved,
            output_path=self.filesystem.get_output_path(),
            settings=settings,
        )
        output_path = self._dispatch(job)
        log_operation_complete(
            self.logger, "conversion", duration=perf_counter() - start_time, output=output_path
        )
        return output_path

    def _dispatch(self, job: ConversionJob) -> Path:
        try:
            self.backend.convert(job.input.path, job.output_path, job.settings)
        except Exception:
            self.filesystem.remove_partial_output(job.output_path)
            raise
        return job.output_path

    def convert_single(self, file_path: str) -> ConversionResult:
        """Convert ``file_path``, reporting errors in the result instead of raising.

        Returns:
            ConversionResult with SUCCESS and the output path, or FAILED with
            the error kind and message
        """
        start_time = perf_counter()
        try:
            output_path = self.convert(file_path)
        except AppError as e:
            return self.error_handler.handle_error(
                e,
                {
                    "input_path": file_path,
                    "operation": "conversion",
                    "processing_time": perf_counter() - start_time,
                },
            )

        return ConversionResult(
            input_path=file_path,
            output_path=output_path,
            status=ConversionStatus.SUCCESS,
            processing_time=perf_counter() - start_time,
        )
