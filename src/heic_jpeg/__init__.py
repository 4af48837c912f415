"""HEIC to JPEG Converter.

Validates an untrusted HEIC/HEIF file path and converts the file to JPEG,
using the macOS ``sips`` tool where available and Pillow with pillow-heif
elsewhere.
"""

__version__ = "0.1.0"

from heic_jpeg.config import (
    get_max_file_size_from_env,
    get_quality_from_env,
    load_config,
    load_settings,
    validate_jpeg_quality,
)
from heic_jpeg.converter import (
    ConversionBackend,
    PillowBackend,
    SipsBackend,
    select_backend,
)
from heic_jpeg.error_handler import ErrorHandler
from heic_jpeg.errors import (
    AppError,
    ConfigError,
    ConversionFailedError,
    ErrorCategory,
    ErrorKind,
    FileIOError,
    FileTooLargeError,
    InvalidHeicFileError,
    InvalidPathError,
    MissingFileError,
    SaveFailedError,
    TempFileError,
)
from heic_jpeg.filesystem import FileSystemHandler, format_file_size
from heic_jpeg.logging_config import get_logger, setup_logging
from heic_jpeg.models import (
    AppConfig,
    ConversionJob,
    ConversionResult,
    ConversionSettings,
    ConversionStatus,
    ResolvedFile,
    StorageSettings,
    UiSettings,
)
from heic_jpeg.orchestrator import ConversionOrchestrator
from heic_jpeg.validation import ContentValidator

__all__ = [
    "AppConfig",
    "AppError",
    "ConfigError",
    "ContentValidator",
    "ConversionBackend",
    "ConversionFailedError",
    "ConversionJob",
    "ConversionOrchestrator",
    "ConversionResult",
    "ConversionSettings",
    "ConversionStatus",
    "ErrorCategory",
    "ErrorHandler",
    "ErrorKind",
    "FileIOError",
    "FileSystemHandler",
    "FileTooLargeError",
    "InvalidHeicFileError",
    "InvalidPathError",
    "MissingFileError",
    "PillowBackend",
    "ResolvedFile",
    "SaveFailedError",
    "SipsBackend",
    "StorageSettings",
    "TempFileError",
    "UiSettings",
    "format_file_size",
    "get_logger",
    "get_max_file_size_from_env",
    "get_quality_from_env",
    "load_config",
    "load_settings",
    "select_backend",
    "setup_logging",
    "validate_jpeg_quality",
]
