"""Error definitions for the HEIC to JPEG converter.

Every stage of the conversion pipeline reports into one closed set of
error kinds. Each exception carries only the data needed to render its
user-facing message; none of them holds an open file or process handle.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Closed enumeration of domain error kinds."""

    FILE_NOT_FOUND = "FileNotFound"
    INVALID_PATH = "InvalidPath"
    FILE_TOO_LARGE = "FileTooLarge"
    INVALID_HEIC_FILE = "InvalidHeicFile"
    CONVERSION_FAILED = "ConversionFailed"
    SAVE_FAILED = "SaveFailed"
    TEMP_FILE_FAILED = "TempFileFailed"
    CONFIG_ERROR = "ConfigError"
    IO_ERROR = "IoError"


class ErrorCategory(Enum):
    """Categories of errors for classification."""

    INPUT_VALIDATION = "input_validation"
    SECURITY = "security"
    PROCESSING = "processing"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class AppError(Exception):
    """Base exception for all converter errors."""

    kind: ErrorKind
    prefix = "Error"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)

    def __str__(self) -> str:
        return f"{self.prefix}: {self.reason}"

    def to_dict(self) -> dict[str, str]:
        """Serialize as a tagged ``{"type", "message"}`` mapping for a front-end."""
        return {"type": self.kind.value, "message": str(self)}


class MissingFileError(AppError):
    """Raised when a path does not name an existing regular file."""

    kind = ErrorKind.FILE_NOT_FOUND
    prefix = "File not found"

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(path)


class InvalidPathError(AppError):
    """Raised when a path is empty, unresolvable or attempts traversal."""

    kind = ErrorKind.INVALID_PATH
    prefix = "Invalid file path"


class FileTooLargeError(AppError):
    """Raised when a file exceeds the configured size ceiling."""

    kind = ErrorKind.FILE_TOO_LARGE

    def __init__(self, file_size_mb: int, max_size_mb: int) -> None:
        self.file_size_mb = file_size_mb
        self.max_size_mb = max_size_mb
        super().__init__(f"{file_size_mb}MB > {max_size_mb}MB")

    def __str__(self) -> str:
        return f"File size {self.file_size_mb}MB exceeds maximum {self.max_size_mb}MB"


class InvalidHeicFileError(AppError):
    """Raised when a file is not a HEIC/HEIF container."""

    kind = ErrorKind.INVALID_HEIC_FILE
    prefix = "Invalid HEIC/HEIF file"


class ConversionFailedError(AppError):
    """Raised when the conversion backend fails."""

    kind = ErrorKind.CONVERSION_FAILED
    prefix = "Conversion failed"


class SaveFailedError(AppError):
    """Raised when a converted file cannot be copied to its destination."""

    kind = ErrorKind.SAVE_FAILED
    prefix = "Save failed"


class TempFileError(AppError):
    """Raised when a temporary file cannot be created or removed."""

    kind = ErrorKind.TEMP_FILE_FAILED
    prefix = "Temporary file operation failed"


class ConfigError(AppError):
    """Raised when a configuration value is explicitly validated and rejected."""

    kind = ErrorKind.CONFIG_ERROR
    prefix = "Configuration error"


class FileIOError(AppError):
    """Raised when a filesystem operation fails."""

    kind = ErrorKind.IO_ERROR
    prefix = "I/O error"

    @classmethod
    def from_os_error(cls, error: OSError) -> FileIOError:
        return cls(str(error))
