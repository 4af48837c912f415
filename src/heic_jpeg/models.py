"""Core data models for the HEIC to JPEG converter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .constants import (
    BYTES_PER_MB,
    DEFAULT_CLEANUP_TEMP_FILES,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_MAX_CONCURRENT_CONVERSIONS,
    DEFAULT_MAX_FILE_SIZE_MB,
    DEFAULT_TEMP_FILE_RETENTION_HOURS,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
)
from .errors import ConfigError, ErrorKind


class ConversionStatus(Enum):
    """Status of a conversion operation."""

    SUCCESS = "success"
    FAILED = "failed"


def _require_int(name: str, value: Any) -> int:
    # bool is an int subclass but never a valid setting
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got: {value!r}")
    return value


@dataclass(frozen=True)
class ConversionSettings:
    """Conversion parameters consumed by the pipeline.

    Attributes:
        jpeg_quality: JPEG quality level (1-100, default 90)
        max_file_size_mb: Largest accepted input in whole megabytes (default 100)
    """

    jpeg_quality: int = DEFAULT_JPEG_QUALITY
    max_file_size_mb: int = DEFAULT_MAX_FILE_SIZE_MB

    def __post_init__(self) -> None:
        """Reject out-of-range values instead of clamping them."""
        quality = _require_int("jpeg_quality", self.jpeg_quality)
        if not 1 <= quality <= 100:
            raise ConfigError(f"JPEG quality must be between 1-100, got: {quality}")
        max_size = _require_int("max_file_size_mb", self.max_file_size_mb)
        if max_size <= 0:
            raise ConfigError(f"Maximum file size must be a positive integer, got: {max_size}")

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * BYTES_PER_MB

    @property
    def jpeg_quality_string(self) -> str:
        return str(self.jpeg_quality)


@dataclass(frozen=True)
class UiSettings:
    """Window settings for the desktop shell."""

    window_width: int = DEFAULT_WINDOW_WIDTH
    window_height: int = DEFAULT_WINDOW_HEIGHT
    max_concurrent_conversions: int = DEFAULT_MAX_CONCURRENT_CONVERSIONS

    def __post_init__(self) -> None:
        for name in ("window_width", "window_height", "max_concurrent_conversions"):
            if _require_int(name, getattr(self, name)) < 0:
                raise ConfigError(f"{name} must not be negative")


@dataclass(frozen=True)
class StorageSettings:
    """Temporary file retention settings."""

    cleanup_temp_files: bool = DEFAULT_CLEANUP_TEMP_FILES
    temp_file_retention_hours: int = DEFAULT_TEMP_FILE_RETENTION_HOURS

    def __post_init__(self) -> None:
        if not isinstance(self.cleanup_temp_files, bool):
            raise ConfigError(
                f"cleanup_temp_files must be a boolean, got: {self.cleanup_temp_files!r}"
            )
        if _require_int("temp_file_retention_hours", self.temp_file_retention_hours) < 0:
            raise ConfigError("temp_file_retention_hours must not be negative")


@dataclass(frozen=True)
class AppConfig:
    """Full application configuration, mirroring the three groups of the config file.

    Only the ``conversion`` group affects the conversion pipeline.
    """

    conversion: ConversionSettings = field(default_factory=ConversionSettings)
    ui: UiSettings = field(default_factory=UiSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        """Build a config from the camelCase mapping stored in ``config.json``.

        Raises:
            ConfigError: If a group or key is missing or a value is invalid
        """
        try:
            conversion = data["conversion"]
            ui = data["ui"]
            storage = data["storage"]
            return cls(
                conversion=ConversionSettings(
                    jpeg_quality=conversion["jpegQuality"],
                    max_file_size_mb=conversion["maxFileSizeMB"],
                ),
                ui=UiSettings(
                    window_width=ui["windowWidth"],
                    window_height=ui["windowHeight"],
                    max_concurrent_conversions=ui["maxConcurrentConversions"],
                ),
                storage=StorageSettings(
                    cleanup_temp_files=storage["cleanupTempFiles"],
                    temp_file_retention_hours=storage["tempFileRetentionHours"],
                ),
            )
        except (KeyError, TypeError) as e:
            raise ConfigError(f"Malformed configuration: {e!r}") from e

    def to_dict(self) -> dict[str, Any]:
        return {
            "conversion": {
                "jpegQuality": self.conversion.jpeg_quality,
                "maxFileSizeMB": self.conversion.max_file_size_mb,
            },
            "ui": {
                "windowWidth": self.ui.window_width,
                "windowHeight": self.ui.window_height,
                "maxConcurrentConversions": self.ui.max_concurrent_conversions,
            },
            "storage": {
                "cleanupTempFiles": self.storage.cleanup_temp_files,
                "tempFileRetentionHours": self.storage.temp_file_retention_hours,
            },
        }


@dataclass(frozen=True)
class ResolvedFile:
    """A canonical, symlink-resolved path to an existing regular file.

    Only produced by ``validate_path_safety``. Valid for the current
    operation only; the file may change on disk afterwards.

    Attributes:
        path: Canonical absolute path
        original: The untrusted string the path was derived from
    """

    path: Path
    original: str

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class ConversionJob:
    """A single dispatch: validated input, fresh output path and settings."""

    input: ResolvedFile
    output_path: Path
    settings: ConversionSettings


@dataclass
class ConversionResult:
    """Result of a single conversion request.

    Attributes:
        input_path: The path string supplied by the caller
        output_path: Path to the JPEG file (None if failed)
        status: Conversion status
        error_kind: Kind of the error if conversion failed
        error_message: User-facing error message if conversion failed
        processing_time: Time taken to process in seconds
    """

    input_path: str
    output_path: Path | None
    status: ConversionStatus
    error_kind: ErrorKind | None = None
    error_message: str | None = None
    processing_time: float = 0.0
