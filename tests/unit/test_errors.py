"""Unit tests for the error taxonomy."""

import pytest

from heic_jpeg.errors import (
    AppError,
    ConfigError,
    ConversionFailedError,
    ErrorKind,
    FileIOError,
    FileTooLargeError,
    InvalidHeicFileError,
    InvalidPathError,
    MissingFileError,
    SaveFailedError,
    TempFileError,
)


class TestErrorClasses:
    """Tests for error exception classes."""

    @pytest.mark.parametrize(
        ("error", "kind", "message"),
        [
            (MissingFileError("a.heic"), ErrorKind.FILE_NOT_FOUND, "File not found: a.heic"),
            (
                InvalidPathError("Path traversal not allowed"),
                ErrorKind.INVALID_PATH,
                "Invalid file path: Path traversal not allowed",
            ),
            (
                InvalidHeicFileError("File too small or unreadable"),
                ErrorKind.INVALID_HEIC_FILE,
                "Invalid HEIC/HEIF file: File too small or unreadable",
            ),
            (
                ConversionFailedError("sips command failed: boom"),
                ErrorKind.CONVERSION_FAILED,
                "Conversion failed: sips command failed: boom",
            ),
            (SaveFailedError("disk full"), ErrorKind.SAVE_FAILED, "Save failed: disk full"),
            (
                TempFileError("denied"),
                ErrorKind.TEMP_FILE_FAILED,
                "Temporary file operation failed: denied",
            ),
            (ConfigError("bad"), ErrorKind.CONFIG_ERROR, "Configuration error: bad"),
            (FileIOError("broken pipe"), ErrorKind.IO_ERROR, "I/O error: broken pipe"),
        ],
    )
    def test_kind_and_message(self, error, kind, message):
        """Each error reports its kind and a user-facing message."""
        assert isinstance(error, AppError)
        assert isinstance(error, Exception)
        assert error.kind == kind
        assert str(error) == message

    def test_file_too_large_carries_sizes(self):
        """FileTooLargeError keeps both sizes and renders them in MB."""
        error = FileTooLargeError(file_size_mb=150, max_size_mb=100)
        assert error.file_size_mb == 150
        assert error.max_size_mb == 100
        assert str(error) == "File size 150MB exceeds maximum 100MB"

    def test_missing_file_keeps_original_path(self):
        """MissingFileError keeps the path string as given."""
        error = MissingFileError("./photos/IMG_0001.HEIC")
        assert error.path == "./photos/IMG_0001.HEIC"

    def test_to_dict_is_tagged(self):
        """to_dict renders a tagged mapping for a front-end."""
        error = InvalidHeicFileError("Invalid HEIC/HEIF magic bytes")
        assert error.to_dict() == {
            "type": "InvalidHeicFile",
            "message": "Invalid HEIC/HEIF file: Invalid HEIC/HEIF magic bytes",
        }

    def test_io_error_from_os_error(self):
        """OSError details survive the conversion into FileIOError."""
        error = FileIOError.from_os_error(PermissionError(13, "Permission denied", "x.heic"))
        assert error.kind == ErrorKind.IO_ERROR
        assert "Permission denied" in str(error)

    def test_errors_can_be_caught_as_app_error(self):
        """All kinds share the AppError base."""
        with pytest.raises(AppError):
            raise ConversionFailedError("boom")


class TestErrorKind:
    """Tests for the ErrorKind enum."""

    def test_kind_set_is_closed(self):
        """There are exactly nine error kinds."""
        assert len(ErrorKind) == 9
        assert {kind.value for kind in ErrorKind} == {
            "FileNotFound",
            "InvalidPath",
            "FileTooLarge",
            "InvalidHeicFile",
            "ConversionFailed",
            "SaveFailed",
            "TempFileFailed",
            "ConfigError",
            "IoError",
        }
