"""File system operations with security validation for the HEIC converter."""

from __future__ import annotations

import contextlib
import shutil
import tempfile
import uuid
from pathlib import Path

from .constants import CONVERTED_SUFFIX, FORBIDDEN_FILENAME_CHARS, MAX_FILENAME_LENGTH
from .errors import InvalidPathError, MissingFileError, SaveFailedError, TempFileError
from .logging_config import get_logger
from .models import ResolvedFile

logger = get_logger(__name__)


class FileSystemHandler:
    """Handle file system operations with security validation.

    This class provides:
    - Path traversal prevention and canonicalization of untrusted paths
    - File name validation for staged uploads
    - Unique output path generation in the temporary directory
    - Temporary file bookkeeping (stage, copy out, clean up)
    """

    def __init__(self, temp_dir: Path | None = None) -> None:
        """Initialize the handler.

        Args:
            temp_dir: Directory for staged and converted files
                (default: the platform temporary directory)
        """
        self.temp_dir = temp_dir if temp_dir is not None else Path(tempfile.gettempdir())

    def validate_path_safety(self, raw: str) -> ResolvedFile:
        """Resolve an untrusted path string into a canonical regular file.

        The literal ``..`` check runs before canonicalization and rejects
        any string containing the sequence, even inside a file name. It does
        not catch escapes through symlinks in intermediate directories;
        canonicalization below resolves those to their real target.

        Args:
            raw: User-supplied path string

        Returns:
            ResolvedFile for an existing regular file

        Raises:
            InvalidPathError: If the path is empty, contains ``..`` or
                cannot be resolved
            MissingFileError: If the resolved path is not a regular file
        """
        if not raw:
            raise InvalidPathError("File path cannot be empty")

        if ".." in raw:
            logger.warning(f"Rejected path traversal attempt: {raw}")
            raise InvalidPathError("Path traversal not allowed")

        # A missing file lands here too, since resolve cannot tell it apart
        # from a permission or I/O failure
        try:
            canonical = Path(raw).resolve(strict=True)
        except (OSError, RuntimeError, ValueError) as e:
            logger.debug(f"Cannot resolve {raw}: {e}")
            raise InvalidPathError("Cannot resolve path") from e

        if not canonical.is_file():
            raise MissingFileError(raw)

        return ResolvedFile(path=canonical, original=raw)

    def validate_file_name(self, file_name: str) -> None:
        """Validate a bare file name before staging it as a temporary file.

        Raises:
            InvalidPathError: If the name is empty, too long or contains
                path separators or other forbidden characters
        """
        if not file_name:
            raise InvalidPathError("File name cannot be empty")

        if any(char in FORBIDDEN_FILENAME_CHARS for char in file_name):
            raise InvalidPathError("File name contains invalid characters")

        if len(file_name) > MAX_FILENAME_LENGTH:
            raise InvalidPathError(
                f"File name too long (max {MAX_FILENAME_LENGTH} characters)"
            )

    def get_output_path(self) -> Path:
        """Generate a fresh, collision-resistant path for a converted JPEG."""
        return self.temp_dir / f"{uuid.uuid4()}{CONVERTED_SUFFIX}"

    def save_temp_file(self, file_name: str, data: bytes) -> Path:
        """Stage uploaded bytes as a uniquely named temporary file.

        Raises:
            InvalidPathError: If the file name is invalid
            TempFileError: If the file cannot be written
        """
        self.validate_file_name(file_name)
        temp_path = self.temp_dir / f"{uuid.uuid4()}_{file_name}"
        try:
            temp_path.write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to write temporary file {temp_path}: {e}")
            raise TempFileError(f"Cannot create {temp_path}: {e.strerror or e}") from e
        logger.debug(f"Staged {len(data)} bytes at {temp_path}")
        return temp_path

    def get_file_size(self, path: Path) -> int:
        """Return the size of a file in bytes.

        Raises:
            MissingFileError: If the file metadata cannot be read
        """
        try:
            return path.stat().st_size
        except OSError as e:
            raise MissingFileError(str(path)) from e

    def copy_to_destination(self, temp_path: Path, save_path: Path) -> None:
        """Copy a converted file to the destination chosen by the user.

        An existing destination is overwritten; the caller confirms that.

        Raises:
            MissingFileError: If the converted file does not exist
            SaveFailedError: If the destination cannot be written
        """
        if not temp_path.exists():
            raise MissingFileError(str(temp_path))

        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(temp_path, save_path)
        except OSError as e:
            logger.error(f"Failed to copy {temp_path} to {save_path}: {e}")
            raise SaveFailedError(f"Cannot write {save_path}: {e.strerror or e}") from e
        logger.info(f"Saved converted file to {save_path}")

    def cleanup_temp_file(self, path: Path) -> None:
        """Remove a temporary file; an already-absent file counts as removed.

        Raises:
            TempFileError: If an existing file cannot be removed
        """
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            logger.error(f"Failed to remove temporary file {path}: {e}")
            raise TempFileError(f"Cannot remove {path}: {e.strerror or e}") from e
        logger.debug(f"Removed temporary file {path}")

    def remove_partial_output(self, path: Path) -> None:
        """Best-effort removal of an incomplete output after a failed conversion."""
        with contextlib.suppress(OSError):
            path.unlink()


def format_file_size(size_bytes: int) -> str:
    """Format a byte count for display, e.g. ``1.5 MB``."""
    if size_bytes <= 0:
        return "0 B"
    units = ("B", "KB", "MB", "GB")
    value = float(size_bytes)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    text = f"{value:.1f}".rstrip("0").rstrip(".")
    return f"{text} {units[index]}"
