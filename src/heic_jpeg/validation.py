"""Content validation for HEIC/HEIF inputs.

The pipeline runs the checks in a fixed order, stopping at the first
failure: extension, then size, then magic bytes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import (
    BYTES_PER_MB,
    HEIC_BRAND_OFFSET,
    HEIC_BRANDS,
    HEIC_HEADER_SIZE,
    HEIC_MAGIC_BYTES,
    HEIC_MAGIC_OFFSET,
    HEIC_MAGIC_SIZE,
    SUPPORTED_EXTENSIONS,
)
from .errors import FileIOError, FileTooLargeError, InvalidHeicFileError
from .logging_config import get_logger

if TYPE_CHECKING:
    from pathlib import Path

logger = get_logger(__name__)


class ContentValidator:
    """Confirm that a resolved file is a HEIC/HEIF container within the size limit."""

    VALID_EXTENSIONS = SUPPORTED_EXTENSIONS
    BRANDS = HEIC_BRANDS

    def validate_extension(self, path: Path) -> None:
        """Check the lower-cased file extension against the supported set.

        Raises:
            InvalidHeicFileError: If the extension is not heic or heif
        """
        extension = path.suffix[1:].lower()
        if extension not in self.VALID_EXTENSIONS:
            raise InvalidHeicFileError(
                f"Unsupported extension '{extension}'. "
                f"Supported: {', '.join(self.VALID_EXTENSIONS)}"
            )

    def measure_file_size(self, path: Path) -> int:
        """Return the size of ``path`` in bytes.

        Raises:
            FileIOError: If the file metadata cannot be read
        """
        try:
            return path.stat().st_size
        except OSError as e:
            raise FileIOError.from_os_error(e) from e

    def validate_file_size(self, file_size: int, max_size: int) -> None:
        """Check a byte length against a byte ceiling.

        A file exactly at the ceiling is accepted.

        Raises:
            FileTooLargeError: If ``file_size`` exceeds ``max_size``, reporting
                both values rounded down to whole megabytes
        """
        if file_size > max_size:
            logger.warning(f"File size {file_size} bytes exceeds limit of {max_size} bytes")
            raise FileTooLargeError(
                file_size_mb=file_size // BYTES_PER_MB,
                max_size_mb=max_size // BYTES_PER_MB,
            )

    def validate_magic_bytes(self, path: Path) -> None:
        """Check the container signature in the first 12 bytes.

        Bytes 4-8 must be ``ftyp`` and bytes 8-12 must start with one of the
        known HEIC/HEIF brand codes. A file shorter than 12 bytes is always
        rejected.

        Raises:
            FileIOError: If the file cannot be opened
            InvalidHeicFileError: If the header cannot be read, the file is
                too small or the signature does not match
        """
        try:
            f = path.open("rb")
        except OSError as e:
            raise FileIOError.from_os_error(e) from e

        with f:
            try:
                header = f.read(HEIC_HEADER_SIZE)
            except OSError as e:
                logger.debug(f"Cannot read header of {path.name}: {e}")
                raise InvalidHeicFileError("File too small or unreadable") from e

        if len(header) < HEIC_HEADER_SIZE:
            raise InvalidHeicFileError("File too small or unreadable")

        if self.has_heic_signature(header):
            return

        logger.debug(f"Rejected header {header.hex()} for {path.name}")
        raise InvalidHeicFileError("Invalid HEIC/HEIF magic bytes")

    def has_heic_signature(self, header: bytes) -> bool:
        """Return True if a 12-byte header carries ``ftyp`` and a known brand."""
        if len(header) < HEIC_HEADER_SIZE:
            return False
        marker = header[HEIC_MAGIC_OFFSET : HEIC_MAGIC_OFFSET + HEIC_MAGIC_SIZE]
        if marker != HEIC_MAGIC_BYTES:
            return False
        brand = header[HEIC_BRAND_OFFSET:HEIC_HEADER_SIZE]
        return any(brand.startswith(supported) for supported in self.BRANDS)
