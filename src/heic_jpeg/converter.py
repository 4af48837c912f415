"""Conversion backends for HEIC to JPEG.

Two interchangeable backends implement ``ConversionBackend``:

- ``SipsBackend`` runs the macOS ``sips`` command-line tool
- ``PillowBackend`` decodes through Pillow with the pillow-heif plugin

``select_backend`` picks one per process. A failing backend is final for
that conversion; there is no fallback from one backend to the other.
"""

from __future__ import annotations

import contextlib
import os
import subprocess
import sys
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import piexif
import pillow_heif
from PIL import Image, UnidentifiedImageError

from .constants import ENV_CONVERSION_BACKEND
from .errors import ConversionFailedError, FileIOError
from .logging_config import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from .models import ConversionSettings

logger = get_logger(__name__)

NATIVE_PLATFORMS = ("darwin",)


class ConversionBackend(ABC):
    """Convert one HEIC file into one JPEG file."""

    name: str

    @abstractmethod
    def convert(self, input_path: Path, output_path: Path, settings: ConversionSettings) -> None:
        """Write a JPEG rendition of ``input_path`` to ``output_path``.

        Raises:
            ConversionFailedError: If the conversion cannot be performed
            FileIOError: If the output cannot be written
        """


class SipsBackend(ConversionBackend):
    """Delegate conversion to the macOS ``sips`` tool.

    The subprocess runs without a timeout; a hung ``sips`` blocks the
    calling request until it exits.
    """

    name = "sips"

    def __init__(self, executable: str = "sips") -> None:
        self.executable = executable

    def build_command(
        self, input_path: Path, output_path: Path, settings: ConversionSettings
    ) -> list[str]:
        return [
            self.executable,
            "-s",
            "format",
            "jpeg",
            "-s",
            "formatOptions",
            settings.jpeg_quality_string,
            str(input_path),
            "--out",
            str(output_path),
        ]

    def convert(self, input_path: Path, output_path: Path, settings: ConversionSettings) -> None:
        cmd = self.build_command(input_path, output_path, settings)
        logger.debug(f"Executing sips command with quality {settings.jpeg_quality}")

        try:
            completed = subprocess.run(cmd, capture_output=True, check=False)
        except OSError as e:
            raise ConversionFailedError(f"Failed to execute sips: {e}") from e

        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace")
            logger.error(f"sips command failed: {stderr}")
            raise ConversionFailedError(f"sips command failed: {stderr}")


class PillowBackend(ConversionBackend):
    """Decode with Pillow and pillow-heif, then re-encode as JPEG."""

    name = "pillow"

    UNSUPPORTED_MESSAGE = (
        "HEIC format not supported on this platform. Please use macOS with sips."
    )

    def __init__(self) -> None:
        # Register HEIF opener with Pillow
        pillow_heif.register_heif_opener()

    def convert(self, input_path: Path, output_path: Path, settings: ConversionSettings) -> None:
        try:
            with Image.open(input_path) as img:
                exif_bytes = self._sanitize_exif(img.info.get("exif"))
                # convert() always returns a copy that outlives the closed source
                rgb_img = img.convert("RGB")
        except Image.DecompressionBombError as e:
            logger.warning(f"Refusing to decode {input_path}: {e}")
            raise ConversionFailedError(f"Image too large to decode: {e}") from e
        except (UnidentifiedImageError, OSError, ValueError, RuntimeError, EOFError) as e:
            logger.debug(f"Pillow could not decode {input_path}: {e}")
            raise ConversionFailedError(self.UNSUPPORTED_MESSAGE) from e

        save_kwargs: dict[str, object] = {"quality": settings.jpeg_quality, "optimize": True}
        if exif_bytes:
            save_kwargs["exif"] = exif_bytes

        try:
            rgb_img.save(output_path, format="JPEG", **save_kwargs)
        except OSError as e:
            raise FileIOError.from_os_error(e) from e

    def _sanitize_exif(self, exif_blob: bytes | None) -> bytes | None:
        """Round-trip EXIF through piexif, dropping payloads it cannot parse."""
        if not exif_blob:
            return None
        with contextlib.suppress(Exception):
            return piexif.dump(piexif.load(exif_blob))
        return None


def select_backend(platform: str | None = None) -> ConversionBackend:
    """Pick the conversion backend for this process.

    ``HEIC_CONVERSION_BACKEND`` (``sips`` or ``pillow``) overrides platform
    detection. Otherwise macOS uses ``sips`` and every other platform uses
    Pillow.

    Args:
        platform: Platform identifier (default: ``sys.platform``)
    """
    override = (os.getenv(ENV_CONVERSION_BACKEND) or "").strip().lower()
    if override == SipsBackend.name:
        backend: ConversionBackend = SipsBackend()
    elif override == PillowBackend.name:
        backend = PillowBackend()
    else:
        if override:
            logger.warning(f"Unknown conversion backend '{override}', using platform default")
        current = platform if platform is not None else sys.platform
        backend = SipsBackend() if current in NATIVE_PLATFORMS else PillowBackend()

    logger.debug(f"Selected conversion backend: {backend.name}")
    return backend
