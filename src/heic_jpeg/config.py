"""Configuration handling for the HEIC to JPEG converter.

Settings are resolved from three layers, highest priority first:

1. ``config.json`` in the working directory, used as a whole when it
   parses and validates
2. ``HEIC_JPEG_QUALITY`` / ``HEIC_MAX_FILE_SIZE_MB`` overriding the defaults
   field by field
3. Compiled-in defaults (quality 90, max size 100MB)

Loading never fails: a malformed file or an invalid override falls back to
the next layer. Nothing is cached, every call re-reads its sources.
"""

from __future__ import annotations

import json
import os
import re
from pathlib import Path

from .constants import (
    CONFIG_FILE_NAME,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_MAX_FILE_SIZE_MB,
    ENV_JPEG_QUALITY,
    ENV_MAX_FILE_SIZE_MB,
)
from .errors import ConfigError
from .logging_config import get_logger
from .models import AppConfig, ConversionSettings

logger = get_logger(__name__)

_DIGITS = re.compile(r"[0-9]+")


def default_config_path() -> Path:
    """Return the well-known config file location."""
    return Path.cwd() / CONFIG_FILE_NAME


def _read_int_env(name: str) -> int | None:
    value = os.getenv(name)
    if value is None or not _DIGITS.fullmatch(value):
        return None
    return int(value)


def get_quality_from_env() -> int | None:
    """Get JPEG quality from the ``HEIC_JPEG_QUALITY`` environment variable.

    Returns:
        Quality value (1-100) if set and valid, None otherwise
    """
    quality = _read_int_env(ENV_JPEG_QUALITY)
    if quality is not None and 1 <= quality <= 100:
        return quality
    return None


def get_max_file_size_from_env() -> int | None:
    """Get the size ceiling from the ``HEIC_MAX_FILE_SIZE_MB`` environment variable.

    Returns:
        Positive size in megabytes if set and valid, None otherwise
    """
    size = _read_int_env(ENV_MAX_FILE_SIZE_MB)
    if size is not None and size > 0:
        return size
    return None


def validate_jpeg_quality(quality: int) -> int:
    """Explicitly validate a JPEG quality value.

    Raises:
        ConfigError: If quality is outside 1-100
    """
    if isinstance(quality, bool) or not isinstance(quality, int) or not 1 <= quality <= 100:
        raise ConfigError(f"JPEG quality must be between 1-100, got: {quality}")
    return quality


def load_config_file(path: Path) -> AppConfig | None:
    """Load the structured config file.

    Returns:
        The parsed config, or None when the file is absent or malformed
    """
    try:
        raw = path.read_bytes()
    except OSError:
        return None

    try:
        return AppConfig.from_dict(json.loads(raw))
    except (ValueError, ConfigError) as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        logger.warning(f"Ignoring malformed config file {path}: {e}")
        return None


def load_config(config_path: Path | None = None) -> AppConfig:
    """Resolve the full application configuration.

    Args:
        config_path: Config file to read; defaults to ``config.json`` in the
            working directory

    Returns:
        AppConfig built from the highest-priority usable source
    """
    path = config_path if config_path is not None else default_config_path()
    file_config = load_config_file(path)
    if file_config is not None:
        logger.debug(f"Loaded configuration from {path}")
        return file_config

    quality = get_quality_from_env()
    max_size = get_max_file_size_from_env()
    conversion = ConversionSettings(
        jpeg_quality=quality if quality is not None else DEFAULT_JPEG_QUALITY,
        max_file_size_mb=max_size if max_size is not None else DEFAULT_MAX_FILE_SIZE_MB,
    )
    return AppConfig(conversion=conversion)


def load_settings(config_path: Path | None = None) -> ConversionSettings:
    """Resolve the conversion settings for a single request."""
    return load_config(config_path).conversion
