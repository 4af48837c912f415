"""Pytest configuration and shared fixtures."""

import logging
from pathlib import Path

import pytest

HEIC_HEADER = b"\x00\x00\x00\x18ftypheic"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Isolate every test from real configuration sources."""
    for name in (
        "HEIC_JPEG_QUALITY",
        "HEIC_MAX_FILE_SIZE_MB",
        "HEIC_CONVERSION_BACKEND",
        "HEIC_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    # config.json is looked up in the working directory
    monkeypatch.chdir(tmp_path)
    yield
    logging.getLogger("heic_jpeg").handlers.clear()


@pytest.fixture
def make_file(tmp_path: Path):
    """Factory writing ``content`` to ``tmp_path / name``."""

    def _make(name: str, content: bytes = HEIC_HEADER + b"\x00" * 32) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def heic_file(make_file) -> Path:
    """A small file with a valid HEIC container signature."""
    return make_file("photo.heic")


@pytest.fixture
def sample_settings():
    """Provide sample conversion settings for testing."""
    from heic_jpeg.models import ConversionSettings

    return ConversionSettings(jpeg_quality=85, max_file_size_mb=10)


@pytest.fixture
def real_heic_file(tmp_path: Path) -> Path:
    """Encode a real HEIC image with pillow-heif, skipping if no encoder is available."""
    import pillow_heif
    from PIL import Image

    path = tmp_path / "real.heic"
    image = Image.new("RGB", (64, 48), color=(200, 120, 40))
    try:
        pillow_heif.from_pillow(image).save(path, quality=90)
    except (OSError, RuntimeError, ValueError, KeyError) as e:
        pytest.skip(f"HEIC encoding unavailable: {e}")
    return path
