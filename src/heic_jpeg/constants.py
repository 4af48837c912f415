"""Constants and default values for the HEIC to JPEG converter."""

# File validation
SUPPORTED_EXTENSIONS = ("heic", "heif")
HEIC_HEADER_SIZE = 12
HEIC_MAGIC_OFFSET = 4
HEIC_MAGIC_SIZE = 4
HEIC_MAGIC_BYTES = b"ftyp"
HEIC_BRAND_OFFSET = 8
HEIC_BRANDS = (b"heic", b"heix", b"hevc", b"hevx", b"mif1")

# Characters never allowed in a staged upload's file name
FORBIDDEN_FILENAME_CHARS = frozenset('/\\:*?"<>|')
MAX_FILENAME_LENGTH = 255

BYTES_PER_MB = 1024 * 1024

# Conversion defaults
DEFAULT_JPEG_QUALITY = 90
DEFAULT_MAX_FILE_SIZE_MB = 100

# UI defaults
DEFAULT_WINDOW_WIDTH = 600
DEFAULT_WINDOW_HEIGHT = 500
DEFAULT_MAX_CONCURRENT_CONVERSIONS = 5

# Storage defaults
DEFAULT_TEMP_FILE_RETENTION_HOURS = 24
DEFAULT_CLEANUP_TEMP_FILES = True

# Configuration sources
CONFIG_FILE_NAME = "config.json"
ENV_JPEG_QUALITY = "HEIC_JPEG_QUALITY"
ENV_MAX_FILE_SIZE_MB = "HEIC_MAX_FILE_SIZE_MB"
ENV_CONVERSION_BACKEND = "HEIC_CONVERSION_BACKEND"
ENV_LOG_LEVEL = "HEIC_LOG_LEVEL"

# Output naming
CONVERTED_SUFFIX = "_converted.jpg"
