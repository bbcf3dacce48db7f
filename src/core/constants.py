"""Core constants used across repository modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_CACHE_ROOT = Path(".reachability-cache")
DEFAULT_LOG_LEVEL = "info"
DEFAULT_DOWNLOAD_TIMEOUT_SECONDS = 60.0
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error")
ARCHIVE_FILE_NAME = "archive"
EXPLODED_DIR_NAME = "exploded"
CACHE_KEY_MIN_WIDTH = 32
CACHE_KEY_HASH_ALGORITHM = "sha1"
ZIP_ARCHIVE_FORMAT = "zip"
TAR_GZ_ARCHIVE_FORMAT = "tar.gz"
TAR_BZ2_ARCHIVE_FORMAT = "tar.bz2"
SUPPORTED_ARCHIVE_SUFFIXES = (
    (".zip", ZIP_ARCHIVE_FORMAT),
    (".tar.gz", TAR_GZ_ARCHIVE_FORMAT),
    (".tar.bz2", TAR_BZ2_ARCHIVE_FORMAT),
)
LOCAL_URI_SCHEMES = ("", "file")
HTTP_URI_SCHEMES = ("http", "https")
S3_URI_SCHEME = "s3"
COORDINATE_SEPARATOR = ":"
DOWNLOAD_CHUNK_SIZE = 64 * 1024
REPOSITORY_SPEC_VERSION = 1
