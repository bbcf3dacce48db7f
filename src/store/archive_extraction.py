"""Archive extraction helpers.

This module unpacks zip, tar.gz, and tar.bz2 repository archives and
rejects members that would be written outside the destination.
"""

from __future__ import annotations

import tarfile
import zipfile
from pathlib import Path

from core.errors import ExtractionFailureError, UnsupportedFormatError
from core.types import ArchiveFormat

_TAR_MODES = {"tar.gz": "r:gz", "tar.bz2": "r:bz2"}


def extract_archive(archive: Path, destination: Path, archive_format: ArchiveFormat) -> None:
    """Extract an archive into an existing destination directory.

    Args:
        archive: Local archive file.
        destination: Directory receiving archive members.
        archive_format: Archive format of the file.

    Raises:
        ExtractionFailureError: If the archive is corrupt, unreadable, or
            contains members escaping the destination.
        UnsupportedFormatError: If the format is not supported.
    """
    try:
        if archive_format == "zip":
            _extract_zip(archive, destination)
        elif archive_format in _TAR_MODES:
            _extract_tar(archive, destination, _TAR_MODES[archive_format])
        else:
            raise UnsupportedFormatError(
                f"Unsupported archive format '{archive_format}' for {archive}. "
                "Use a zip, tar.gz or tar.bz2 archive."
            )
    except (zipfile.BadZipFile, tarfile.TarError, EOFError, OSError) as error:
        raise ExtractionFailureError(
            f"Failed to extract repository archive {archive}: {error}. "
            "Delete the cached archive and retry with a valid archive."
        ) from error


def _extract_zip(archive: Path, destination: Path) -> None:
    root = destination.resolve()
    with zipfile.ZipFile(archive) as zip_file:
        for member_name in zip_file.namelist():
            _ensure_inside(root, member_name, archive)
        zip_file.extractall(root)


def _extract_tar(archive: Path, destination: Path, mode: str) -> None:
    root = destination.resolve()
    with tarfile.open(archive, mode) as tar_file:  # type: ignore[call-overload]
        for member in tar_file.getmembers():
            _ensure_inside(root, member.name, archive)
        tar_file.extractall(root, filter="data")


def _ensure_inside(root: Path, member_name: str, archive: Path) -> None:
    """Reject archive members whose target path escapes root."""
    target = (root / member_name).resolve()
    if not target.is_relative_to(root):
        raise ExtractionFailureError(
            f"Archive {archive} contains member '{member_name}' outside the extraction "
            "directory. Refusing to extract an unsafe archive."
        )
