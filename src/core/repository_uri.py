"""Repository location parsing helpers.

This module classifies repository locations into local paths, HTTP(S)
archives, and S3 archives. It also centralizes S3 URI parsing so the
download layer validates locations consistently.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

from core.constants import (
    HTTP_URI_SCHEMES,
    LOCAL_URI_SCHEMES,
    S3_URI_SCHEME,
    SUPPORTED_ARCHIVE_SUFFIXES,
)
from core.errors import DownloadFailureError, UnresolvableLocationError
from core.types import ArchiveFormat, RepositoryLocation


@dataclass(frozen=True)
class S3Location:
    """Parsed S3 location model."""

    bucket: str
    key: str


def parse_repository_location(location: str | Path) -> RepositoryLocation:
    """Classify a repository location.

    Args:
        location: Filesystem path, ``file:`` URI, ``http(s):`` URI, or
            ``s3://bucket/key`` URI.

    Returns:
        Parsed location with its canonical URI and archive format.

    Raises:
        UnresolvableLocationError: If the URI scheme is not supported.
    """
    if isinstance(location, Path):
        return _local_location(location)
    parsed = urlparse(location)
    scheme = parsed.scheme.lower()
    # single-letter schemes are Windows drive letters
    if scheme in LOCAL_URI_SCHEMES or len(scheme) == 1:
        if scheme == "file":
            return _local_location(Path(url2pathname(parsed.path)))
        return _local_location(Path(location))
    if scheme in HTTP_URI_SCHEMES:
        return RepositoryLocation(
            uri=location,
            kind="http",
            path=None,
            archive_format=archive_format_for(parsed.path),
        )
    if scheme == S3_URI_SCHEME:
        return RepositoryLocation(
            uri=location,
            kind="s3",
            path=None,
            archive_format=archive_format_for(parsed.path),
        )
    raise UnresolvableLocationError(
        f"Unsupported repository location '{location}': scheme '{parsed.scheme}' "
        "is not one of file, http, https, s3."
    )


def archive_format_for(name: str) -> ArchiveFormat | None:
    """Return the archive format implied by a file name or URI path."""
    lowered = name.lower()
    for suffix, archive_format in SUPPORTED_ARCHIVE_SUFFIXES:
        if lowered.endswith(suffix):
            return archive_format  # type: ignore[return-value]
    return None


def parse_s3_uri(uri: str) -> S3Location:
    """Parse and validate an S3 object URI.

    Args:
        uri: URI in format ``s3://bucket/key``.

    Returns:
        Parsed bucket and key pair.

    Raises:
        DownloadFailureError: If bucket or key is missing.
    """
    stripped_uri = uri.removeprefix("s3://")
    if "/" not in stripped_uri:
        _raise_s3_uri_error(uri)
    bucket, key = stripped_uri.split("/", 1)
    if not bucket or not key:
        _raise_s3_uri_error(uri)
    return S3Location(bucket=bucket, key=key)


def _local_location(path: Path) -> RepositoryLocation:
    resolved_path = path.expanduser().resolve()
    return RepositoryLocation(
        uri=resolved_path.as_uri(),
        kind="local",
        path=resolved_path,
        archive_format=archive_format_for(resolved_path.name),
    )


def _raise_s3_uri_error(uri: str) -> None:
    raise DownloadFailureError(
        f"Invalid S3 URI '{uri}': expected s3://bucket/key. "
        "Provide both bucket and object key."
    )
