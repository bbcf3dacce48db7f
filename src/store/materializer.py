"""Directory materializer interface and default implementation.

The URI resolver never downloads or extracts by itself. It asks a
materializer, which callers may replace to plug in their own transport
or archive handling.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

import httpx

from core.config import ReachabilityConfig
from core.errors import UnsupportedFormatError
from core.repository_uri import parse_repository_location
from core.types import ArchiveFormat
from store.archive_extraction import extract_archive
from store.remote_fetch import create_s3_client, download_http, download_s3


class DirectoryMaterializer(Protocol):
    """Capability that turns remote archives into local directories."""

    def download(self, uri: str, destination: Path) -> None:
        """Write the archive at uri to the local destination file."""

    def extract(self, archive: Path, destination: Path, archive_format: ArchiveFormat) -> None:
        """Extract archive into the existing destination directory."""


class DefaultMaterializer:
    """Materializer backed by httpx, boto3, zipfile, and tarfile."""

    def __init__(
        self,
        config: ReachabilityConfig,
        http_transport: httpx.BaseTransport | None = None,
        s3_client: Any | None = None,
    ) -> None:
        self._config = config
        self._http_transport = http_transport
        self._s3_client = s3_client

    def download(self, uri: str, destination: Path) -> None:
        """Download an HTTP(S) or S3 archive.

        Raises:
            DownloadFailureError: If the transfer fails.
            UnsupportedFormatError: If the URI scheme cannot be downloaded.
        """
        location = parse_repository_location(uri)
        if location.kind == "http":
            download_http(
                uri,
                destination,
                timeout=self._config.download_timeout,
                transport=self._http_transport,
            )
            return
        if location.kind == "s3":
            if self._s3_client is None:
                self._s3_client = create_s3_client(self._config)
            download_s3(uri, destination, self._s3_client)
            return
        raise UnsupportedFormatError(
            f"Cannot download '{uri}': only http, https and s3 locations are remote."
        )

    def extract(self, archive: Path, destination: Path, archive_format: ArchiveFormat) -> None:
        """Extract a zip, tar.gz or tar.bz2 archive."""
        extract_archive(archive, destination, archive_format)
