"""Remote archive download helpers.

This module streams HTTP(S) archives through httpx and fetches S3
objects through boto3. Both write to a caller-provided local path.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx

from core.config import ReachabilityConfig
from core.constants import DOWNLOAD_CHUNK_SIZE
from core.errors import DownloadFailureError, ReachabilityDependencyError
from core.logging_config import get_logger
from core.repository_uri import parse_s3_uri

_LOGGER = get_logger(__name__)


def download_http(
    uri: str,
    destination: Path,
    timeout: float,
    transport: httpx.BaseTransport | None = None,
) -> None:
    """Stream an HTTP(S) resource into a local file.

    Args:
        uri: Remote archive URI.
        destination: Local file to write.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport override.

    Raises:
        DownloadFailureError: If the request fails or returns an error status.
    """
    _LOGGER.info("archive_download_started", uri=uri, destination=str(destination))
    downloaded = 0
    try:
        with httpx.Client(follow_redirects=True, timeout=timeout, transport=transport) as client:
            with client.stream("GET", uri) as response:
                response.raise_for_status()
                with destination.open("wb") as handle:
                    for chunk in response.iter_bytes(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        handle.write(chunk)
                        downloaded += len(chunk)
    except httpx.HTTPError as error:
        raise DownloadFailureError(
            f"Failed to download repository archive from {uri}: {error}. "
            "Check the repository URI and network access, then retry."
        ) from error
    _LOGGER.info("archive_download_completed", uri=uri, byte_count=downloaded)


def download_s3(uri: str, destination: Path, s3_client: Any) -> None:
    """Download one S3 object into a local file.

    Args:
        uri: Object URI in format ``s3://bucket/key``.
        destination: Local file to write.
        s3_client: Boto3 S3 client.

    Raises:
        DownloadFailureError: If the URI is invalid or the download fails.
    """
    location = parse_s3_uri(uri)
    _LOGGER.info("archive_download_started", uri=uri, destination=str(destination))
    try:
        s3_client.download_file(location.bucket, location.key, str(destination))
    except Exception as error:
        raise DownloadFailureError(
            f"Failed to download repository archive from {uri}: {error}. "
            "Check AWS credentials and object key, then retry."
        ) from error
    _LOGGER.info("archive_download_completed", uri=uri)


def create_s3_client(config: ReachabilityConfig) -> Any:
    """Create boto3 S3 client for archive downloads.

    Args:
        config: Runtime config with optional session settings.

    Returns:
        Boto3 S3 client.

    Raises:
        ReachabilityDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise ReachabilityDependencyError(
            "S3 repositories require boto3, but it is not installed. "
            "Install boto3 to resolve s3:// repository locations."
        ) from error
    session_kwargs: dict[str, str] = {}
    if config.s3_profile:
        session_kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        session_kwargs["region_name"] = config.s3_region
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")
