"""Unit tests for the default directory materializer."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import httpx
import pytest

from core.config import ReachabilityConfig
from core.errors import DownloadFailureError, UnsupportedFormatError
from store.materializer import DefaultMaterializer


class _FakeS3Client:
    def __init__(self, payload: bytes | None) -> None:
        self.payload = payload
        self.requests: list[tuple[str, str]] = []

    def download_file(self, bucket: str, key: str, filename: str) -> None:
        self.requests.append((bucket, key))
        if self.payload is None:
            raise RuntimeError("AccessDenied")
        Path(filename).write_bytes(self.payload)


def _config(tmp_path: Path) -> ReachabilityConfig:
    return replace(ReachabilityConfig.from_env(), cache_root=tmp_path / "cache")


def test_download_streams_http_body(tmp_path: Path) -> None:
    """HTTP downloads should write the response body to the destination."""
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"zip-bytes"))
    materializer = DefaultMaterializer(_config(tmp_path), http_transport=transport)
    destination = tmp_path / "archive"

    materializer.download("https://example.org/repo.zip", destination)

    assert destination.read_bytes() == b"zip-bytes"


def test_download_raises_for_http_error_status(tmp_path: Path) -> None:
    """Error responses should surface as download failures."""
    transport = httpx.MockTransport(lambda request: httpx.Response(404))
    materializer = DefaultMaterializer(_config(tmp_path), http_transport=transport)

    with pytest.raises(DownloadFailureError):
        materializer.download("https://example.org/repo.zip", tmp_path / "archive")


def test_download_fetches_s3_objects(tmp_path: Path) -> None:
    """S3 downloads should request the bucket and key of the URI."""
    s3_client = _FakeS3Client(b"tar-bytes")
    materializer = DefaultMaterializer(_config(tmp_path), s3_client=s3_client)
    destination = tmp_path / "archive"

    materializer.download("s3://metadata/releases/repo.tar.gz", destination)

    assert s3_client.requests == [("metadata", "releases/repo.tar.gz")]
    assert destination.read_bytes() == b"tar-bytes"


def test_download_wraps_s3_client_errors(tmp_path: Path) -> None:
    """S3 client failures should surface as download failures."""
    materializer = DefaultMaterializer(_config(tmp_path), s3_client=_FakeS3Client(None))

    with pytest.raises(DownloadFailureError):
        materializer.download("s3://metadata/repo.zip", tmp_path / "archive")


def test_download_rejects_local_locations(tmp_path: Path) -> None:
    """Local paths are never downloaded."""
    materializer = DefaultMaterializer(_config(tmp_path))

    with pytest.raises(UnsupportedFormatError):
        materializer.download(str(tmp_path / "repo.zip"), tmp_path / "archive")
