"""Unit tests for repository location parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import DownloadFailureError, UnresolvableLocationError
from core.repository_uri import archive_format_for, parse_repository_location, parse_s3_uri


def test_plain_path_is_local_with_file_uri(tmp_path: Path) -> None:
    """Plain paths should canonicalize to absolute file URIs."""
    location = parse_repository_location(str(tmp_path))

    assert location.kind == "local" and location.uri == tmp_path.resolve().as_uri()


def test_file_uri_and_path_share_canonical_uri(tmp_path: Path) -> None:
    """A file URI and the equivalent path should produce the same URI."""
    archive = tmp_path / "repo.zip"

    from_uri = parse_repository_location(archive.resolve().as_uri())
    from_path = parse_repository_location(archive)

    assert from_uri.uri == from_path.uri and from_uri.archive_format == "zip"


def test_http_location_keeps_uri_and_detects_format() -> None:
    """Remote URIs should be used verbatim for cache keys."""
    location = parse_repository_location("https://example.org/metadata-0.1.tar.bz2")

    assert location.kind == "http" and location.archive_format == "tar.bz2"


def test_unknown_scheme_is_unresolvable() -> None:
    """Unsupported schemes should fail early."""
    with pytest.raises(UnresolvableLocationError):
        parse_repository_location("ftp://example.org/repo.zip")


@pytest.mark.parametrize(
    ("name", "expected"),
    [("a.zip", "zip"), ("a.TAR.GZ", "tar.gz"), ("a.tar.bz2", "tar.bz2"), ("a.tgz", None)],
)
def test_archive_format_for_known_suffixes(name: str, expected: str | None) -> None:
    """Only zip, tar.gz and tar.bz2 should be recognized."""
    assert archive_format_for(name) == expected


def test_parse_s3_uri_requires_bucket_and_key() -> None:
    """S3 URIs without an object key should be rejected."""
    with pytest.raises(DownloadFailureError):
        parse_s3_uri("s3://bucket-only")


def test_parse_s3_uri_splits_bucket_and_key() -> None:
    """S3 URIs should split at the first slash."""
    location = parse_s3_uri("s3://bucket/path/to/repo.zip")

    assert (location.bucket, location.key) == ("bucket", "path/to/repo.zip")
