"""Unit tests for the lazily opened repository service."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from core.config import ReachabilityConfig
from core.errors import DownloadFailureError
from query.repository_logger import CollectingRepositoryLogger
from repository.repository_service import MetadataRepositoryService
from tests.repository_fixtures import (
    RecordingMaterializer,
    build_repository_tree,
    write_zip_archive,
)

REMOTE_URI = "https://example.org/reachability-metadata.zip"


def _config(cache_root: Path) -> ReachabilityConfig:
    return ReachabilityConfig(
        cache_root=cache_root,
        log_level="info",
        download_timeout=5.0,
        s3_region=None,
        s3_profile=None,
    )


def _archive(tmp_path: Path) -> Path:
    source = build_repository_tree(tmp_path / "source", ["org.example:lib:1.0"])
    return write_zip_archive(source, tmp_path / "metadata.zip")


def test_service_does_not_open_until_first_query(tmp_path: Path) -> None:
    """Construction should not touch the network or the cache."""
    materializer = RecordingMaterializer(_archive(tmp_path))
    service = MetadataRepositoryService(
        REMOTE_URI,
        config=_config(tmp_path / "cache"),
        materializer=materializer,
        logger=CollectingRepositoryLogger(),
    )

    assert materializer.downloads == []

    directories = service.find_configuration_directories_for("org.example:lib:1.0")

    assert [path.name for path in directories] == ["1.0"]
    assert materializer.downloads == [REMOTE_URI]


def test_concurrent_first_queries_open_once(tmp_path: Path) -> None:
    """Concurrent first queries should share one download and extraction."""
    materializer = RecordingMaterializer(_archive(tmp_path))
    service = MetadataRepositoryService(
        REMOTE_URI,
        config=_config(tmp_path / "cache"),
        materializer=materializer,
        logger=CollectingRepositoryLogger(),
    )
    barrier = threading.Barrier(6)
    results: list[set[Path]] = []
    results_lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        found = service.find_configuration_directories_for_modules(["org.example:lib:1.0"])
        with results_lock:
            results.append(found)

    threads = [threading.Thread(target=worker) for _ in range(6)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 6 and all(found == results[0] for found in results)
    assert len(materializer.downloads) == 1 and len(materializer.extractions) == 1


class _FlakyMaterializer(RecordingMaterializer):
    def __init__(self, archive_source: Path) -> None:
        super().__init__(archive_source)
        self.failures_left = 1

    def download(self, uri: str, destination: Path) -> None:
        if self.failures_left:
            self.failures_left -= 1
            raise DownloadFailureError(f"Temporary failure downloading {uri}.")
        super().download(uri, destination)


def test_failed_open_is_retried_on_next_query(tmp_path: Path) -> None:
    """A failed first open should not poison later queries."""
    materializer = _FlakyMaterializer(_archive(tmp_path))
    service = MetadataRepositoryService(
        REMOTE_URI,
        config=_config(tmp_path / "cache"),
        materializer=materializer,
        logger=CollectingRepositoryLogger(),
    )

    with pytest.raises(DownloadFailureError):
        service.find_configuration_directories(lambda query: query.for_artifact("org.example:lib"))

    directories = service.find_configuration_directories(
        lambda query: query.for_artifact("org.example:lib")
    )

    assert [path.name for path in directories] == ["1.0"]
    assert materializer.downloads == [REMOTE_URI]
