"""Content-keyed cache of repository archives and exploded trees.

This module owns the cache root layout ``<root>/<key>/archive`` and
``<root>/<key>/exploded``. Slots are written under a process-wide
per-key lock into temporary siblings and published by atomic rename,
so readers never observe partial downloads or extractions.
"""

from __future__ import annotations

import os
import shutil
import threading
import uuid
from pathlib import Path
from typing import Callable

from core.constants import ARCHIVE_FILE_NAME, EXPLODED_DIR_NAME
from core.errors import DownloadFailureError, ExtractionFailureError
from core.logging_config import get_logger
from core.types import CacheSlot

_LOGGER = get_logger(__name__)
_LOCKS_GUARD = threading.Lock()
_SLOT_LOCKS: dict[Path, threading.Lock] = {}


class ArchiveCache:
    """Filesystem-backed cache of materialized repository locations."""

    def __init__(self, cache_root: Path) -> None:
        self._cache_root = cache_root.expanduser().resolve()

    @property
    def cache_root(self) -> Path:
        """Return the absolute cache root directory."""
        return self._cache_root

    def slot(self, key: str) -> CacheSlot:
        """Return the paths reserved for one cache key."""
        slot_dir = self._cache_root / key
        return CacheSlot(
            key=key,
            archive_path=slot_dir / ARCHIVE_FILE_NAME,
            exploded_dir=slot_dir / EXPLODED_DIR_NAME,
        )

    def ensure_archive(self, key: str, fetch: Callable[[Path], None]) -> Path:
        """Return the cached archive for key, fetching it on first use.

        Args:
            key: Cache key.
            fetch: Callback writing the archive to the given temporary path.

        Returns:
            Path of the cached archive file.

        Raises:
            DownloadFailureError: If fetching or publishing the archive fails.
        """
        slot = self.slot(key)
        if slot.archive_path.is_file():
            _LOGGER.debug("archive_cache_hit", key=key, path=str(slot.archive_path))
            return slot.archive_path
        with _lock_for(slot.archive_path.parent):
            if slot.archive_path.is_file():
                _LOGGER.debug("archive_cache_hit", key=key, path=str(slot.archive_path))
                return slot.archive_path
            _LOGGER.info("archive_cache_miss", key=key, path=str(slot.archive_path))
            temp_path = slot.archive_path.with_name(
                f".{ARCHIVE_FILE_NAME}.{uuid.uuid4().hex}.part"
            )
            try:
                temp_path.parent.mkdir(parents=True, exist_ok=True)
                fetch(temp_path)
                if not temp_path.is_file():
                    raise DownloadFailureError(
                        f"Download for cache key {key} produced no archive file. "
                        "Check the repository URI and retry."
                    )
                os.replace(temp_path, slot.archive_path)
            except OSError as error:
                raise DownloadFailureError(
                    f"Failed to store repository archive at {slot.archive_path}: {error}. "
                    "Check cache directory permissions and retry."
                ) from error
            finally:
                temp_path.unlink(missing_ok=True)
        return slot.archive_path

    def ensure_exploded(self, key: str, extract: Callable[[Path], None]) -> Path:
        """Return the exploded tree for key, extracting it on first use.

        Args:
            key: Cache key.
            extract: Callback extracting into the given empty temporary directory.

        Returns:
            Path of the exploded directory.

        Raises:
            ExtractionFailureError: If extraction or publishing fails.
        """
        slot = self.slot(key)
        if slot.exploded_dir.is_dir():
            _LOGGER.debug("exploded_cache_hit", key=key, path=str(slot.exploded_dir))
            return slot.exploded_dir
        with _lock_for(slot.exploded_dir.parent):
            if slot.exploded_dir.is_dir():
                _LOGGER.debug("exploded_cache_hit", key=key, path=str(slot.exploded_dir))
                return slot.exploded_dir
            _LOGGER.info("exploded_cache_miss", key=key, path=str(slot.exploded_dir))
            temp_dir = slot.exploded_dir.with_name(
                f".{EXPLODED_DIR_NAME}.{uuid.uuid4().hex}.partial"
            )
            try:
                temp_dir.mkdir(parents=True)
                extract(temp_dir)
                _publish_directory(temp_dir, slot.exploded_dir)
            except OSError as error:
                raise ExtractionFailureError(
                    f"Failed to store exploded repository at {slot.exploded_dir}: {error}. "
                    "Check cache directory permissions and retry."
                ) from error
            finally:
                if temp_dir.exists():
                    shutil.rmtree(temp_dir, ignore_errors=True)
        return slot.exploded_dir


def _lock_for(slot_dir: Path) -> threading.Lock:
    """Return the process-wide lock guarding one cache slot."""
    with _LOCKS_GUARD:
        return _SLOT_LOCKS.setdefault(slot_dir, threading.Lock())


def _publish_directory(temp_dir: Path, target_dir: Path) -> None:
    """Move a finished directory into place.

    Another process may have published the same slot first; its copy is
    kept and ours is discarded by the caller.
    """
    try:
        temp_dir.rename(target_dir)
    except OSError:
        if target_dir.is_dir():
            _LOGGER.info("exploded_cache_published_concurrently", path=str(target_dir))
            return
        raise
