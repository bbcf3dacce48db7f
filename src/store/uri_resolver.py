"""Repository location resolution.

This module maps a repository location to a local directory root.
Local directories are used in place; archives are downloaded and
extracted once per cache key through the injected materializer.
"""

from __future__ import annotations

from pathlib import Path

from core.errors import UnresolvableLocationError, UnsupportedFormatError
from core.logging_config import get_logger
from core.repository_uri import parse_repository_location
from core.types import ArchiveFormat, RepositoryLocation
from store.archive_cache import ArchiveCache
from store.cache_key import cache_key_for
from store.materializer import DirectoryMaterializer

_LOGGER = get_logger(__name__)


class RepositoryUriResolver:
    """Resolve repository locations into materialized directory roots."""

    def __init__(self, cache: ArchiveCache, materializer: DirectoryMaterializer) -> None:
        self._cache = cache
        self._materializer = materializer

    @property
    def cache(self) -> ArchiveCache:
        """Return the archive cache backing this resolver."""
        return self._cache

    def resolve(self, location: str | Path) -> Path:
        """Resolve a location to a local repository root directory.

        Args:
            location: Local directory, local archive, or remote archive URI.

        Returns:
            Absolute directory containing the repository tree.

        Raises:
            UnresolvableLocationError: If a local path is missing or is not
                a directory or supported archive.
            UnsupportedFormatError: If a remote URI is not a supported archive.
            DownloadFailureError: If downloading fails.
            ExtractionFailureError: If extraction fails.
        """
        parsed = parse_repository_location(location)
        if parsed.kind == "local":
            return self._resolve_local(parsed)
        if parsed.archive_format is None:
            raise UnsupportedFormatError(
                f"Remote repository URI '{parsed.uri}' must point to a zip, "
                "a tar.gz or a tar.bz2 file."
            )
        key = cache_key_for(parsed.uri)
        archive = self._cache.ensure_archive(
            key,
            lambda destination: self._materializer.download(parsed.uri, destination),
        )
        return self._explode(key, archive, parsed.archive_format)

    def _resolve_local(self, parsed: RepositoryLocation) -> Path:
        local_path = parsed.path
        if local_path is None or not local_path.exists():
            raise UnresolvableLocationError(
                f"Repository location {local_path or parsed.uri} does not exist. "
                "Provide an existing directory or archive."
            )
        if local_path.is_dir():
            _LOGGER.debug("repository_root_local", path=str(local_path))
            return local_path
        if parsed.archive_format is None:
            raise UnresolvableLocationError(
                f"Repository location {local_path} must point to a directory "
                "or a zip, tar.gz or tar.bz2 archive."
            )
        return self._explode(cache_key_for(parsed.uri), local_path, parsed.archive_format)

    def _explode(self, key: str, archive: Path, archive_format: ArchiveFormat) -> Path:
        exploded_dir = self._cache.ensure_exploded(
            key,
            lambda destination: self._materializer.extract(archive, destination, archive_format),
        )
        _LOGGER.debug("repository_root_exploded", key=key, path=str(exploded_dir))
        return exploded_dir
