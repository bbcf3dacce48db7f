"""Repository construction from locations and spec files.

This module resolves repository locations through the archive cache
and the configured materializer, then indexes the resulting root.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from core.config import ReachabilityConfig
from core.repository_spec import QueryPolicy, RepositorySpec, load_repository_spec
from core.types import ResolutionResult
from query.repository_logger import RepositoryLogger, StructlogRepositoryLogger
from repository.filesystem_repository import FileSystemRepository
from store.archive_cache import ArchiveCache
from store.materializer import DefaultMaterializer, DirectoryMaterializer
from store.uri_resolver import RepositoryUriResolver


def build_uri_resolver(
    config: ReachabilityConfig,
    materializer: DirectoryMaterializer | None = None,
) -> RepositoryUriResolver:
    """Create a URI resolver over the configured cache root."""
    return RepositoryUriResolver(
        ArchiveCache(config.cache_root),
        materializer or DefaultMaterializer(config),
    )


def open_repository(
    location: str | Path,
    config: ReachabilityConfig | None = None,
    materializer: DirectoryMaterializer | None = None,
    logger: RepositoryLogger | None = None,
    policy: QueryPolicy | None = None,
) -> FileSystemRepository:
    """Materialize and index a repository location.

    Args:
        location: Local directory, local archive, or remote archive URI.
        config: Runtime config; read from the environment when omitted.
        materializer: Download/extraction capability; default when omitted.
        logger: Resolution event sink; structlog at the config level when omitted.
        policy: Default query directives.

    Returns:
        Indexed filesystem repository.

    Raises:
        UnresolvableLocationError: If the location is missing or invalid.
        UnsupportedFormatError: If a remote location is not a supported archive.
        DownloadFailureError: If download fails.
        ExtractionFailureError: If extraction fails.
    """
    resolved_config = config or ReachabilityConfig.from_env()
    root = build_uri_resolver(resolved_config, materializer).resolve(location)
    return FileSystemRepository(
        root,
        logger=logger or StructlogRepositoryLogger(resolved_config.log_level),
        policy=policy,
    )


def open_repository_from_spec(
    spec_path: str | Path,
    config: ReachabilityConfig | None = None,
    materializer: DirectoryMaterializer | None = None,
    logger: RepositoryLogger | None = None,
) -> tuple[FileSystemRepository, RepositorySpec]:
    """Open the repository described by a YAML spec file.

    Spec values for cache directory and log level take precedence over
    the runtime config.

    Returns:
        Repository with the spec query policy, and the parsed spec.
    """
    spec = load_repository_spec(spec_path)
    resolved_config = config or ReachabilityConfig.from_env()
    if spec.repository.cache_dir is not None:
        resolved_config = replace(resolved_config, cache_root=spec.repository.cache_dir)
    if spec.repository.log_level is not None:
        resolved_config = replace(resolved_config, log_level=spec.repository.log_level)
    repository = open_repository(
        spec.repository.uri,
        config=resolved_config,
        materializer=materializer,
        logger=logger,
        policy=spec.policy,
    )
    return repository, spec


def resolve_spec_artifacts(
    spec_path: str | Path,
    config: ReachabilityConfig | None = None,
    materializer: DirectoryMaterializer | None = None,
    logger: RepositoryLogger | None = None,
) -> ResolutionResult:
    """Resolve the artifacts listed in a spec file with its query policy."""
    repository, spec = open_repository_from_spec(
        spec_path,
        config=config,
        materializer=materializer,
        logger=logger,
    )
    builder = repository.new_query()
    for coordinate in spec.artifacts:
        builder.for_artifact(coordinate)
    return repository.resolve(builder.build())
