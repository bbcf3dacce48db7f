"""Public SDK surface for the reachability metadata repository.

This module provides a stable import path for build integrations.
It re-exports the repository entry points and typed models.
"""

from __future__ import annotations

from core.config import ReachabilityConfig
from core.coordinates import parse_coordinate
from core.logging_config import configure_logging
from core.errors import (
    DownloadFailureError,
    ExtractionFailureError,
    MalformedCoordinateError,
    ReachabilityError,
    UnresolvableLocationError,
    UnsupportedFormatError,
)
from core.repository_spec import QueryPolicy, RepositorySpec, load_repository_spec
from core.types import ArtifactCoordinate, ConfigEntry, Query, ResolutionResult
from query.query_builder import QueryBuilder
from query.repository_logger import (
    CollectingRepositoryLogger,
    RepositoryLogger,
    StructlogRepositoryLogger,
)
from repository.filesystem_repository import FileSystemRepository
from repository.repository_factory import (
    open_repository,
    open_repository_from_spec,
    resolve_spec_artifacts,
)
from repository.repository_service import MetadataRepositoryService
from store.materializer import DefaultMaterializer, DirectoryMaterializer

__all__ = [
    "ArtifactCoordinate",
    "CollectingRepositoryLogger",
    "ConfigEntry",
    "DefaultMaterializer",
    "DirectoryMaterializer",
    "DownloadFailureError",
    "ExtractionFailureError",
    "FileSystemRepository",
    "MalformedCoordinateError",
    "MetadataRepositoryService",
    "Query",
    "QueryBuilder",
    "QueryPolicy",
    "ReachabilityConfig",
    "ReachabilityError",
    "RepositoryLogger",
    "RepositorySpec",
    "ResolutionResult",
    "StructlogRepositoryLogger",
    "configure_logging",
    "UnresolvableLocationError",
    "UnsupportedFormatError",
    "load_repository_spec",
    "open_repository",
    "open_repository_from_spec",
    "parse_coordinate",
    "resolve_spec_artifacts",
]
