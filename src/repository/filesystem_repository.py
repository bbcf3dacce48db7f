"""Filesystem-backed reachability metadata repository.

This module answers "which configuration directories apply to these
artifacts" for a materialized repository root.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

from core.repository_spec import QueryPolicy
from core.types import Query, ResolutionResult
from index.directory_index import DirectoryIndex, build_directory_index
from query.query_builder import QueryBuilder
from query.repository_logger import RepositoryLogger, StructlogRepositoryLogger
from query.resolution_engine import resolve_query

QueryBuilderFunction = Callable[[QueryBuilder], object]


class FileSystemRepository:
    """Repository over ``root/<group>/<artifact>/<version>/`` directories.

    The index is built once at construction; queries only read it and
    may run concurrently.
    """

    def __init__(
        self,
        root: Path,
        logger: RepositoryLogger | None = None,
        policy: QueryPolicy | None = None,
    ) -> None:
        """Index a repository root.

        Args:
            root: Materialized repository root directory.
            logger: Sink for resolution events; structlog when omitted.
            policy: Default directives seeded into every query.

        Raises:
            UnresolvableLocationError: If root is not a directory.
        """
        self._index = build_directory_index(root)
        self._logger: RepositoryLogger = logger or StructlogRepositoryLogger()
        self._policy = policy or QueryPolicy()

    @property
    def root(self) -> Path:
        """Return the absolute repository root."""
        return self._index.root

    @property
    def index(self) -> DirectoryIndex:
        """Return the read-only directory index."""
        return self._index

    def new_query(self) -> QueryBuilder:
        """Return a builder pre-populated with the repository policy."""
        builder = QueryBuilder()
        for pattern in self._policy.excludes:
            builder.exclude(pattern)
        for override in self._policy.overrides:
            if override.directory is None:
                builder.force_exclude(override.pattern)
            else:
                builder.override(override.pattern, override.directory)
        for directive in self._policy.config_versions:
            builder.force_config_version(directive.pattern, directive.version)
        builder.use_latest_config_when_version_untested(self._policy.use_latest_when_untested)
        return builder

    def find_configuration_directories(self, query_builder: QueryBuilderFunction) -> set[Path]:
        """Run a query described by a builder function.

        Args:
            query_builder: Callable configuring the supplied builder.

        Returns:
            Configuration directories matching the query; may be empty.

        Raises:
            MalformedCoordinateError: If the builder receives a bad coordinate.
        """
        builder = self.new_query()
        query_builder(builder)
        return set(self.resolve(builder.build()).directories)

    def find_configuration_directories_for(self, gav_coordinates: str) -> set[Path]:
        """Return configuration directories for one ``group:artifact[:version]``."""
        return self.find_configuration_directories(
            lambda query: query.for_artifacts(gav_coordinates)
        )

    def find_configuration_directories_for_modules(self, modules: Iterable[str]) -> set[Path]:
        """Return configuration directories for every coordinate in modules."""
        coordinates = list(modules)
        return self.find_configuration_directories(lambda query: query.for_artifacts(coordinates))

    def resolve(self, query: Query) -> ResolutionResult:
        """Resolve a prebuilt query, returning the detailed result."""
        return resolve_query(query, self._index, self._logger)
