"""Lazily opened, process-shared metadata repository.

Build integrations hold one service per repository location. The
location is materialized and indexed on the first query only, and
concurrent first queries open the repository exactly once.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Iterable

from core.config import ReachabilityConfig
from core.repository_spec import QueryPolicy
from query.repository_logger import RepositoryLogger
from repository.filesystem_repository import FileSystemRepository, QueryBuilderFunction
from repository.repository_factory import open_repository
from store.materializer import DirectoryMaterializer


class MetadataRepositoryService:
    """Deferred :class:`FileSystemRepository` for one location."""

    def __init__(
        self,
        location: str | Path,
        config: ReachabilityConfig | None = None,
        materializer: DirectoryMaterializer | None = None,
        logger: RepositoryLogger | None = None,
        policy: QueryPolicy | None = None,
    ) -> None:
        self._location = location
        self._config = config
        self._materializer = materializer
        self._logger = logger
        self._policy = policy
        self._repository: FileSystemRepository | None = None
        self._lock = threading.Lock()

    @property
    def repository(self) -> FileSystemRepository:
        """Return the repository, opening it on first access.

        A failed open is not remembered, so the next access retries.
        """
        repository = self._repository
        if repository is not None:
            return repository
        with self._lock:
            if self._repository is None:
                self._repository = open_repository(
                    self._location,
                    config=self._config,
                    materializer=self._materializer,
                    logger=self._logger,
                    policy=self._policy,
                )
            return self._repository

    def find_configuration_directories(self, query_builder: QueryBuilderFunction) -> set[Path]:
        """Delegate a builder-function query to the repository."""
        return self.repository.find_configuration_directories(query_builder)

    def find_configuration_directories_for(self, gav_coordinates: str) -> set[Path]:
        """Delegate a single-coordinate query to the repository."""
        return self.repository.find_configuration_directories_for(gav_coordinates)

    def find_configuration_directories_for_modules(self, modules: Iterable[str]) -> set[Path]:
        """Delegate a multi-coordinate query to the repository."""
        return self.repository.find_configuration_directories_for_modules(modules)
