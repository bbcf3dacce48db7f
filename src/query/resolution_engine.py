"""Resolution of repository queries against a directory index.

Each requested coordinate is resolved independently: overrides first,
then excludes, then an index lookup with latest-version fallback.
Excludes also apply to the entry a lookup or fallback picks. A
coordinate that cannot be resolved is logged and omitted; it never
fails the whole query.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, TypeVar

from core.types import (
    ArtifactCoordinate,
    ArtifactOverride,
    ConfigEntry,
    ConfigVersionDirective,
    Query,
    ResolutionResult,
    VersionSubstitution,
)
from index.directory_index import DirectoryIndex
from query.repository_logger import MessageSupplier, RepositoryLogger

_Directive = TypeVar("_Directive", ArtifactOverride, ConfigVersionDirective)


class _ResolutionState:
    """Accumulates per-coordinate outcomes for one query."""

    def __init__(self) -> None:
        self.directories: set[Path] = set()
        self.unresolved: list[ArtifactCoordinate] = []
        self.substitutions: list[VersionSubstitution] = []

    def to_result(self) -> ResolutionResult:
        return ResolutionResult(
            directories=frozenset(self.directories),
            unresolved=tuple(self.unresolved),
            substitutions=tuple(self.substitutions),
        )


def resolve_query(query: Query, index: DirectoryIndex, logger: RepositoryLogger) -> ResolutionResult:
    """Resolve every requested coordinate of a query.

    Args:
        query: Immutable query snapshot.
        index: Directory index of the repository.
        logger: Sink for fallback, miss, and exclusion events.

    Returns:
        Union of resolved directories plus unresolved coordinates and
        applied version substitutions.
    """
    state = _ResolutionState()
    for coordinate in query.artifacts:
        _resolve_coordinate(coordinate, query, index, logger, state)
    return state.to_result()


def _resolve_coordinate(
    coordinate: ArtifactCoordinate,
    query: Query,
    index: DirectoryIndex,
    logger: RepositoryLogger,
    state: _ResolutionState,
) -> None:
    override = _most_specific(query.overrides, coordinate)
    if override is not None:
        if override.directory is None:
            _log(logger, coordinate, lambda: "force-excluded by query override")
            return
        state.directories.add(override.directory)
        return
    if _is_excluded(query, coordinate):
        _log(logger, coordinate, lambda: "excluded by query")
        return
    forced = _most_specific(query.config_versions, coordinate)
    lookup_version = forced.version if forced is not None else coordinate.version
    if lookup_version is not None:
        exact = index.find(coordinate.group, coordinate.artifact, lookup_version)
        if exact is not None and not _is_excluded(query, exact.coordinate):
            state.directories.add(exact.directory)
            return
    latest = _latest_not_excluded(query, index, coordinate)
    if latest is None:
        state.unresolved.append(coordinate)
        indexed = bool(index.entries_for(coordinate.group, coordinate.artifact))
        _log(
            logger,
            coordinate,
            lambda: (
                "missing reachability metadata: all configuration directories excluded"
                if indexed
                else "missing reachability metadata: no configuration directory found"
            ),
        )
        return
    if lookup_version is not None and not query.use_latest_when_untested:
        state.unresolved.append(coordinate)
        _log(
            logger,
            coordinate,
            lambda: (
                f"configuration directory for version {lookup_version} not found "
                "and latest version fallback is disabled"
            ),
        )
        return
    state.directories.add(latest.directory)
    state.substitutions.append(
        VersionSubstitution(requested=coordinate, substituted=latest.coordinate)
    )
    _log(
        logger,
        coordinate,
        lambda: (
            f"configuration directory for version {lookup_version or '<unspecified>'} "
            f"not found, using latest version {latest.coordinate.version}"
        ),
    )


def _most_specific(
    directives: Sequence[_Directive],
    coordinate: ArtifactCoordinate,
) -> _Directive | None:
    """Return the matching directive, preferring version-specific patterns.

    Among equally specific matches the last registered directive wins.
    """
    module_match: _Directive | None = None
    version_match: _Directive | None = None
    for directive in directives:
        if not directive.pattern.matches(coordinate):
            continue
        if directive.pattern.version is None:
            module_match = directive
        else:
            version_match = directive
    return version_match if version_match is not None else module_match


def _log(
    logger: RepositoryLogger,
    coordinate: ArtifactCoordinate,
    message: MessageSupplier,
) -> None:
    logger.log(coordinate.group, coordinate.artifact, coordinate.version, message)


def _is_excluded(query: Query, coordinate: ArtifactCoordinate) -> bool:
    return any(pattern.matches(coordinate) for pattern in query.excludes)


def _latest_not_excluded(
    query: Query,
    index: DirectoryIndex,
    coordinate: ArtifactCoordinate,
) -> ConfigEntry | None:
    """Return the newest indexed entry of the module that no exclude removes."""
    for entry in reversed(index.entries_for(coordinate.group, coordinate.artifact)):
        if not _is_excluded(query, entry.coordinate):
            return entry
    return None
