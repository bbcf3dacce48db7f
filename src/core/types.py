"""Shared typed models.

This module defines immutable data models used by the cache, index,
query, and repository layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from core.constants import COORDINATE_SEPARATOR

ArchiveFormat = Literal["zip", "tar.gz", "tar.bz2"]
LocationKind = Literal["local", "http", "s3"]


@dataclass(frozen=True)
class ArtifactCoordinate:
    """Artifact coordinates, also used as directive patterns.

    Attributes:
        group: Group identifier, e.g. ``org.example``.
        artifact: Artifact identifier within the group.
        version: Optional version; ``None`` means any or latest.
    """

    group: str
    artifact: str
    version: str | None = None

    @property
    def module(self) -> tuple[str, str]:
        """Return the (group, artifact) index key."""
        return (self.group, self.artifact)

    def matches(self, coordinate: "ArtifactCoordinate") -> bool:
        """Return whether this pattern applies to a requested coordinate.

        A pattern without a version matches every version of its module.
        """
        if self.module != coordinate.module:
            return False
        return self.version is None or self.version == coordinate.version

    def with_version(self, version: str | None) -> "ArtifactCoordinate":
        """Return a copy pointing at another version."""
        return ArtifactCoordinate(group=self.group, artifact=self.artifact, version=version)

    def __str__(self) -> str:
        parts = [self.group, self.artifact]
        if self.version is not None:
            parts.append(self.version)
        return COORDINATE_SEPARATOR.join(parts)


@dataclass(frozen=True)
class ConfigEntry:
    """One configuration directory found in a repository root.

    Attributes:
        coordinate: Fully versioned artifact coordinate.
        directory: Absolute configuration directory under the root.
    """

    coordinate: ArtifactCoordinate
    directory: Path


@dataclass(frozen=True)
class ArtifactOverride:
    """Override directive for one module or module version.

    Attributes:
        pattern: Coordinate pattern the override applies to.
        directory: Explicit configuration directory, or ``None`` to
            force-exclude matching coordinates.
    """

    pattern: ArtifactCoordinate
    directory: Path | None

    @property
    def is_force_exclude(self) -> bool:
        """Return whether this override removes matches entirely."""
        return self.directory is None


@dataclass(frozen=True)
class ConfigVersionDirective:
    """Forces the configuration version looked up for matching coordinates."""

    pattern: ArtifactCoordinate
    version: str


@dataclass(frozen=True)
class Query:
    """Immutable query snapshot consumed by the resolution engine.

    Attributes:
        artifacts: Requested coordinates in first-seen order.
        excludes: Exclude patterns.
        overrides: Override directives in registration order.
        config_versions: Forced configuration versions.
        use_latest_when_untested: Fall back to the latest indexed version
            when the requested version has no configuration directory.
    """

    artifacts: tuple[ArtifactCoordinate, ...] = ()
    excludes: tuple[ArtifactCoordinate, ...] = ()
    overrides: tuple[ArtifactOverride, ...] = ()
    config_versions: tuple[ConfigVersionDirective, ...] = ()
    use_latest_when_untested: bool = True


@dataclass(frozen=True)
class VersionSubstitution:
    """Record of a fallback from a requested to an indexed version."""

    requested: ArtifactCoordinate
    substituted: ArtifactCoordinate


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of resolving one query against an index.

    Attributes:
        directories: Resolved configuration directories.
        unresolved: Requested coordinates that contributed nothing
            because the index had no usable entry.
        substitutions: Fallbacks applied during resolution.
    """

    directories: frozenset[Path]
    unresolved: tuple[ArtifactCoordinate, ...]
    substitutions: tuple[VersionSubstitution, ...]


@dataclass(frozen=True)
class RepositoryLocation:
    """Parsed repository location.

    Attributes:
        uri: Canonical URI string used for cache keys.
        kind: Local filesystem, HTTP(S), or S3 location.
        path: Local filesystem path when kind is ``local``.
        archive_format: Archive format inferred from the extension, if any.
    """

    uri: str
    kind: LocationKind
    path: Path | None
    archive_format: ArchiveFormat | None


@dataclass(frozen=True)
class CacheSlot:
    """Filesystem paths of one cache key."""

    key: str
    archive_path: Path
    exploded_dir: Path
