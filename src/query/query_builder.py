"""Query builder for repository lookups.

Callers describe what they need on a mutable builder; ``build`` returns
an immutable query snapshot that the resolution engine consumes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from core.coordinates import coerce_pattern, parse_coordinates
from core.types import ArtifactCoordinate, ArtifactOverride, ConfigVersionDirective, Query


class QueryBuilder:
    """Mutable builder producing immutable :class:`Query` snapshots."""

    def __init__(self) -> None:
        self._artifacts: dict[ArtifactCoordinate, None] = {}
        self._excludes: dict[ArtifactCoordinate, None] = {}
        self._overrides: list[ArtifactOverride] = []
        self._config_versions: list[ConfigVersionDirective] = []
        self._use_latest_when_untested = True

    def for_artifacts(self, coordinates: str | Iterable[str]) -> "QueryBuilder":
        """Add one or more ``group:artifact[:version]`` coordinates.

        Raises:
            MalformedCoordinateError: If any coordinate is malformed. No
                coordinate from the call is added in that case.
        """
        for coordinate in parse_coordinates(coordinates):
            self._artifacts.setdefault(coordinate, None)
        return self

    def for_artifact(self, coordinate: str | ArtifactCoordinate) -> "QueryBuilder":
        """Add a single coordinate."""
        self._artifacts.setdefault(coerce_pattern(coordinate), None)
        return self

    def exclude(self, pattern: str | ArtifactCoordinate) -> "QueryBuilder":
        """Exclude a module, or one version of it, from the result."""
        self._excludes.setdefault(coerce_pattern(pattern), None)
        return self

    def override(
        self,
        pattern: str | ArtifactCoordinate,
        directory: str | Path,
    ) -> "QueryBuilder":
        """Use an explicit configuration directory for matching coordinates."""
        self._overrides.append(
            ArtifactOverride(pattern=coerce_pattern(pattern), directory=Path(directory))
        )
        return self

    def force_exclude(self, pattern: str | ArtifactCoordinate) -> "QueryBuilder":
        """Override matching coordinates to contribute no directory at all."""
        self._overrides.append(ArtifactOverride(pattern=coerce_pattern(pattern), directory=None))
        return self

    def force_config_version(
        self,
        pattern: str | ArtifactCoordinate,
        version: str,
    ) -> "QueryBuilder":
        """Look up ``version`` instead of the requested version for matches."""
        self._config_versions.append(
            ConfigVersionDirective(pattern=coerce_pattern(pattern), version=version)
        )
        return self

    def use_latest_config_when_version_untested(self, enabled: bool = True) -> "QueryBuilder":
        """Toggle fallback to the latest version when the exact one is absent."""
        self._use_latest_when_untested = enabled
        return self

    def do_not_use_latest_config_when_version_untested(self) -> "QueryBuilder":
        """Report absent exact versions as misses instead of falling back."""
        return self.use_latest_config_when_version_untested(False)

    def build(self) -> Query:
        """Return an immutable snapshot of the current builder state."""
        return Query(
            artifacts=tuple(self._artifacts),
            excludes=tuple(self._excludes),
            overrides=tuple(self._overrides),
            config_versions=tuple(self._config_versions),
            use_latest_when_untested=self._use_latest_when_untested,
        )
