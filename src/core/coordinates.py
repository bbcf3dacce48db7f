"""Artifact coordinate parsing helpers.

This module turns ``group:artifact[:version]`` strings into typed
coordinates and keeps validation messages consistent across callers.
"""

from __future__ import annotations

from typing import Iterable

from core.constants import COORDINATE_SEPARATOR
from core.errors import MalformedCoordinateError
from core.types import ArtifactCoordinate


def parse_coordinate(text: str) -> ArtifactCoordinate:
    """Parse one coordinate string.

    Args:
        text: Coordinate in format ``group:artifact`` or ``group:artifact:version``.

    Returns:
        Parsed artifact coordinate.

    Raises:
        MalformedCoordinateError: If group or artifact is missing, a segment
            is empty, or there are more than three segments.
    """
    if not isinstance(text, str):
        raise MalformedCoordinateError(
            f"Invalid artifact coordinate {text!r}: expected a string "
            "in format group:artifact[:version]."
        )
    segments = [segment.strip() for segment in text.strip().split(COORDINATE_SEPARATOR)]
    if len(segments) not in (2, 3) or not all(segments):
        raise MalformedCoordinateError(
            f"Invalid artifact coordinate '{text}': expected group:artifact[:version] "
            "with non-empty segments."
        )
    version = segments[2] if len(segments) == 3 else None
    return ArtifactCoordinate(group=segments[0], artifact=segments[1], version=version)


def parse_coordinates(coordinates: str | Iterable[str]) -> tuple[ArtifactCoordinate, ...]:
    """Parse one coordinate string or a collection of them.

    Args:
        coordinates: Single coordinate string or iterable of strings.

    Returns:
        Parsed coordinates in input order.

    Raises:
        MalformedCoordinateError: If any entry is malformed.
    """
    if isinstance(coordinates, str):
        return (parse_coordinate(coordinates),)
    return tuple(parse_coordinate(item) for item in coordinates)


def coerce_pattern(pattern: str | ArtifactCoordinate) -> ArtifactCoordinate:
    """Accept either a coordinate string or an already parsed coordinate."""
    if isinstance(pattern, ArtifactCoordinate):
        return pattern
    return parse_coordinate(pattern)
