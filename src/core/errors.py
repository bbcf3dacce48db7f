"""Reachability repository exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class ReachabilityError(Exception):
    """Base exception for all metadata repository failures."""


class ReachabilityConfigError(ReachabilityError):
    """Raised for invalid runtime configuration."""


class ReachabilitySpecError(ReachabilityError):
    """Raised for invalid or unsupported repository spec files."""


class ReachabilityDependencyError(ReachabilityError):
    """Raised when an optional runtime dependency is missing."""


class UnresolvableLocationError(ReachabilityError):
    """Raised when a repository location is missing or not a directory."""


class UnsupportedFormatError(ReachabilityError):
    """Raised when an archive location has an unsupported extension."""


class DownloadFailureError(ReachabilityError):
    """Raised when a remote repository archive cannot be downloaded."""


class ExtractionFailureError(ReachabilityError):
    """Raised when a repository archive cannot be extracted."""


class MalformedCoordinateError(ReachabilityError):
    """Raised when an artifact coordinate string cannot be parsed."""
