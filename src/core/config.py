"""Runtime configuration model for the metadata repository.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import os
from pathlib import Path

from core.constants import (
    DEFAULT_CACHE_ROOT,
    DEFAULT_DOWNLOAD_TIMEOUT_SECONDS,
    DEFAULT_LOG_LEVEL,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import ReachabilityConfigError


@dataclass(frozen=True)
class ReachabilityConfig:
    """Validated runtime configuration.

    Attributes:
        cache_root: Local root directory for downloaded and exploded archives.
        log_level: Level that repository resolution events are emitted at.
            It does not change the logging filter; call
            ``configure_logging`` for that, or debug events are dropped
            under the default info filter.
        download_timeout: HTTP download timeout in seconds.
        s3_region: Optional default AWS region for S3 downloads.
        s3_profile: Optional AWS profile for boto3 session initialization.
    """

    cache_root: Path
    log_level: str
    download_timeout: float
    s3_region: str | None
    s3_profile: str | None

    @classmethod
    def from_env(cls) -> "ReachabilityConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ReachabilityConfigError: If environment values are invalid.
        """
        cache_root_value = os.getenv("REACHABILITY_CACHE_DIR", str(DEFAULT_CACHE_ROOT))
        log_level = parse_log_level(
            os.getenv("REACHABILITY_LOG_LEVEL", DEFAULT_LOG_LEVEL),
            "REACHABILITY_LOG_LEVEL",
        )
        timeout_value = os.getenv(
            "REACHABILITY_DOWNLOAD_TIMEOUT",
            str(DEFAULT_DOWNLOAD_TIMEOUT_SECONDS),
        )
        return cls(
            cache_root=Path(cache_root_value).expanduser().resolve(),
            log_level=log_level,
            download_timeout=_parse_download_timeout(timeout_value),
            s3_region=os.getenv("REACHABILITY_S3_REGION"),
            s3_profile=os.getenv("REACHABILITY_S3_PROFILE"),
        )


def parse_log_level(raw_value: str, source_name: str) -> str:
    """Normalize and validate a log level name.

    Args:
        raw_value: Raw level name, any case.
        source_name: Setting name reported in errors.

    Returns:
        Lower-case level name.

    Raises:
        ReachabilityConfigError: If the level is not supported.
    """
    level = raw_value.strip().lower()
    if level not in SUPPORTED_LOG_LEVELS:
        supported_rows = ", ".join(SUPPORTED_LOG_LEVELS)
        raise ReachabilityConfigError(
            f"Invalid {source_name} value '{raw_value}'. Use one of: {supported_rows}."
        )
    return level


def _parse_download_timeout(raw_value: str) -> float:
    """Parse the download timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Positive timeout in seconds.

    Raises:
        ReachabilityConfigError: If value is not a positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise ReachabilityConfigError(
            "Invalid REACHABILITY_DOWNLOAD_TIMEOUT value: "
            f"expected number of seconds, got '{raw_value}'. "
            "Set REACHABILITY_DOWNLOAD_TIMEOUT to a positive number."
        ) from error
    if not math.isfinite(timeout) or timeout <= 0:
        raise ReachabilityConfigError(
            "Invalid REACHABILITY_DOWNLOAD_TIMEOUT value: "
            f"expected a positive number, got '{raw_value}'."
        )
    return timeout
