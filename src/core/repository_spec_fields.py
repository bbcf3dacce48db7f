"""Type-safe field parsing helpers for repository spec files.

This module centralizes primitive parsing so the spec loader stays
concise and produces consistent validation errors.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from core.errors import ReachabilitySpecError


def expect_mapping(value: object, context: str) -> Mapping[str, object]:
    """Validate a mapping with string keys."""
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise ReachabilitySpecError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise ReachabilitySpecError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def expect_sequence(value: object, context: str) -> Sequence[object]:
    """Validate a list value."""
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise ReachabilitySpecError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def required_string(mapping: Mapping[str, object], field_name: str, context: str) -> str:
    """Read a required string field."""
    value = optional_string(mapping, field_name, context)
    if value is None:
        raise ReachabilitySpecError(f"{context} is missing required field '{field_name}'.")
    return value


def optional_string(mapping: Mapping[str, object], field_name: str, context: str) -> str | None:
    """Read an optional string field."""
    value = mapping.get(field_name)
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    raise ReachabilitySpecError(f"{context} field '{field_name}' must be a string when provided.")


def optional_bool(
    mapping: Mapping[str, object],
    field_name: str,
    context: str,
    default_value: bool,
) -> bool:
    """Read an optional boolean field."""
    value = mapping.get(field_name)
    if value is None:
        return default_value
    if isinstance(value, bool):
        return value
    raise ReachabilitySpecError(f"{context} field '{field_name}' must be true/false.")


def string_list(mapping: Mapping[str, object], field_name: str, context: str) -> tuple[str, ...]:
    """Read an optional list of non-empty strings."""
    value = mapping.get(field_name)
    if value is None:
        return ()
    rows = expect_sequence(value, f"{context} field '{field_name}'")
    parsed_rows = []
    for row in rows:
        if not isinstance(row, str) or not row.strip():
            raise ReachabilitySpecError(
                f"{context} field '{field_name}' must only contain non-empty strings."
            )
        parsed_rows.append(row.strip())
    return tuple(parsed_rows)


def string_mapping(
    mapping: Mapping[str, object],
    field_name: str,
    context: str,
    allow_null: bool,
) -> Mapping[str, str | None]:
    """Read an optional mapping of strings to strings."""
    value = mapping.get(field_name)
    if value is None:
        return {}
    rows = expect_mapping(value, f"{context} field '{field_name}'")
    parsed_rows: dict[str, str | None] = {}
    for key, row in rows.items():
        if row is None and allow_null:
            parsed_rows[key] = None
            continue
        if not isinstance(row, str) or not row.strip():
            raise ReachabilitySpecError(
                f"{context} field '{field_name}' value for '{key}' must be a non-empty string."
            )
        parsed_rows[key] = row.strip()
    return parsed_rows


def validate_keys(mapping: Mapping[str, object], allowed_keys: set[str], context: str) -> None:
    """Reject unknown fields."""
    unknown_keys = sorted(set(mapping) - allowed_keys)
    if unknown_keys:
        raise ReachabilitySpecError(f"{context} contains unknown fields: {', '.join(unknown_keys)}.")
