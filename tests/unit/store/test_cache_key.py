"""Unit tests for cache key derivation."""

from __future__ import annotations

import hashlib

from store.cache_key import cache_key_for


def test_cache_key_is_stable_for_the_same_uri() -> None:
    """The same URI should always map to the same key."""
    uri = "https://example.org/metadata.zip"

    assert cache_key_for(uri) == cache_key_for(uri)


def test_cache_key_differs_between_uris() -> None:
    """Distinct URIs should use distinct cache slots."""
    assert cache_key_for("https://example.org/a.zip") != cache_key_for("https://example.org/b.zip")


def test_cache_key_is_double_sha1_hex() -> None:
    """Keys should be the twice-applied SHA-1 digest in lower-case hex."""
    uri = "https://example.org/metadata.zip"
    digest = hashlib.sha1(hashlib.sha1(uri.encode("utf-8")).digest()).digest()

    key = cache_key_for(uri)

    assert int(key, 16) == int.from_bytes(digest, "big") and key == key.lower()


def test_cache_key_is_zero_padded_to_minimum_width() -> None:
    """Keys should never be shorter than 32 hex characters."""
    keys = [cache_key_for(f"file:///repo-{index}.zip") for index in range(200)]

    assert all(len(key) >= 32 for key in keys)
