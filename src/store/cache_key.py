"""Cache key derivation for repository locations.

This module derives the directory name used to cache one repository
location. Keys are compatible with caches written by the build plugins.
"""

from __future__ import annotations

import hashlib

from core.constants import CACHE_KEY_HASH_ALGORITHM, CACHE_KEY_MIN_WIDTH


def cache_key_for(uri: str) -> str:
    """Compute the cache key of a canonical location URI.

    The UTF-8 URI bytes are hashed twice; the digest is rendered as an
    unsigned lower-case hex number left-padded to the minimum key width.

    Args:
        uri: Canonical location URI.

    Returns:
        Lower-case hex cache key.
    """
    first_pass = hashlib.new(CACHE_KEY_HASH_ALGORITHM, uri.encode("utf-8")).digest()
    digest = hashlib.new(CACHE_KEY_HASH_ALGORITHM, first_pass).digest()
    return format(int.from_bytes(digest, "big"), "x").rjust(CACHE_KEY_MIN_WIDTH, "0")
