"""Version ordering for configuration directories.

Versions are compared the way Maven orders them in practice: numeric
segments numerically, pre-release qualifiers before the release, and
service packs after it. Trailing zero segments are not significant.
"""

from __future__ import annotations

import re

_TOKEN_PATTERN = re.compile(r"\d+|[a-z]+")
_RELEASE_RANK = 5
_UNKNOWN_QUALIFIER_RANK = 7
_QUALIFIER_RANKS = {
    "alpha": 0,
    "a": 0,
    "beta": 1,
    "b": 1,
    "milestone": 2,
    "m": 2,
    "rc": 3,
    "cr": 3,
    "snapshot": 4,
    "ga": _RELEASE_RANK,
    "final": _RELEASE_RANK,
    "release": _RELEASE_RANK,
    "sp": 6,
}
_END_OF_VERSION = (0, _RELEASE_RANK, "")

VersionKey = tuple[tuple[int, int, str], ...]


def version_sort_key(version: str) -> VersionKey:
    """Return a sort key ordering versions from oldest to newest.

    Args:
        version: Version string such as ``1.2.0`` or ``2.0-rc1``.

    Returns:
        Tuple usable as a ``sorted`` key.
    """
    tokens = [_token_key(token) for token in _TOKEN_PATTERN.findall(version.lower())]
    normalized: list[tuple[int, int, str]] = []
    for index, token in enumerate(tokens):
        next_token = tokens[index + 1] if index + 1 < len(tokens) else None
        # zeros before a qualifier or the end carry no ordering information
        if token == (1, 0, "") and (next_token is None or next_token[0] == 0):
            continue
        normalized.append(token)
    while normalized and normalized[-1] in (_END_OF_VERSION, (1, 0, "")):
        normalized.pop()
    return tuple(normalized) + (_END_OF_VERSION,)


def _token_key(token: str) -> tuple[int, int, str]:
    if token.isdigit():
        return (1, int(token), "")
    rank = _QUALIFIER_RANKS.get(token)
    if rank is None:
        return (0, _UNKNOWN_QUALIFIER_RANK, token)
    if rank == _RELEASE_RANK:
        return _END_OF_VERSION
    return (0, rank, "")
