"""Directory index over a materialized repository root.

This module walks ``root/<group>/<artifact>/<version>/`` and records one
configuration entry per version directory. Anything that does not fit
the layout is skipped, so indexing is best-effort over what is present.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

from core.errors import UnresolvableLocationError
from core.logging_config import get_logger
from core.types import ArtifactCoordinate, ConfigEntry
from index.version_order import version_sort_key

_LOGGER = get_logger(__name__)

ModuleKey = tuple[str, str]


class DirectoryIndex:
    """Read-only mapping of (group, artifact) to version-ordered entries.

    Instances never change after construction and can be shared across
    threads without locking.
    """

    def __init__(self, root: Path, entries: Mapping[ModuleKey, tuple[ConfigEntry, ...]]) -> None:
        self._root = root
        self._entries: Mapping[ModuleKey, tuple[ConfigEntry, ...]] = MappingProxyType(
            dict(entries)
        )

    @property
    def root(self) -> Path:
        """Return the indexed repository root."""
        return self._root

    def modules(self) -> tuple[ModuleKey, ...]:
        """Return indexed (group, artifact) keys in sorted order."""
        return tuple(sorted(self._entries))

    def entries_for(self, group: str, artifact: str) -> tuple[ConfigEntry, ...]:
        """Return entries for a module ordered by version ascending."""
        return self._entries.get((group, artifact), ())

    def find(self, group: str, artifact: str, version: str) -> ConfigEntry | None:
        """Return the entry for an exact version, if indexed."""
        for entry in self.entries_for(group, artifact):
            if entry.coordinate.version == version:
                return entry
        return None

    def latest(self, group: str, artifact: str) -> ConfigEntry | None:
        """Return the newest indexed entry for a module, if any."""
        entries = self.entries_for(group, artifact)
        return entries[-1] if entries else None

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())

    def __iter__(self) -> Iterator[ConfigEntry]:
        for module in self.modules():
            yield from self._entries[module]


def build_directory_index(root: Path) -> DirectoryIndex:
    """Scan a repository root into a directory index.

    Args:
        root: Materialized repository root directory.

    Returns:
        Immutable directory index.

    Raises:
        UnresolvableLocationError: If root is not a directory.
    """
    resolved_root = root.expanduser().resolve()
    if not resolved_root.is_dir():
        raise UnresolvableLocationError(
            f"Repository root {resolved_root} is not a directory. "
            "Point the repository at a directory or a supported archive."
        )
    grouped: dict[ModuleKey, list[ConfigEntry]] = {}
    for group_dir in _child_dirs(resolved_root, resolved_root):
        for artifact_dir in _child_dirs(group_dir, resolved_root):
            for version_dir in _child_dirs(artifact_dir, resolved_root):
                coordinate = ArtifactCoordinate(
                    group=group_dir.name,
                    artifact=artifact_dir.name,
                    version=version_dir.name,
                )
                grouped.setdefault(coordinate.module, []).append(
                    ConfigEntry(coordinate=coordinate, directory=version_dir)
                )
    entries = {
        module: tuple(sorted(module_entries, key=_entry_sort_key))
        for module, module_entries in grouped.items()
    }
    index = DirectoryIndex(resolved_root, entries)
    _LOGGER.info(
        "repository_indexed",
        root=str(resolved_root),
        module_count=len(entries),
        entry_count=len(index),
    )
    return index


def _child_dirs(parent: Path, root: Path) -> list[Path]:
    """List visible subdirectories of parent that stay inside root."""
    try:
        children = sorted(parent.iterdir())
    except OSError as error:
        _LOGGER.warning("repository_index_unreadable", path=str(parent), error=str(error))
        return []
    return [
        child
        for child in children
        if not child.name.startswith(".") and child.is_dir() and _is_inside(child, root)
    ]


def _is_inside(path: Path, root: Path) -> bool:
    return path.resolve().is_relative_to(root)


def _entry_sort_key(entry: ConfigEntry) -> tuple[object, str]:
    version = entry.coordinate.version or ""
    return (version_sort_key(version), version)
