"""Unit tests for the filesystem repository facade."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import MalformedCoordinateError, UnresolvableLocationError
from core.repository_spec import QueryPolicy
from core.types import ArtifactCoordinate, ArtifactOverride
from query.repository_logger import CollectingRepositoryLogger
from repository.filesystem_repository import FileSystemRepository
from tests.repository_fixtures import build_repository_tree


@pytest.fixture()
def repository_root(tmp_path: Path) -> Path:
    return build_repository_tree(
        tmp_path / "repo",
        ["org.example:lib:1.0", "org.example:lib:2.0", "io.other:tool:0.9"],
    )


def test_exact_lookup_returns_version_directory(repository_root: Path) -> None:
    """A tested version should map to its own directory."""
    repository = FileSystemRepository(repository_root, logger=CollectingRepositoryLogger())

    directories = repository.find_configuration_directories_for("org.example:lib:1.0")

    assert directories == {repository_root / "org.example" / "lib" / "1.0"}


def test_untested_version_falls_back_and_logs_once(repository_root: Path) -> None:
    """An untested version should use the latest directory with one log event."""
    logger = CollectingRepositoryLogger()
    repository = FileSystemRepository(repository_root, logger=logger)

    directories = repository.find_configuration_directories_for("org.example:lib:1.5")

    assert directories == {repository_root / "org.example" / "lib" / "2.0"}
    assert len(logger.events) == 1


def test_modules_query_unions_results(repository_root: Path) -> None:
    """Multiple modules should resolve to the union of their directories."""
    logger = CollectingRepositoryLogger()
    repository = FileSystemRepository(repository_root, logger=logger)

    directories = repository.find_configuration_directories_for_modules(
        ["org.example:lib:2.0", "io.other:tool:0.9", "missing:module:1.0"]
    )

    assert directories == {
        repository_root / "org.example" / "lib" / "2.0",
        repository_root / "io.other" / "tool" / "0.9",
    }
    assert [event.group for event in logger.events] == ["missing"]


def test_builder_function_query(repository_root: Path) -> None:
    """Builder functions should configure the query before resolution."""
    repository = FileSystemRepository(repository_root, logger=CollectingRepositoryLogger())

    directories = repository.find_configuration_directories(
        lambda query: query.for_artifacts(["org.example:lib:1.0", "io.other:tool:0.9"]).exclude(
            "io.other:tool"
        )
    )

    assert directories == {repository_root / "org.example" / "lib" / "1.0"}


def test_malformed_coordinate_fails_query(repository_root: Path) -> None:
    """Malformed coordinates should raise instead of resolving to nothing."""
    repository = FileSystemRepository(repository_root, logger=CollectingRepositoryLogger())

    with pytest.raises(MalformedCoordinateError):
        repository.find_configuration_directories_for("org.example")


def test_policy_is_seeded_into_each_query(repository_root: Path, tmp_path: Path) -> None:
    """Repository policy directives should apply to every query."""
    policy = QueryPolicy(
        use_latest_when_untested=False,
        overrides=(
            ArtifactOverride(
                pattern=ArtifactCoordinate("io.other", "tool"),
                directory=tmp_path / "tool-config",
            ),
        ),
    )
    repository = FileSystemRepository(
        repository_root,
        logger=CollectingRepositoryLogger(),
        policy=policy,
    )

    directories = repository.find_configuration_directories_for_modules(
        ["org.example:lib:1.5", "io.other:tool:0.9"]
    )

    assert directories == {tmp_path / "tool-config"}
    assert repository.new_query().build().use_latest_when_untested is False


def test_missing_root_is_unresolvable(tmp_path: Path) -> None:
    """A missing root directory cannot be indexed."""
    with pytest.raises(UnresolvableLocationError):
        FileSystemRepository(tmp_path / "missing")
