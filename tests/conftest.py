"""Global pytest fixtures and hooks for GQLSUITE."""

from pathlib import Path

import pytest

pytest_plugins = [
    "tests.fixtures.suite_trees",
    "tests.fixtures.docker",
]

TESTS_ROOT = Path(__file__).parent.resolve()

# Tests below these top-level directories get the matching mark by default.
DIRECTORY_MARKS = ("unit", "integration", "e2e")


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config,  # pylint: disable=unused-argument
    items: list[pytest.Item],
) -> None:
    """Mark items by the top-level test directory they live in."""
    for item in items:
        try:
            top = item.path.resolve().relative_to(TESTS_ROOT).parts[0]
        except (ValueError, IndexError):
            continue
        if top in DIRECTORY_MARKS and item.get_closest_marker(top) is None:
            item.add_marker(getattr(pytest.mark, top))
