"""Selection of runnable suite paths."""

from collections.abc import Mapping

from gqlsuite.domain.model import SuiteNode


def runnable_paths(forest: Mapping[str, SuiteNode]) -> list[str]:
    """Return the suite paths that are independent execution entry points.

    A sequenced leaf (referenced by its parent and without children of its
    own) is absorbed into its parent's ordering and left out. Every other
    suite, the root included, is runnable.

    Returns:
        list[str]: Distinct relative paths, sorted lexicographically.
    """
    return sorted(path for path, node in forest.items() if not node.is_absorbed)
