"""Suite discovery: build a suite forest from a directory tree.

The tree is walked once, top-down, so a directory's node always exists before
any of its files are classified. Fixture fragments are merged into the node of
their directory; a directory with a sequence token is registered as a child of
its parent the first time it contributes a fixture. After the walk, nodes with
neither fixtures nor sequenced children are pruned.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from gqlsuite.domain.classifier import classify, is_excluded
from gqlsuite.domain.errors import DiscoveryError, StructuralInconsistencyError
from gqlsuite.domain.model import (
    PATH_SEPARATOR,
    ROOT_PATH,
    SuiteForest,
    SuiteNode,
    TestCase,
    parent_path,
)

logger = logging.getLogger(__name__)


@dataclass
class _DraftNode:
    """Mutable node used only while the forest is being built."""

    path: str
    base_case: TestCase | None = None
    child_suites: dict[str, str] = field(default_factory=dict)
    reference_count: int = 0

    @property
    def is_dead(self) -> bool:
        return self.base_case is None and not self.child_suites

    def freeze(self) -> SuiteNode:
        return SuiteNode(
            path=self.path,
            base_case=self.base_case,
            child_suites=self.child_suites,
            reference_count=self.reference_count,
        )


def _resolve_root(suite_root: str | os.PathLike[str]) -> Path:
    try:
        root = Path(suite_root).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise DiscoveryError(suite_root, f"cannot resolve path ({e})") from e
    if not root.is_dir():
        raise DiscoveryError(root, "not a directory")
    return root


def _relative_dir(root: Path, directory: str) -> str:
    parts = Path(directory).relative_to(root).parts
    return PATH_SEPARATOR.join(parts) if parts else ROOT_PATH


def _attach(root: Path, drafts: dict[str, _DraftNode], fragment: TestCase) -> None:
    """Merge a fixture fragment into its suite and link sequenced suites."""
    node = drafts.get(fragment.relative_path)
    if node is None:
        raise StructuralInconsistencyError(root, fragment.relative_path)

    is_new = node.base_case is None
    node.base_case = (
        fragment if node.base_case is None else node.base_case.merge(fragment)
    )

    if not is_new or fragment.sequence is None:
        return
    parent = parent_path(node.path)
    if parent is None:
        return
    if (parent_node := drafts.get(parent)) is None:
        raise StructuralInconsistencyError(root, parent)
    parent_node.child_suites[fragment.dir_name] = node.path
    node.reference_count += 1


def build(suite_root: str | os.PathLike[str]) -> SuiteForest:
    """Discover every suite under ``suite_root``.

    Args:
        suite_root: Path of the suite root directory.

    Returns:
        SuiteForest: The immutable forest of discovered suites.

    Raises:
        DiscoveryError: If the root cannot be resolved, is not a directory, or
            any part of the tree cannot be read. No partial forest is returned.
    """
    root = _resolve_root(suite_root)

    def _on_walk_error(error: OSError) -> None:
        raise DiscoveryError(
            root, f"cannot read '{error.filename}' ({error.strerror})"
        ) from error

    drafts: dict[str, _DraftNode] = {}
    for directory, dirnames, filenames in os.walk(root, onerror=_on_walk_error):
        relative = _relative_dir(root, directory)
        drafts.setdefault(relative, _DraftNode(path=relative))

        # Excluded subtrees are never entered; sorted for a stable walk order.
        dirnames[:] = sorted(name for name in dirnames if not is_excluded((name,)))

        for filename in sorted(filenames):
            fragment, recognized = classify(
                root, Path(directory) / filename, is_dir=False
            )
            if not recognized or fragment is None:
                continue
            logger.debug("Found fixture %s in suite '%s'", filename, relative)
            _attach(root, drafts, fragment)

    for path in [path for path, node in drafts.items() if node.is_dead]:
        logger.debug("Pruning empty suite '%s'", path)
        del drafts[path]

    forest = SuiteForest(root, {path: node.freeze() for path, node in drafts.items()})
    logger.info(
        "Discovered %d suites with %d test cases in %s",
        len(forest),
        len(forest.cases()),
        root,
    )
    return forest
