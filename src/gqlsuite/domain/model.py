"""Fixture model: test cases, suite nodes and the suite forest.

A suite forest is a flat mapping from a suite's relative path to its node.
Nodes never hold references to each other; a node's parent is found by
dropping the last segment of its path and looking the result up in the forest.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from gqlsuite.domain.errors import DuplicateFixtureError

ROOT_PATH = ""
PATH_SEPARATOR = "/"

# Fixture slots of a test case, in the order they are reported.
FIXTURE_FIELDS = ("request_path", "response_path", "variables_path", "transform_path")


def parent_path(path: str) -> str | None:
    """Return the structural parent of a suite path.

    The root (``""``) has no parent and yields ``None``; top-level suites have
    the root as parent.
    """
    if path == ROOT_PATH:
        return None
    head, _, _ = path.rpartition(PATH_SEPARATOR)
    return head


@dataclass(frozen=True)
class TestCase:
    """One executable unit: the fixtures found directly in one directory.

    Attributes:
        name: Directory base name with its ordering token stripped.
        dir_name: The raw directory base name (``001_First``).
        relative_path: Directory path relative to the suite root (``""`` = root).
        absolute_path: Absolute path of the directory.
        sequence: Ordering token, or ``None`` when the directory is unsequenced.
        request_path: ``request.gql`` fixture, required for validity.
        response_path: ``response.json`` fixture, required for validity.
        variables_path: Optional ``variables.json`` fixture.
        transform_path: Optional ``transform.jq`` fixture.
    """

    __test__ = False  # not a pytest test class

    name: str
    dir_name: str
    relative_path: str
    absolute_path: Path
    sequence: int | None = None
    request_path: Path | None = None
    response_path: Path | None = None
    variables_path: Path | None = None
    transform_path: Path | None = None

    @property
    def is_sequenced(self) -> bool:
        """True when the directory name carries a numeric ordering token."""
        return self.sequence is not None

    @property
    def is_valid(self) -> bool:
        """True when both the request and the expected response are present."""
        return self.request_path is not None and self.response_path is not None

    def merge(self, other: TestCase) -> TestCase:
        """Combine two fragments of the same directory into one test case.

        Unset fields never overwrite set ones, so the result does not depend on
        the order the fragments were found in.

        Raises:
            DuplicateFixtureError: If both fragments set the same fixture slot
                to different files.
        """
        updates: dict[str, Path] = {}
        for name in FIXTURE_FIELDS:
            mine, theirs = getattr(self, name), getattr(other, name)
            if theirs is None or theirs == mine:
                continue
            if mine is not None:
                raise DuplicateFixtureError(
                    self.absolute_path, self.relative_path, name, mine, theirs
                )
            updates[name] = theirs
        return dataclasses.replace(self, **updates) if updates else self


@dataclass(frozen=True)
class SuiteNode:
    """One directory of the suite forest.

    Attributes:
        path: Relative path from the suite root (``""`` = root).
        base_case: The test case owned by this directory, if it has fixtures.
        child_suites: Sequenced child directories, directory name -> suite path.
        reference_count: How many parents registered this node as a child.
    """

    path: str
    base_case: TestCase | None = None
    child_suites: Mapping[str, str] = field(default_factory=dict)
    reference_count: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "child_suites", MappingProxyType(dict(self.child_suites))
        )

    @property
    def parent_path(self) -> str | None:
        """Structural parent path, ``None`` for the root."""
        return parent_path(self.path)

    @property
    def is_absorbed(self) -> bool:
        """True for a sequenced leaf that only runs as part of its parent."""
        return self.reference_count > 0 and not self.child_suites


class SuiteForest(Mapping[str, SuiteNode]):
    """Read-only mapping of every discovered suite under one suite root."""

    def __init__(self, root: Path, nodes: Mapping[str, SuiteNode]) -> None:
        self._root = root
        self._nodes = dict(nodes)

    @property
    def root(self) -> Path:
        """Absolute path of the suite root directory."""
        return self._root

    def __getitem__(self, path: str) -> SuiteNode:
        return self._nodes[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def cases(self) -> list[TestCase]:
        """All base cases of the forest, ordered by relative path."""
        return [
            node.base_case
            for _, node in sorted(self._nodes.items())
            if node.base_case is not None
        ]

    def invalid_cases(self) -> list[TestCase]:
        """Discovered cases lacking a request or a response fixture."""
        return [case for case in self.cases() if not case.is_valid]

    def __repr__(self) -> str:
        return f"SuiteForest(root={str(self._root)!r}, suites={sorted(self._nodes)!r})"
