"""Execution ordering for a suite forest.

Expanding a suite emits, in order:

1. the full expansion of its ancestors, root first;
2. its own base case;
3. the base cases of its sequenced children, by ascending sequence token
   (unsequenced children, if any were registered, follow by name).

Grandchildren are not expanded: a nested suite contributes its children only
when ordering starts at (or below) that suite. Every suite path is expanded at
most once per call and every case is emitted at most once per call.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from gqlsuite.domain.model import SuiteNode, TestCase, parent_path

UNBOUNDED = -1

CasePredicate = Callable[[TestCase], bool]


def child_sort_key(case: TestCase) -> tuple[bool, int, str, str]:
    """Sort key placing sequenced cases first, by token, then the rest by name."""
    if case.sequence is not None:
        return (False, case.sequence, "", "")
    return (True, 0, case.name, case.dir_name)


def _within_limit(case: TestCase, max_sequence: int) -> bool:
    if max_sequence < 0 or case.sequence is None:
        return True
    return case.sequence <= max_sequence


def _children(
    forest: Mapping[str, SuiteNode],
    node: SuiteNode,
    max_sequence: int,
    accept: CasePredicate,
) -> list[TestCase]:
    children = []
    for child_path in node.child_suites.values():
        child = forest.get(child_path)
        if child is None or child.base_case is None:
            continue
        if not accept(child.base_case) or not _within_limit(
            child.base_case, max_sequence
        ):
            continue
        children.append(child.base_case)
    return sorted(children, key=child_sort_key)


class _Traversal:
    """State of one ordering call: visited suites and emitted cases."""

    def __init__(self, forest: Mapping[str, SuiteNode], accept: CasePredicate) -> None:
        self._forest = forest
        self._accept = accept
        self._visited: set[str] = set()
        self._emitted: set[str] = set()
        self.cases: list[TestCase] = []

    def expand(self, path: str, max_sequence: int = UNBOUNDED) -> None:
        if path in self._visited:
            return
        if (parent := parent_path(path)) is not None:
            self.expand(parent)

        self._visited.add(path)
        node = self._forest.get(path)
        if node is None:
            return

        self._emit(node.base_case)
        for case in _children(self._forest, node, max_sequence, self._accept):
            self._emit(case)

    def _emit(self, case: TestCase | None) -> None:
        if case is None or not self._accept(case):
            return
        if case.relative_path in self._emitted:
            return
        self._emitted.add(case.relative_path)
        self.cases.append(case)


def _collect(
    forest: Mapping[str, SuiteNode],
    start_path: str,
    max_sequence: int,
    accept: CasePredicate,
) -> tuple[TestCase, ...]:
    if start_path not in forest:
        return ()
    traversal = _Traversal(forest, accept)
    traversal.expand(start_path, max_sequence)
    return tuple(traversal.cases)


def ordered_cases(
    forest: Mapping[str, SuiteNode],
    start_path: str = "",
    max_sequence: int = UNBOUNDED,
) -> tuple[TestCase, ...]:
    """Return the valid test cases of ``start_path`` in execution order.

    Args:
        forest: The suite forest, as returned by ``build``.
        start_path: Relative path of the suite to order (``""`` = root).
        max_sequence: Highest sequence token of ``start_path``'s children to
            include; ``-1`` includes all. Ancestors are never limited.

    Returns:
        tuple[TestCase, ...]: The ordered cases; empty for an unknown path.
    """
    return _collect(forest, start_path, max_sequence, lambda case: case.is_valid)


def skipped_cases(
    forest: Mapping[str, SuiteNode],
    start_path: str = "",
    max_sequence: int = UNBOUNDED,
) -> tuple[TestCase, ...]:
    """Return the invalid cases ``ordered_cases`` leaves out for the same call.

    These are the cases that would have run at their position in the order had
    they carried both a request and a response fixture.
    """
    return _collect(forest, start_path, max_sequence, lambda case: not case.is_valid)
