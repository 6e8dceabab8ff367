"""Suite execution driver.

Turns a suite root into an execution plan (discovery + ordering) and runs each
planned case through the transport, the transform pipeline and the JSON
comparison. Per-case failures are recorded on the case result; discovery
errors propagate and abort the suite.
"""

from __future__ import annotations

import json
import logging
import os
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from gqlsuite.domain.errors import (
    FixtureReadError,
    GqlSuiteError,
    ResponseMismatchError,
)
from gqlsuite.domain.model import SuiteForest, TestCase
from gqlsuite.interfaces.errors import TransformError, TransportError
from gqlsuite.interfaces.transport import Transport
from gqlsuite.service_layer.compare import json_equal
from gqlsuite.service_layer.discovery import build
from gqlsuite.service_layer.ordering import UNBOUNDED, ordered_cases, skipped_cases
from gqlsuite.service_layer.transform import transform_json

logger = logging.getLogger(__name__)

CaseError = GqlSuiteError | TransportError | TransformError


@dataclass
class CaseResult:
    """Outcome of a single test case."""

    case: TestCase
    passed: bool = False
    duration: float = 0.0
    error: CaseError | None = None
    expected: str = ""
    actual: str = ""


@dataclass
class SuiteResult:
    """Outcome of a suite run."""

    suite_path: str
    results: list[CaseResult] = field(default_factory=list)
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    duration: float = 0.0

    @property
    def ok(self) -> bool:
        """True when no case failed."""
        return self.failed == 0

    def record(self, result: CaseResult) -> None:
        """Add a case result and update the counters."""
        self.results.append(result)
        if result.passed:
            self.passed += 1
        else:
            self.failed += 1


@dataclass(frozen=True)
class SuitePlan:
    """The cases of one suite run, ordered, plus the ones that will be skipped."""

    suite_path: str
    forest: SuiteForest
    cases: tuple[TestCase, ...]
    skipped: tuple[TestCase, ...]


def plan_suite(
    suite_path: str | os.PathLike[str],
    start_path: str = "",
    max_sequence: int = UNBOUNDED,
) -> SuitePlan:
    """Discover a suite root and order the cases reachable from ``start_path``.

    Raises:
        DiscoveryError: If the suite root cannot be discovered.
    """
    forest = build(suite_path)
    return SuitePlan(
        suite_path=str(suite_path),
        forest=forest,
        cases=ordered_cases(forest, start_path, max_sequence),
        skipped=skipped_cases(forest, start_path, max_sequence),
    )


def _read_bytes(kind: str, path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise FixtureReadError(kind, path, str(e)) from e


def _read_text(kind: str, path: Path) -> str:
    try:
        return _read_bytes(kind, path).decode("utf-8")
    except UnicodeDecodeError as e:
        raise FixtureReadError(kind, path, f"not UTF-8 text ({e})") from e


def _read_variables(path: Path | None) -> dict[str, Any] | None:
    if path is None:
        return None
    raw = _read_bytes("variables", path)
    try:
        variables = json.loads(raw)
    except ValueError as e:
        raise FixtureReadError("variables", path, f"invalid JSON ({e})") from e
    if variables is None:
        return None
    if not isinstance(variables, dict):
        raise FixtureReadError("variables", path, "expected a JSON object")
    return variables


class SuiteRunner:
    """Runs planned test cases against a transport.

    Args:
        transport: Transport used to execute every request of the suite.
        fail_fast: Stop the suite at the first failing case.
        on_result: Called with each case result as soon as it is known.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        fail_fast: bool = False,
        on_result: Callable[[CaseResult], None] | None = None,
    ) -> None:
        self._transport = transport
        self._fail_fast = fail_fast
        self._on_result = on_result

    def run_suite(
        self, suite_path: str | os.PathLike[str], start_path: str = ""
    ) -> SuiteResult:
        """Discover, order and run a suite root."""
        return self.run_plan(plan_suite(suite_path, start_path))

    def run_plan(self, plan: SuitePlan) -> SuiteResult:
        """Run the cases of a plan in order."""
        start = time.perf_counter()
        result = SuiteResult(suite_path=plan.suite_path, skipped=len(plan.skipped))
        for case in plan.skipped:
            logger.info(
                "Skipping %s (missing request.gql or response.json)",
                case.relative_path or "<root>",
            )

        for case in plan.cases:
            case_result = self.run_case(case)
            result.record(case_result)
            if self._on_result is not None:
                self._on_result(case_result)
            if not case_result.passed and self._fail_fast:
                logger.warning(
                    "Stopping suite %s after first failure", plan.suite_path
                )
                break

        result.duration = time.perf_counter() - start
        logger.info(
            "Suite %s: %d passed, %d failed, %d skipped",
            plan.suite_path,
            result.passed,
            result.failed,
            result.skipped,
        )
        return result

    def run_case(self, case: TestCase) -> CaseResult:
        """Execute one test case and compare its response with the fixture."""
        start = time.perf_counter()
        result = CaseResult(case=case)
        try:
            self._execute(case, result)
        except (GqlSuiteError, TransportError, TransformError) as e:
            logger.debug("Case %s failed: %s", case.relative_path, e)
            result.error = e
        result.duration = time.perf_counter() - start
        return result

    def _execute(self, case: TestCase, result: CaseResult) -> None:
        if case.request_path is None or case.response_path is None:
            raise FixtureReadError(
                "request", case.absolute_path, "incomplete test case"
            )

        query = _read_text("request", case.request_path)
        variables = _read_variables(case.variables_path)

        actual = self._transport.execute(query, variables)
        actual = transform_json(case.transform_path, actual)

        expected = _read_bytes("expected response", case.response_path)
        expected = transform_json(case.transform_path, expected)

        result.expected = expected.decode("utf-8", errors="replace")
        result.actual = actual.decode("utf-8", errors="replace")
        result.passed = json_equal(expected, actual)
        if not result.passed:
            raise ResponseMismatchError()
