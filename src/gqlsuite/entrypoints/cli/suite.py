"""GQLSUITE suite commands: ``run`` and ``list``.

Behavior
- Results (PASS/FAIL/SKIP lines and summaries) go to **stdout**; notices and
  logs go to **stderr**.
- ``run`` provisions one backend per suite root (a fresh container unless
  ``--endpoint`` is given) and always tears it down, even on failure.
- ``run`` exits with status 1 if any case failed.

Failure modes
- Unreadable suite root or broken tree -> ``ClickException`` naming the root.
- Container cannot be started or never becomes healthy -> ``ClickException``.
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from gqlsuite import config
from gqlsuite.adapters.backend import ContainerBackend, ExternalBackend
from gqlsuite.adapters.backend.container import DEFAULT_IMAGE
from gqlsuite.adapters.transport import HttpTransport
from gqlsuite.domain.errors import DiscoveryError
from gqlsuite.interfaces.backend import Backend
from gqlsuite.interfaces.errors import BackendError
from gqlsuite.service_layer import build, ordered_cases, runnable_paths
from gqlsuite.service_layer.compare import compact
from gqlsuite.service_layer.runner import (
    CaseResult,
    SuiteResult,
    SuiteRunner,
    plan_suite,
)

from .helpers import parse_header_option, warn

RULE = "=" * 40


def _display(relative_path: str) -> str:
    return relative_path or "."


def _echo_result(result: CaseResult, verbose_diff: bool) -> None:
    duration_ms = round(result.duration * 1000)
    label = _display(result.case.relative_path)
    if result.passed:
        click.echo(f"PASS: {label} ({duration_ms}ms)")
        return
    click.echo(f"FAIL: {label} ({duration_ms}ms)")
    if result.error is not None:
        click.echo(f"      Error: {result.error}")
    if verbose_diff and result.expected and result.actual:
        click.echo(f"      Expected: {compact(result.expected)}")
        click.echo(f"      Actual:   {compact(result.actual)}")


def _make_backend(
    endpoint: str | None, image: str | None, always_pull: bool
) -> Backend:
    if endpoint:
        return ExternalBackend(endpoint)
    return ContainerBackend(image, always_pull=always_pull)


def _run_one(  # pylint: disable=too-many-arguments
    suite_path: Path,
    backend: Backend,
    headers: dict[str, str],
    entry: str,
    fail_fast: bool,
    verbose_diff: bool,
) -> SuiteResult:
    plan = plan_suite(suite_path, entry)

    with backend:
        click.echo(f"\n{RULE}\nRunning suite: {suite_path}\n{RULE}")
        click.echo(f"Endpoint: {backend.graphql_url}")
        click.echo(f"Discovered {len(plan.cases)} tests\n")
        for case in plan.skipped:
            click.echo(
                f"SKIP: {_display(case.relative_path)} "
                "(missing request.gql or response.json)"
            )

        transport = HttpTransport(
            backend.graphql_url,
            headers=config.request_headers(str(suite_path), headers),
        )
        try:
            runner = SuiteRunner(
                transport,
                fail_fast=fail_fast,
                on_result=lambda r: _echo_result(r, verbose_diff),
            )
            result = runner.run_plan(plan)
        finally:
            transport.close()

    click.echo(
        f"\n=== Suite complete: {result.passed} passed, {result.failed} failed, "
        f"{result.skipped} skipped ({round(result.duration * 1000)}ms) ==="
    )
    return result


@click.command()
@click.argument(
    "suite_paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--endpoint",
    help="External GraphQL endpoint URL (skips container creation).",
    envvar=config.ENDPOINT_ENV,
    show_envvar=True,
)
@click.option(
    "--header",
    "headers",
    multiple=True,
    callback=parse_header_option,
    help="Custom request header in 'Key: Value' format. Repeatable.",
)
@click.option(
    "--image",
    help="Service image for per-suite containers.",
    default=DEFAULT_IMAGE,
    envvar=config.IMAGE_ENV,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--always-pull/--no-always-pull",
    default=False,
    help="Pull the service image before starting each container.",
    envvar=config.ALWAYS_PULL_ENV,
    show_envvar=True,
)
@click.option(
    "--entry",
    default="",
    help="Suite path (relative to each root) to start ordering from.",
)
@click.option(
    "--fail-fast/--no-fail-fast",
    default=False,
    help="Stop execution on the first failing test.",
)
@click.option(
    "--verbose-diff/--no-verbose-diff",
    default=False,
    help="Print expected and actual responses of failing tests.",
)
@click.pass_context
def run(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    suite_paths: tuple[Path, ...],
    endpoint: str | None,
    headers: dict[str, str],
    image: str,
    always_pull: bool,
    entry: str,
    fail_fast: bool,
    verbose_diff: bool,
) -> None:
    """Run GraphQL test suites.

    Each SUITE_PATH is discovered, ordered and run against its own backend.
    """
    totals = SuiteResult(suite_path="TOTAL")

    for suite_path in suite_paths:
        backend = _make_backend(endpoint, image, always_pull)
        try:
            result = _run_one(
                suite_path, backend, headers, entry.strip("/"), fail_fast, verbose_diff
            )
        except (DiscoveryError, BackendError) as e:
            raise click.ClickException(str(e)) from e

        totals.passed += result.passed
        totals.failed += result.failed
        totals.skipped += result.skipped
        if fail_fast and not result.ok:
            if len(suite_paths) > 1:
                warn("Stopping after first failing suite (--fail-fast).")
            break

    click.echo(
        f"\n{RULE}\nTOTAL: {totals.passed} passed, {totals.failed} failed, "
        f"{totals.skipped} skipped\n{RULE}"
    )
    if not totals.ok:
        ctx.exit(1)


@click.command(name="list")
@click.argument(
    "suite_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print a JSON object mapping each runnable suite to its ordered cases.",
)
def list_suites(suite_path: Path, as_json: bool) -> None:
    """List runnable suites of SUITE_PATH and their execution order."""
    try:
        forest = build(suite_path)
    except DiscoveryError as e:
        raise click.ClickException(str(e)) from e

    order = {
        path: [case.relative_path for case in ordered_cases(forest, path)]
        for path in runnable_paths(forest)
    }
    if as_json:
        click.echo(json.dumps(order, indent=2))
        return

    for path, cases in order.items():
        click.echo(_display(path))
        for case_path in cases:
            click.echo(f"  {_display(case_path)}")
