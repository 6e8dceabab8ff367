"""End-to-end tests for ``gqlsuite list``."""

import json

from gqlsuite.entrypoints.cli.main import gqlsuite
from tests.fixtures.suite_trees import case_files

# pylint: disable=unused-argument

BASE_ARGS = ["--no-flight-recorder"]


def make_tree(make_suite):
    """A root with ordered steps, a nested suite and a standalone suite."""
    return make_suite(
        case_files("")
        | case_files("001_Open")
        | case_files("002_Post")
        | case_files("002_Post/001_Reverse")
        | case_files("Standalone")
        | case_files("SKIP_Old")
    )


def test_list_prints_runnable_suites(runner, make_suite):
    """Every runnable suite is printed with its ordered cases."""
    root = make_tree(make_suite)
    result = runner.invoke(gqlsuite, BASE_ARGS + ["list", str(root)])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        ".",
        "  .",
        "  001_Open",
        "  002_Post",
        "002_Post",
        "  .",
        "  001_Open",
        "  002_Post",
        "  002_Post/001_Reverse",
        "Standalone",
        "  .",
        "  001_Open",
        "  002_Post",
        "  Standalone",
    ]


def test_list_json(runner, make_suite):
    """--json prints a machine-readable mapping."""
    root = make_tree(make_suite)
    result = runner.invoke(gqlsuite, BASE_ARGS + ["list", "--json", str(root)])

    assert result.exit_code == 0, result.output
    order = json.loads(result.output)
    assert list(order) == ["", "002_Post", "Standalone"]
    assert order["002_Post"][-1] == "002_Post/001_Reverse"
    assert not any("SKIP" in path for cases in order.values() for path in cases)


def test_list_empty_suite(runner, make_suite):
    """A tree without fixtures lists nothing."""
    root = make_suite({}, dirs=("empty",))
    result = runner.invoke(gqlsuite, BASE_ARGS + ["list", "--json", str(root)])
    assert result.exit_code == 0
    assert json.loads(result.output) == {}


def test_list_missing_path(runner, tmp_path):
    """A missing suite root is a usage error."""
    result = runner.invoke(gqlsuite, BASE_ARGS + ["list", str(tmp_path / "nope")])
    assert result.exit_code == 2
    assert "does not exist" in result.output
