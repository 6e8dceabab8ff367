"""Unit tests for the fixture model."""

from pathlib import Path

import pytest

from gqlsuite.domain.errors import DuplicateFixtureError
from gqlsuite.domain.model import SuiteForest, SuiteNode, TestCase, parent_path

SUITE_DIR = Path("/suite/001_First")


def fragment(**slots: Path) -> TestCase:
    """Return a fragment of the ``001_First`` directory with the given slots."""
    return TestCase(
        name="First",
        dir_name="001_First",
        relative_path="001_First",
        absolute_path=SUITE_DIR,
        sequence=1,
        **slots,
    )


REQUEST = SUITE_DIR / "request.gql"
RESPONSE = SUITE_DIR / "response.json"
TRANSFORM = SUITE_DIR / "transform.jq"


@pytest.mark.parametrize(
    "path, expected",
    [
        ("", None),
        ("a", ""),
        ("a/b", "a"),
        ("a/b/001_c", "a/b"),
    ],
)
def test_parent_path(path, expected):
    """Parents are derived by dropping the last path segment."""
    assert parent_path(path) == expected


class TestTestCase:
    """Tests for `TestCase`."""

    @staticmethod
    def test_validity_requires_request_and_response() -> None:
        """Only a case with both a request and a response is valid."""
        assert not fragment().is_valid
        assert not fragment(request_path=REQUEST).is_valid
        assert not fragment(response_path=RESPONSE).is_valid
        assert fragment(request_path=REQUEST, response_path=RESPONSE).is_valid

    @staticmethod
    def test_is_sequenced() -> None:
        """The sequence sentinel is None."""
        assert fragment().is_sequenced
        unsequenced = TestCase(
            name="Extra",
            dir_name="Extra",
            relative_path="Extra",
            absolute_path=SUITE_DIR,
        )
        assert not unsequenced.is_sequenced

    @staticmethod
    def test_merge_fills_missing_slots() -> None:
        """Merging combines the slots of both fragments."""
        merged = fragment(request_path=REQUEST).merge(fragment(response_path=RESPONSE))
        assert merged.request_path == REQUEST
        assert merged.response_path == RESPONSE
        assert merged.is_valid

    @staticmethod
    def test_merge_is_order_independent() -> None:
        """The merge result does not depend on which fragment came first."""
        parts = [
            fragment(request_path=REQUEST),
            fragment(response_path=RESPONSE),
            fragment(transform_path=TRANSFORM),
        ]
        forward = parts[0].merge(parts[1]).merge(parts[2])
        backward = parts[2].merge(parts[1]).merge(parts[0])
        assert forward == backward

    @staticmethod
    def test_merge_never_clears_a_slot() -> None:
        """An empty slot in the later fragment keeps the existing value."""
        merged = fragment(request_path=REQUEST).merge(fragment())
        assert merged.request_path == REQUEST

    @staticmethod
    def test_merge_same_file_twice() -> None:
        """Merging the same file again is a no-op."""
        case = fragment(request_path=REQUEST)
        assert case.merge(fragment(request_path=REQUEST)) == case

    @staticmethod
    def test_merge_conflicting_files_raises() -> None:
        """Two different files for one slot are rejected."""
        other = Path("/suite/001_First/copy/request.gql")
        with pytest.raises(DuplicateFixtureError) as excinfo:
            fragment(request_path=REQUEST).merge(fragment(request_path=other))
        assert excinfo.value.field == "request_path"
        assert excinfo.value.suite_path == "001_First"


class TestSuiteNode:
    """Tests for `SuiteNode`."""

    @staticmethod
    def test_child_suites_are_read_only() -> None:
        """The child map of a node cannot be modified."""
        node = SuiteNode(path="", child_suites={"001_First": "001_First"})
        with pytest.raises(TypeError):
            node.child_suites["002_Second"] = "002_Second"  # type: ignore[index]

    @staticmethod
    def test_child_suites_are_copied() -> None:
        """Changing the source mapping later does not leak into the node."""
        children = {"001_First": "001_First"}
        node = SuiteNode(path="", child_suites=children)
        children["002_Second"] = "002_Second"
        assert list(node.child_suites) == ["001_First"]

    @staticmethod
    @pytest.mark.parametrize(
        "reference_count, children, absorbed",
        [
            (0, {}, False),
            (1, {}, True),
            (1, {"001_x": "a/001_x"}, False),
            (0, {"001_x": "a/001_x"}, False),
        ],
    )
    def test_is_absorbed(reference_count, children, absorbed) -> None:
        """Only referenced leaves are absorbed into their parent."""
        node = SuiteNode(
            path="a", child_suites=children, reference_count=reference_count
        )
        assert node.is_absorbed is absorbed

    @staticmethod
    def test_parent_path() -> None:
        """Node parents are computed from the path."""
        assert SuiteNode(path="").parent_path is None
        assert SuiteNode(path="a/b").parent_path == "a"


class TestSuiteForest:
    """Tests for `SuiteForest`."""

    @staticmethod
    def test_mapping_behavior() -> None:
        """The forest is a read-only mapping of path to node."""
        nodes = {"": SuiteNode(path=""), "a": SuiteNode(path="a")}
        forest = SuiteForest(Path("/suite"), nodes)

        assert len(forest) == 2
        assert set(forest) == {"", "a"}
        assert forest["a"].path == "a"
        assert "b" not in forest
        assert forest.get("b") is None
        assert forest.root == Path("/suite")
        assert not hasattr(forest, "__setitem__")

    @staticmethod
    def test_nodes_are_copied() -> None:
        """Mutating the source mapping does not change the forest."""
        nodes = {"": SuiteNode(path="")}
        forest = SuiteForest(Path("/suite"), nodes)
        nodes["x"] = SuiteNode(path="x")
        assert "x" not in forest

    @staticmethod
    def test_cases_and_invalid_cases() -> None:
        """Cases are listed by path; invalid ones can be singled out."""
        valid = fragment(request_path=REQUEST, response_path=RESPONSE)
        invalid = TestCase(
            name="Third",
            dir_name="003_Third",
            relative_path="003_Third",
            absolute_path=Path("/suite/003_Third"),
            sequence=3,
            request_path=Path("/suite/003_Third/request.gql"),
        )
        forest = SuiteForest(
            Path("/suite"),
            {
                "003_Third": SuiteNode(path="003_Third", base_case=invalid),
                "001_First": SuiteNode(path="001_First", base_case=valid),
                "": SuiteNode(path="", child_suites={"001_First": "001_First"}),
            },
        )
        assert forest.cases() == [valid, invalid]
        assert forest.invalid_cases() == [invalid]
