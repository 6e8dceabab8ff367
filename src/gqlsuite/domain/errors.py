"""Domain-layer error definitions."""

import os

# ============================================================================
#                           General domain errors
# ============================================================================


class GqlSuiteError(Exception):
    """Base class for all GQLSUITE errors."""


# ============================================================================
#                           Discovery errors
# ============================================================================


class DiscoveryError(GqlSuiteError):
    """Raised when a suite root cannot be turned into a suite forest.

    Discovery is all-or-nothing: once this is raised no partial forest is
    available for the suite root.
    """

    def __init__(self, root: str | os.PathLike[str], reason: str) -> None:
        super().__init__(f"Failed to discover tests in '{root}': {reason}")
        self.root = str(root)
        self.reason = reason


class StructuralInconsistencyError(DiscoveryError):
    """Raised when a fixture file's directory has no suite node.

    The walk always visits a directory before its contents, so this signals a
    broken traversal rather than bad input.
    """

    def __init__(self, root: str | os.PathLike[str], suite_path: str) -> None:
        super().__init__(root, f"suite for '{suite_path}' not found")
        self.suite_path = suite_path


class DuplicateFixtureError(DiscoveryError):
    """Raised when two different files claim the same fixture slot of one suite."""

    def __init__(
        self,
        root: str | os.PathLike[str],
        suite_path: str,
        field: str,
        existing: str | os.PathLike[str],
        duplicate: str | os.PathLike[str],
    ) -> None:
        super().__init__(
            root,
            f"suite '{suite_path}' has conflicting {field} fixtures: "
            f"'{existing}' and '{duplicate}'",
        )
        self.suite_path = suite_path
        self.field = field


# ============================================================================
#                           Execution errors
# ============================================================================


class FixtureReadError(GqlSuiteError):
    """Raised when a fixture file of a test case cannot be read or parsed."""

    def __init__(self, kind: str, path: str | os.PathLike[str], reason: str) -> None:
        super().__init__(f"failed to read {kind} '{path}': {reason}")
        self.kind = kind
        self.path = str(path)


class ResponseMismatchError(GqlSuiteError):
    """Raised (or recorded) when the actual response differs from the expected one."""

    def __init__(self) -> None:
        super().__init__("response mismatch")
