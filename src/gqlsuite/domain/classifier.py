"""Fixture-file classification.

Decides whether a path is one of the recognized fixture files and derives the
test case fragment it contributes to its directory:

- ``request.gql``: the GraphQL query (required).
- ``response.json``: the expected response (required).
- ``variables.json``: query variables (optional).
- ``transform.jq``: jq filters applied to both responses (optional).

A directory named ``<digits>_<rest>`` carries a sequence token used for
ordering. Any path segment equal to, or beginning with, ``SKIP`` hides the
whole subtree.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from pathlib import Path, PurePath

from gqlsuite.domain.model import PATH_SEPARATOR, TestCase

REQUEST_FILE = "request.gql"
RESPONSE_FILE = "response.json"
VARIABLES_FILE = "variables.json"
TRANSFORM_FILE = "transform.jq"

FIXTURE_FILES = {
    REQUEST_FILE: "request_path",
    RESPONSE_FILE: "response_path",
    VARIABLES_FILE: "variables_path",
    TRANSFORM_FILE: "transform_path",
}

SKIP_MARKER = "SKIP"
SEQUENCE_PATTERN = re.compile(r"^(\d+)_(.*)$", re.ASCII)


def is_excluded(segments: Iterable[str]) -> bool:
    """Return True if any path segment is, or starts with, the ``SKIP`` marker."""
    return any(segment.startswith(SKIP_MARKER) for segment in segments)


def parse_sequence(dir_name: str) -> tuple[int | None, str]:
    """Split a directory name into its sequence token and display name.

    Examples:
        >>> parse_sequence("001_CreateAccount")
        (1, 'CreateAccount')
        >>> parse_sequence("Extra")
        (None, 'Extra')
    """
    if match := SEQUENCE_PATTERN.match(dir_name):
        return int(match.group(1)), match.group(2)
    return None, dir_name


def classify(
    suite_root: str | os.PathLike[str],
    file_path: str | os.PathLike[str],
    *,
    is_dir: bool | None = None,
) -> tuple[TestCase | None, bool]:
    """Classify a path found while walking a suite root.

    Args:
        suite_root: Absolute path of the suite root.
        file_path: Absolute path of the entry to classify.
        is_dir: Directory flag from the walk; probed on disk when omitted.

    Returns:
        ``(fragment, True)`` for a recognized fixture file, where the fragment
        has exactly one fixture slot set; ``(None, False)`` otherwise.
    """
    path = Path(file_path)
    if is_dir is None:
        is_dir = path.is_dir()
    if is_dir:
        return None, False

    slot = FIXTURE_FILES.get(path.name)
    if slot is None:
        return None, False

    try:
        relative = PurePath(path).relative_to(suite_root)
    except ValueError:
        return None, False
    if is_excluded(relative.parts):
        return None, False

    dir_parts = relative.parent.parts
    dir_name = dir_parts[-1] if dir_parts else ""
    sequence, name = parse_sequence(dir_name)

    fragment = TestCase(
        name=name,
        dir_name=dir_name,
        relative_path=PATH_SEPARATOR.join(dir_parts),
        absolute_path=path.parent,
        sequence=sequence,
        **{slot: path},
    )
    return fragment, True
