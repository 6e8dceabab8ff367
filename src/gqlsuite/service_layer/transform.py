"""jq transform pipeline for response payloads.

A ``transform.jq`` file holds one jq filter per line. Empty lines and lines
starting with ``#`` are ignored. Filters run in file order, each one consuming
the previous filter's first output; the same pipeline is applied to both the
actual and the expected response before they are compared.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import jq

from gqlsuite.interfaces.errors import TransformError

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"


def read_filters(path: str | os.PathLike[str]) -> list[str]:
    """Read the jq filters of a transform file.

    Raises:
        TransformError: If the file cannot be read.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise TransformError(str(path), f"cannot read file ({e})") from e
    return [
        line
        for line in text.splitlines()
        if line and not line.startswith(COMMENT_PREFIX)
    ]


def apply_filters(path: str, filters: list[str], data: Any) -> Any:
    """Run ``filters`` in sequence over an already parsed JSON value."""
    for expression in filters:
        try:
            program = jq.compile(expression)
        except ValueError as e:
            raise TransformError(
                path, f"cannot parse jq expression '{expression}' ({e})"
            ) from e
        try:
            data = program.input_value(data).first()
        except StopIteration:
            raise TransformError(
                path, f"jq expression '{expression}' produced no output"
            ) from None
        except ValueError as e:
            raise TransformError(
                path, f"jq expression '{expression}' failed ({e})"
            ) from e
    return data


def transform_json(
    transform_path: str | os.PathLike[str] | None, payload: bytes
) -> bytes:
    """Normalize a JSON payload through the filters of a transform file.

    Args:
        transform_path: The ``transform.jq`` file, or ``None`` for no transform.
        payload: Raw JSON bytes.

    Returns:
        bytes: Compact JSON of the transformed value, or ``payload`` itself
        when there is nothing to apply.

    Raises:
        TransformError: If the payload is not JSON or any filter fails or
            produces no output.
    """
    if transform_path is None:
        return payload

    filters = read_filters(transform_path)
    if not filters:
        return payload

    try:
        data = json.loads(payload)
    except ValueError as e:
        raise TransformError(str(transform_path), f"cannot parse JSON ({e})") from e

    logger.debug("Applying %d jq filters from %s", len(filters), transform_path)
    data = apply_filters(str(transform_path), filters, data)
    return json.dumps(data, separators=(",", ":")).encode("utf-8")
