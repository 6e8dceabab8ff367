"""Structural JSON comparison."""

import json
from typing import Any


def _same(left: Any, right: Any) -> bool:
    if isinstance(left, dict):
        return (
            isinstance(right, dict)
            and left.keys() == right.keys()
            and all(_same(value, right[key]) for key, value in left.items())
        )
    if isinstance(left, list):
        return (
            isinstance(right, list)
            and len(left) == len(right)
            and all(_same(a, b) for a, b in zip(left, right))
        )
    # JSON true/false must not compare equal to the numbers 1/0.
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    return left == right


def json_equal(left: bytes | str, right: bytes | str) -> bool:
    """Return True if two JSON documents hold the same value.

    Object key order and whitespace are ignored; array order is significant.
    Input that is not valid JSON never compares equal.
    """
    try:
        left_value = json.loads(left)
        right_value = json.loads(right)
    except ValueError:
        return False
    return _same(left_value, right_value)


def compact(text: str) -> str:
    """Render a JSON document on one line, falling back to the raw text."""
    try:
        return json.dumps(json.loads(text), separators=(",", ":"))
    except ValueError:
        return text.replace("\n", " ")
