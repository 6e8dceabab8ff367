"""Configuration utilities for GQLSUITE.

This module centralizes small helpers and constants related to run
configuration: environment variable names, request headers and the per-suite
account identifier.
"""

import hashlib
from collections.abc import Iterable

ENDPOINT_ENV = "GQLSUITE_ENDPOINT"  # pragma: no mutate
IMAGE_ENV = "GQLSUITE_IMAGE"  # pragma: no mutate
ALWAYS_PULL_ENV = "GQLSUITE_ALWAYS_PULL"  # pragma: no mutate

ACCOUNT_HEADER = "x-twisp-account-id"  # pragma: no mutate


class InvalidHeaderError(ValueError):
    """Raised when a header is not given in ``Key: Value`` form."""

    def __init__(self, value: str) -> None:
        super().__init__(f"invalid header format: {value!r} (expected 'Key: Value')")
        self.value = value


def parse_headers(values: Iterable[str]) -> dict[str, str]:
    """Parse ``Key: Value`` strings into a header mapping.

    Keys and values are stripped; later entries win for repeated keys.

    Raises:
        InvalidHeaderError: If an entry has no ``:`` separator.
    """
    headers: dict[str, str] = {}
    for value in values:
        key, sep, content = value.partition(":")
        if not sep or not key.strip():
            raise InvalidHeaderError(value)
        headers[key.strip()] = content.strip()
    return headers


def account_id(suite_path: str) -> str:
    """Return the account identifier of a suite: the SHA-256 hex of its path."""
    return hashlib.sha256(suite_path.encode("utf-8")).hexdigest()


def request_headers(suite_path: str, custom: dict[str, str]) -> dict[str, str]:
    """Build the headers sent with every request of a suite.

    Custom headers override the account header when they name it.
    """
    return {ACCOUNT_HEADER: account_id(suite_path), **custom}
