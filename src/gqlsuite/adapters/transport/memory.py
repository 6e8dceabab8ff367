"""In-memory transport answering queries from a fixed table.

Useful for dry runs and tests: responses are looked up by the query text
(surrounding whitespace ignored) and every call is recorded.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from gqlsuite.interfaces.errors import TransportError
from gqlsuite.interfaces.transport import Transport

ENDPOINT = "memory://"


@dataclass(frozen=True)
class RecordedCall:
    """A request received by the in-memory transport."""

    query: str
    variables: dict[str, Any] | None


class InMemoryTransport(Transport):
    """Transport backed by a mapping of query text to response payload."""

    def __init__(
        self, responses: Mapping[str, bytes | str | Any] | None = None
    ) -> None:
        self._responses: dict[str, bytes] = {}
        self.calls: list[RecordedCall] = []
        for query, payload in (responses or {}).items():
            self.add(query, payload)

    def add(self, query: str, payload: bytes | str | Any) -> None:
        """Register the response for ``query``; non-bytes values are JSON-encoded."""
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        elif not isinstance(payload, bytes):
            payload = json.dumps(payload).encode("utf-8")
        self._responses[query.strip()] = payload

    def execute(self, query: str, variables: dict[str, Any] | None = None) -> bytes:
        self.calls.append(RecordedCall(query=query, variables=variables))
        try:
            return self._responses[query.strip()]
        except KeyError:
            raise TransportError(ENDPOINT, "no response registered for query") from None
