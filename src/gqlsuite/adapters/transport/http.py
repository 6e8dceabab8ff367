"""HTTP transport posting GraphQL requests with `requests`."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

import requests

from gqlsuite import __version__
from gqlsuite.interfaces.errors import TransportError
from gqlsuite.interfaces.transport import Transport

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
    "User-Agent": f"gqlsuite/{__version__}",
}


class HttpTransport(Transport):
    """Transport that POSTs ``{"query", "variables"}`` documents to an endpoint.

    Args:
        endpoint: GraphQL endpoint URL.
        headers: Extra headers; they override the defaults with the same name.
        timeout: Per-request timeout in seconds.
        session: Session to use; a new one is created when omitted.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        headers: Mapping[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(DEFAULT_HEADERS)
        if headers:
            self._session.headers.update(headers)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def execute(self, query: str, variables: dict[str, Any] | None = None) -> bytes:
        body: dict[str, Any] = {"query": query}
        if variables:
            body["variables"] = variables

        logger.debug("POST %s", self._endpoint)
        try:
            response = self._session.post(
                self._endpoint, data=json.dumps(body), timeout=self._timeout
            )
        except requests.RequestException as e:
            raise TransportError(self._endpoint, str(e)) from e

        if response.status_code != HTTPStatus.OK:
            raise TransportError(
                self._endpoint,
                f"unexpected status code {response.status_code}: {response.text}",
            )
        return response.content

    def close(self) -> None:
        self._session.close()
