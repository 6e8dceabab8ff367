"""Backend interface definitions.

A backend provides the GraphQL endpoint one suite runs against. Backends are
context managers: entering starts (or attaches to) the service, leaving
releases it.
"""

from __future__ import annotations

import abc
from types import TracebackType


class Backend(abc.ABC):
    """Abstract base class for per-suite service backends."""

    @property
    @abc.abstractmethod
    def graphql_url(self) -> str:
        """URL of the GraphQL endpoint.

        Raises:
            BackendError: If the backend has not been started.
        """

    @abc.abstractmethod
    def start(self) -> None:
        """Start the backend and block until it accepts requests.

        Raises:
            BackendError: If the backend cannot be started.
        """

    @abc.abstractmethod
    def stop(self) -> None:
        """Stop the backend. Stopping a stopped backend is a no-op."""

    def __enter__(self) -> Backend:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()
