"""Transport interface definitions."""

import abc
from typing import Any


class Transport(abc.ABC):
    """Abstract base class for executing GraphQL requests."""

    @abc.abstractmethod
    def execute(self, query: str, variables: dict[str, Any] | None = None) -> bytes:
        """Execute a GraphQL query and return the raw response body.

        Args:
            query: The GraphQL document, as read from ``request.gql``.
            variables: Parsed ``variables.json`` content, if any.

        Returns:
            bytes: The response payload exactly as the endpoint returned it.

        Raises:
            TransportError: If the request fails or the endpoint does not
                answer with a successful status.
        """

    def close(self) -> None:
        """Release any resources held by the transport."""
