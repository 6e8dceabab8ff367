"""Backend attaching to an already running endpoint."""

from gqlsuite.interfaces.backend import Backend


class ExternalBackend(Backend):
    """Backend for a fixed, externally managed GraphQL endpoint.

    Starting and stopping are no-ops; the endpoint's lifecycle is not ours.
    """

    def __init__(self, url: str) -> None:
        self._url = url

    @property
    def graphql_url(self) -> str:
        return self._url

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass
