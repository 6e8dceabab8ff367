"""Errors raised by transport, backend and transform collaborators."""


class TransportError(Exception):
    """Raised when a request cannot be executed against an endpoint."""

    def __init__(self, endpoint: str, reason: str) -> None:
        super().__init__(f"request to {endpoint} failed: {reason}")
        self.endpoint = endpoint
        self.reason = reason


class BackendError(Exception):
    """Raised when a backend for a suite cannot be provisioned."""


class StartupTimeoutError(BackendError):
    """Raised when a provisioned backend does not become healthy in time."""

    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(f"backend at {url} not healthy after {timeout:g}s")
        self.url = url
        self.timeout = timeout


class TransformError(Exception):
    """Raised when a transform file cannot be applied to a JSON payload."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"transform '{path}' failed: {reason}")
        self.path = path
        self.reason = reason
