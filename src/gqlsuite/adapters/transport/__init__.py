"""Transport adapters."""

from .http import HttpTransport
from .memory import InMemoryTransport

__all__ = ["HttpTransport", "InMemoryTransport"]
