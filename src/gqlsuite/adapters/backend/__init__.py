"""Backend adapters."""

from .container import ContainerBackend
from .external import ExternalBackend

__all__ = ["ContainerBackend", "ExternalBackend"]
