"""Service layer for GQLSUITE.

Discovery, ordering and selection over suite forests, plus the execution
driver that runs ordered cases through a transport.
"""

from .discovery import build
from .ordering import ordered_cases, skipped_cases
from .selection import runnable_paths

__all__ = ["build", "ordered_cases", "skipped_cases", "runnable_paths"]
