"""GQLSUITE

A runner for hierarchical, file-based GraphQL test fixtures. Suites are plain
directory trees of request/response pairs; numeric directory prefixes decide
execution order and every suite runs against its own isolated backend.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
