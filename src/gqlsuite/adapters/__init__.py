"""Adapters (infrastructure) for GQLSUITE.

Provide concrete implementations of the interfaces: HTTP and in-memory
transports, and container-backed or external backends.

Dependency rule: may import `gqlsuite.interfaces`; the domain must not import
this package.
"""
