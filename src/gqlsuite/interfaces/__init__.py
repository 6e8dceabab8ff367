"""Interfaces (application boundary) for GQLSUITE.

Defines framework-free contracts for the collaborators a suite run depends on:
the transport that executes a GraphQL request and the backend that provides an
endpoint for one suite. Business rules stay out of this package.

Dependency rule: this package is independent; do not import from any
`gqlsuite.*` modules. It may be imported by `gqlsuite.service_layer` and
`gqlsuite.adapters`.
"""
