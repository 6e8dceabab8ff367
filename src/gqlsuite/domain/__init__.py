"""Domain layer for GQLSUITE.

Contains the fixture model (test cases, suite nodes, the suite forest), the
fixture-file classification rules and the domain errors. This package is
deliberately free of I/O beyond inspecting paths.

Dependency rule: do not import from `gqlsuite.adapters` or `gqlsuite.entrypoints`.
"""
