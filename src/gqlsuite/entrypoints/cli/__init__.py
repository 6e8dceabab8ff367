"""GQLSUITE command-line interface."""
