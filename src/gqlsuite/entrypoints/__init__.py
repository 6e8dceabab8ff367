"""Entrypoints (outer adapters) for GQLSUITE, currently the command line."""
