"""CLI helpers for GQLSUITE.

Utilities used by the command-line interface: option callbacks that parse
logger levels and request headers, and a warning emitter that writes to
stderr with an emoji to ASCII fallback.
"""

from .log_level_parser import parse_header_option, parse_log_level
from .messages import warn

__all__ = ["parse_log_level", "parse_header_option", "warn"]
