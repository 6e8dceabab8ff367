"""Click callbacks for logger-level and header options.

Logger levels are given as NAME=LEVEL pairs, either repeated on the command
line or as one comma/space separated string from the environment. Headers are
given as repeated ``Key: Value`` strings.
"""

import logging
import re

import click

from gqlsuite.config import InvalidHeaderError, parse_headers

DEFAULT_LIB_LEVELS = {
    "urllib3": logging.WARNING,
    "docker": logging.WARNING,
    "testcontainers": logging.WARNING,
}


def _normalize_items(value: str | list[str] | tuple[str, ...]) -> list[str]:
    """Split a string or a sequence of strings on commas and whitespace.

    Empty fragments are dropped.
    """
    values = value if isinstance(value, (tuple, list)) else [value]
    return [item for v in values for item in re.split(r"[,\s]+", v) if item]


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...],
) -> dict[str, int]:
    """Click callback that parses NAME=LEVEL pairs into a name->level dict.

    Starts from DEFAULT_LIB_LEVELS; later pairs override earlier ones.

    Raises:
        click.BadParameter: If an item is not NAME=LEVEL or LEVEL is unknown.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in _normalize_items(value):
        name, sep, level_str = item.partition("=")
        if not sep:
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}")
        lvl = logging.getLevelName(level_str.strip().upper())
        if not isinstance(lvl, int):
            raise click.BadParameter(f"Invalid log level: {level_str}")
        levels[name.strip()] = lvl
    return levels


def parse_header_option(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: tuple[str, ...],
) -> dict[str, str]:
    """Click callback turning repeated ``Key: Value`` options into a dict.

    Raises:
        click.BadParameter: If a header has no ``:`` separator.
    """
    try:
        return parse_headers(value)
    except InvalidHeaderError as e:
        raise click.BadParameter(str(e)) from e
