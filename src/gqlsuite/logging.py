"""Logging setup for the GQLSUITE command line.

Console output goes through Rich on stderr so that stdout stays reserved for
test results. An optional in-memory "flight recorder" keeps the most recent
records at DEBUG granularity and dumps them to a file when something goes
wrong (or on exit, when forced). Records from third-party libraries (urllib3,
docker, testcontainers) get a short bracketed prefix on the console.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from importlib import metadata
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from collections.abc import Mapping
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "gqlsuite"

REPORTED_DISTRIBUTIONS = ("requests", "jq", "testcontainers", "docker")

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


class ThirdPartyPrefixFilter(logging.Filter):
    """Set ``record.prefix`` to ``[library]`` for records from other packages.

    Project records get an empty prefix. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith(PROJECT_PREFIX):
            # e.g. "urllib3.connectionpool" -> "[urllib3]"
            record.prefix = f"[{record.name.split('.')[0]}]"
        else:
            record.prefix = ""
        return True


def verbosity_level(verbose_count: int, quiet_count: int) -> int:
    """Map ``-v``/``-q`` repetitions to a level around the WARNING default."""
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    return max(logging.DEBUG, min(logging.CRITICAL, level))


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Configure and return a RichHandler writing to stderr.

    Args:
        level: Minimum level for console output (DEBUG when ``debug_mode``).
        debug_mode: Show timestamps, logger names and source locations.
        color: Enable color output.

    Returns:
        RichHandler: Handler ready to attach to the root logger.
    """
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    fmt = (
        "%(prefix)s %(message)s"
        if not debug_mode
        else "%(asctime)s %(name)s: %(message)s"
    )
    handler.setFormatter(logging.Formatter(fmt=fmt))
    if not debug_mode:
        handler.addFilter(ThirdPartyPrefixFilter())

    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Configure and return the in-memory flight recorder.

    Up to ``capacity`` records are buffered and written to ``path`` (truncated
    first) when a record at ``flush_level`` or above arrives, or on close when
    ``flush_on_close`` is set.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d:%(threadName)s] "
            "%(levelname)s %(name)s:%(lineno)d: %(message)s"
        )
    )

    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def configure_logging(  # pylint: disable=too-many-arguments
    *,
    level: int,
    debug_mode: bool,
    color: bool,
    log_path: Path | None,
    flight_capacity: int,
    force_flush: bool,
    logger_levels: Mapping[str, int],
) -> list[logging.Handler]:
    """Install console and flight-recorder handlers on the root logger.

    The root logger captures everything; each handler filters on its own level.
    Per-logger levels apply to both handlers.

    Args:
        level: Console level.
        debug_mode: Developer diagnostics on the console.
        color: Console color.
        log_path: Flight-recorder file, or None to disable the recorder.
        flight_capacity: Flight-recorder buffer size in records.
        force_flush: Flush the flight recorder on exit even without warnings.
        logger_levels: Logger name -> minimum level overrides.

    Returns:
        list[logging.Handler]: The installed handlers.
    """
    handlers: list[logging.Handler] = [
        config_console_handler(level=level, debug_mode=debug_mode, color=color)
    ]
    if log_path is not None:
        handlers.append(
            config_flight_recorder(
                path=log_path, capacity=flight_capacity, flush_on_close=force_flush
            )
        )

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)
    return handlers


def _distribution_version(name: str) -> str:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return "<not installed>"


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    flight_capacity: int | None,
    force_flush_fr: bool,
    logger_levels: Mapping[str, int],
) -> None:
    """Log a one-line banner at INFO and environment diagnostics at DEBUG."""
    flight_recorder = log_path is not None
    logger.info(
        "GQLSUITE %s: console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    for name in REPORTED_DISTRIBUTIONS:
        logger.debug("%s: %s", name, _distribution_version(name))
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flight_recorder:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            log_path,
            flight_capacity,
            force_flush_fr,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
        or "<none>",
    )
