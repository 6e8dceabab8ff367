"""GQLSUITE CLI entry point.

Defines the top-level ``gqlsuite`` command (via Click-Extra), which sets up
console logging and the flight recorder, and registers the subcommands:

- ``gqlsuite run``: run one or more suite roots against a backend.
- ``gqlsuite list``: show runnable suites and their execution order.

Examples
    $ gqlsuite --version
    $ gqlsuite list tests/graphql
    $ gqlsuite -v run tests/graphql --endpoint http://localhost:8080/graphql
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from gqlsuite import __version__
from gqlsuite.logging import configure_logging, log_startup, verbosity_level

from .helpers import parse_log_level
from .suite import list_suites, run

logger = logging.getLogger(__name__)


HELP = """GQLSUITE command-line interface.

    Runs hierarchical, file-based GraphQL test suites. Each directory holding a
    request.gql and a response.json is a test case; numeric directory prefixes
    (001_, 002_, ...) decide the order, and directories named SKIP* are ignored.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Increase the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Decrease the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (enables extra developer diagnostics beyond -vvv).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path of the flight recorder log file.",
    default=Path(user_log_dir("gqlsuite", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="GQLSUITE_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="GQLSUITE_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last N log records at DEBUG granularity (unaffected by -v/-q) "
        "and write them to --log-path when a WARNING/ERROR occurs, or on exit "
        "if --force-flush is set. Console verbosity is unchanged."
    ),
    default=True,
    envvar="GQLSUITE_FLIGHT_RECORDER",
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help=(
        "Write the flight recorder buffer to --log-path on exit, "
        "even without warnings."
    ),
    default=False,
    show_default=True,
    envvar="GQLSUITE_FORCE_FLUSH",
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Applies to both "
        "console and flight recorder. Repeatable (e.g. -L urllib3=INFO "
        "-L testcontainers=DEBUG) or via GQLSUITE_LOGGER_LEVELS (comma/space list)."
    ),
    default=("urllib3=WARNING", "docker=WARNING", "testcontainers=WARNING"),
    envvar="GQLSUITE_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def gqlsuite(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """GQLSUITE command-line interface."""
    level = verbosity_level(verbose_count, quiet_count)
    recorder_path = log_path if flight_recorder else None

    handlers = configure_logging(
        level=level,
        debug_mode=debug,
        color=ctx.color is not False,  # None or True => allow color
        log_path=recorder_path,
        flight_capacity=flight_recorder_capacity,
        force_flush=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=recorder_path,
        flight_capacity=flight_recorder_capacity if flight_recorder else None,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    ctx.call_on_close(logging.shutdown)


gqlsuite.add_command(run)
gqlsuite.add_command(list_suites)
