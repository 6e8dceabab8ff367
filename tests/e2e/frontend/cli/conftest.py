"""Fixtures and fakes for end-to-end CLI tests.

``emit-logs`` is a test-only subcommand that logs from a gqlsuite module and
from each third-party library gqlsuite drives, so console filtering and the
flight recorder can be checked without running a suite. The transport and
container fakes keep ``gqlsuite run`` off the network and away from Docker.
"""

import logging
import types

import click
import pytest
from click.testing import CliRunner

from gqlsuite.adapters.transport.memory import InMemoryTransport
from gqlsuite.entrypoints.cli import suite as suite_module
from gqlsuite.entrypoints.cli.main import gqlsuite
from gqlsuite.interfaces.backend import Backend

# pylint: disable=redefined-outer-name

PROJECT_LOGGER = "gqlsuite.service_layer.runner"
LIBRARY_LOGGERS = (
    "urllib3.connectionpool",
    "docker.api.client",
    # testcontainers pins INFO on its own module loggers; use an unconfigured child
    "testcontainers.readiness",
)
LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}
LIBRARY_LEVELS = ("debug", "info", "warning")


@click.command()
def emit_logs():
    """Log one record per level from a gqlsuite logger, then DEBUG to WARNING
    records from each library logger, then a trailing DEBUG record.

    Messages read ``project <level> record`` and ``<library> <level> record``.
    """
    project = logging.getLogger(PROJECT_LOGGER)
    for name, level in LEVELS.items():
        project.log(level, "project %s record", name)
    for logger_name in LIBRARY_LOGGERS:
        library = logging.getLogger(logger_name)
        short = logger_name.split(".")[0]
        for name in LIBRARY_LEVELS:
            library.log(LEVELS[name], "%s %s record", short, name)
    project.debug("project trailing record")


@pytest.fixture
def with_emit_logs(monkeypatch):
    """Make ``gqlsuite emit-logs`` available for one test."""
    monkeypatch.setitem(gqlsuite.commands, "emit-logs", emit_logs)


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fake_transport(monkeypatch):
    """Replace the HTTP transport of ``gqlsuite run`` with an in-memory one.

    Returns a namespace holding the shared transport (register responses on
    it) and the ``(endpoint, headers)`` of every transport the command built.
    """
    transport = InMemoryTransport()
    created = []

    def factory(endpoint, *, headers=None, **kwargs):  # pylint: disable=unused-argument
        created.append((endpoint, dict(headers or {})))
        return transport

    monkeypatch.setattr(suite_module, "HttpTransport", factory)
    return types.SimpleNamespace(transport=transport, created=created)


class FakeContainerBackend(Backend):
    """Backend recording its lifecycle instead of starting a container."""

    instances: list["FakeContainerBackend"] = []
    fail_start = False

    def __init__(self, image=None, *, always_pull=False):
        self.image = image
        self.always_pull = always_pull
        self.events: list[str] = []
        FakeContainerBackend.instances.append(self)

    @property
    def graphql_url(self) -> str:
        return "http://container.test:8080/financial/v1/graphql"

    def start(self) -> None:
        self.events.append("start")
        if self.fail_start:
            raise suite_module.BackendError("failed to start container: no daemon")

    def stop(self) -> None:
        self.events.append("stop")


@pytest.fixture
def fake_container(monkeypatch):
    """Replace the container backend of ``gqlsuite run`` with a recording fake."""
    monkeypatch.setattr(FakeContainerBackend, "instances", [])
    monkeypatch.setattr(suite_module, "ContainerBackend", FakeContainerBackend)
    return FakeContainerBackend
