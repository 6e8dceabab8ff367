"""Container-backed backend provisioned with Testcontainers.

Every suite gets a fresh container of the service image, so suites never see
each other's data. The container is considered ready once its HTTP health
check answers ``200``. Probes are retried with Testcontainers' readiness
helper, so the startup timeout follows its configuration (``TC_MAX_TRIES`` x
``TC_POLLING_INTERVAL``, two minutes by default).
"""

from __future__ import annotations

import logging
from http import HTTPStatus

import docker
import requests
from docker.errors import DockerException
from testcontainers.core.config import testcontainers_config
from testcontainers.core.container import DockerContainer
from testcontainers.core.waiting_utils import wait_container_is_ready

from gqlsuite.interfaces.backend import Backend
from gqlsuite.interfaces.errors import BackendError, StartupTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_IMAGE = "public.ecr.aws/twisp/local:latest"
ADMIN_PORT = 3000
HTTP_PORT = 8080
GRPC_PORT = 8081
GRAPHQL_ENDPOINT = "/financial/v1/graphql"
HEALTHCHECK_ENDPOINT = "/healthcheck"

PROBE_TIMEOUT = 5.0


@wait_container_is_ready(requests.RequestException)
def _probe_health(url: str) -> None:
    response = requests.get(url, timeout=PROBE_TIMEOUT)
    if response.status_code != HTTPStatus.OK:
        raise requests.HTTPError(f"health check answered {response.status_code}")


class ContainerBackend(Backend):
    """Backend running the service image in a throwaway Docker container.

    Args:
        image: Image to run; the default local service image when empty.
        always_pull: Pull the image before starting, even if present locally.
    """

    def __init__(self, image: str | None = None, *, always_pull: bool = False) -> None:
        self._image = (image or "").strip() or DEFAULT_IMAGE
        self._always_pull = always_pull
        self._container: DockerContainer | None = None
        self._base_url: str | None = None

    @property
    def image(self) -> str:
        return self._image

    @property
    def graphql_url(self) -> str:
        if self._base_url is None:
            raise BackendError(f"container for {self._image} is not running")
        return self._base_url + GRAPHQL_ENDPOINT

    def start(self) -> None:
        if self._container is not None:
            return
        if self._always_pull:
            self._pull()

        logger.info("Starting container from %s", self._image)
        container = DockerContainer(self._image).with_exposed_ports(
            ADMIN_PORT, HTTP_PORT, GRPC_PORT
        )
        try:
            container.start()
        except DockerException as e:
            raise BackendError(f"failed to start container: {e}") from e
        self._container = container

        try:
            host = container.get_container_host_ip()
            http_port = container.get_exposed_port(HTTP_PORT)
        except DockerException as e:
            self.stop()
            raise BackendError(f"failed to inspect container: {e}") from e

        self._base_url = f"http://{host}:{http_port}"
        health_url = self._base_url + HEALTHCHECK_ENDPOINT
        try:
            _probe_health(health_url)
        except TimeoutError as e:
            self.stop()
            raise StartupTimeoutError(health_url, testcontainers_config.timeout) from e
        logger.info("Container ready at %s", self.graphql_url)

    def stop(self) -> None:
        container, self._container = self._container, None
        self._base_url = None
        if container is None:
            return
        try:
            container.stop()
        except DockerException as e:
            logger.warning("Failed to terminate container for %s: %s", self._image, e)

    def _pull(self) -> None:
        logger.info("Pulling %s", self._image)
        try:
            docker.from_env().images.pull(self._image)
        except DockerException as e:
            raise BackendError(f"failed to pull {self._image}: {e}") from e
