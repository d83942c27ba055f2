"""ServerController — start/stop the co-located OpenMoxie server container."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from moxie_companion.l1_entities.errors import ContainerRuntimeError
from moxie_companion.l2_use_cases.ports.container_runtime import ContainerRuntime

log = logging.getLogger('moxie.docker')

DEFAULT_CONTAINER = 'openmoxie'
DEFAULT_IMAGE = 'openmoxie/openmoxie-server:latest'
SERVER_PORTS = ['8000:8000', '1883:1883']
SERVER_VOLUMES = ['openmoxie-data:/app/data']


@dataclass(frozen=True)
class ServerStatus:
    docker_running: bool
    container_running: bool

    @property
    def message(self) -> str:
        if not self.docker_running:
            return 'Docker not running'
        return 'OpenMoxie running' if self.container_running else 'Container stopped'


class ServerController:
    def __init__(
        self,
        runtime: ContainerRuntime,
        container_name: str = DEFAULT_CONTAINER,
        image: str = DEFAULT_IMAGE,
    ) -> None:
        self._runtime = runtime
        self._container = container_name
        self._image = image

    def refresh_status(self) -> ServerStatus:
        docker_running = self._runtime.is_daemon_running()
        container_running = docker_running and self._runtime.is_container_running(self._container)
        status = ServerStatus(docker_running, container_running)
        log.debug('Server status: %s', status.message)
        return status

    def start(self) -> ServerStatus:
        if not self._runtime.is_daemon_running():
            raise ContainerRuntimeError('Docker is not running. Please start Docker first.')
        self._runtime.run_container(self._container, self._image, SERVER_PORTS, SERVER_VOLUMES)
        return self.refresh_status()

    def stop(self) -> ServerStatus:
        self._runtime.stop_container(self._container)
        return self.refresh_status()

    def restart(self) -> ServerStatus:
        self._runtime.restart_container(self._container)
        return self.refresh_status()

    def update(self) -> ServerStatus:
        self._runtime.pull_image(self._image)
        return self.refresh_status()
