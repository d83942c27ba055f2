"""Port: container runtime hosting the local OpenMoxie server."""

from __future__ import annotations

from typing import Protocol


class ContainerRuntime(Protocol):
    """Abstract container runtime. Commands raise ContainerRuntimeError on failure."""

    def is_daemon_running(self) -> bool: ...

    def is_container_running(self, name: str) -> bool: ...

    def run_container(self, name: str, image: str, ports: list[str], volumes: list[str]) -> str: ...

    def stop_container(self, name: str) -> str: ...

    def restart_container(self, name: str) -> str: ...

    def pull_image(self, image: str) -> str: ...
