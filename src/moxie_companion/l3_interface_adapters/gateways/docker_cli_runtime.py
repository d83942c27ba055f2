"""Gateway: ``docker`` CLI via subprocess — implements ContainerRuntime port."""

from __future__ import annotations

import logging
import subprocess  # noqa: S404 -- fixed docker argument lists, never shell=True

from moxie_companion.l1_entities.errors import ContainerRuntimeError

log = logging.getLogger('moxie.docker')

STATUS_TIMEOUT = 5.0
COMMAND_TIMEOUT = 600.0


class DockerCliRuntime:
    def __init__(self, docker_bin: str = 'docker') -> None:
        self._docker = docker_bin

    def _run(self, args: list[str], timeout: float) -> subprocess.CompletedProcess[str]:
        try:
            return subprocess.run(  # noqa: S603 -- fixed arg list, not shell=True
                [self._docker, *args],
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise ContainerRuntimeError('Docker command failed to start. Is Docker installed?') from e
        except subprocess.TimeoutExpired as e:
            raise ContainerRuntimeError('Docker command timed out') from e

    def _command(self, args: list[str]) -> str:
        log.info('docker %s', ' '.join(args))
        proc = self._run(args, COMMAND_TIMEOUT)
        if proc.returncode != 0:
            err = proc.stderr.strip()
            log.warning('docker %s failed (%d): %s', args[0], proc.returncode, err)
            raise ContainerRuntimeError(err or 'Docker command failed')
        return proc.stdout.strip()

    def is_daemon_running(self) -> bool:
        try:
            return self._run(['info'], STATUS_TIMEOUT).returncode == 0
        except ContainerRuntimeError:
            return False

    def is_container_running(self, name: str) -> bool:
        try:
            proc = self._run(['ps', '-q', '-f', f'name={name}'], STATUS_TIMEOUT)
        except ContainerRuntimeError:
            return False
        return proc.returncode == 0 and bool(proc.stdout.strip())

    def run_container(self, name: str, image: str, ports: list[str], volumes: list[str]) -> str:
        args = ['run', '-d', '--name', name]
        for port in ports:
            args += ['-p', port]
        for volume in volumes:
            args += ['-v', volume]
        args += ['--restart', 'unless-stopped', image]
        return self._command(args)

    def stop_container(self, name: str) -> str:
        return self._command(['stop', name])

    def restart_container(self, name: str) -> str:
        return self._command(['restart', name])

    def pull_image(self, image: str) -> str:
        return self._command(['pull', image])
