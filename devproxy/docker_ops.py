from __future__ import annotations

import docker
from docker.errors import DockerException, NotFound

from .errors import ContainerRuntimeUnavailable
from .process import require_tool, run_command


PROXY_CONTAINER_NAME = "devproxy-nginx"
DOCKER_HINT = "Install Docker Desktop / docker engine with the compose plugin."


def _client() -> docker.DockerClient:
    return docker.from_env()


def docker_available() -> bool:
    try:
        c = _client()
        c.ping()
        return True
    except DockerException:
        return False


def ensure_runtime() -> None:
    if not docker_available():
        raise ContainerRuntimeUnavailable("Docker is not available. Start Docker Desktop / docker daemon and try again.")


def proxy_container_running(name: str = PROXY_CONTAINER_NAME) -> bool:
    if not docker_available():
        return False
    c = _client()
    try:
        cont = c.containers.get(name)
        cont.reload()
        return cont.status == "running"
    except NotFound:
        return False


def compose_command(action: str, docker_bin: str = "docker") -> list[str]:
    if action not in {"up", "down"}:
        raise ValueError("compose action must be 'up' or 'down'.")
    return [docker_bin, "compose", action]


def compose_up(project_dir: str, docker_bin: str = "docker") -> int:
    """Run `docker compose up` attached to the terminal; returns its exit status."""
    require_tool(docker_bin, DOCKER_HINT)
    ensure_runtime()
    return run_command(compose_command("up", docker_bin), cwd=project_dir, check=False)


def compose_down(project_dir: str, docker_bin: str = "docker") -> int:
    require_tool(docker_bin, DOCKER_HINT)
    return run_command(compose_command("down", docker_bin), cwd=project_dir, check=False)
