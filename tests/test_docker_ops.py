import subprocess

import pytest
from docker.errors import DockerException, NotFound

from devproxy import docker_ops, process
from devproxy.errors import ContainerRuntimeUnavailable, ToolNotFoundError


class _Container:
    def __init__(self, status):
        self.status = status

    def reload(self):
        pass


class _Containers:
    def __init__(self, known):
        self.known = known

    def get(self, name):
        if name not in self.known:
            raise NotFound("no such container")
        return self.known[name]


class _Client:
    def __init__(self, up=True, containers=None):
        self.up = up
        self.containers = _Containers(containers or {})

    def ping(self):
        if not self.up:
            raise DockerException("daemon not running")
        return True


@pytest.fixture
def fake_run(monkeypatch):
    calls = []
    result = {"rc": 0}

    def run(args, cwd=None):
        calls.append((list(args), cwd))
        return subprocess.CompletedProcess(args, result["rc"])

    monkeypatch.setattr(process.subprocess, "run", run)
    monkeypatch.setattr(process.shutil, "which", lambda name: f"/usr/bin/{name}")
    return calls, result


def test_docker_available(monkeypatch):
    monkeypatch.setattr(docker_ops, "_client", lambda: _Client(up=True))
    assert docker_ops.docker_available() is True
    monkeypatch.setattr(docker_ops, "_client", lambda: _Client(up=False))
    assert docker_ops.docker_available() is False


def test_proxy_container_running(monkeypatch):
    client = _Client(containers={"devproxy-nginx": _Container("running")})
    monkeypatch.setattr(docker_ops, "_client", lambda: client)
    assert docker_ops.proxy_container_running() is True
    assert docker_ops.proxy_container_running("missing") is False

    client.containers.known["devproxy-nginx"] = _Container("exited")
    assert docker_ops.proxy_container_running() is False


def test_compose_up_runs_in_project_dir(monkeypatch, fake_run, tmp_path):
    calls, _ = fake_run
    monkeypatch.setattr(docker_ops, "_client", lambda: _Client(up=True))
    assert docker_ops.compose_up(str(tmp_path)) == 0
    assert calls == [(["docker", "compose", "up"], str(tmp_path))]


def test_compose_up_surfaces_exit_status(monkeypatch, fake_run, tmp_path):
    calls, result = fake_run
    result["rc"] = 17
    monkeypatch.setattr(docker_ops, "_client", lambda: _Client(up=True))
    assert docker_ops.compose_up(str(tmp_path)) == 17
    assert len(calls) == 1


def test_compose_up_requires_running_daemon(monkeypatch, fake_run, tmp_path):
    calls, _ = fake_run
    monkeypatch.setattr(docker_ops, "_client", lambda: _Client(up=False))
    with pytest.raises(ContainerRuntimeUnavailable):
        docker_ops.compose_up(str(tmp_path))
    assert calls == []


def test_compose_down(fake_run, tmp_path):
    calls, _ = fake_run
    assert docker_ops.compose_down(str(tmp_path), docker_bin="podman") == 0
    assert calls == [(["podman", "compose", "down"], str(tmp_path))]


def test_missing_docker_binary(monkeypatch, tmp_path):
    monkeypatch.setattr(process.shutil, "which", lambda name: None)
    with pytest.raises(ToolNotFoundError):
        docker_ops.compose_down(str(tmp_path))


def test_compose_command_rejects_other_actions():
    with pytest.raises(ValueError):
        docker_ops.compose_command("restart")
