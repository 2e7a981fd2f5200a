from __future__ import annotations

import os
import sys
from dataclasses import dataclass


WINDOWS_HOSTS_PATH = r"C:\Windows\System32\drivers\etc\hosts"
POSIX_HOSTS_PATH = "/etc/hosts"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def default_hosts_path(platform: str = sys.platform) -> str:
    return WINDOWS_HOSTS_PATH if platform == "win32" else POSIX_HOSTS_PATH


@dataclass(frozen=True)
class Settings:
    # Layout
    project_dir: str = os.getenv("DEVPROXY_PROJECT_DIR", os.getcwd())

    # Name resolution
    hosts_path: str = os.getenv("DEVPROXY_HOSTS_PATH", default_hosts_path())
    # auto|sudo|powershell|direct
    hosts_writer: str = os.getenv("DEVPROXY_HOSTS_WRITER", "auto")
    loopback_ip: str = os.getenv("DEVPROXY_LOOPBACK_IP", "127.0.0.1")

    # Proxy
    upstream_host: str = os.getenv("DEVPROXY_UPSTREAM_HOST", "host.docker.internal")

    # External tools
    mkcert_bin: str = os.getenv("DEVPROXY_MKCERT_BIN", "mkcert")
    docker_bin: str = os.getenv("DEVPROXY_DOCKER_BIN", "docker")

    # Event journal
    db_path: str = os.getenv("DEVPROXY_DB_PATH", "devproxy.db")
    enable_journal: bool = _env_bool("DEVPROXY_JOURNAL", True)

    status_timeout_s: int = _env_int("DEVPROXY_STATUS_TIMEOUT_S", 3)

    @property
    def nginx_dir(self) -> str:
        return os.path.join(self.project_dir, "nginx")

    @property
    def ssl_dir(self) -> str:
        return os.path.join(self.nginx_dir, "ssl")

    @property
    def config_path(self) -> str:
        return os.path.join(self.nginx_dir, "nginx.conf")

    @property
    def compose_path(self) -> str:
        return os.path.join(self.project_dir, "docker-compose.yml")


settings = Settings()
