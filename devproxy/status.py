from __future__ import annotations

import os
from typing import Callable

from pydantic import BaseModel, Field

from . import docker_ops, hostsfile
from .certs import certificate_files
from .domains import normalize
from .health import check_proxy
from .settings import Settings, settings as default_settings


class StatusReport(BaseModel):
    with_www: str = Field(..., description="Domain with the www. prefix")
    without_www: str = Field(..., description="Bare domain")
    hosts_path: str
    hosts_readable: bool = Field(True, description="False when the hosts file could not be read")
    hosts_entries: dict[str, bool] = Field(default_factory=dict, description="Domain -> mapped in the hosts file")
    certificates: dict[str, bool] = Field(default_factory=dict, description="File name -> present in the ssl dir")
    config_path: str
    config_matches: bool = Field(False, description="nginx.conf serves this domain pair")
    docker_available: bool = False
    proxy_container_running: bool = False
    proxy_reachable: bool = False
    proxy_detail: str = ""
    proxy_latency_ms: float | None = None


def _read(path: str) -> str | None:
    try:
        return hostsfile.read_hosts(path)
    except OSError:
        return None


def build_status(
    domain: str,
    cfg: Settings | None = None,
    probe: Callable[..., tuple[bool, str, float | None]] = check_proxy,
) -> StatusReport:
    """Inspect every artifact the setup flow produces for `domain`. Read-only."""
    cfg = cfg or default_settings
    pair = normalize(domain)

    report = StatusReport(
        with_www=pair.with_www,
        without_www=pair.without_www,
        hosts_path=cfg.hosts_path,
        config_path=cfg.config_path,
    )

    hosts = _read(cfg.hosts_path)
    if hosts is None:
        report.hosts_readable = False
    else:
        lines = hosts.splitlines()
        report.hosts_entries = {d: any(hostsfile.mentions_host(line, d) for line in lines) for d in pair}

    report.certificates = {name: os.path.exists(os.path.join(cfg.ssl_dir, name)) for name in certificate_files(pair)}

    conf = _read(cfg.config_path)
    report.config_matches = conf is not None and f"server_name {pair.with_www} {pair.without_www};" in conf

    report.docker_available = docker_ops.docker_available()
    if report.docker_available:
        report.proxy_container_running = docker_ops.proxy_container_running()

    ok, detail, latency = probe(f"https://{pair.with_www}/", timeout_s=cfg.status_timeout_s)
    report.proxy_reachable = ok
    report.proxy_detail = detail
    report.proxy_latency_ms = latency
    return report
