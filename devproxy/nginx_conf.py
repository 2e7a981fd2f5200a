from __future__ import annotations

import os

from .domains import DomainPair


CONTAINER_SSL_DIR = "/etc/nginx/ssl"

NGINX_CONF_TEMPLATE = """\
events {{}}

http {{
    server {{
        listen 443 ssl;
        server_name {with_www} {without_www};

        ssl_certificate     {ssl_dir}/{with_www}.pem;
        ssl_certificate_key {ssl_dir}/{with_www}-key.pem;

        location / {{
            proxy_pass https://{upstream_host}:{port};
            proxy_set_header Host $host;
            proxy_set_header X-Real-IP $remote_addr;
            proxy_set_header X-Forwarded-For $proxy_add_x_forwarded_for;
            proxy_set_header X-Forwarded-Proto $scheme;
        }}
    }}

    # Plain HTTP is redirected to HTTPS
    server {{
        listen 80;
        server_name {with_www} {without_www};
        return 301 https://$host$request_uri;
    }}
}}
"""

COMPOSE_TEMPLATE = """\
services:
  nginx:
    image: nginx:alpine
    container_name: devproxy-nginx
    ports:
      - "80:80"
      - "443:443"
    volumes:
      - ./nginx/nginx.conf:/etc/nginx/nginx.conf:ro
      - ./nginx/ssl:{ssl_dir}:ro
    extra_hosts:
      - "{upstream_host}:host-gateway"
"""


def render_config(pair: DomainPair, backend_port, upstream_host: str = "host.docker.internal") -> str:
    """Render nginx.conf for a domain pair.

    The port is rendered verbatim; range and type are not checked.
    """
    return NGINX_CONF_TEMPLATE.format(
        with_www=pair.with_www,
        without_www=pair.without_www,
        ssl_dir=CONTAINER_SSL_DIR,
        upstream_host=upstream_host,
        port=backend_port,
    )


def write_config(text: str, path: str) -> str:
    """Overwrite the config file at `path` (never merged)."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)
    return path


def render_compose(upstream_host: str = "host.docker.internal") -> str:
    return COMPOSE_TEMPLATE.format(ssl_dir=CONTAINER_SSL_DIR, upstream_host=upstream_host)


def ensure_compose_file(path: str, upstream_host: str = "host.docker.internal") -> bool:
    """Write the default compose file if none exists. Returns True when a file was created."""
    if os.path.exists(path):
        return False
    write_config(render_compose(upstream_host), path)
    return True
