from __future__ import annotations

import time

import httpx


def check_proxy(url: str, timeout_s: float = 3.0, transport: httpx.BaseTransport | None = None) -> tuple[bool, str, float | None]:
    """Probe the proxy's HTTPS endpoint.

    Any response below 500 counts as the proxy answering; a 502/504 usually means nginx
    is up but the backend port is not. Certificates are not verified (mkcert roots are
    often only trusted by browsers).
    Returns (is_reachable, message, latency_ms).
    """
    start = time.time()
    try:
        with httpx.Client(timeout=timeout_s, follow_redirects=False, verify=False, transport=transport) as client:
            resp = client.get(url)
        latency_ms = round((time.time() - start) * 1000.0, 2)
        if resp.status_code >= 500:
            return False, f"HTTP {resp.status_code}", latency_ms
        return True, f"HTTP {resp.status_code}", latency_ms
    except (httpx.ConnectError, httpx.TimeoutException):
        latency_ms = round((time.time() - start) * 1000.0, 2)
        return False, "No response", latency_ms
    except httpx.HTTPError as e:
        latency_ms = round((time.time() - start) * 1000.0, 2)
        return False, f"Error: {type(e).__name__}: {e}", latency_ms
