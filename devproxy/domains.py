from __future__ import annotations

from dataclasses import dataclass


WWW_PREFIX = "www."


@dataclass(frozen=True)
class DomainPair:
    with_www: str
    without_www: str

    def __iter__(self):
        # www form first; host-file entries and server_name follow this order.
        yield self.with_www
        yield self.without_www


def normalize(domain: str) -> DomainPair:
    """Derive the `www.` and bare forms of a domain.

    The input is taken verbatim (no trimming, case folding or validation), so
    `normalize("www.example.com")` and `normalize("example.com")` give the same pair.
    """
    without_www = domain[len(WWW_PREFIX):] if domain.startswith(WWW_PREFIX) else domain
    with_www = domain if domain.startswith(WWW_PREFIX) else f"{WWW_PREFIX}{domain}"
    return DomainPair(with_www=with_www, without_www=without_www)
