from __future__ import annotations

import os
import shutil

from .domains import DomainPair
from .process import require_tool, run_command


MKCERT_HINT = "Install mkcert: https://github.com/FiloSottile/mkcert"


def certificate_files(pair: DomainPair) -> tuple[str, str]:
    """(certificate, private key) file names for a pair."""
    return f"{pair.with_www}.pem", f"{pair.with_www}-key.pem"


def mkcert_command(pair: DomainPair, mkcert_bin: str = "mkcert") -> list[str]:
    cert_file, key_file = certificate_files(pair)
    return [mkcert_bin, "-cert-file", cert_file, "-key-file", key_file, pair.with_www, pair.without_www]


def issue_certificate(pair: DomainPair, ssl_dir: str, workdir: str | None = None, mkcert_bin: str = "mkcert") -> list[str]:
    """Issue a certificate valid for both domain forms and move it into `ssl_dir`.

    mkcert writes the files into `workdir`; each artifact that exists afterwards is
    moved into `ssl_dir` (created if absent). Returns the destination paths.
    """
    require_tool(mkcert_bin, MKCERT_HINT)
    workdir = workdir or os.getcwd()
    run_command(mkcert_command(pair, mkcert_bin), cwd=workdir)

    os.makedirs(ssl_dir, exist_ok=True)
    moved: list[str] = []
    for name in certificate_files(pair):
        src = os.path.join(workdir, name)
        if not os.path.exists(src):
            continue
        dest = os.path.join(ssl_dir, name)
        shutil.move(src, dest)
        moved.append(dest)
    return moved


def remove_certificates(pair: DomainPair, ssl_dir: str) -> list[str]:
    """Delete the pair's certificate and key from `ssl_dir`. Returns the names removed."""
    removed: list[str] = []
    for name in certificate_files(pair):
        path = os.path.join(ssl_dir, name)
        if os.path.exists(path):
            os.unlink(path)
            removed.append(name)
    return removed
