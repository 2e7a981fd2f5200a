from __future__ import annotations

import os

from . import certs, docker_ops, hostsfile
from .domains import DomainPair, normalize
from .elevation import writer_for_platform
from .errors import CommandFailedError
from .nginx_conf import ensure_compose_file, render_config, write_config
from .session import OK, RunReport, Session, Step, run_steps
from .settings import POSIX_HOSTS_PATH, WINDOWS_HOSTS_PATH


def _hosts_locations(session: Session) -> None:
    session.say(f"   Windows: {WINDOWS_HOSTS_PATH}")
    session.say(f"   Mac/Linux: {POSIX_HOSTS_PATH}\n")


def _print_lines(session: Session, lines: list[str]) -> None:
    for line in lines:
        session.say(f"   {line}")


def _hosts_step(session: Session, pair: DomainPair, action: str, writer=None) -> Step:
    cfg = session.settings
    manual = hostsfile.manual_instructions(pair, action, ip=cfg.loopback_ip)
    adding = action == hostsfile.ADD

    def run() -> str:
        w = writer or writer_for_platform(choice=cfg.hosts_writer)
        change = hostsfile.apply(pair, action, cfg.hosts_path, w, ip=cfg.loopback_ip)
        if not change.changed:
            msg = "Hosts entries already exist" if adding else "No matching entries found in hosts file"
        else:
            msg = "Hosts file updated" if adding else "Hosts file entries removed"
        session.say(f"   ✓ {msg}")
        return msg

    def skipped() -> None:
        session.say("   Skipped. Add these entries manually:" if adding else "   Skipped. Remove these entries manually:")
        _hosts_locations(session)
        _print_lines(session, manual)

    def remediation(exc: Exception) -> None:
        verb = "add" if adding else "remove"
        session.error(f"   ✗ Error updating hosts file. Please {verb} manually:")
        _print_lines(session, manual)

    if adding:
        title, prompt = "\n📝 Updating hosts file...", "Update hosts file automatically? (requires admin/sudo) (y/n): "
    else:
        title, prompt = "\n📝 Cleaning up hosts file...", "Remove hosts file entries? (requires admin/sudo) (y/n): "
    return Step(name="hosts", title=title, prompt=prompt, action=run, skipped=skipped, remediation=remediation)


def _compose_step(session: Session, action: str) -> Step:
    cfg = session.settings

    def run() -> str:
        if action == "up":
            session.say("\n🐳 Starting Docker Compose...\n")
            rc = docker_ops.compose_up(cfg.project_dir, docker_bin=cfg.docker_bin)
        else:
            rc = docker_ops.compose_down(cfg.project_dir, docker_bin=cfg.docker_bin)
        if rc != 0:
            raise CommandFailedError(docker_ops.compose_command(action, cfg.docker_bin), rc)
        msg = "Docker Compose stopped" if action == "down" else "Docker Compose exited"
        session.say(f"   ✓ {msg}")
        return msg

    def skipped() -> None:
        if action == "up":
            session.say('\nRun "docker compose up" when ready to start the proxy.')

    def remediation(exc: Exception) -> None:
        session.error(f"   ✗ Error {'starting' if action == 'up' else 'stopping'} Docker Compose")

    prompt = "Start Docker Compose now? (y/n): " if action == "up" else "Stop Docker Compose? (y/n): "
    return Step(
        name=f"compose-{action}",
        title="\n🐳 Docker Compose:",
        prompt=prompt,
        action=run,
        skipped=skipped,
        remediation=remediation,
    )


def provision(session: Session, writer=None) -> RunReport:
    """Interactive setup: certificates, nginx config, hosts entries, docker compose up."""
    cfg = session.settings
    session.say("🚀 Proxy Setup Script\n")

    domain = session.ask("Enter your domain (e.g., www.smartseraina.ch): ")
    pair = normalize(domain)
    session.domain = pair.with_www
    port = session.ask("Enter the port to proxy to (e.g., 44314): ")

    session.say("\n📋 Configuration:")
    session.say(f"   Domain (with www): {pair.with_www}")
    session.say(f"   Domain (without www): {pair.without_www}")
    session.say(f"   Proxy Port: {port}\n")

    report = RunReport(flow="setup", domain=pair.with_www)
    if not session.confirm("Proceed with setup? (y/n): "):
        session.say("Setup cancelled.")
        report.cancelled = True
        return report
    session.record("INFO", f"Setup started for {pair.with_www} / {pair.without_www} -> port {port}")

    def issue() -> str:
        moved = certs.issue_certificate(pair, cfg.ssl_dir, workdir=cfg.project_dir, mkcert_bin=cfg.mkcert_bin)
        for path in moved:
            session.say(f"   ✓ Moved {os.path.basename(path)} to nginx/ssl/")
        return f"{len(moved)} file(s) placed in {cfg.ssl_dir}"

    def cert_remediation(exc: Exception) -> None:
        session.error("   ✗ Error generating certificates. Make sure mkcert is installed.")
        session.error(f"   {certs.MKCERT_HINT}")
        session.error(f"   Retry later with: {' '.join(certs.mkcert_command(pair, cfg.mkcert_bin))}")

    def write_nginx() -> str:
        write_config(render_config(pair, port, upstream_host=cfg.upstream_host), cfg.config_path)
        session.say("   ✓ nginx.conf updated")
        if ensure_compose_file(cfg.compose_path, upstream_host=cfg.upstream_host):
            session.say("   ✓ docker-compose.yml created")
        return f"Wrote {cfg.config_path}"

    steps = [
        Step(
            name="certificates",
            title="\n🔐 Generating SSL certificates...",
            prompt="Generate SSL certificates with mkcert? (y/n): ",
            action=issue,
            remediation=cert_remediation,
        ),
        Step(
            name="config",
            title="\n⚙️  Updating nginx configuration...",
            prompt="Write nginx/nginx.conf? (y/n): ",
            action=write_nginx,
        ),
        _hosts_step(session, pair, hostsfile.ADD, writer=writer),
        _compose_step(session, "up"),
    ]
    run_steps(session, steps, report)

    if report.status("config") == OK and report.status("certificates") != OK:
        session.error(
            f"\n⚠️  nginx.conf expects {'/'.join(certs.certificate_files(pair))} in nginx/ssl/ "
            "but they were not generated in this run."
        )
    session.say("\n✅ Setup complete!\n")
    session.record("INFO", f"Setup finished (failed steps: {', '.join(report.failed) or 'none'})")
    return report


def teardown(session: Session, writer=None) -> RunReport:
    """Interactive cleanup: hosts entries, docker compose down, certificates."""
    cfg = session.settings
    session.say("🧹 Proxy Cleanup Script\n")

    domain = session.ask("Enter the domain to remove (e.g., www.smartseraina.ch): ")
    pair = normalize(domain)
    session.domain = pair.with_www

    session.say("\n📋 Will remove:")
    session.say(f"   - {pair.with_www}")
    session.say(f"   - {pair.without_www}")

    report = RunReport(flow="cleanup", domain=pair.with_www)
    if not session.confirm("\nProceed with cleanup? (y/n): "):
        session.say("Cleanup cancelled.")
        report.cancelled = True
        return report
    session.record("INFO", f"Cleanup started for {pair.with_www} / {pair.without_www}")

    def remove_certs() -> str:
        removed = certs.remove_certificates(pair, cfg.ssl_dir)
        for name in removed:
            session.say(f"   ✓ Removed {name}")
        if not removed:
            session.say("   ✓ No certificates found")
        return f"Removed {len(removed)} file(s)"

    def cert_remediation(exc: Exception) -> None:
        session.error("   ✗ Error removing certificates")

    steps = [
        _hosts_step(session, pair, hostsfile.REMOVE, writer=writer),
        _compose_step(session, "down"),
        Step(
            name="certificates",
            title="\n🔐 SSL Certificates:",
            prompt="Remove SSL certificates from nginx/ssl/? (y/n): ",
            action=remove_certs,
            remediation=cert_remediation,
        ),
    ]
    run_steps(session, steps, report)

    session.say("\n✅ Cleanup complete!\n")
    session.record("INFO", f"Cleanup finished (failed steps: {', '.join(report.failed) or 'none'})")
    return report
