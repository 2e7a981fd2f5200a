"""devproxy: local HTTPS reverse proxy for development domains.

Two interactive flows:
 - setup: mkcert certificates, nginx.conf, /etc/hosts entries, docker compose up
 - cleanup: hosts entries out, docker compose down, certificates removed

The hosts file is reconciled in memory and only written (with elevation) when
its content actually changes.
"""
