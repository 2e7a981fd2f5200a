from __future__ import annotations

import argparse
import json
import sys

from devproxy import journal
from devproxy.flows import provision, teardown
from devproxy.session import Session
from devproxy.settings import settings
from devproxy.status import build_status


def _print(obj) -> None:
    print(json.dumps(obj, indent=2, ensure_ascii=False))


def main(argv: list[str] | None = None, session: Session | None = None) -> int:
    p = argparse.ArgumentParser(description="Local HTTPS reverse-proxy setup for development domains")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("setup", help="Interactively provision certificates, nginx config, hosts entries and start the proxy")
    sub.add_parser("cleanup", help="Interactively remove hosts entries, stop the proxy and delete certificates")

    s_status = sub.add_parser("status", help="Report what is provisioned for a domain (JSON)")
    s_status.add_argument("domain")

    s_ev = sub.add_parser("events", help="Show the event journal")
    s_ev.add_argument("--limit", type=int, default=20)

    args = p.parse_args(argv)

    try:
        if args.cmd == "setup":
            provision(session or Session())
            return 0

        if args.cmd == "cleanup":
            teardown(session or Session())
            return 0

        if args.cmd == "status":
            _print(build_status(args.domain).model_dump())
            return 0

        if args.cmd == "events":
            _print(journal.latest_events(args.limit, db_path=settings.db_path))
            return 0
    except (KeyboardInterrupt, EOFError):
        print("\nAborted.", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 2


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
