from __future__ import annotations

import os
import sqlite3
import sys
from contextlib import closing
from datetime import datetime, timezone
from typing import Any

from .settings import settings


_warned = False


def utc_now() -> str:
    return datetime.now(tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _resolve_db_path(db_path: str | None = None) -> str:
    """Return a file path usable by sqlite.

    If the configured path is an existing directory, the DB file is placed inside it.
    """
    p = os.path.abspath(db_path or settings.db_path)
    if os.path.isdir(p):
        p = os.path.join(p, "devproxy.db")

    parent = os.path.dirname(p)
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)
    return p


def connect(db_path: str | None = None) -> sqlite3.Connection:
    conn = sqlite3.connect(_resolve_db_path(db_path))
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: str | None = None) -> None:
    """Create tables if they do not exist."""
    with closing(connect(db_path)) as conn, conn:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS events (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              ts TEXT NOT NULL,
              level TEXT NOT NULL,
              domain TEXT,
              step TEXT,
              message TEXT NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_events_ts ON events(ts);
            """
        )


def log_event(
    level: str,
    message: str,
    domain: str | None = None,
    step: str | None = None,
    db_path: str | None = None,
) -> None:
    """Record an event. A journal that cannot be written is reported once and otherwise ignored."""
    global _warned
    try:
        init_db(db_path)
        with closing(connect(db_path)) as conn, conn:
            conn.execute(
                "INSERT INTO events (ts, level, domain, step, message) VALUES (?, ?, ?, ?, ?)",
                (utc_now(), level.upper(), domain, step, message),
            )
    except (sqlite3.Error, OSError) as e:
        if not _warned:
            print(f"(event journal unavailable: {e})", file=sys.stderr)
            _warned = True


def latest_events(limit: int = 100, db_path: str | None = None) -> list[dict[str, Any]]:
    init_db(db_path)
    with closing(connect(db_path)) as conn, conn:
        rows = conn.execute("SELECT * FROM events ORDER BY id DESC LIMIT ?", (limit,)).fetchall()
        return [dict(r) for r in rows]
