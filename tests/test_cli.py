import json

import cli
from devproxy import journal
from devproxy.session import Session
from devproxy.settings import Settings
from devproxy.status import StatusReport


def test_setup_cancelled_exits_zero(cfg, answers, capsys):
    out = []
    session = Session(input_fn=answers("example.com", "3000", "n"), output_fn=out.append, cfg=cfg)
    assert cli.main(["setup"], session=session) == 0
    assert "Setup cancelled." in out


def test_cleanup_cancelled_exits_zero(cfg, answers):
    out = []
    session = Session(input_fn=answers("example.com", "n"), output_fn=out.append, cfg=cfg)
    assert cli.main(["cleanup"], session=session) == 0
    assert "Cleanup cancelled." in out


def test_uncaught_error_exits_one(cfg, capsys):
    def broken(prompt):
        raise RuntimeError("terminal went away")

    session = Session(input_fn=broken, output_fn=lambda m: None, cfg=cfg)
    assert cli.main(["setup"], session=session) == 1
    assert "Error: terminal went away" in capsys.readouterr().err


def test_end_of_input_exits_one(cfg):
    def eof(prompt):
        raise EOFError

    session = Session(input_fn=eof, output_fn=lambda m: None, cfg=cfg)
    assert cli.main(["cleanup"], session=session) == 1


def test_status_prints_json(monkeypatch, capsys):
    report = StatusReport(
        with_www="www.example.com",
        without_www="example.com",
        hosts_path="/etc/hosts",
        config_path="nginx/nginx.conf",
    )
    monkeypatch.setattr(cli, "build_status", lambda domain: report)

    assert cli.main(["status", "example.com"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["with_www"] == "www.example.com"
    assert data["proxy_reachable"] is False


def test_events_prints_journal(tmp_path, monkeypatch, capsys):
    db = str(tmp_path / "cli.db")
    journal.log_event("INFO", "hello", step="hosts", db_path=db)
    monkeypatch.setattr(cli, "settings", Settings(db_path=db))

    assert cli.main(["events", "--limit", "5"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data[0]["message"] == "hello"
