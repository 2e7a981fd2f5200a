from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass, field
from typing import Callable

from . import journal
from .errors import DevProxyError
from .settings import Settings, settings as default_settings


# Failures that skip the current step only; anything else aborts the run.
RECOVERABLE_ERRORS = (DevProxyError, OSError, subprocess.SubprocessError)

OK = "ok"
SKIPPED = "skipped"
FAILED = "failed"


def _print_err(msg: str) -> None:
    print(msg, file=sys.stderr)


@dataclass
class Step:
    name: str
    title: str
    action: Callable[[], str | None]
    prompt: str | None = None
    skipped: Callable[[], None] | None = None
    remediation: Callable[[Exception], None] | None = None


@dataclass(frozen=True)
class StepOutcome:
    name: str
    status: str  # ok|skipped|failed
    detail: str = ""


@dataclass
class RunReport:
    flow: str
    domain: str | None = None
    cancelled: bool = False
    outcomes: list[StepOutcome] = field(default_factory=list)

    def status(self, name: str) -> str | None:
        for o in self.outcomes:
            if o.name == name:
                return o.status
        return None

    @property
    def failed(self) -> list[str]:
        return [o.name for o in self.outcomes if o.status == FAILED]


class Session:
    """One interactive run: prompts, output and the journal, passed explicitly to every step."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        error_fn: Callable[[str], None] = _print_err,
        cfg: Settings | None = None,
    ):
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.error_fn = error_fn
        self.settings = cfg or default_settings
        self.domain: str | None = None

    def ask(self, prompt: str) -> str:
        return self.input_fn(prompt)

    def confirm(self, prompt: str) -> bool:
        return self.ask(prompt).lower() == "y"

    def say(self, message: str = "") -> None:
        self.output_fn(message)

    def error(self, message: str) -> None:
        self.error_fn(message)

    def record(self, level: str, message: str, step: str | None = None) -> None:
        if not self.settings.enable_journal:
            return
        journal.log_event(level, message, domain=self.domain, step=step, db_path=self.settings.db_path)


def run_steps(session: Session, steps: list[Step], report: RunReport) -> RunReport:
    """Execute steps in order.

    A declined confirmation skips that step only. A recoverable error is reported
    with the step's remediation and the next step still runs.
    """
    for step in steps:
        session.say(step.title)

        if step.prompt is not None and not session.confirm(step.prompt):
            if step.skipped:
                step.skipped()
            report.outcomes.append(StepOutcome(step.name, SKIPPED))
            session.record("INFO", "Skipped by operator", step=step.name)
            continue

        try:
            detail = step.action() or ""
        except RECOVERABLE_ERRORS as e:
            session.error(f"   ✗ {e}")
            if step.remediation:
                step.remediation(e)
            report.outcomes.append(StepOutcome(step.name, FAILED, str(e)))
            session.record("ERROR", f"{type(e).__name__}: {e}", step=step.name)
            continue

        report.outcomes.append(StepOutcome(step.name, OK, detail))
        session.record("INFO", detail or "Done", step=step.name)
    return report
