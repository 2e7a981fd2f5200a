from __future__ import annotations

import shutil
import subprocess

from .errors import CommandFailedError, ToolNotFoundError


def require_tool(name: str, hint: str | None = None) -> str:
    """Resolve an executable on PATH or raise ToolNotFoundError."""
    path = shutil.which(name)
    if path is None:
        raise ToolNotFoundError(name, hint)
    return path


def run_command(args: list[str], cwd: str | None = None, check: bool = True) -> int:
    """Run an external command with inherited stdio.

    Arguments are passed as a list, never through a shell.
    Returns the exit status; raises CommandFailedError on non-zero when `check`.
    """
    proc = subprocess.run(args, cwd=cwd)
    if check and proc.returncode != 0:
        raise CommandFailedError(args, proc.returncode)
    return proc.returncode
