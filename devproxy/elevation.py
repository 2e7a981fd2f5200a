from __future__ import annotations

import os
import sys
import tempfile

from .errors import CommandFailedError, PrivilegedWriteError
from .process import require_tool, run_command


def _stage(content: str, directory: str | None = None) -> str:
    """Write content to a temporary file and return its path."""
    fd, tmp_path = tempfile.mkstemp(prefix="hosts.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(content)
    except OSError as e:
        _discard(tmp_path)
        raise PrivilegedWriteError(f"Could not stage temporary copy: {e}") from e
    return tmp_path


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


class SudoCopyWriter:
    """Stage to a temp file, then `sudo cp` it over the protected file."""

    def __init__(self, sudo_bin: str = "sudo"):
        self.sudo_bin = sudo_bin

    def command(self, tmp_path: str, path: str) -> list[str]:
        return [self.sudo_bin, "cp", tmp_path, path]

    def write(self, path: str, content: str) -> None:
        require_tool(self.sudo_bin, "Run as an administrator or edit the hosts file by hand.")
        tmp_path = _stage(content)
        try:
            run_command(self.command(tmp_path, path))
        except CommandFailedError as e:
            raise PrivilegedWriteError(f"Elevated copy to {path} failed (exit {e.returncode}).") from e
        finally:
            _discard(tmp_path)


class PowerShellElevatedWriter:
    """Stage to a temp file, then copy it with an elevated (UAC) PowerShell."""

    def __init__(self, powershell_bin: str = "powershell"):
        self.powershell_bin = powershell_bin

    def command(self, tmp_path: str, path: str) -> list[str]:
        # Start-Process exits 0 once UAC is accepted; the copy's own status comes back via -PassThru.
        copy = f"`$ErrorActionPreference='Stop'; Copy-Item -Path '{tmp_path}' -Destination '{path}' -Force"
        return [
            self.powershell_bin,
            "-NoProfile",
            "-Command",
            f'$p = Start-Process {self.powershell_bin} -Verb RunAs -Wait -PassThru '
            f'-ArgumentList "-NoProfile -Command {copy}"; exit $p.ExitCode',
        ]

    def write(self, path: str, content: str) -> None:
        require_tool(self.powershell_bin, "PowerShell is required to elevate the hosts file copy.")
        tmp_path = _stage(content)
        try:
            run_command(self.command(tmp_path, path))
        except CommandFailedError as e:
            raise PrivilegedWriteError(f"Elevated copy to {path} failed (exit {e.returncode}).") from e
        finally:
            _discard(tmp_path)


class DirectWriter:
    """For targets the current user can already write: stage beside the file and os.replace it."""

    def write(self, path: str, content: str) -> None:
        tmp_path = _stage(content, directory=os.path.dirname(os.path.abspath(path)))
        try:
            os.replace(tmp_path, path)
        except OSError as e:
            _discard(tmp_path)
            raise PrivilegedWriteError(f"Could not replace {path}: {e}") from e


WRITERS = {
    "sudo": SudoCopyWriter,
    "powershell": PowerShellElevatedWriter,
    "direct": DirectWriter,
}


def writer_for_platform(platform: str = sys.platform, choice: str = "auto"):
    choice = (choice or "auto").strip().lower()
    if choice != "auto":
        try:
            return WRITERS[choice]()
        except KeyError:
            raise ValueError(f"Unknown hosts writer {choice!r}. Use auto, {', '.join(WRITERS)}.") from None
    if platform == "win32":
        return PowerShellElevatedWriter()
    return SudoCopyWriter()
