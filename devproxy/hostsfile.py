from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Protocol

from .domains import DomainPair


ADD = "add"
REMOVE = "remove"
ACTIONS = (ADD, REMOVE)

ENTRY_SEPARATOR = "   "


class ProtectedFileWriter(Protocol):
    def write(self, path: str, content: str) -> None: ...


@dataclass(frozen=True)
class HostsChange:
    action: str
    changed: bool
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)


def _check_action(action: str) -> None:
    if action not in ACTIONS:
        raise ValueError(f"Unknown hosts action {action!r}. Use one of: {', '.join(ACTIONS)}.")


def mentions_host(line: str, domain: str) -> bool:
    # A host name match, not a fragment: "www.example.com" does not mention "example.com".
    pattern = r"(?<![A-Za-z0-9.\-])" + re.escape(domain) + r"(?![A-Za-z0-9.\-])"
    return re.search(pattern, line.strip()) is not None


def _contains(line: str, domain: str) -> bool:
    return domain in line.strip()


def _domains(pair: DomainPair) -> list[str]:
    # An empty bare form leaves only "www.", which would match unrelated lines.
    if not pair.without_www:
        return []
    return list(pair)


def entry_lines(pair: DomainPair, ip: str = "127.0.0.1") -> list[str]:
    return [f"{ip}{ENTRY_SEPARATOR}{d}" for d in _domains(pair)]


def reconcile_lines(lines: list[str], pair: DomainPair, action: str, ip: str = "127.0.0.1") -> list[str]:
    """Return the hosts lines with the pair's entries added or removed.

    add:    append `<ip>   <domain>` for each domain no line already mentions.
    remove: drop every line containing either domain.
    A pair with an empty bare domain is ignored.
    """
    _check_action(action)
    domains = _domains(pair)

    if action == REMOVE:
        return [line for line in lines if not any(_contains(line, d) for d in domains)]

    out = list(lines)
    for d in domains:
        if any(mentions_host(line, d) for line in out):
            continue
        out.append(f"{ip}{ENTRY_SEPARATOR}{d}")
    return out


_LINE = re.compile(r"([^\r\n]*)(\r\n|\n|\r)")


def _split(content: str) -> tuple[list[str], list[str]]:
    """Split content into lines and their own line endings ("" for an unterminated last line)."""
    lines, ends = [], []
    pos = 0
    for m in _LINE.finditer(content):
        lines.append(m.group(1))
        ends.append(m.group(2))
        pos = m.end()
    if pos < len(content):
        lines.append(content[pos:])
        ends.append("")
    return lines, ends


def reconcile(content: str, pair: DomainPair, action: str, ip: str = "127.0.0.1") -> str:
    """Apply `reconcile_lines` to file content.

    Kept lines keep their own line endings, appended lines use the ending of the
    last terminated line, and the file's trailing newline (or its absence) is kept.
    """
    lines, ends = _split(content)
    new_lines = reconcile_lines(lines, pair, action, ip=ip)
    if new_lines == lines:
        return content
    if not new_lines:
        return ""

    nl = next((e for e in reversed(ends) if e), "\n")
    tail = ends[-1] if ends else ""

    # new_lines is the kept subsequence of lines followed by any appended entries.
    out: list[tuple[str, str]] = []
    j = 0
    for line, end in zip(lines, ends):
        if j < len(new_lines) and new_lines[j] == line:
            out.append((line, end or nl))
            j += 1
    out.extend((line, nl) for line in new_lines[j:])

    out[-1] = (out[-1][0], tail)
    return "".join(line + end for line, end in out)


def manual_instructions(pair: DomainPair, action: str, ip: str = "127.0.0.1") -> list[str]:
    _check_action(action)
    if action == ADD:
        return entry_lines(pair, ip)
    return [f"Remove lines containing: {d}" for d in _domains(pair)]


def read_hosts(path: str) -> str:
    # Bytes that are not UTF-8 (e.g. cp1252 comments) pass through unchanged.
    with open(path, encoding="utf-8", errors="surrogateescape", newline="") as f:
        return f.read()


def apply(pair: DomainPair, action: str, path: str, writer: ProtectedFileWriter, ip: str = "127.0.0.1") -> HostsChange:
    """Reconcile the hosts file at `path`, writing through `writer` only when the content changes."""
    original = read_hosts(path)

    updated = reconcile(original, pair, action, ip=ip)
    if updated == original:
        return HostsChange(action=action, changed=False)

    before = set(original.splitlines())
    after = set(updated.splitlines())
    writer.write(path, updated)
    return HostsChange(
        action=action,
        changed=True,
        added=[line for line in updated.splitlines() if line not in before],
        removed=[line for line in original.splitlines() if line not in after],
    )
