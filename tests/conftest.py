import os as _os
import sys

import pytest

# Ensure project root is importable (so `import devproxy` / `import cli` work without installing)
_project_root = _os.path.dirname(_os.path.dirname(__file__))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from devproxy.settings import Settings  # noqa: E402


@pytest.fixture
def hosts_file(tmp_path):
    p = tmp_path / "hosts"
    p.write_text("127.0.0.1   localhost\n::1   localhost\n", encoding="utf-8")
    return p


@pytest.fixture
def cfg(tmp_path, hosts_file):
    """Settings pointing every artifact into tmp_path."""
    (tmp_path / "proj").mkdir()
    return Settings(
        project_dir=str(tmp_path / "proj"),
        hosts_path=str(hosts_file),
        hosts_writer="direct",
        db_path=str(tmp_path / "journal.db"),
        enable_journal=True,
    )


class Answers:
    """Scripted operator: returns answers in order and remembers the prompts."""

    def __init__(self, *answers):
        self._answers = list(answers)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self._answers:
            raise AssertionError(f"unexpected prompt: {prompt!r}")
        return self._answers.pop(0)


@pytest.fixture
def answers():
    return Answers
