"""Shared test fixtures for the cv-tailor test suite."""

import itertools
import json
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

# A stand-in agent: records its argv and pid, writes scripted stdout chunks
# (raw bytes, flushed one at a time), writes stderr, then exits.
STUB_TEMPLATE = """#!{python}
import json, os, sys, time
with open({argv_log!r}, "w") as f:
    json.dump({{"argv": sys.argv[1:], "pid": os.getpid()}}, f)
for chunk in {chunks!r}:
    sys.stdout.buffer.write(chunk)
    sys.stdout.buffer.flush()
    time.sleep({pause!r})
sys.stderr.write({stderr!r})
sys.stderr.flush()
time.sleep({sleep!r})
sys.exit({exit_code!r})
"""


@dataclass
class FakeCli:
    command: str
    log_path: Path

    def _record(self) -> dict:
        return json.loads(self.log_path.read_text())

    @property
    def argv(self) -> list[str]:
        return self._record()["argv"]

    @property
    def pid(self) -> int:
        return self._record()["pid"]


def jsonl(*events) -> str:
    """Render events as newline-terminated JSON lines."""
    return "".join(json.dumps(e) + "\n" for e in events)


@pytest.fixture
def fake_cli(tmp_path):
    """Factory for executable stub agents living in tmp_path."""
    counter = itertools.count()

    def _make(stdout=(), *, stderr="", exit_code=0, sleep=0.0, pause=0.0) -> FakeCli:
        if isinstance(stdout, (str, bytes)):
            stdout = [stdout]
        chunks = [c.encode("utf-8") if isinstance(c, str) else c for c in stdout]
        n = next(counter)
        path = tmp_path / f"fake-agent-{n}"
        log_path = tmp_path / f"fake-agent-{n}.json"
        path.write_text(
            STUB_TEMPLATE.format(
                python=sys.executable,
                argv_log=str(log_path),
                chunks=chunks,
                pause=pause,
                stderr=stderr,
                sleep=sleep,
                exit_code=exit_code,
            )
        )
        path.chmod(0o755)
        return FakeCli(command=str(path), log_path=log_path)

    return _make


@pytest.fixture
def clean_env(monkeypatch):
    """Remove TAILOR_* overrides so config defaults apply."""
    for name in (
        "TAILOR_PROVIDER",
        "TAILOR_CODEX_COMMAND",
        "TAILOR_CLAUDE_COMMAND",
        "TAILOR_CHAT_TIMEOUT",
        "TAILOR_PROBE_TIMEOUT",
        "TAILOR_TRANSCRIPT_DIR",
        "TAILOR_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
