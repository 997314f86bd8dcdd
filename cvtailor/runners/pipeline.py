"""Shared JSON-lines helpers for CLI agents.

Agents print one JSON event per line, but the process runner hands over
text in whatever chunks the OS delivers. This module provides:
- a line framer that reassembles chunks into complete lines
- a fail-closed JSON line decoder
- a last-line-first scan over a finished stdout dump
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass
class JSONLineStats:
    lines: int = 0
    discarded: int = 0
    non_json_lines: list[str] = field(default_factory=list)


class LineBuffer:
    """Feed arbitrary text chunks, get complete trimmed lines back.

    The trailing partial line is held until a later chunk terminates it.
    """

    def __init__(self, on_line: Callable[[str], None]):
        self._on_line = on_line
        self._buffer = ""

    @property
    def pending(self) -> str:
        return self._buffer

    def feed(self, chunk: str) -> None:
        self._buffer += chunk
        lines = self._buffer.split("\n")
        self._buffer = lines.pop()
        for line in lines:
            line = line.strip()
            if line:
                self._on_line(line)


def parse_json_line(line: str) -> Any | None:
    """Decode one line as JSON, or return None if it is not valid JSON."""
    try:
        return json.loads(line)
    except (json.JSONDecodeError, RecursionError):
        return None


def scan_last(stdout: str, pick: Callable[[dict], str | None]) -> str | None:
    """Return the first non-empty text `pick` finds, walking stdout lines bottom-up.

    Empty strings do not stop the scan; earlier lines are still tried.
    """
    for line in reversed(stdout.strip().split("\n")):
        event = parse_json_line(line.strip())
        if not isinstance(event, dict):
            continue
        text = pick(event)
        if text:
            return text
    return None
