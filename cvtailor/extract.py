"""Recover a JSON value from an agent's free-form reply.

Agents are asked for bare JSON but routinely wrap it: in JSONL progress
events, in markdown fences, or in a sentence of prose. `extract_json` tries
a fixed sequence of strategies and returns the first value that parses:

1. the whole reply as one JSON document
2. the longest line that starts with ``{`` and parses on its own
3. the content of the first markdown code fence
4. the span from the first ``{`` to the last ``}``

The longest-line rule assumes the final payload is the biggest object in a
multi-event reply; a long progress event can still win.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

log = logging.getLogger("extract")

EXTRACTION_FAILED = "Could not extract valid JSON from AI response"

_FENCE_RE = re.compile(r"```(?:json)?\s*\n?(.*?)```", re.DOTALL)


class JsonExtractionError(ValueError):
    """No strategy recovered valid JSON from the reply."""


def _longest_json_line(raw: str) -> str | None:
    lines = raw.split("\n")
    if len(lines) < 2:
        return None
    longest = ""
    for line in lines:
        line = line.strip()
        if not line.startswith("{") or len(line) <= len(longest):
            continue
        try:
            json.loads(line)
        except json.JSONDecodeError:
            continue
        longest = line
    return longest or None


def extract_json(raw: str) -> Any:
    """Return the JSON value embedded in `raw`.

    Raises JsonExtractionError if every strategy fails.
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass

    line = _longest_json_line(raw)
    if line is not None:
        log.debug(f"Extracted JSON from the longest of several lines ({len(line)} chars)")
        return json.loads(line)

    match = _FENCE_RE.search(raw)
    if match:
        try:
            return json.loads(match.group(1).strip())
        except json.JSONDecodeError as e:
            log.debug(f"Fenced block is not valid JSON: {e}")

    start = raw.find("{")
    end = raw.rfind("}")
    if start != -1 and end > start:
        try:
            return json.loads(raw[start : end + 1])
        except json.JSONDecodeError as e:
            raise JsonExtractionError(EXTRACTION_FAILED) from e

    raise JsonExtractionError(EXTRACTION_FAILED)
