"""Shared provider flow for CLI agents.

Backends differ only in how they are invoked and how their JSON events are
shaped. Subclasses supply:
- the argument list for a prompt
- how to pull the final text out of a finished envelope
- how to pull incremental text out of a streamed event

Everything else (prompt composition, exit-code policy, streaming
accumulation, the empty-stream fallback, transcripts) lives here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from cvtailor.runners.errors import CliError, CliInvocationError
from cvtailor.runners.pipeline import JSONLineStats, LineBuffer, parse_json_line, scan_last
from cvtailor.runners.ports import ChunkCallback
from cvtailor.runners.process import ProcessResult, spawn_cli

DEFAULT_CHAT_TIMEOUT_S = 300.0
DEFAULT_PROBE_TIMEOUT_S = 30.0

_NON_JSON_SAMPLE = 5


class StreamOutcome(str, Enum):
    CONTENT = "completed-with-content"
    FALLBACK = "completed-empty-fallback"
    FAILED = "failed"


@dataclass
class RunState:
    """Per-call accumulator for a streaming run."""

    text: str = ""
    chunks: int = 0
    stats: JSONLineStats = field(default_factory=JSONLineStats)
    outcome: StreamOutcome | None = None


class BaseProvider:
    """Runs one CLI agent per call and turns its output into text."""

    name = "cli"
    label = "CLI"
    default_command = ""
    probe_prompt = "respond ok"

    def __init__(
        self,
        command: str | None = None,
        *,
        timeout: float = DEFAULT_CHAT_TIMEOUT_S,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT_S,
        transcript_dir: Path | None = None,
    ):
        self.command = command or self.default_command
        self.timeout = timeout
        self.probe_timeout = probe_timeout
        self.transcript_dir = transcript_dir
        self.log = logging.getLogger(self.name)

    def _build_command(self, prompt: str, *, stream: bool) -> list[str]:
        raise NotImplementedError

    def _envelope_text(self, event: dict) -> str | None:
        raise NotImplementedError

    def _stream_text(self, event: dict, state: RunState) -> str | None:
        raise NotImplementedError

    @staticmethod
    def compose_prompt(system_prompt: str, user_message: str) -> str:
        """Agents take no separate system role, so both parts share one prompt."""
        return f"{system_prompt}\n\n{user_message}"

    def _failure(self, result: ProcessResult, *, streaming: bool) -> CliInvocationError:
        what = "streaming failed" if streaming else "failed"
        stderr = result.stderr.strip()
        return CliInvocationError(
            f"{self.label} CLI {what} (exit {result.exit_code}): {stderr}",
            result.exit_code,
            stderr,
        )

    async def chat(self, system_prompt: str, user_message: str) -> str:
        """Run the agent to completion and return its final text."""
        prompt = self.compose_prompt(system_prompt, user_message)
        self.log.info(f"{self.label}: {prompt[:50]}...")
        self._log_prompt(prompt)

        try:
            result = await spawn_cli(
                self.command,
                self._build_command(prompt, stream=False),
                timeout=self.timeout,
            )
            if result.exit_code != 0:
                raise self._failure(result, streaming=False)
        except CliError as e:
            self._log_to_file(f"[ERROR] {e}\n")
            raise

        text = scan_last(result.stdout, self._envelope_text)
        if text is None:
            # Not wrapped in a recognizable envelope
            text = result.stdout.strip()
        self._log_response(text)
        return text

    async def chat_stream(
        self, system_prompt: str, user_message: str, on_chunk: ChunkCallback
    ) -> str:
        """Run the agent, pushing text to `on_chunk` as events arrive.

        Returns the full response, which always equals the concatenation of
        the chunks delivered. A non-zero exit is tolerated once any text has
        been streamed.
        """
        prompt = self.compose_prompt(system_prompt, user_message)
        state = RunState()

        def _deliver(text: str) -> None:
            state.text += text
            state.chunks += 1
            on_chunk(text)

        def _on_line(line: str) -> None:
            state.stats.lines += 1
            event = parse_json_line(line)
            if not isinstance(event, dict):
                state.stats.discarded += 1
                if len(state.stats.non_json_lines) < _NON_JSON_SAMPLE:
                    state.stats.non_json_lines.append(line[:200])
                return
            text = self._stream_text(event, state)
            if text:
                _deliver(text)
            else:
                state.stats.discarded += 1

        self.log.info(f"{self.label} (stream): {prompt[:50]}...")
        self._log_prompt(prompt)
        framer = LineBuffer(_on_line)

        try:
            result = await spawn_cli(
                self.command,
                self._build_command(prompt, stream=True),
                on_stdout=framer.feed,
                timeout=self.timeout,
            )
            if result.exit_code != 0 and not state.text:
                raise self._failure(result, streaming=True)
        except CliError as e:
            state.outcome = StreamOutcome.FAILED
            self.log.warning(f"{self.label} stream {state.outcome.value}: {e}")
            self._log_to_file(f"[ERROR] {e}\n")
            raise

        if result.exit_code != 0:
            self.log.warning(
                f"{self.label} exited {result.exit_code} after streaming "
                f"{len(state.text)} chars; keeping output"
            )

        if state.text:
            state.outcome = StreamOutcome.CONTENT
        else:
            state.outcome = StreamOutcome.FALLBACK
            if result.stdout.strip():
                text = scan_last(result.stdout, self._envelope_text) or result.stdout.strip()
                _deliver(text)

        if state.stats.non_json_lines:
            self.log.debug(f"{self.label} non-JSON output: {' | '.join(state.stats.non_json_lines)}")
        self.log.info(
            f"{self.label} stream {state.outcome.value}: {state.chunks} chunks, "
            f"{state.stats.lines} lines, {state.stats.discarded} discarded"
        )
        self._log_response(state.text)
        return state.text

    async def test_connection(self) -> bool:
        """Probe the agent with a canned prompt. Never raises."""
        try:
            result = await spawn_cli(
                self.command,
                self._build_command(self.probe_prompt, stream=False),
                timeout=self.probe_timeout,
            )
        except Exception as e:
            self.log.info(f"{self.label} connection test failed: {e}")
            return False
        return result.exit_code == 0

    def _log_to_file(self, text: str) -> None:
        if self.transcript_dir is None:
            return
        self.transcript_dir.mkdir(parents=True, exist_ok=True)
        with open(self.transcript_dir / f"{self.name}.log", "a", encoding="utf-8") as f:
            f.write(text)

    def _log_prompt(self, prompt: str) -> None:
        stamp = datetime.now().isoformat(timespec="seconds")
        self._log_to_file(f"\n[{stamp}] PROMPT\n{prompt}\n")

    def _log_response(self, text: str) -> None:
        self._log_to_file(f"[RESPONSE]\n{text}\n")
