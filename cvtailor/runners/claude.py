"""Claude Code CLI provider."""

from __future__ import annotations

from cvtailor.runners.base import BaseProvider, RunState


class ClaudeProvider(BaseProvider):
    """Runs `claude -p` in json (sync) or stream-json (streaming) mode."""

    name = "claude"
    label = "Claude"
    default_command = "claude"

    def _build_command(self, prompt: str, *, stream: bool) -> list[str]:
        """Build the claude argument list."""
        if stream:
            # stream-json requires --verbose in print mode
            return ["-p", prompt, "--output-format", "stream-json", "--verbose"]
        return ["-p", prompt, "--output-format", "json"]

    def _envelope_text(self, event: dict) -> str | None:
        result = event.get("result")
        return result if isinstance(result, str) else None

    def _handle_delta(self, event: dict, state: RunState) -> str | None:
        """Handle content_block_delta - incremental text."""
        delta = event.get("delta")
        if not isinstance(delta, dict):
            return None
        text = delta.get("text")
        return text if isinstance(text, str) and text else None

    def _handle_result(self, event: dict, state: RunState) -> str | None:
        """Handle result - used only when no deltas were streamed."""
        if state.text:
            return None
        return self._envelope_text(event)

    def _handle_stream_event(self, event: dict, state: RunState) -> str | None:
        """Handle stream_event - newer CLIs wrap API deltas in this envelope."""
        inner = event.get("event")
        if isinstance(inner, dict) and inner.get("type") == "content_block_delta":
            return self._handle_delta(inner, state)
        return None

    def _stream_text(self, event: dict, state: RunState) -> str | None:
        handlers = {
            "content_block_delta": self._handle_delta,
            "result": self._handle_result,
            "stream_event": self._handle_stream_event,
        }
        event_type = event.get("type")
        handler = handlers.get(event_type) if isinstance(event_type, str) else None
        return handler(event, state) if handler else None
