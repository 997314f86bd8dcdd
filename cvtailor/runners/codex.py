"""Codex CLI provider."""

from __future__ import annotations

from cvtailor.runners.base import BaseProvider, RunState


def _agent_message(event: dict) -> str | None:
    """Text of an `{"item": {"type": "agent_message", "text": ...}}` event."""
    item = event.get("item")
    if isinstance(item, dict) and item.get("type") == "agent_message":
        text = item.get("text")
        if isinstance(text, str):
            return text
    return None


class CodexProvider(BaseProvider):
    """Runs `codex exec --json` and reads its JSONL item events."""

    name = "codex"
    label = "Codex"
    default_command = "codex"

    def _build_command(self, prompt: str, *, stream: bool) -> list[str]:
        """Build the codex argument list (same for both modes)."""
        return ["exec", "--json", prompt, "--skip-git-repo-check"]

    def _envelope_text(self, event: dict) -> str | None:
        text = _agent_message(event)
        if text is not None:
            return text
        # Older CLI versions used flat fields
        for key in ("output", "result", "text"):
            value = event.get(key)
            if isinstance(value, str):
                return value
        return None

    def _stream_text(self, event: dict, state: RunState) -> str | None:
        text = _agent_message(event)
        if text is not None:
            return text
        for key in ("content", "text", "delta"):
            value = event.get(key)
            if isinstance(value, str):
                return value
        return None
