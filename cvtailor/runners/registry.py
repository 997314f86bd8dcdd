"""Provider registry.

This provides a single place to map an engine name to its concrete provider
implementation. Callers should depend on the `Provider` port.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cvtailor.runners.ports import Provider

if TYPE_CHECKING:
    from cvtailor.config import TailorConfig

ENGINES = ("codex", "claude")


def create_provider(engine: str, **kwargs: Any) -> Provider:
    engine = (engine or "").strip().lower()

    if engine == "codex":
        from cvtailor.runners.codex import CodexProvider

        provider = CodexProvider(**kwargs)
    elif engine == "claude":
        from cvtailor.runners.claude import ClaudeProvider

        provider = ClaudeProvider(**kwargs)
    else:
        raise ValueError(f"Unknown engine: {engine}")

    if not isinstance(provider, Provider):
        raise TypeError(f"{engine} provider does not satisfy Provider port")
    return provider


def provider_from_config(config: "TailorConfig") -> Provider:
    """Build the configured provider with its command and timeouts."""
    command = config.claude_command if config.provider == "claude" else config.codex_command
    return create_provider(
        config.provider,
        command=command,
        timeout=config.chat_timeout_s,
        probe_timeout=config.probe_timeout_s,
        transcript_dir=config.transcript_dir,
    )
