"""Runtime configuration.

Values come from the environment (optionally seeded from a `.env` file) so
the command layer never needs to know a provider's constructor signature.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from cvtailor.runners.base import DEFAULT_CHAT_TIMEOUT_S, DEFAULT_PROBE_TIMEOUT_S
from cvtailor.runners.registry import ENGINES


def load_env(path: str | Path | None = None) -> bool:
    """Load a .env file into os.environ without overriding existing values."""
    return load_dotenv(path or Path.cwd() / ".env", override=False)


def _env_seconds(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def _env_log_level(name: str, default: str) -> str:
    level = (os.getenv(name) or default).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{name} must be a logging level name, got {level!r}")
    return level


@dataclass(frozen=True)
class TailorConfig:
    provider: str = "codex"
    codex_command: str = "codex"
    claude_command: str = "claude"
    chat_timeout_s: float = DEFAULT_CHAT_TIMEOUT_S
    probe_timeout_s: float = DEFAULT_PROBE_TIMEOUT_S
    transcript_dir: Path | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "TailorConfig":
        provider = (os.getenv("TAILOR_PROVIDER") or "codex").strip().lower()
        if provider not in ENGINES:
            raise ValueError(f"TAILOR_PROVIDER must be one of {', '.join(ENGINES)}, got {provider!r}")

        transcript_dir = os.getenv("TAILOR_TRANSCRIPT_DIR")
        return cls(
            provider=provider,
            codex_command=os.getenv("TAILOR_CODEX_COMMAND") or "codex",
            claude_command=os.getenv("TAILOR_CLAUDE_COMMAND") or "claude",
            chat_timeout_s=_env_seconds("TAILOR_CHAT_TIMEOUT", DEFAULT_CHAT_TIMEOUT_S),
            probe_timeout_s=_env_seconds("TAILOR_PROBE_TIMEOUT", DEFAULT_PROBE_TIMEOUT_S),
            transcript_dir=Path(transcript_dir).expanduser() if transcript_dir else None,
            log_level=_env_log_level("TAILOR_LOG_LEVEL", "INFO"),
        )
