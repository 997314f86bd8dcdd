"""CLI providers for AI agents."""

from cvtailor.runners.base import BaseProvider, RunState, StreamOutcome
from cvtailor.runners.claude import ClaudeProvider
from cvtailor.runners.codex import CodexProvider
from cvtailor.runners.errors import CliError, CliInvocationError, CliSpawnError, CliTimeoutError
from cvtailor.runners.ports import ChunkCallback, Provider
from cvtailor.runners.process import ProcessResult, is_cli_installed, spawn_cli
from cvtailor.runners.registry import create_provider, provider_from_config

__all__ = [
    "BaseProvider",
    "ChunkCallback",
    "ClaudeProvider",
    "CliError",
    "CliInvocationError",
    "CliSpawnError",
    "CliTimeoutError",
    "CodexProvider",
    "ProcessResult",
    "Provider",
    "RunState",
    "StreamOutcome",
    "create_provider",
    "is_cli_installed",
    "provider_from_config",
    "spawn_cli",
]
