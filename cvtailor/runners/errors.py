"""Errors raised while driving a CLI agent."""

from __future__ import annotations


class CliError(RuntimeError):
    """Base class for CLI agent failures."""


class CliSpawnError(CliError):
    """The agent process could not be started."""


class CliTimeoutError(CliError):
    """The agent process ran past its deadline and was terminated."""


class CliInvocationError(CliError):
    """The agent exited non-zero without producing usable output."""

    def __init__(self, message: str, exit_code: int, stderr: str = ""):
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr
