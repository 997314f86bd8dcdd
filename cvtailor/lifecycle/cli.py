"""Codex CLI lifecycle operations.

Goal: keep install/login/auth-check semantics in one place so the command
handlers and the CLI front end don't drift. All three go through the same
process runner as chat calls; success is a zero exit code.
"""

from __future__ import annotations

import logging

from cvtailor.models import SetupResult
from cvtailor.runners.process import OutputCallback, spawn_cli

_log = logging.getLogger("lifecycle")

CODEX_PACKAGE = "@openai/codex"

INSTALL_TIMEOUT_S = 300.0
LOGIN_TIMEOUT_S = 120.0
AUTH_STATUS_TIMEOUT_S = 15.0


async def install_codex_cli(
    on_progress: OutputCallback | None = None,
    *,
    npm: str = "npm",
) -> SetupResult:
    """Install the Codex CLI globally with npm.

    Raw npm stdout and stderr are forwarded to `on_progress` as they arrive.
    Never raises; failures come back as an unsuccessful SetupResult.
    """
    _log.info(f"Installing {CODEX_PACKAGE} with {npm}")
    try:
        result = await spawn_cli(
            npm,
            ["install", "-g", CODEX_PACKAGE],
            on_stdout=on_progress,
            on_stderr=on_progress,
            timeout=INSTALL_TIMEOUT_S,
        )
    except Exception as e:
        _log.error(f"Codex CLI install failed: {e}")
        return SetupResult(False, str(e) or "Failed to install Codex CLI.")

    if result.exit_code == 0:
        return SetupResult(True, "Codex CLI installed successfully.")
    return SetupResult(
        False,
        result.stderr.strip() or f"npm install failed with code {result.exit_code}",
    )


async def login_codex_cli(command: str = "codex") -> SetupResult:
    """Run the interactive `codex login` flow."""
    try:
        result = await spawn_cli(command, ["login"], timeout=LOGIN_TIMEOUT_S)
    except Exception as e:
        _log.error(f"Codex login failed: {e}")
        return SetupResult(False, str(e) or "Failed to log in to Codex.")

    if result.exit_code == 0:
        return SetupResult(True, "Logged in successfully.")
    return SetupResult(
        False,
        result.stderr.strip() or f"codex login failed with code {result.exit_code}",
    )


async def check_codex_auth_status(command: str = "codex") -> bool:
    """Return True if `codex login status` reports an authenticated user."""
    try:
        result = await spawn_cli(command, ["login", "status"], timeout=AUTH_STATUS_TIMEOUT_S)
    except Exception as e:
        _log.debug(f"Codex auth check failed: {e}")
        return False
    return result.exit_code == 0
