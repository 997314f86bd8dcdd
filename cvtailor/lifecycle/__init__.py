"""Agent install and login helpers."""

from cvtailor.lifecycle.cli import check_codex_auth_status, install_codex_cli, login_codex_cli

__all__ = ["check_codex_auth_status", "install_codex_cli", "login_codex_cli"]
