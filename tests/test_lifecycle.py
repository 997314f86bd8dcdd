"""Tests for cvtailor.lifecycle: installing and logging in to the Codex CLI."""

import pytest

from cvtailor.lifecycle import check_codex_auth_status, install_codex_cli, login_codex_cli
from cvtailor.models import SetupResult


class TestInstall:
    @pytest.mark.asyncio
    async def test_success_streams_progress(self, fake_cli):
        npm = fake_cli(["added 1 package\n", "done\n"], stderr="npm warn deprecated\n", pause=0.05)
        progress = []
        result = await install_codex_cli(progress.append, npm=npm.command)
        assert result == SetupResult(True, "Codex CLI installed successfully.")
        assert npm.argv == ["install", "-g", "@openai/codex"]
        joined = "".join(progress)
        assert "added 1 package" in joined
        assert "npm warn deprecated" in joined

    @pytest.mark.asyncio
    async def test_failure_reports_stderr(self, fake_cli):
        npm = fake_cli(stderr="EACCES: permission denied\n", exit_code=243)
        result = await install_codex_cli(npm=npm.command)
        assert result == SetupResult(False, "EACCES: permission denied")

    @pytest.mark.asyncio
    async def test_failure_without_stderr(self, fake_cli):
        npm = fake_cli(exit_code=1)
        result = await install_codex_cli(npm=npm.command)
        assert result == SetupResult(False, "npm install failed with code 1")

    @pytest.mark.asyncio
    async def test_missing_npm(self):
        result = await install_codex_cli(npm="cv-tailor-no-such-npm")
        assert result.success is False
        assert "cv-tailor-no-such-npm" in result.message


class TestLogin:
    @pytest.mark.asyncio
    async def test_success(self, fake_cli):
        codex = fake_cli("Successfully logged in\n")
        assert await login_codex_cli(codex.command) == SetupResult(True, "Logged in successfully.")
        assert codex.argv == ["login"]

    @pytest.mark.asyncio
    async def test_failure(self, fake_cli):
        codex = fake_cli(stderr="browser closed", exit_code=1)
        assert await login_codex_cli(codex.command) == SetupResult(False, "browser closed")


class TestAuthStatus:
    @pytest.mark.asyncio
    async def test_authenticated(self, fake_cli):
        codex = fake_cli("Logged in using ChatGPT\n")
        assert await check_codex_auth_status(codex.command) is True
        assert codex.argv == ["login", "status"]

    @pytest.mark.asyncio
    async def test_not_authenticated(self, fake_cli):
        codex = fake_cli("Not logged in\n", exit_code=1)
        assert await check_codex_auth_status(codex.command) is False

    @pytest.mark.asyncio
    async def test_missing_binary(self):
        assert await check_codex_auth_status("cv-tailor-no-such-codex") is False
