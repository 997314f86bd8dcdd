"""Tests for cvtailor.runners.process: spawning and supervising agent processes."""

import os
import sys
import time

import pytest

from cvtailor.runners.errors import CliSpawnError, CliTimeoutError
from cvtailor.runners.process import ProcessResult, is_cli_installed, spawn_cli


class TestSpawnCli:
    @pytest.mark.asyncio
    async def test_collects_output_and_exit_code(self, fake_cli):
        cli = fake_cli("hello\n", stderr="warn\n", exit_code=3)
        result = await spawn_cli(cli.command, ["a", "b c"])
        assert result == ProcessResult(exit_code=3, stdout="hello\n", stderr="warn\n")
        assert cli.argv == ["a", "b c"]

    @pytest.mark.asyncio
    async def test_callbacks_see_same_text_as_accumulators(self, fake_cli):
        cli = fake_cli(["one ", "two\n", "three"], stderr="oops", pause=0.05)
        seen_out, seen_err = [], []
        result = await spawn_cli(
            cli.command, [], on_stdout=seen_out.append, on_stderr=seen_err.append
        )
        assert "".join(seen_out) == result.stdout == "one two\nthree"
        assert "".join(seen_err) == result.stderr == "oops"

    @pytest.mark.asyncio
    async def test_split_utf8_sequence_is_reassembled(self, fake_cli):
        cli = fake_cli([b"caf\xc3", b"\xa9\n"], pause=0.1)
        seen = []
        result = await spawn_cli(cli.command, [], on_stdout=seen.append)
        assert result.stdout == "café\n"
        assert "\ufffd" not in "".join(seen)

    @pytest.mark.asyncio
    async def test_missing_binary_raises_spawn_error(self):
        with pytest.raises(CliSpawnError):
            await spawn_cli("cv-tailor-no-such-binary-xyz", [])

    @pytest.mark.asyncio
    async def test_timeout_terminates_process(self, fake_cli):
        cli = fake_cli("partial\n", sleep=30)
        started = time.monotonic()
        with pytest.raises(CliTimeoutError, match="timed out"):
            await spawn_cli(cli.command, [], timeout=1.0)
        assert time.monotonic() - started < 8
        with pytest.raises(ProcessLookupError):
            os.kill(cli.pid, 0)

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
    @pytest.mark.asyncio
    async def test_signal_death_maps_to_unknown_failure(self):
        result = await spawn_cli(
            sys.executable,
            ["-c", "import os, signal; os.kill(os.getpid(), signal.SIGTERM)"],
        )
        assert result.exit_code == 1


class TestIsCliInstalled:
    def test_found(self, fake_cli):
        assert is_cli_installed(fake_cli().command)

    def test_not_found(self):
        assert not is_cli_installed("cv-tailor-no-such-binary-xyz")
