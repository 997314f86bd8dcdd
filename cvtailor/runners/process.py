"""Subprocess plumbing shared by every CLI agent.

One call to `spawn_cli` owns exactly one child process: it drains stdout and
stderr concurrently, forwards decoded text to optional callbacks as it
arrives, enforces a deadline, and always reaps the child before returning.
"""

from __future__ import annotations

import asyncio
import codecs
import logging
import shutil
from dataclasses import dataclass
from typing import Callable

from cvtailor.runners.errors import CliSpawnError, CliTimeoutError

log = logging.getLogger("cli")

DEFAULT_TIMEOUT_S = 120.0

# Reported when the OS gives no exit status (e.g. the child died from a signal).
UNKNOWN_EXIT_CODE = 1

_READ_SIZE = 64 * 1024
_TERMINATE_GRACE_S = 5.0

OutputCallback = Callable[[str], None]


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a finished CLI process."""

    exit_code: int
    stdout: str
    stderr: str


def is_cli_installed(command: str) -> bool:
    """Return True if `command` resolves on PATH."""
    return shutil.which(command) is not None


async def _drain(
    stream: asyncio.StreamReader,
    parts: list[str],
    callback: OutputCallback | None,
) -> None:
    # Multi-byte sequences split across reads are held back until complete.
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while True:
        data = await stream.read(_READ_SIZE)
        text = decoder.decode(data, final=not data)
        if text:
            parts.append(text)
            if callback:
                callback(text)
        if not data:
            return


async def _reap(process: asyncio.subprocess.Process) -> None:
    """Terminate the child if it is still running and wait for it."""
    if process.returncode is not None:
        return
    try:
        process.terminate()
    except ProcessLookupError:
        pass
    try:
        await asyncio.wait_for(process.wait(), timeout=_TERMINATE_GRACE_S)
    except asyncio.TimeoutError:
        log.warning(f"pid {process.pid} ignored SIGTERM, killing")
        try:
            process.kill()
        except ProcessLookupError:
            pass
        await process.wait()


async def spawn_cli(
    command: str,
    args: list[str],
    *,
    on_stdout: OutputCallback | None = None,
    on_stderr: OutputCallback | None = None,
    timeout: float = DEFAULT_TIMEOUT_S,
) -> ProcessResult:
    """Run `command` with `args` and collect its output.

    Callbacks receive text exactly as it is read; no line boundaries are
    implied. Raises CliSpawnError if the process cannot be started and
    CliTimeoutError if it outlives `timeout` seconds (partial output is
    discarded). A non-zero exit is not an error at this layer.
    """
    executable = shutil.which(command) or command
    try:
        process = await asyncio.create_subprocess_exec(
            executable,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise CliSpawnError(f"Failed to start {command}: {e}") from e

    if process.stdout is None or process.stderr is None:
        await _reap(process)
        raise CliSpawnError(f"{command} process pipes missing")

    stdout_parts: list[str] = []
    stderr_parts: list[str] = []
    readers = [
        asyncio.create_task(_drain(process.stdout, stdout_parts, on_stdout)),
        asyncio.create_task(_drain(process.stderr, stderr_parts, on_stderr)),
    ]

    async def _communicate() -> int:
        await asyncio.gather(*readers)
        return await process.wait()

    try:
        returncode = await asyncio.wait_for(_communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        log.warning(f"{command} timed out after {timeout:g}s, terminating pid {process.pid}")
        raise CliTimeoutError(f"{command} timed out after {timeout:g}s") from None
    finally:
        for task in readers:
            if not task.done():
                task.cancel()
        await _reap(process)

    exit_code = returncode if returncode is not None and returncode >= 0 else UNKNOWN_EXIT_CODE
    log.debug(f"{command} exited with {exit_code}")
    return ProcessResult(
        exit_code=exit_code,
        stdout="".join(stdout_parts),
        stderr="".join(stderr_parts),
    )
