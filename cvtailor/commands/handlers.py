"""Command handlers for the tailoring workflow.

Each command is a coroutine method; `dispatch` routes a channel name such as
``"ai:optimize"`` to it. Front ends (the CLI, or any host process) call these
instead of touching providers directly.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Callable

from cvtailor.extract import extract_json
from cvtailor.lifecycle.cli import check_codex_auth_status, install_codex_cli, login_codex_cli
from cvtailor.models import (
    ChunkSink,
    JobRequirements,
    OptimizationResult,
    SetupResult,
    StreamChunk,
    StructuredResume,
)
from cvtailor.prompts import EXTRACT_JOB_PROMPT, OPTIMIZE_RESUME_PROMPT, STRUCTURE_RESUME_PROMPT
from cvtailor.runners.ports import Provider
from cvtailor.runners.process import OutputCallback, is_cli_installed
from cvtailor.scrape import fetch_job_posting

log = logging.getLogger("commands")


class AiCommandHandler:
    """Routes tailoring commands to the active provider.

    Commands are registered in the dispatch table on init.
    """

    def __init__(self, provider: Provider, *, cli_command: str = "codex"):
        self.provider = provider
        self.cli_command = cli_command

        self._commands: dict[str, Callable[..., Awaitable[Any]]] = {
            "ai:check-installed": self.check_installed,
            "ai:structure-resume": self.structure_resume,
            "ai:extract-job": self.extract_job,
            "ai:optimize": self.optimize,
            "ai:test-connection": self.test_connection,
            "ai:install": self.install_cli,
            "ai:login": self.login,
            "ai:check-auth": self.check_auth,
            "job:scrape-url": self.scrape_job_url,
        }

    @property
    def channels(self) -> list[str]:
        return sorted(self._commands)

    async def dispatch(self, channel: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke the handler registered for `channel`."""
        handler = self._commands.get(channel)
        if handler is None:
            raise KeyError(f"Unknown command channel: {channel}")
        return await handler(*args, **kwargs)

    async def check_installed(self) -> dict[str, bool]:
        return {"installed": is_cli_installed(self.cli_command)}

    async def structure_resume(self, raw_text: str) -> StructuredResume:
        """Turn raw résumé text into a structured résumé."""
        response = await self.provider.chat(STRUCTURE_RESUME_PROMPT, raw_text)
        return extract_json(response)

    async def extract_job(self, description: str) -> JobRequirements:
        """Pull structured requirements out of a job description."""
        response = await self.provider.chat(EXTRACT_JOB_PROMPT, description)
        return extract_json(response)

    async def optimize(
        self,
        resume: StructuredResume,
        job: JobRequirements,
        sink: ChunkSink | None = None,
    ) -> OptimizationResult:
        """Score and rewrite `resume` against `job`, streaming progress to `sink`.

        The sink sees every content chunk, then a single ``done`` chunk. On
        failure it sees one ``error`` chunk and the exception propagates.
        """
        user_message = json.dumps({"resume": resume, "jobRequirements": job})

        def _emit(chunk: StreamChunk) -> None:
            if sink is not None:
                sink(chunk)

        try:
            full_response = await self.provider.chat_stream(
                OPTIMIZE_RESUME_PROMPT,
                user_message,
                lambda text: _emit(StreamChunk("content", text)),
            )
            result = extract_json(full_response)
            _emit(StreamChunk("done"))
            return result
        except Exception as e:
            log.error(f"Optimization failed: {e}")
            _emit(StreamChunk("error", str(e)))
            raise

    async def test_connection(self) -> bool:
        try:
            return await self.provider.test_connection()
        except Exception as e:
            log.warning(f"Connection test raised: {e}")
            return False

    async def install_cli(self, on_progress: OutputCallback | None = None) -> SetupResult:
        return await install_codex_cli(on_progress)

    async def login(self) -> SetupResult:
        return await login_codex_cli(self.cli_command)

    async def check_auth(self) -> dict[str, bool]:
        return {"authenticated": await check_codex_auth_status(self.cli_command)}

    async def scrape_job_url(self, url: str) -> str:
        return await fetch_job_posting(url)
