"""Ports (interfaces) for provider implementations.

The command layer and the CLI front end should depend on these contracts
rather than on a concrete backend.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable


ChunkCallback = Callable[[str], None]


@runtime_checkable
class Provider(Protocol):
    """A chat-capable CLI agent (backend adapter)."""

    name: str

    async def chat(self, system_prompt: str, user_message: str) -> str:
        ...

    async def chat_stream(
        self, system_prompt: str, user_message: str, on_chunk: ChunkCallback
    ) -> str:
        ...

    async def test_connection(self) -> bool:
        ...
