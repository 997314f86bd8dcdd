"""Command layer between front ends and providers."""

from cvtailor.commands.handlers import AiCommandHandler

__all__ = ["AiCommandHandler"]
