"""Command types shared by the actions and ``dispatch.dispatcher``."""

from .base import Command, CommandContext, CommandResult, EventBus, KeyInput

__all__ = [
    "Command",
    "CommandContext",
    "CommandResult",
    "EventBus",
    "KeyInput",
]
