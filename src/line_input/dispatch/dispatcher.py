"""Resolves input events to commands and runs them atomically."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from line_input.buffer import ClipboardPort, EditMode, InMemoryClipboard, InputBuffer
from line_input.keymaps import KeymapRegistry, KeymapResolver, KeyStroke
from line_input.keymaps import defaults as default_keymaps
from line_input.runtime import telemetry
from line_input.runtime.config import EngineConfig

from .base import Command, CommandContext, CommandResult, EventBus, KeyInput


@dataclass(frozen=True, slots=True)
class Invocation:
    """A resolved command plus the payload it runs with."""

    action_id: str
    payload: Optional[str] = None
    source: str = "keymap"


def key_to_stroke(key: KeyInput) -> KeyStroke:
    return KeyStroke(key.key, tuple(key.modifiers))


class CommandDispatcher:
    """Maps each input event to exactly one command on the shared context."""

    def __init__(
        self,
        context: CommandContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
        config: EngineConfig | None = None,
    ) -> None:
        self.context = context
        self.config = config or EngineConfig()
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="line_input.keymaps"
        )
        if load_defaults and keymap_registry is None:
            default_keymaps.load_default_keymaps(
                self.keymap_registry, config=self.config
            )
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="line_input.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("dispatcher", self)

    @property
    def buffer(self) -> InputBuffer:
        return self.context.buffer

    def flags(self) -> Dict[str, bool]:
        """Flags ``WhenClause`` gates are evaluated against."""

        buffer = self.buffer
        return {
            "focused": buffer.focused,
            "selection_active": buffer.selected_range() is not None,
            "overwrite": buffer.mode() is EditMode.OVERWRITE,
            "empty": len(buffer) == 0,
        }

    def resolve(self, key: KeyInput) -> Optional[Invocation]:
        """Work out which command ``key`` triggers, if any."""

        if key.released:
            return None

        stroke = key_to_stroke(key)
        result = self.keymap_resolver.resolve(stroke, context=self.flags())
        if result.status == "match" and result.match:
            return Invocation(
                action_id=result.match.action.id, payload=result.match.argument
            )

        text = key.text
        if not text or stroke.blocks_text or not text.isprintable():
            return None
        if len(text) == 1:
            return Invocation(Command.INSERT_CHAR.value, text, source="text")
        return Invocation(Command.INSERT_TEXT.value, text, source="text")

    def handle_key(self, key: KeyInput) -> CommandResult:
        invocation = self.resolve(key)
        if invocation is None:
            telemetry.record_event(
                "dispatch.ignored",
                level="debug",
                data={"key": key.key, "modifiers": key.modifiers},
                logger_name=self.config.logger_name,
            )
            return CommandResult(consumed=False, status="ignored")
        return self.execute(invocation.action_id, invocation.payload)

    def handle_paste(self, text: str) -> CommandResult:
        """Bracketed-paste events carry their own text, no clipboard read."""

        return self.execute(Command.INSERT_TEXT, text)

    def execute(
        self, command: Command | str, payload: Optional[str] = None
    ) -> CommandResult:
        """Run one command; buffer, cursor, and mode change together or not at all."""

        action_id = command.value if isinstance(command, Command) else command
        action = self.keymap_registry.get_action(action_id)
        buffer = self.buffer
        with telemetry.span(
            f"command::{action_id}",
            logger_name=self.config.logger_name,
            component="dispatch",
            metadata={"buffer": buffer.name, "cursor": buffer.cursor_offset()},
        ) as handle:
            with buffer.transaction(action_id):
                outcome = action(self.context, payload)
            handle.add_metadata("cursor_after", buffer.cursor_offset())
            if isinstance(outcome, CommandResult):
                handle.add_metadata("status", outcome.status)

        if not isinstance(outcome, CommandResult):
            outcome = CommandResult(consumed=True)
        outcome.command = action_id
        return outcome


def create_dispatcher(
    text: str = "",
    *,
    clipboard: Optional[ClipboardPort] = None,
    config: Optional[EngineConfig] = None,
    name: str = "default",
) -> CommandDispatcher:
    """Build a dispatcher over a fresh buffer with the default key table."""

    settings = config or EngineConfig.from_env()
    buffer = InputBuffer.from_text(text, name=name, mode=settings.start_mode)
    context = CommandContext(
        buffer=buffer,
        clipboard=clipboard if clipboard is not None else InMemoryClipboard(),
        bus=EventBus(),
    )
    return CommandDispatcher(context, config=settings)


__all__ = ["CommandDispatcher", "Invocation", "create_dispatcher", "key_to_stroke"]
