"""Minimal Textual adapter that wires dispatcher events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from line_input.buffer import InputMirror
from line_input.dispatch import Command, CommandResult, KeyInput
from line_input.dispatch.dispatcher import CommandDispatcher


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_input: Callable[[InputMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


BUS_EVENTS = (
    "input.changed",
    "input.cursor",
    "input.mode",
    "input.focus",
    "clipboard.write",
    "clipboard.error",
)


class TextualInputAdapter:
    """Bridges Textual key and paste events to a ``CommandDispatcher``."""

    def __init__(self, dispatcher: CommandDispatcher, hooks: TextualUIHooks) -> None:
        self.dispatcher = dispatcher
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_input()

    def handle_textual_key(
        self,
        key: str,
        *,
        character: Optional[str] = None,
        printable: Optional[bool] = None,
    ) -> CommandResult:
        """Translate a Textual ``events.Key`` payload and dispatch it.

        Textual reports keys as ``"shift+left"``/``"ctrl+c"`` strings and puts
        the typed text in ``character``.
        """

        key_input = normalize_textual_key(
            key, character=character, printable=printable
        )
        self._log_state(
            "key ->", key=key_input.key, mods=key_input.modifiers, text=key_input.text
        )
        result = self.dispatcher.handle_key(key_input)
        self._after_result(result)
        return result

    def handle_textual_paste(self, text: str) -> CommandResult:
        self._log_state("paste ->", length=len(text))
        result = self.dispatcher.handle_paste(text)
        self._after_result(result)
        return result

    def focus(self) -> CommandResult:
        result = self.dispatcher.execute(Command.FOCUS)
        self._after_result(result)
        return result

    def blur(self) -> CommandResult:
        result = self.dispatcher.execute(Command.BLUR)
        self._after_result(result)
        return result

    def _after_result(self, result: CommandResult) -> None:
        if result.consumed:
            label = result.command or ""
            if result.status != "ok":
                label = f"{label}:{result.status}"
            self.hooks.update_status(label)
        self._refresh_input()
        self._log_state(
            "result <-",
            consumed=result.consumed,
            command=result.command,
            status=result.status,
        )

    def _subscribe_events(self) -> None:
        bus = self.dispatcher.context.bus
        for event in BUS_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)

    def _refresh_input(self) -> None:
        self.hooks.update_input(self.dispatcher.buffer.pull_input())

    def _log_state(self, prefix: str, **fields: object) -> None:
        # Log hooks are best-effort.
        try:
            snapshot = self._state_metadata()
            snapshot.update({k: v for k, v in fields.items() if v is not None})
            parts = [prefix]
            for key, value in snapshot.items():
                parts.append(f"{key}={value!r}")
            self.hooks.log(" ".join(parts))
        except Exception:
            pass

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.dispatcher.buffer
        return {
            "mode": buffer.mode().value,
            "cursor": buffer.cursor_offset(),
            "selection": buffer.selected_range(),
            "focused": buffer.focused,
            "buffer": buffer.name,
            "version": buffer.document.version,
        }


_TEXTUAL_KEY_NAMES = {
    "space": " ",
    "plus": "+",
    "minus": "-",
}


def normalize_textual_key(
    key: str,
    *,
    character: Optional[str] = None,
    printable: Optional[bool] = None,
) -> KeyInput:
    """Split a Textual key string into a ``KeyInput``.

    ``"ctrl+c"`` becomes key ``c`` with modifier ``ctrl``; a printable
    ``character`` becomes the text to insert.
    """

    parts = key.split("+") if key not in {"+", "plus"} else [key]
    name = parts[-1] or "+"
    modifiers = tuple(part for part in parts[:-1] if part)
    if printable is None:
        printable = character is not None and character.isprintable()
    text = character if printable and character else None
    if text is not None and not modifiers:
        name = text
    else:
        name = _TEXTUAL_KEY_NAMES.get(name, name)
    return KeyInput(key=name, modifiers=modifiers, text=text)


__all__ = [
    "TextualInputAdapter",
    "TextualUIHooks",
    "normalize_textual_key",
    "BUS_EVENTS",
]
