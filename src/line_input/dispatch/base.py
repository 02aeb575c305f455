"""Shared types for command dispatch: inputs, results, and the command context."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from line_input.buffer import ClipboardPort, InMemoryClipboard, InputBuffer


class Command(str, Enum):
    """Every editing command an input event can resolve to."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SELECT_LEFT = "select_left"
    SELECT_RIGHT = "select_right"
    JUMP_START = "jump_start"
    JUMP_END = "jump_end"
    SELECT_TO_START = "select_to_start"
    SELECT_TO_END = "select_to_end"
    SELECT_ALL = "select_all"
    BACKSPACE = "backspace"
    DELETE = "delete"
    INSERT_CHAR = "insert_char"
    INSERT_TEXT = "insert_text"
    TOGGLE_MODE = "toggle_mode"
    COPY = "copy"
    CUT = "cut"
    PASTE = "paste"
    FOCUS = "focus"
    BLUR = "blur"


@dataclass(slots=True)
class KeyInput:
    """Normalized key event delivered by the host."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None
    released: bool = False


@dataclass(slots=True)
class CommandResult:
    """Outcome of dispatching one input event.

    ``consumed`` is False only when no command was resolved. Commands always
    succeed from the caller's point of view; ``status`` tells the host what
    actually happened (``ok``, ``noop``, ``clipboard_error``, ``ignored``).
    """

    consumed: bool
    command: Optional[str] = None
    status: str = "ok"
    changed: bool = False
    message: Optional[str] = None


@dataclass(slots=True)
class CommandContext:
    """Services every action can reach: the input state and the clipboard."""

    buffer: InputBuffer
    clipboard: ClipboardPort = field(default_factory=InMemoryClipboard)
    bus: "EventBus" = field(default_factory=lambda: EventBus())
    extras: Dict[str, object] = field(default_factory=dict)


class EventBus:
    """Minimal event bus letting actions notify host adapters."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)
