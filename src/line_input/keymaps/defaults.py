"""Built-in actions and the default single-line key table."""

from __future__ import annotations

from typing import Optional

from line_input import actions
from line_input.dispatch.base import Command
from line_input.runtime.config import EngineConfig

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry


def _action(
    command: Command, handler, description: str, *, mutates: bool = True
) -> ActionRef:
    return ActionRef(
        id=command.value,
        handler=handler,
        description=description,
        mutates=mutates,
    )


DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    _action(Command.MOVE_LEFT, actions.move_left, "Move left", mutates=False),
    _action(Command.MOVE_RIGHT, actions.move_right, "Move right", mutates=False),
    _action(Command.SELECT_LEFT, actions.select_left, "Select left", mutates=False),
    _action(Command.SELECT_RIGHT, actions.select_right, "Select right", mutates=False),
    _action(Command.JUMP_START, actions.jump_start, "Jump to start", mutates=False),
    _action(Command.JUMP_END, actions.jump_end, "Jump to end", mutates=False),
    _action(
        Command.SELECT_TO_START,
        actions.select_to_start,
        "Select to start",
        mutates=False,
    ),
    _action(
        Command.SELECT_TO_END, actions.select_to_end, "Select to end", mutates=False
    ),
    _action(Command.SELECT_ALL, actions.select_all, "Select all", mutates=False),
    _action(Command.BACKSPACE, actions.backspace, "Delete before cursor"),
    _action(Command.DELETE, actions.delete, "Delete under cursor"),
    _action(Command.INSERT_CHAR, actions.insert_char, "Type a character"),
    _action(Command.INSERT_TEXT, actions.insert_text, "Insert host text"),
    _action(Command.TOGGLE_MODE, actions.toggle_mode, "Toggle insert/overwrite"),
    _action(Command.COPY, actions.copy, "Copy selection or line", mutates=False),
    _action(Command.CUT, actions.cut, "Cut selection or line"),
    _action(Command.PASTE, actions.paste, "Paste from clipboard"),
    _action(Command.FOCUS, actions.focus, "Gain focus", mutates=False),
    _action(Command.BLUR, actions.blur, "Release focus", mutates=False),
)


def _bind(
    token: str,
    command: Command,
    *,
    argument: str | None = None,
    when: tuple[str, ...] = (),
    tags: tuple[str, ...] = ("default",),
) -> Binding:
    stroke = KeyStroke.parse(token)
    return Binding(
        id=f"default.{stroke.token}",
        stroke=stroke,
        action_id=command.value,
        argument=argument,
        when=tuple(when),
        tags=tags,
        source="defaults",
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("right", Command.MOVE_RIGHT),
    _bind("left", Command.MOVE_LEFT),
    _bind("shift+right", Command.SELECT_RIGHT),
    _bind("shift+left", Command.SELECT_LEFT),
    _bind("home", Command.JUMP_START),
    _bind("end", Command.JUMP_END),
    _bind("shift+home", Command.SELECT_TO_START),
    _bind("shift+end", Command.SELECT_TO_END),
    _bind("backspace", Command.BACKSPACE),
    _bind("delete", Command.DELETE),
    _bind("insert", Command.TOGGLE_MODE),
    _bind("ctrl+c", Command.COPY),
    _bind("ctrl+x", Command.CUT),
    _bind("ctrl+v", Command.PASTE),
    _bind("ctrl+a", Command.SELECT_ALL),
)

TAB_BINDING = _bind(
    "tab", Command.INSERT_CHAR, argument="\t", tags=("default", "tab")
)

BLUR_BINDINGS: tuple[Binding, ...] = (
    _bind("enter", Command.BLUR, when=("focused",), tags=("default", "focus")),
    _bind("escape", Command.BLUR, when=("focused",), tags=("default", "focus")),
)


def default_bindings(config: Optional[EngineConfig] = None) -> tuple[Binding, ...]:
    settings = config or EngineConfig()
    bindings = list(DEFAULT_BINDINGS)
    if settings.tab_inserts:
        bindings.append(TAB_BINDING)
    if settings.blur_keys_enabled:
        bindings.extend(BLUR_BINDINGS)
    return tuple(bindings)


def load_default_keymaps(
    registry: KeymapRegistry, *, config: Optional[EngineConfig] = None
) -> KeymapRegistry:
    """Seed ``registry`` with the built-in actions and key table."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=True)
    for binding in default_bindings(config):
        registry.register_binding(binding, replace=True)
    return registry


__all__ = [
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "TAB_BINDING",
    "BLUR_BINDINGS",
    "default_bindings",
    "load_default_keymaps",
]
