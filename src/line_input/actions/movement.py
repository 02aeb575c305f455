"""Cursor movement and selection actions."""

from __future__ import annotations

from typing import Optional

from line_input.dispatch.base import CommandContext, CommandResult


def _moved(
    context: CommandContext, before: tuple[int, Optional[int]]
) -> CommandResult:
    state = context.buffer.cursor
    after = (state.cursor, state.anchor)
    context.bus.emit(
        "input.cursor",
        {"cursor": state.cursor, "selection": state.selected_range()},
    )
    return CommandResult(consumed=True, status="ok" if after != before else "noop")


def _snapshot(context: CommandContext) -> tuple[int, Optional[int]]:
    state = context.buffer.cursor
    return (state.cursor, state.anchor)


def _move_by(context: CommandContext, delta: int, *, extend: bool) -> CommandResult:
    before = _snapshot(context)
    context.buffer.cursor.move_by(delta, len(context.buffer), extend=extend)
    return _moved(context, before)


def move_left(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    return _move_by(context, -1, extend=False)


def move_right(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    return _move_by(context, 1, extend=False)


def select_left(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    return _move_by(context, -1, extend=True)


def select_right(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    return _move_by(context, 1, extend=True)


def jump_start(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    before = _snapshot(context)
    context.buffer.cursor.jump_start(len(context.buffer))
    return _moved(context, before)


def jump_end(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    before = _snapshot(context)
    context.buffer.cursor.jump_end(len(context.buffer))
    return _moved(context, before)


def select_to_start(
    context: CommandContext, payload: str | None = None
) -> CommandResult:
    del payload
    before = _snapshot(context)
    context.buffer.cursor.jump_start(len(context.buffer), extend=True)
    return _moved(context, before)


def select_to_end(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    before = _snapshot(context)
    context.buffer.cursor.jump_end(len(context.buffer), extend=True)
    return _moved(context, before)


def select_all(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    before = _snapshot(context)
    context.buffer.cursor.select_all(len(context.buffer))
    return _moved(context, before)


__all__ = [
    "move_left",
    "move_right",
    "select_left",
    "select_right",
    "jump_start",
    "jump_end",
    "select_to_start",
    "select_to_end",
    "select_all",
]
