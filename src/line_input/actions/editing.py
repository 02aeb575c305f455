"""Text-mutating actions: deletion, character input, and mode/focus toggles."""

from __future__ import annotations

from line_input.buffer import EditMode
from line_input.dispatch.base import CommandContext, CommandResult
from line_input.runtime import telemetry

_LINE_BREAKS = ("\r\n", "\r", "\n")


def single_line(text: str) -> str:
    """Fold line breaks into spaces so pasted text stays on one line."""

    for line_break in _LINE_BREAKS:
        text = text.replace(line_break, " ")
    return text


def _changed(context: CommandContext, label: str, removed: str = "") -> CommandResult:
    buffer = context.buffer
    context.bus.emit(
        "input.changed",
        {
            "label": label,
            "text": buffer.current_text(),
            "cursor": buffer.cursor_offset(),
            "removed": removed,
        },
    )
    return CommandResult(consumed=True, changed=True)


def delete_selection(context: CommandContext, *, label: str) -> CommandResult | None:
    """Remove the active selection, if any, leaving the cursor at its start."""

    span = context.buffer.selected_range()
    if span is None:
        return None
    delta = context.buffer.replace_range(*span, "", label=label)
    return _changed(context, label, delta.removed)


def insert_text(context: CommandContext, payload: str | None = None) -> CommandResult:
    """Replace the selection with ``payload`` or insert it at the cursor."""

    text = single_line(payload or "")
    buffer = context.buffer
    span = buffer.selected_range()
    if span is None:
        if not text:
            return CommandResult(consumed=True, status="noop")
        span = (buffer.cursor_offset(), buffer.cursor_offset())
    delta = buffer.replace_range(*span, text, label="insert_text")
    return _changed(context, "insert_text", delta.removed)


def insert_char(context: CommandContext, payload: str | None = None) -> CommandResult:
    if payload is None or len(payload) != 1:
        raise ValueError(f"insert_char expects exactly one character, got {payload!r}")

    payload = single_line(payload)
    buffer = context.buffer
    span = buffer.selected_range()
    if span is None:
        cursor = buffer.cursor_offset()
        if buffer.mode() is EditMode.OVERWRITE and cursor < len(buffer):
            span = (cursor, cursor + 1)
        else:
            span = (cursor, cursor)
    delta = buffer.replace_range(*span, payload, label="insert_char")
    return _changed(context, "insert_char", delta.removed)


def backspace(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    removed = delete_selection(context, label="backspace")
    if removed is not None:
        return removed

    cursor = context.buffer.cursor_offset()
    if cursor == 0:
        return CommandResult(consumed=True, status="noop")
    delta = context.buffer.replace_range(cursor - 1, cursor, "", label="backspace")
    return _changed(context, "backspace", delta.removed)


def delete(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    removed = delete_selection(context, label="delete")
    if removed is not None:
        return removed

    cursor = context.buffer.cursor_offset()
    if cursor >= len(context.buffer):
        return CommandResult(consumed=True, status="noop")
    delta = context.buffer.replace_range(cursor, cursor + 1, "", label="delete")
    return _changed(context, "delete", delta.removed)


def toggle_mode(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    mode = context.buffer.toggle_mode()
    telemetry.record_event(
        "input.mode",
        level="debug",
        data={"mode": mode.value, "buffer": context.buffer.name},
    )
    context.bus.emit("input.mode", mode)
    return CommandResult(consumed=True, message=mode.value)


def _set_focus(context: CommandContext, focused: bool) -> CommandResult:
    buffer = context.buffer
    if buffer.focused is focused:
        return CommandResult(consumed=True, status="noop")
    buffer.focused = focused
    telemetry.record_event(
        "input.focus", level="debug", data={"focused": focused, "buffer": buffer.name}
    )
    context.bus.emit("input.focus", focused)
    return CommandResult(consumed=True)


def focus(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    return _set_focus(context, True)


def blur(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    return _set_focus(context, False)


__all__ = [
    "insert_text",
    "insert_char",
    "backspace",
    "delete",
    "delete_selection",
    "toggle_mode",
    "focus",
    "blur",
]
