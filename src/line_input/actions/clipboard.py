"""Copy, cut, and paste through the injected clipboard port.

Clipboard failures never reach the caller: copy and cut keep going without
the write, paste turns into a no-op.
"""

from __future__ import annotations

from line_input.buffer import ClipboardError
from line_input.dispatch.base import CommandContext, CommandResult
from line_input.runtime import telemetry

from .editing import insert_text


def _clipboard_failed(
    context: CommandContext, operation: str, exc: ClipboardError
) -> None:
    telemetry.record_event(
        "clipboard.error",
        level="warning",
        data={
            "operation": operation,
            "reason": str(exc),
            "buffer": context.buffer.name,
        },
    )
    context.bus.emit("clipboard.error", {"operation": operation, "reason": str(exc)})


def _write(context: CommandContext, text: str, *, operation: str) -> bool:
    try:
        context.clipboard.write(text)
    except ClipboardError as exc:
        _clipboard_failed(context, operation, exc)
        return False
    context.bus.emit("clipboard.write", {"operation": operation, "text": text})
    return True


def _copy_span(context: CommandContext) -> tuple[int, int]:
    """Selected span, or the whole line when nothing is selected."""

    span = context.buffer.selected_range()
    if span is None:
        return (0, len(context.buffer))
    return span


def copy(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    text = context.buffer.document.slice(*_copy_span(context))
    if not _write(context, text, operation="copy"):
        return CommandResult(consumed=True, status="clipboard_error")
    return CommandResult(consumed=True)


def cut(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    buffer = context.buffer
    start, end = _copy_span(context)
    text = buffer.document.slice(start, end)
    written = _write(context, text, operation="cut")

    delta = buffer.replace_range(start, end, "", label="cut")
    if delta.removed:
        context.bus.emit(
            "input.changed",
            {
                "label": "cut",
                "text": buffer.current_text(),
                "cursor": buffer.cursor_offset(),
                "removed": delta.removed,
            },
        )
    return CommandResult(
        consumed=True,
        status="ok" if written else "clipboard_error",
        changed=bool(delta.removed),
    )


def paste(context: CommandContext, payload: str | None = None) -> CommandResult:
    del payload
    try:
        text = context.clipboard.read()
    except ClipboardError as exc:
        _clipboard_failed(context, "paste", exc)
        return CommandResult(consumed=True, status="clipboard_error")
    return insert_text(context, text)


__all__ = ["copy", "cut", "paste"]
