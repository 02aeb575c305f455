from __future__ import annotations

from typing import List

import pyperclip
import pytest

from line_input.adapters.system_clipboard import SystemClipboard
from line_input.buffer import (
    ClipboardError,
    ClipboardPort,
    InMemoryClipboard,
    InputBuffer,
)
from line_input.dispatch import Command, CommandContext, EventBus
from line_input.dispatch.dispatcher import CommandDispatcher
from line_input.runtime import telemetry
from line_input.runtime.config import EngineConfig


def make_dispatcher(
    text: str, clipboard: ClipboardPort, *, cursor: int | None = None
) -> CommandDispatcher:
    context = CommandContext(
        buffer=InputBuffer.from_text(text, cursor=cursor),
        clipboard=clipboard,
        bus=EventBus(),
    )
    return CommandDispatcher(context, config=EngineConfig())


def test_in_memory_clipboard_tracks_history() -> None:
    clipboard = InMemoryClipboard()

    clipboard.write("one")
    clipboard.write("two")

    assert clipboard.read() == "two"
    assert clipboard.history == ["one", "two"]
    assert clipboard.last_written == "two"
    assert isinstance(clipboard, ClipboardPort)


def test_in_memory_clipboard_failure_flags() -> None:
    clipboard = InMemoryClipboard("kept", fail_reads=True, fail_writes=True)

    with pytest.raises(ClipboardError):
        clipboard.read()
    with pytest.raises(ClipboardError):
        clipboard.write("lost")
    assert clipboard.text == "kept"
    assert clipboard.last_written is None


def test_copy_write_failure_is_swallowed() -> None:
    dispatcher = make_dispatcher("hello", InMemoryClipboard(fail_writes=True))
    errors: List[object] = []
    dispatcher.context.bus.subscribe("clipboard.error", errors.append)

    result = dispatcher.execute(Command.COPY)

    assert result.consumed
    assert result.status == "clipboard_error"
    assert dispatcher.buffer.current_text() == "hello"
    assert errors == [{"operation": "copy", "reason": "clipboard write unavailable"}]


def test_cut_still_removes_text_when_write_fails() -> None:
    dispatcher = make_dispatcher("hello", InMemoryClipboard(fail_writes=True))
    dispatcher.execute(Command.SELECT_TO_START)

    result = dispatcher.execute(Command.CUT)

    assert result.status == "clipboard_error"
    assert result.changed
    assert dispatcher.buffer.current_text() == ""
    assert dispatcher.buffer.cursor_offset() == 0


def test_paste_read_failure_is_a_noop() -> None:
    dispatcher = make_dispatcher("abc", InMemoryClipboard(fail_reads=True), cursor=1)
    dispatcher.execute(Command.SELECT_RIGHT)

    result = dispatcher.execute(Command.PASTE)

    assert result.status == "clipboard_error"
    assert dispatcher.buffer.current_text() == "abc"
    assert dispatcher.buffer.selected_range() == (1, 2)


def test_paste_of_empty_clipboard_is_a_noop() -> None:
    dispatcher = make_dispatcher("abc", InMemoryClipboard(""))

    result = dispatcher.execute(Command.PASTE)

    assert result.status == "noop"
    assert dispatcher.buffer.current_text() == "abc"


def test_clipboard_write_event_reports_text() -> None:
    dispatcher = make_dispatcher("abc", InMemoryClipboard())
    writes: List[object] = []
    dispatcher.context.bus.subscribe("clipboard.write", writes.append)

    dispatcher.execute(Command.CUT)

    assert writes == [{"operation": "cut", "text": "abc"}]


def test_system_clipboard_delegates_to_pyperclip(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    store = {"text": "from desktop"}
    monkeypatch.setattr(pyperclip, "paste", lambda: store["text"])
    monkeypatch.setattr(pyperclip, "copy", lambda text: store.update(text=text))
    clipboard = SystemClipboard()

    assert clipboard.read() == "from desktop"
    clipboard.write("to desktop")
    assert store["text"] == "to desktop"


def test_system_clipboard_wraps_pyperclip_errors(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def unavailable(*_args: object) -> str:
        raise pyperclip.PyperclipException("no clipboard mechanism")

    monkeypatch.setattr(pyperclip, "paste", unavailable)
    monkeypatch.setattr(pyperclip, "copy", unavailable)
    clipboard = SystemClipboard()

    with pytest.raises(ClipboardError, match="no clipboard mechanism"):
        clipboard.read()
    with pytest.raises(ClipboardError):
        clipboard.write("x")


def test_system_clipboard_failure_degrades_paste(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def unavailable() -> str:
        raise pyperclip.PyperclipException("headless")

    monkeypatch.setattr(pyperclip, "paste", unavailable)
    dispatcher = make_dispatcher("abc", SystemClipboard())

    result = dispatcher.execute(Command.PASTE)

    assert result.status == "clipboard_error"
    assert dispatcher.buffer.current_text() == "abc"


def test_system_clipboard_treats_none_as_empty(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(pyperclip, "paste", lambda: None)

    assert SystemClipboard().read() == ""


def test_clipboard_failures_stay_off_the_terminal(
    monkeypatch: pytest.MonkeyPatch, capfd: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("LINE_INPUT_LOG_CONSOLE", raising=False)
    telemetry.configure()
    clipboard = InMemoryClipboard(fail_reads=True, fail_writes=True)
    dispatcher = make_dispatcher("hello", clipboard)

    statuses = [
        dispatcher.execute(command).status
        for command in (Command.COPY, Command.CUT, Command.PASTE)
    ]
    captured = capfd.readouterr()

    assert statuses == ["clipboard_error"] * 3
    assert captured.out == ""
    assert captured.err == ""
