"""System clipboard port backed by pyperclip."""

from __future__ import annotations

import pyperclip

from line_input.buffer import ClipboardError


class SystemClipboard:
    """Reads and writes the desktop clipboard through pyperclip.

    pyperclip raises ``PyperclipException`` when no copy/paste mechanism is
    available (e.g. a headless Linux box without xclip); that surfaces here as
    ``ClipboardError`` so the editing commands can degrade quietly.
    """

    def read(self) -> str:
        try:
            content = pyperclip.paste()
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(str(exc)) from exc
        return content or ""

    def write(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(str(exc)) from exc


__all__ = ["SystemClipboard"]
