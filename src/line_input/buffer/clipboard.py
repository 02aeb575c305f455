"""Clipboard port consumed by the copy, cut, and paste commands."""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable


class ClipboardError(RuntimeError):
    """Host-reported failure reading or writing the clipboard."""


@runtime_checkable
class ClipboardPort(Protocol):
    """Narrow clipboard capability implemented by the host."""

    def read(self) -> str:
        """Return the clipboard text or raise ``ClipboardError``."""
        ...

    def write(self, text: str) -> None:
        """Replace the clipboard text or raise ``ClipboardError``."""
        ...


class InMemoryClipboard:
    """Process-local clipboard, handy for tests and headless hosts."""

    def __init__(
        self, text: str = "", *, fail_reads: bool = False, fail_writes: bool = False
    ) -> None:
        self.text = text
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.history: List[str] = []

    def read(self) -> str:
        if self.fail_reads:
            raise ClipboardError("clipboard read unavailable")
        return self.text

    def write(self, text: str) -> None:
        if self.fail_writes:
            raise ClipboardError("clipboard write unavailable")
        self.text = text
        self.history.append(text)

    @property
    def last_written(self) -> Optional[str]:
        return self.history[-1] if self.history else None


__all__ = ["ClipboardError", "ClipboardPort", "InMemoryClipboard"]
