"""Single-line text storage for the input buffer."""

from __future__ import annotations

from dataclasses import dataclass

from .validation import ensure_offset, ensure_range


@dataclass(slots=True)
class TextDocument:
    """Mutable code-point sequence backed by a plain ``str``.

    Offsets count code points, so every offset in ``[0, len]`` is a valid
    boundary and multi-byte characters can never be split. Splicing a string
    is O(length), which is fine at the scale of one input line.
    """

    _text: str = ""
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "TextDocument":
        return cls(_text=text)

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def slice(self, start: int, end: int) -> str:
        start, end = ensure_range(len(self._text), start, end)
        return self._text[start:end]

    def insert(self, offset: int, text: str) -> None:
        """Splice ``text`` in at ``offset``; nothing is written on failure."""

        ensure_offset(len(self._text), offset)
        if not text:
            return
        self._text = self._text[:offset] + text + self._text[offset:]
        self.version += 1

    def remove(self, start: int, end: int) -> str:
        """Remove ``[start, end)`` and return what was there."""

        start, end = ensure_range(len(self._text), start, end)
        removed = self._text[start:end]
        if removed:
            self._text = self._text[:start] + self._text[end:]
            self.version += 1
        return removed

    def copy(self) -> "TextDocument":
        return TextDocument(_text=self._text, version=self.version)
