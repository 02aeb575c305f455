"""Widget-state aggregate combining document, cursor/selection, and mode."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from line_input.runtime import telemetry

from .document import TextDocument
from .state import CursorState, EditMode, Span
from .sync import InputMirror
from .validation import ensure_offset, ensure_range


@dataclass(slots=True)
class InputDelta:
    version: int
    text: str
    cursor: int
    removed: str
    label: str


class InputBuffer:
    """Owns everything a single-line input edits.

    Document, cursor state, and mode are sibling fields so one command can
    update all of them inside a single ``Transaction``.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[TextDocument] = None,
        cursor: Optional[CursorState] = None,
        mode: EditMode = EditMode.INSERT,
        focused: bool = False,
    ) -> None:
        self.name = name
        self.document = document if document is not None else TextDocument()
        self.cursor = cursor or CursorState()
        self.cursor.clamp(len(self.document))
        self.edit_mode = mode
        self.focused = focused
        self._in_transaction = False

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "default",
        cursor: Optional[int] = None,
        mode: EditMode = EditMode.INSERT,
    ) -> "InputBuffer":
        document = TextDocument.from_text(text)
        if cursor is None:
            offset = len(document)
        else:
            offset = ensure_offset(len(document), cursor)
        return cls(
            name=name, document=document, cursor=CursorState(cursor=offset), mode=mode
        )

    def __len__(self) -> int:
        return len(self.document)

    # Host-facing read surface -------------------------------------------------

    def current_text(self) -> str:
        return self.document.text

    def cursor_offset(self) -> int:
        return self.cursor.cursor

    def selected_range(self) -> Optional[Span]:
        return self.cursor.selected_range()

    def selected_text(self) -> Optional[str]:
        span = self.selected_range()
        if span is None:
            return None
        return self.document.slice(*span)

    def mode(self) -> EditMode:
        return self.edit_mode

    def pull_input(self) -> InputMirror:
        return self.mirror()

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> InputMirror:
        return InputMirror(
            text=self.document.text,
            cursor=self.cursor.cursor,
            selection=self.selected_range(),
            mode=self.edit_mode,
            focused=self.focused,
            attributes=dict(attributes or {}),
        )

    # Mutations ----------------------------------------------------------------

    def transaction(self, label: str) -> "Transaction":
        return Transaction(self, label)

    def replace_range(
        self, start: int, end: int, text: str, *, label: str
    ) -> InputDelta:
        """Swap ``[start, end)`` for ``text`` and park the cursor after it.

        Any selection is dropped. Offsets must already be clamped; anything
        outside ``[0, len]`` raises ``OutOfBoundsError``.
        """

        start, end = ensure_range(len(self.document), start, end)
        with self.transaction(label):
            removed = self.document.remove(start, end)
            self.document.insert(start, text)
            self.cursor.collapse(start + len(text), len(self.document))

        return InputDelta(
            version=self.document.version,
            text=self.document.text,
            cursor=self.cursor.cursor,
            removed=removed,
            label=label,
        )

    def insert_text(self, text: str, *, offset: Optional[int] = None) -> InputDelta:
        position = self.cursor.cursor if offset is None else offset
        return self.replace_range(position, position, text, label="insert_text")

    def delete_range(self, start: int, end: int) -> InputDelta:
        return self.replace_range(start, end, "", label="delete_range")

    def toggle_mode(self) -> EditMode:
        self.edit_mode = self.edit_mode.toggled()
        return self.edit_mode


class Transaction(AbstractContextManager["Transaction"]):
    """Runs a block atomically: state is restored if the block raises."""

    def __init__(self, buffer: InputBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._document: Optional[TextDocument] = None
        self._cursor: Optional[CursorState] = None
        self._mode: Optional[EditMode] = None
        self._focused = False
        self._depth_owner = False

    def __enter__(self) -> "Transaction":
        # Nested transactions share the outermost snapshot.
        self._depth_owner = not self.buffer._in_transaction
        if self._depth_owner:
            self.buffer._in_transaction = True
            self._document = self.buffer.document.copy()
            self._cursor = self.buffer.cursor.copy()
            self._mode = self.buffer.edit_mode
            self._focused = self.buffer.focused
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def rollback(self) -> None:
        if self._document is None or self._cursor is None or self._mode is None:
            return
        self.buffer.document = self._document
        self.buffer.cursor = self._cursor
        self.buffer.edit_mode = self._mode
        self.buffer.focused = self._focused

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        finally:
            if self._depth_owner:
                if exc_type is not None:
                    self.rollback()
                self.buffer._in_transaction = False
        return False
