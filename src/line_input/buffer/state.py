"""Cursor, selection, and edit-mode state for the input buffer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

Span = Tuple[int, int]  # [start, end)


class EditMode(str, Enum):
    """What a typed character does when the cursor sits on another character."""

    INSERT = "insert"
    OVERWRITE = "overwrite"

    def toggled(self) -> "EditMode":
        return EditMode.OVERWRITE if self is EditMode.INSERT else EditMode.INSERT


@dataclass(frozen=True, slots=True)
class NoSelection:
    pass


@dataclass(frozen=True, slots=True)
class Selecting:
    """A selection gesture in progress; ``anchor`` is the fixed endpoint."""

    anchor: int


SelectionState = Union[NoSelection, Selecting]
NO_SELECTION = NoSelection()


def clamp(offset: int, length: int) -> int:
    return max(0, min(offset, length))


@dataclass(slots=True)
class CursorState:
    """Cursor offset plus the selection gesture it belongs to.

    The anchor is recorded lazily: only the first extending move of a gesture
    stores it, later extending moves only move the cursor. A non-extending
    move always drops the anchor, even when the cursor stays put.
    """

    cursor: int = 0
    selection: SelectionState = NO_SELECTION

    @property
    def anchor(self) -> Optional[int]:
        if isinstance(self.selection, Selecting):
            return self.selection.anchor
        return None

    def move_to(self, offset: int, length: int, *, extend: bool = False) -> None:
        target = clamp(offset, length)
        if not extend:
            self.selection = NO_SELECTION
        elif isinstance(self.selection, NoSelection):
            self.selection = Selecting(anchor=self.cursor)
        self.cursor = target

    def move_by(self, delta: int, length: int, *, extend: bool = False) -> None:
        self.move_to(self.cursor + delta, length, extend=extend)

    def jump_start(self, length: int, *, extend: bool = False) -> None:
        self.move_to(0, length, extend=extend)

    def jump_end(self, length: int, *, extend: bool = False) -> None:
        self.move_to(length, length, extend=extend)

    def select_all(self, length: int) -> None:
        self.selection = Selecting(anchor=0)
        self.cursor = length

    def collapse(self, offset: int, length: int) -> None:
        self.cursor = clamp(offset, length)
        self.selection = NO_SELECTION

    def clamp(self, length: int) -> None:
        """Pull cursor and anchor back inside a buffer that just shrank."""

        self.cursor = clamp(self.cursor, length)
        if isinstance(self.selection, Selecting):
            self.selection = Selecting(anchor=clamp(self.selection.anchor, length))

    def selected_range(self) -> Optional[Span]:
        anchor = self.anchor
        if anchor is None or anchor == self.cursor:
            return None
        return (min(anchor, self.cursor), max(anchor, self.cursor))

    def copy(self) -> "CursorState":
        return CursorState(cursor=self.cursor, selection=self.selection)
