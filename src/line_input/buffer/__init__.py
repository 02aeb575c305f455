"""Text document, cursor/selection state, and the clipboard port."""

from .buffer import InputBuffer, InputDelta, Transaction
from .clipboard import ClipboardError, ClipboardPort, InMemoryClipboard
from .document import TextDocument
from .state import (
    NO_SELECTION,
    CursorState,
    EditMode,
    NoSelection,
    Selecting,
    SelectionState,
    Span,
)
from .sync import InputMirror, InputSync, OutOfBoundsError
from .validation import ensure_offset, ensure_range

__all__ = [
    "InputBuffer",
    "InputDelta",
    "Transaction",
    "ClipboardError",
    "ClipboardPort",
    "InMemoryClipboard",
    "TextDocument",
    "CursorState",
    "EditMode",
    "NoSelection",
    "Selecting",
    "SelectionState",
    "NO_SELECTION",
    "Span",
    "InputMirror",
    "InputSync",
    "OutOfBoundsError",
    "ensure_offset",
    "ensure_range",
]
