"""Adapter boundary types for syncing the input state with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from .state import EditMode, Span


@dataclass(slots=True)
class InputMirror:
    """Host-friendly snapshot describing what the renderer should draw."""

    text: str
    cursor: int
    selection: Optional[Span]
    mode: EditMode
    focused: bool = False
    attributes: dict[str, str] = field(default_factory=dict)


class InputSync(Protocol):
    """How adapters pull render state out of the engine."""

    def pull_input(self) -> InputMirror:
        """Return the latest snapshot the host should render."""
        ...


class OutOfBoundsError(IndexError):
    """Raised when an offset outside ``[0, len]`` reaches the document.

    The dispatcher clamps every offset before touching the document, so this
    signals a bug in the engine rather than bad user input.
    """

    def __init__(
        self, message: str, *, offset: int | None = None, length: int | None = None
    ) -> None:
        super().__init__(message)
        self.offset = offset
        self.length = length
