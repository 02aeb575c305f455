"""Textual integration for the line input engine.

``app`` is left out of this namespace so the controller can be used without
starting (or even installing) a Textual application.
"""

from .controller import (
    BUS_EVENTS,
    TextualInputAdapter,
    TextualUIHooks,
    normalize_textual_key,
)

__all__ = [
    "BUS_EVENTS",
    "TextualInputAdapter",
    "TextualUIHooks",
    "normalize_textual_key",
]
