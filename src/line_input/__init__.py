"""UI-agnostic single-line text input engine."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "dispatch",
    "keymaps",
    "runtime",
]

__version__ = "0.1.0"
