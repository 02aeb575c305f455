"""Editing verbs the dispatcher binds keys to."""

from .clipboard import copy, cut, paste
from .editing import (
    backspace,
    blur,
    delete,
    delete_selection,
    focus,
    insert_char,
    insert_text,
    toggle_mode,
)
from .movement import (
    jump_end,
    jump_start,
    move_left,
    move_right,
    select_all,
    select_left,
    select_right,
    select_to_end,
    select_to_start,
)

__all__ = [
    "copy",
    "cut",
    "paste",
    "backspace",
    "blur",
    "delete",
    "delete_selection",
    "focus",
    "insert_char",
    "insert_text",
    "toggle_mode",
    "jump_end",
    "jump_start",
    "move_left",
    "move_right",
    "select_all",
    "select_left",
    "select_right",
    "select_to_end",
    "select_to_start",
]
