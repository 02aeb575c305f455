"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .sync import OutOfBoundsError


def ensure_offset(length: int, offset: int) -> int:
    if offset < 0 or offset > length:
        raise OutOfBoundsError(
            f"Offset {offset} outside [0, {length}]", offset=offset, length=length
        )
    return offset


def ensure_range(length: int, start: int, end: int) -> tuple[int, int]:
    ensure_offset(length, start)
    ensure_offset(length, end)
    if start > end:
        raise OutOfBoundsError(
            f"Range start {start} is past its end {end}", offset=start, length=length
        )
    return start, end
