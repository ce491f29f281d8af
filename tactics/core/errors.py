"""Exceptions raised by the grid and map layers."""

from __future__ import annotations

from typing import Optional

from .types import GridPos


class TacticsError(Exception):
    """Base class for recoverable core errors."""


class OutOfBounds(TacticsError, IndexError):
    """A grid query fell outside [0, width) x [0, height)."""

    def __init__(self, pos: GridPos, width: int, height: int):
        self.pos = pos
        self.width = width
        self.height = height
        super().__init__(f"Position {pos} is outside the {width}x{height} grid")


class InvalidMove(TacticsError, ValueError):
    """
    An occupancy or terrain precondition failed on a mutation attempt.

    Attributes:
        code: Short machine-readable reason (NOT_OCCUPANT, WALL, OCCUPIED,
            NOT_ADJACENT)
        message: Human-readable explanation
    """

    def __init__(self, code: str, message: str, char_id: Optional[int] = None):
        self.code = code
        self.message = message
        self.char_id = char_id
        super().__init__(f"[{code}] {message}")
