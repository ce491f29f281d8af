"""
Shared value types for the tactics core.

Everything here is a plain enum or alias: no state, no behaviour beyond
small lookups. Other modules import from ``tactics.core`` rather than from
this file directly.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

# (x, y) with x growing rightwards and y growing downwards.
GridPos = Tuple[int, int]

# Reference board size.
GRID_WIDTH = 16
GRID_HEIGHT = 16

# Sentinel stored on a tile nobody stands on.
UNOCCUPIED: Optional[int] = None

# Number of characters in a match.
ROSTER_SIZE = 2


class TerrainKind(Enum):
    """Terrain carried by a tile."""
    EMPTY = "empty"
    WALL = "wall"
    TRAP = "trap"

    @property
    def code(self) -> str:
        """Single-digit code used in layout tables."""
        return _TERRAIN_CODES[self]

    @classmethod
    def from_code(cls, code: str) -> TerrainKind:
        for kind, value in _TERRAIN_CODES.items():
            if value == code:
                return kind
        raise ValueError(f"Unknown terrain code: {code!r}")


_TERRAIN_CODES = {
    TerrainKind.EMPTY: "0",
    TerrainKind.WALL: "1",
    TerrainKind.TRAP: "2",
}


class MoveDir(Enum):
    """Compass directions in screen coordinates (UP decreases y)."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> GridPos:
        return _DELTAS[self]


_DELTAS = {
    MoveDir.UP: (0, -1),
    MoveDir.DOWN: (0, 1),
    MoveDir.LEFT: (-1, 0),
    MoveDir.RIGHT: (1, 0),
}


class Phase(Enum):
    """Match-wide phase, tied to the active character."""
    MOVE = "move"
    ATTACK = "attack"


class Status(Enum):
    ALIVE = "alive"
    DEAD = "dead"


class InputEvent(Enum):
    """
    One logical input, as handed over by whatever captures keys.

    UNRECOGNIZED stands for any key the game does not map; the engine
    treats it as a no-op (apart from its pending phase check).
    """
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    CONFIRM = "confirm"
    UNRECOGNIZED = "unrecognized"

    @property
    def direction(self) -> Optional[MoveDir]:
        """The compass direction for arrow events, None otherwise."""
        try:
            return MoveDir(self.value)
        except ValueError:
            return None

    @classmethod
    def from_key(cls, key: str) -> InputEvent:
        """
        Translate a textual key name into an event.

        Accepts event names ("up", "confirm"), a few common aliases
        ("space", "enter", "w"/"a"/"s"/"d") and is case-insensitive.
        Anything else maps to UNRECOGNIZED.
        """
        name = key.strip().lower()
        return _KEY_ALIASES.get(name, cls.UNRECOGNIZED)


_KEY_ALIASES = {
    **{event.value: event for event in InputEvent},
    "space": InputEvent.CONFIRM,
    "enter": InputEvent.CONFIRM,
    "return": InputEvent.CONFIRM,
    "w": InputEvent.UP,
    "s": InputEvent.DOWN,
    "a": InputEvent.LEFT,
    "d": InputEvent.RIGHT,
}
