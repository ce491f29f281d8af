"""Core types, grid addressing and errors."""

from .types import (
    GRID_HEIGHT,
    GRID_WIDTH,
    ROSTER_SIZE,
    UNOCCUPIED,
    GridPos,
    InputEvent,
    MoveDir,
    Phase,
    Status,
    TerrainKind,
)
from .errors import InvalidMove, OutOfBounds, TacticsError
from .grid import from_index, in_bounds, iter_positions, neighbor, step, to_index

__all__ = [
    "GRID_HEIGHT",
    "GRID_WIDTH",
    "ROSTER_SIZE",
    "UNOCCUPIED",
    "GridPos",
    "InputEvent",
    "MoveDir",
    "Phase",
    "Status",
    "TerrainKind",
    "InvalidMove",
    "OutOfBounds",
    "TacticsError",
    "from_index",
    "in_bounds",
    "iter_positions",
    "neighbor",
    "step",
    "to_index",
]
