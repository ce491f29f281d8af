"""
Grid addressing.

Converts between (x, y) positions and linear cell indices and resolves
neighbours. All functions are pure; width and height default to the
reference board but any positive size works.

Neighbour lookup always goes through ``neighbor()`` so that a move off the
top row can never wrap around to the bottom of the previous column.
"""

from __future__ import annotations

from typing import Iterator, Optional

from .errors import OutOfBounds
from .types import GRID_HEIGHT, GRID_WIDTH, GridPos, MoveDir


def in_bounds(pos: GridPos, width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> bool:
    """Check whether a position lies on the grid."""
    x, y = pos
    return 0 <= x < width and 0 <= y < height


def to_index(pos: GridPos, width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> int:
    """
    Convert a position to its linear index ``x + y * width``.

    Raises:
        OutOfBounds: If the position is not on the grid
    """
    if not in_bounds(pos, width, height):
        raise OutOfBounds(pos, width, height)
    x, y = pos
    return x + y * width


def from_index(index: int, width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> GridPos:
    """
    Convert a linear index back to a position.

    Raises:
        OutOfBounds: If the index is not in [0, width * height)
    """
    if not 0 <= index < width * height:
        raise OutOfBounds((index % width, index // width), width, height)
    return index % width, index // width


def neighbor(
    pos: GridPos,
    direction: MoveDir,
    width: int = GRID_WIDTH,
    height: int = GRID_HEIGHT,
) -> Optional[GridPos]:
    """
    Return the adjacent cell in ``direction``, or None if it is off the grid.

    The starting position itself is not validated; callers holding a
    position from the map always pass an in-bounds one.
    """
    dx, dy = direction.delta
    candidate = (pos[0] + dx, pos[1] + dy)
    if not in_bounds(candidate, width, height):
        return None
    return candidate


def step(pos: GridPos, direction: MoveDir) -> GridPos:
    """Offset a position by one cell with no bounds check (selector moves)."""
    dx, dy = direction.delta
    return pos[0] + dx, pos[1] + dy


def iter_positions(width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> Iterator[GridPos]:
    """Yield every position in index order (row by row)."""
    for index in range(width * height):
        yield index % width, index // width
