"""
Map - fixed-size grid of tiles with terrain and occupancy.

The map is the single source of truth for which cell each character
stands on. During play the only mutation is ``move_occupant()``, which
keeps tile occupancy and character positions in lock-step.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from ..core.errors import InvalidMove, OutOfBounds
from ..core.grid import from_index, in_bounds, neighbor, to_index
from ..core.types import (
    GRID_HEIGHT,
    GRID_WIDTH,
    UNOCCUPIED,
    GridPos,
    MoveDir,
    TerrainKind,
)


@dataclass
class Tile:
    """
    One cell of the map.

    Attributes:
        terrain: Terrain kind (EMPTY, WALL, TRAP)
        occupant: ID of the character standing here, or UNOCCUPIED
        cooldown: Reserved for trap timing; not consumed by current rules
    """

    terrain: TerrainKind = TerrainKind.EMPTY
    occupant: Optional[int] = UNOCCUPIED
    cooldown: int = 0

    @property
    def is_occupied(self) -> bool:
        return self.occupant is not UNOCCUPIED

    def is_passable(self) -> bool:
        """Walls always block; any other terrain blocks only when occupied."""
        if self.terrain == TerrainKind.WALL:
            return False
        # Traps do not block entry.
        return not self.is_occupied

    def to_dict(self) -> Dict[str, Any]:
        return {
            "terrain": self.terrain.value,
            "occupant": self.occupant,
            "cooldown": self.cooldown,
        }


class Map:
    """
    WIDTH x HEIGHT tiles stored in index order (``x + y * width``).

    Example:
        game_map = Map.from_layout(["111", "101", "111"])
        game_map.place_occupant((1, 1), char_id=0)
    """

    def __init__(self, width: int = GRID_WIDTH, height: int = GRID_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError(f"Map dimensions must be positive: {width}x{height}")
        self.width = width
        self.height = height
        self._tiles: List[Tile] = [Tile() for _ in range(width * height)]

    @classmethod
    def from_layout(cls, rows: Sequence[str]) -> Map:
        """
        Build a map from rows of terrain codes ("0" empty, "1" wall, "2" trap).

        Raises:
            ValueError: If rows are ragged or contain unknown codes
        """
        if not rows:
            raise ValueError("Layout must contain at least one row")
        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(
                    f"Layout row {y} has {len(row)} cells, expected {width}"
                )

        game_map = cls(width=width, height=len(rows))
        for y, row in enumerate(rows):
            for x, code in enumerate(row):
                kind = TerrainKind.from_code(code)
                if kind != TerrainKind.EMPTY:
                    game_map.set_terrain((x, y), kind)
        return game_map

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def in_bounds(self, pos: GridPos) -> bool:
        return in_bounds(pos, self.width, self.height)

    def tile_at(self, pos: GridPos) -> Tile:
        """
        Return the tile at ``pos``.

        Raises:
            OutOfBounds: If pos is off the grid
        """
        return self._tiles[to_index(pos, self.width, self.height)]

    def is_passable(self, pos: GridPos) -> bool:
        """
        Whether a character could step onto ``pos``.

        Raises:
            OutOfBounds: If pos is off the grid
        """
        return self.tile_at(pos).is_passable()

    def neighbor(self, pos: GridPos, direction: MoveDir) -> Optional[GridPos]:
        """Bounded neighbour of ``pos``; None at the grid edge."""
        return neighbor(pos, direction, self.width, self.height)

    def is_available(self, pos: GridPos, direction: MoveDir) -> bool:
        """Whether the neighbour in ``direction`` exists and is passable."""
        target = self.neighbor(pos, direction)
        return target is not None and self.is_passable(target)

    def occupant_positions(self) -> Dict[int, List[GridPos]]:
        """Map each occupant ID to every position it is recorded on."""
        positions: Dict[int, List[GridPos]] = {}
        for pos, tile in self.iter_tiles():
            if tile.is_occupied:
                positions.setdefault(tile.occupant, []).append(pos)
        return positions

    def iter_tiles(self) -> Iterator[Tuple[GridPos, Tile]]:
        """Yield (position, tile) pairs in index order."""
        for index, tile in enumerate(self._tiles):
            yield from_index(index, self.width, self.height), tile

    # ------------------------------------------------------------------
    # Setup-time mutation
    # ------------------------------------------------------------------
    def set_terrain(self, pos: GridPos, kind: TerrainKind) -> None:
        """
        Lay down terrain at match setup.

        Raises:
            OutOfBounds: If pos is off the grid
            InvalidMove: If a wall would be placed under a character
        """
        tile = self.tile_at(pos)
        if kind == TerrainKind.WALL and tile.is_occupied:
            raise InvalidMove(
                "OCCUPIED",
                f"Cannot place a wall at {pos}: occupied by #{tile.occupant}",
                tile.occupant,
            )
        tile.terrain = kind

    def place_occupant(self, pos: GridPos, char_id: int) -> None:
        """
        Mark a character's starting tile.

        Raises:
            OutOfBounds: If pos is off the grid
            InvalidMove: If the tile is a wall or already occupied
        """
        tile = self.tile_at(pos)
        if tile.terrain == TerrainKind.WALL:
            raise InvalidMove("WALL", f"Cannot place #{char_id} on wall at {pos}", char_id)
        if tile.is_occupied:
            raise InvalidMove(
                "OCCUPIED",
                f"Cannot place #{char_id} at {pos}: occupied by #{tile.occupant}",
                char_id,
            )
        tile.occupant = char_id

    # ------------------------------------------------------------------
    # Play-time mutation
    # ------------------------------------------------------------------
    def move_occupant(self, from_pos: GridPos, to_pos: GridPos, char_id: int) -> None:
        """
        Move ``char_id`` from one tile to an adjacent passable tile.

        All preconditions are checked before anything is written, so a
        failed call leaves the map untouched.

        Raises:
            OutOfBounds: If either position is off the grid
            InvalidMove: If char_id is not on from_pos, the tiles are not
                adjacent, or to_pos is a wall or occupied
        """
        source = self.tile_at(from_pos)
        target = self.tile_at(to_pos)

        if source.occupant != char_id:
            raise InvalidMove(
                "NOT_OCCUPANT",
                f"#{char_id} is not standing on {from_pos} (occupant: {source.occupant})",
                char_id,
            )
        if abs(from_pos[0] - to_pos[0]) + abs(from_pos[1] - to_pos[1]) != 1:
            raise InvalidMove(
                "NOT_ADJACENT",
                f"{from_pos} and {to_pos} are not adjacent",
                char_id,
            )
        if target.terrain == TerrainKind.WALL:
            raise InvalidMove("WALL", f"{to_pos} is a wall", char_id)
        if target.is_occupied:
            raise InvalidMove(
                "OCCUPIED",
                f"{to_pos} is occupied by #{target.occupant}",
                char_id,
            )

        source.occupant = UNOCCUPIED
        target.occupant = char_id

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_layout(self) -> List[str]:
        """Terrain as rows of codes (inverse of from_layout)."""
        rows = []
        for y in range(self.height):
            rows.append("".join(
                self.tile_at((x, y)).terrain.code for x in range(self.width)
            ))
        return rows

    def __str__(self) -> str:
        return f"Map({self.width}x{self.height})"
