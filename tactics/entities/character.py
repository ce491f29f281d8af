from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..core.grid import step
from ..core.types import GridPos, MoveDir, Status


@dataclass
class Character:
    """
    Per-player state for one side of the match.

    Characters are created once at match start and never removed; a DEAD
    status is terminal but the record stays on the roster. Position is
    mirrored on the map's occupancy, so only the turn engine moves a
    character (through ``Map.move_occupant``).

    Movement budget and the Attack-phase selector counter are kept apart:
    ``movement_points`` limits steps in Move, ``selector_steps`` belongs to
    the targeting phase. Both are refilled to ``mobility`` on phase entry.
    """

    # Required attributes (NO defaults)
    id: int
    pos: GridPos

    # Stats (have defaults)
    facing: MoveDir = MoveDir.DOWN
    hp: int = 5
    mobility: int = 3
    status: Status = Status.ALIVE
    name: Optional[str] = None

    # Turn state
    movement_points: int = field(default=-1)
    selector: Optional[GridPos] = None
    selector_steps: int = 0

    def __post_init__(self):
        """Validate stats and fill the initial movement budget."""
        if self.hp < 0:
            raise ValueError(f"Hit points cannot be negative: {self.hp}")
        if self.mobility < 0:
            raise ValueError(f"Mobility cannot be negative: {self.mobility}")
        if self.movement_points < 0:
            self.movement_points = self.mobility
        if self.selector is None:
            self.selector = self.pos

    @property
    def is_alive(self) -> bool:
        return self.status == Status.ALIVE

    def apply_move(self, direction: MoveDir) -> bool:
        """
        Face ``direction``.

        Facing follows the last attempted direction, so this runs whether or
        not the step itself is accepted by the map.

        Returns:
            True for any recognized direction
        """
        if not isinstance(direction, MoveDir):
            return False
        self.facing = direction
        return True

    def spend_movement_point(self) -> None:
        """Use one step of the Move budget (floored at zero)."""
        self.movement_points = max(0, self.movement_points - 1)

    def reset_movement(self, mobility: Optional[int] = None) -> None:
        """Refill the Move budget to base mobility (or an explicit value)."""
        self.movement_points = self.mobility if mobility is None else mobility

    def begin_targeting(self) -> None:
        """Put the selector on the character and refill the targeting counter."""
        self.selector = self.pos
        self.selector_steps = self.mobility

    def move_selector(self, direction: MoveDir) -> GridPos:
        """
        Shift the selector one cell.

        No bounds or occupancy checks: the selector can leave the grid.
        """
        self.selector = step(self.selector, direction)
        return self.selector

    def label(self) -> str:
        """
        Human-readable label like "Knight#0" or "character#1".
        """
        display_name = self.name if self.name else "character"
        return f"{display_name}#{self.id}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize character to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "pos": list(self.pos),
            "facing": self.facing.value,
            "hp": self.hp,
            "mobility": self.mobility,
            "status": self.status.value,
            "name": self.name,
            "movement_points": self.movement_points,
            "selector": list(self.selector) if self.selector is not None else None,
            "selector_steps": self.selector_steps,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Character:
        """Rebuild a character from ``to_dict()`` output."""
        selector = data.get("selector")
        return cls(
            id=data["id"],
            pos=tuple(data["pos"]),
            facing=MoveDir(data.get("facing", MoveDir.DOWN.value)),
            hp=data.get("hp", 5),
            mobility=data.get("mobility", 3),
            status=Status(data.get("status", Status.ALIVE.value)),
            name=data.get("name"),
            movement_points=data.get("movement_points", -1),
            selector=tuple(selector) if selector is not None else None,
            selector_steps=data.get("selector_steps", 0),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    def __str__(self) -> str:
        return f"{self.label()} at {self.pos} facing {self.facing.value} [{self.status.value}]"

    def __repr__(self) -> str:
        return (f"Character(id={self.id}, pos={self.pos}, facing={self.facing}, "
                f"hp={self.hp}, mp={self.movement_points}/{self.mobility}, "
                f"status={self.status})")
