"""
Scenario system for describing a match setup.

A scenario carries everything needed to start a match: the terrain layout
table and the two characters with their starting positions and stats.
Scenarios are defined in Python; ``to_dict``/``from_dict`` exist so the
engine can take a private deep copy.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

from infra.logger import get_logger
from .core.grid import in_bounds
from .core.types import ROSTER_SIZE, MoveDir, TerrainKind
from .entities.character import Character

if TYPE_CHECKING:
    from inputs import InputSourceSpec

logger = get_logger(__name__)


# Reference arena: "0" empty, "1" wall, "2" trap.
ARENA_LAYOUT: tuple[str, ...] = (
    "1111111111111111",
    "1000010000000001",
    "1000010000000001",
    "1000010000010001",
    "1000010000010221",
    "1000010101112201",
    "1000011100010001",
    "1000000000011101",
    "1011000111221001",
    "1001010111000001",
    "1001010000000001",
    "1011010000001001",
    "1000011111001001",
    "1000010000001001",
    "1000010000000001",
    "1111111111111111",
)


def open_layout(width: int = 16, height: int = 16) -> List[str]:
    """An all-empty layout of the given size."""
    return [TerrainKind.EMPTY.code * width for _ in range(height)]


class Scenario:
    """
    A complete, self-contained match definition.

    Example:
        scenario = Scenario(
            layout=open_layout(),
            characters=[
                Character(id=0, pos=(1, 1), facing=MoveDir.DOWN),
                Character(id=1, pos=(13, 13), facing=MoveDir.UP),
            ],
        )
        engine.reset(scenario)

    Raises:
        ValueError: On a ragged or unknown layout, a roster that is not
            exactly two characters, duplicate IDs, or a character placed
            off-grid, on a wall, or on another character.
    """

    def __init__(
        self,
        layout: Sequence[str],
        characters: Optional[List[Character]] = None,
        input_source: Optional["InputSourceSpec"] = None,
    ):
        """
        Initialize a scenario.

        Args:
            layout: Rows of terrain codes; all rows must be the same length
            characters: Roster in turn order (exactly two)
            input_source: Optional spec for the source that drives the match
        """
        self.layout: List[str] = list(layout)
        if not self.layout:
            raise ValueError("Scenario layout must have at least one row")
        widths = {len(row) for row in self.layout}
        if len(widths) != 1:
            raise ValueError(f"Scenario layout rows differ in length: {sorted(widths)}")
        for row in self.layout:
            for code in row:
                TerrainKind.from_code(code)

        self.input_source = input_source
        self.characters: List[Character] = []
        for character in characters or []:
            self.add_character(character)

    @property
    def grid_width(self) -> int:
        return len(self.layout[0])

    @property
    def grid_height(self) -> int:
        return len(self.layout)

    def terrain_at(self, x: int, y: int) -> TerrainKind:
        return TerrainKind.from_code(self.layout[y][x])

    def add_character(self, character: Character) -> Scenario:
        """Append a character after checking its start tile."""
        if any(c.id == character.id for c in self.characters):
            raise ValueError(f"Duplicate character id: {character.id}")
        if not in_bounds(character.pos, self.grid_width, self.grid_height):
            raise ValueError(f"{character.label()} starts off-grid at {character.pos}")
        if self.terrain_at(*character.pos) == TerrainKind.WALL:
            raise ValueError(f"{character.label()} starts on a wall at {character.pos}")
        if any(c.pos == character.pos for c in self.characters):
            raise ValueError(f"{character.label()} starts on an occupied tile {character.pos}")
        self.characters.append(character)
        return self

    def validate(self) -> None:
        """Check the roster is complete before a match starts."""
        if len(self.characters) != ROSTER_SIZE:
            raise ValueError(
                f"Scenario needs exactly {ROSTER_SIZE} characters, got {len(self.characters)}"
            )

    def clone(self) -> Scenario:
        """Deep copy (characters are rebuilt, not shared)."""
        return Scenario.from_dict(self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "config": {
                "grid_width": self.grid_width,
                "grid_height": self.grid_height,
                "layout": list(self.layout),
            },
            "characters": [c.to_dict() for c in self.characters],
        }
        if self.input_source is not None:
            data["input_source"] = self.input_source.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Scenario:
        """
        Rebuild a scenario from ``to_dict()`` output.

        Accepts Character objects as well as character dicts; objects are
        copied so the scenario never shares mutable state with the caller.
        """
        config = data.get("config", {})
        if "layout" not in config:
            raise ValueError("Scenario config must contain a 'layout'")

        input_source = data.get("input_source")
        if input_source is not None and isinstance(input_source, dict):
            # Local import to avoid circular imports during module load
            from inputs import InputSourceSpec
            input_source = InputSourceSpec.from_dict(input_source)

        def _to_character(c: Any) -> Character:
            if isinstance(c, Character):
                return Character.from_dict(c.to_dict())
            return Character.from_dict(c)

        return cls(
            layout=config["layout"],
            characters=[_to_character(c) for c in data.get("characters", [])],
            input_source=input_source,
        )

    def __str__(self) -> str:
        return f"Scenario({self.grid_width}x{self.grid_height}, characters={len(self.characters)})"

    def __repr__(self) -> str:
        return f"Scenario(characters={self.characters})"


# =============================================================================
# SCENARIO BUILDERS
# =============================================================================

def create_arena_scenario() -> Scenario:
    """
    The reference match: walled 16x16 arena, two characters in opposite
    corners, hp 5 and mobility 3 each.
    """
    return Scenario(
        layout=ARENA_LAYOUT,
        characters=[
            Character(id=0, pos=(1, 1), facing=MoveDir.DOWN, hp=5, mobility=3),
            Character(id=1, pos=(13, 13), facing=MoveDir.UP, hp=5, mobility=3),
        ],
    )


def create_open_scenario(
    start_a: tuple[int, int] = (1, 1),
    start_b: tuple[int, int] = (13, 13),
    mobility: int = 3,
    width: int = 16,
    height: int = 16,
) -> Scenario:
    """An all-empty board; handy for tests and experiments."""
    logger.debug("Building open %sx%s scenario", width, height)
    return Scenario(
        layout=open_layout(width, height),
        characters=[
            Character(id=0, pos=start_a, facing=MoveDir.DOWN, mobility=mobility),
            Character(id=1, pos=start_b, facing=MoveDir.UP, mobility=mobility),
        ],
    )
