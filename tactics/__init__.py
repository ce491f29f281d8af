"""
Grid Tactics - a two-player, turn-based tactics core on a fixed grid.

Each player controls one character that spends a movement budget to
reposition, then picks a target cell before ending the turn.

Quick Start:
    from tactics import TurnEngine, InputEvent, create_arena_scenario

    engine = TurnEngine()
    state = engine.reset(create_arena_scenario())

    for event in (InputEvent.DOWN, InputEvent.RIGHT, InputEvent.CONFIRM):
        result = engine.handle_input(event)

    snapshot = RenderStateBuilder.build(engine.state)
"""

__version__ = "0.1.0"

# Main engine interface
from .engine import GameState, InputResult, TurnEngine

# Scenario system
from .scenario import (
    ARENA_LAYOUT,
    Scenario,
    create_arena_scenario,
    create_open_scenario,
    open_layout,
)

# Core types available at package level
from .core import (
    GridPos,
    InputEvent,
    InvalidMove,
    MoveDir,
    OutOfBounds,
    Phase,
    Status,
    TacticsError,
    TerrainKind,
)
from .entities import Character
from .world import Map, Tile

from .rendering import RenderStateBuilder

__all__ = [
    # Main interface
    "TurnEngine",
    "GameState",
    "InputResult",

    # Scenario system
    "ARENA_LAYOUT",
    "Scenario",
    "create_arena_scenario",
    "create_open_scenario",
    "open_layout",

    # Core types
    "GridPos",
    "InputEvent",
    "MoveDir",
    "Phase",
    "Status",
    "TerrainKind",
    "TacticsError",
    "OutOfBounds",
    "InvalidMove",

    # Model
    "Character",
    "Map",
    "Tile",

    # Rendering
    "RenderStateBuilder",
]
