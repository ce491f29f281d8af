"""
TurnEngine - the match state machine.

The engine owns the single ``GameState`` of a match and is the only thing
that mutates it. Input arrives one event at a time through
``handle_input()``; each call is processed to completion and returns an
``InputResult`` describing what happened.

Usage:
    from tactics import TurnEngine, InputEvent, create_arena_scenario

    engine = TurnEngine()
    engine.reset(create_arena_scenario())
    result = engine.handle_input(InputEvent.DOWN)
    print(result.log)

Phase rules:
    MOVE    arrows move the active character (one budget point per accepted
            step); CONFIRM switches to ATTACK.
    ATTACK  arrows move the selector (unbounded, free); CONFIRM ends the turn
            and hands control to the next character.

    Before anything else, every event checks whether the active character
    has run out of movement in MOVE and, if so, switches to ATTACK. The
    event that triggers the switch is then handled under ATTACK.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from infra.logger import get_logger
from .core.errors import TacticsError
from .core.types import InputEvent, MoveDir, Phase
from .entities.character import Character
from .scenario import Scenario
from .world.map import Map

logger = get_logger(__name__)


@dataclass
class GameState:
    """
    Everything that makes up a running match.

    Attributes:
        characters: Roster in turn order
        map: Terrain and occupancy
        phase: Current match-wide phase
        active_index: Index into ``characters`` of the acting character
        turn: Completed turns so far (starts at 0)
    """

    characters: List[Character]
    map: Map
    phase: Phase = Phase.MOVE
    active_index: int = 0
    turn: int = 0

    @property
    def active_character(self) -> Character:
        return self.characters[self.active_index]

    def get_character(self, char_id: int) -> Optional[Character]:
        for character in self.characters:
            if character.id == char_id:
                return character
        return None

    def occupancy_violations(self) -> List[str]:
        """
        Describe every mismatch between character positions and tile occupancy.

        Returns:
            Empty list when every living character occupies exactly its own
            tile and nothing else records it.
        """
        problems: List[str] = []
        recorded = self.map.occupant_positions()
        known_ids = {c.id for c in self.characters}

        for character in self.characters:
            positions = recorded.get(character.id, [])
            if not character.is_alive:
                continue
            if positions != [character.pos]:
                problems.append(
                    f"{character.label()} at {character.pos} is recorded on {positions}"
                )

        for char_id, positions in recorded.items():
            if char_id not in known_ids:
                problems.append(f"Unknown occupant #{char_id} on {positions}")
        return problems

    def to_dict(self) -> Dict[str, Any]:
        return {
            "turn": self.turn,
            "phase": self.phase.value,
            "active_index": self.active_index,
            "active_character_id": self.active_character.id,
            "characters": [c.to_dict() for c in self.characters],
            "layout": self.map.to_layout(),
        }


@dataclass
class InputResult:
    """
    Outcome of processing one input event.

    Attributes:
        event: The event that was handled
        character_id: Character that was active when the event arrived
        phase_before: Phase when the event arrived (before the budget check)
        phase_after: Phase once the event was fully handled
        turn: Turn counter after handling
        moved: True if the character stepped to a new tile
        selector_moved: True if the Attack selector moved
        forced_attack: True if an empty budget forced the switch to ATTACK
        turn_ended: True if the event ended the turn
        rejection: Reason code for a refused move (None otherwise)
        log: Human-readable summary
    """

    event: InputEvent
    character_id: int
    phase_before: Phase
    phase_after: Phase
    turn: int
    moved: bool = False
    selector_moved: bool = False
    forced_attack: bool = False
    turn_ended: bool = False
    rejection: Optional[str] = None
    log: str = ""
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.event.value,
            "character_id": self.character_id,
            "phase_before": self.phase_before.value,
            "phase_after": self.phase_after.value,
            "turn": self.turn,
            "moved": self.moved,
            "selector_moved": self.selector_moved,
            "forced_attack": self.forced_attack,
            "turn_ended": self.turn_ended,
            "rejection": self.rejection,
            "log": self.log,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> InputResult:
        return cls(
            event=InputEvent(data["event"]),
            character_id=data["character_id"],
            phase_before=Phase(data["phase_before"]),
            phase_after=Phase(data["phase_after"]),
            turn=data["turn"],
            moved=data.get("moved", False),
            selector_moved=data.get("selector_moved", False),
            forced_attack=data.get("forced_attack", False),
            turn_ended=data.get("turn_ended", False),
            rejection=data.get("rejection"),
            log=data.get("log", ""),
        )


class TurnEngine:
    """
    Drives a two-character match from discrete input events.

    Attributes:
        state: Current GameState (None until reset())
        verbose: Log every handled event at INFO instead of DEBUG
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.state: Optional[GameState] = None
        self._scenario: Optional[Scenario] = None

    def reset(self, scenario: Scenario | Dict[str, Any]) -> GameState:
        """
        Start a new match from a scenario.

        The scenario is cloned, so the caller's characters are never mutated.
        Starting tiles are marked occupied before the first event.

        Raises:
            ValueError: If the scenario is incomplete or inconsistent
        """
        if isinstance(scenario, Scenario):
            scenario_obj = scenario.clone()
        else:
            scenario_obj = Scenario.from_dict(scenario)
        scenario_obj.validate()
        self._scenario = scenario_obj

        # The kept scenario stays pristine; play mutates a second copy.
        characters = scenario_obj.clone().characters
        game_map = Map.from_layout(scenario_obj.layout)
        for character in characters:
            if character.is_alive:
                game_map.place_occupant(character.pos, character.id)

        self.state = GameState(characters=characters, map=game_map)
        self.state.active_character.reset_movement()

        logger.info(
            "Match started on %s with %s",
            game_map,
            ", ".join(c.label() for c in self.state.characters),
        )
        return self.state

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def phase(self) -> Phase:
        return self._require_state().phase

    @property
    def turn(self) -> int:
        return self._require_state().turn

    @property
    def active_character(self) -> Character:
        return self._require_state().active_character

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------
    def handle_input(self, event: InputEvent) -> InputResult:
        """
        Process one input event to completion.

        Never raises for gameplay reasons: refused moves are reported via
        ``InputResult.rejection``.

        Raises:
            RuntimeError: If reset() hasn't been called
        """
        state = self._require_state()
        if not isinstance(event, InputEvent):
            event = InputEvent.UNRECOGNIZED

        character = state.active_character
        result = InputResult(
            event=event,
            character_id=character.id,
            phase_before=state.phase,
            phase_after=state.phase,
            turn=state.turn,
        )

        # Pending budget check runs first, on every event.
        if state.phase == Phase.MOVE and character.movement_points == 0:
            self._enter_attack(character)
            result.forced_attack = True
            result.notes.append(f"{character.label()} is out of movement; targeting")

        direction = event.direction
        if state.phase == Phase.MOVE:
            if direction is not None:
                self._handle_move(character, direction, result)
            elif event == InputEvent.CONFIRM:
                self._enter_attack(character)
                result.notes.append(f"{character.label()} starts targeting")
        else:
            if direction is not None:
                character.move_selector(direction)
                result.selector_moved = True
                result.notes.append(f"selector -> {character.selector}")
            elif event == InputEvent.CONFIRM:
                self._end_turn(character, result)

        result.phase_after = state.phase
        result.turn = state.turn
        result.log = self._format_log(character, event, result)

        if self.verbose:
            logger.info(result.log)
        else:
            logger.debug(result.log)
        return result

    def _handle_move(self, character: Character, direction: MoveDir, result: InputResult) -> None:
        """Try one step; facing changes either way."""
        state = self.state
        character.apply_move(direction)

        target = state.map.neighbor(character.pos, direction)
        if target is None:
            result.rejection = "OUT_OF_BOUNDS"
            result.notes.append(f"{direction.value} from {character.pos} leaves the grid")
            return

        try:
            state.map.move_occupant(character.pos, target, character.id)
        except TacticsError as exc:
            result.rejection = getattr(exc, "code", "OUT_OF_BOUNDS")
            result.notes.append(str(exc))
            logger.debug("Move refused for %s: %s", character.label(), exc)
            return

        character.pos = target
        character.spend_movement_point()
        result.moved = True
        result.notes.append(
            f"moved to {target} ({character.movement_points}/{character.mobility} left)"
        )

    def _enter_attack(self, character: Character) -> None:
        state = self.state
        state.phase = Phase.ATTACK
        character.begin_targeting()
        # Refill now so the next turn starts with a full budget.
        character.reset_movement()
        logger.debug("%s enters ATTACK at %s", character.label(), character.pos)

    def _end_turn(self, character: Character, result: InputResult) -> None:
        state = self.state
        target = character.selector
        state.turn += 1
        state.phase = Phase.MOVE
        state.active_index = (state.active_index + 1) % len(state.characters)

        incoming = state.active_character
        incoming.reset_movement()

        result.turn_ended = True
        result.notes.append(f"targeted {target}; turn {state.turn} -> {incoming.label()}")
        logger.info(
            "Turn %s ended: %s targeted %s, %s to move",
            state.turn, character.label(), target, incoming.label(),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _require_state(self) -> GameState:
        if self.state is None:
            raise RuntimeError("Must call reset() before handling input")
        return self.state

    @staticmethod
    def _format_log(character: Character, event: InputEvent, result: InputResult) -> str:
        head = f"[turn {result.turn}] {character.label()} {event.value}"
        if result.phase_before != result.phase_after:
            head += f" ({result.phase_before.value}->{result.phase_after.value})"
        if result.rejection:
            head += f" refused: {result.rejection}"
        if result.notes:
            head += " | " + "; ".join(result.notes)
        return head

    @property
    def scenario(self) -> Optional[Scenario]:
        return self._scenario
