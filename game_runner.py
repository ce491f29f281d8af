from __future__ import annotations

from typing import Optional

from infra.logger import get_logger
from inputs import BaseInputSource, create_source_from_spec
from tactics import InputEvent, TurnEngine
from tactics.engine import GameState
from tactics.scenario import Scenario

from game_frame import Frame

logger = get_logger(__name__)


class GameRunner:
    """
    Event-by-event match runner that returns UI-friendly frames.

    Use get_initial_frame() before any input, then step() until the source
    runs dry (or feed() events directly).
    """

    def __init__(
        self,
        scenario: Scenario,
        source: Optional[BaseInputSource] = None,
        verbose: bool = False,
        check_invariants: bool = True,
    ):
        self.scenario = scenario.clone()
        self.verbose = verbose
        self.check_invariants = check_invariants

        self.engine = TurnEngine(verbose=verbose)
        self._state = self.engine.reset(self.scenario)

        if source is None:
            source = self._source_from_scenario(self.scenario)
        self.source = source
        self._exhausted = False
        self._events_handled = 0

    # ------------------------------------------------------------------#
    # Properties
    # ------------------------------------------------------------------#
    @property
    def state(self) -> GameState:
        return self._state

    @property
    def done(self) -> bool:
        """True once the input source has nothing more to give."""
        return self._exhausted

    @property
    def turn(self) -> int:
        return self._state.turn

    @property
    def events_handled(self) -> int:
        return self._events_handled

    # ------------------------------------------------------------------#
    # Core API
    # ------------------------------------------------------------------#
    def get_initial_frame(self) -> Frame:
        return Frame.capture(self._state)

    def feed(self, event: InputEvent) -> Frame:
        """Push one event straight into the engine, bypassing the source."""
        result = self.engine.handle_input(event)
        self._events_handled += 1

        if self.check_invariants:
            problems = self._state.occupancy_violations()
            if problems:
                # Should be unreachable; surface loudly without killing the match.
                logger.error("Occupancy invariant broken after %s: %s", event.value, problems)

        return Frame.capture(self._state, result)

    def step(self) -> Optional[Frame]:
        """
        Pull one event from the source and process it.

        Returns:
            The resulting frame, or None once the source is exhausted
        """
        if self._exhausted:
            return None
        if self.source is None:
            raise RuntimeError("GameRunner has no input source; use feed() instead")

        event = self.source.next_event(self._state)
        if event is None:
            self._exhausted = True
            logger.info("Input source %s exhausted after %s events", self.source.name, self._events_handled)
            return None
        return self.feed(event)

    def run(self, max_events: int = 500, *, include_history: bool = False) -> Frame | list[Frame]:
        """
        Process events until the source runs dry or ``max_events`` is reached.

        Returns the last frame (the initial frame if nothing happened), or
        the full history if include_history is True.
        """
        frames: list[Frame] = []
        for _ in range(max_events):
            frame = self.step()
            if frame is None:
                break
            frames.append(frame)

        if include_history:
            return frames
        return frames[-1] if frames else self.get_initial_frame()

    # Helpers
    def _source_from_scenario(self, scenario: Scenario) -> Optional[BaseInputSource]:
        if scenario.input_source is None:
            return None
        return create_source_from_spec(scenario.input_source)
