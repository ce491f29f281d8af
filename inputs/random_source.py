"""
Random input source for soak-testing the engine.

Presses random keys for whichever character is active. It makes no
attempt to play well; it exists to push long, unpredictable event
sequences through the engine.
"""

import random
from typing import Any, Dict, Optional, TYPE_CHECKING

from tactics.core.types import InputEvent
from .base_source import BaseInputSource
from .registry import register_source

if TYPE_CHECKING:
    from tactics.engine import GameState


@register_source("random")
class RandomInputSource(BaseInputSource):
    """
    Emit weighted random events, optionally a bounded number of them.

    Decision process:
    - Sample an event using ``weights`` (arrows dominate by default so
      characters actually travel between confirms).
    """

    DEFAULT_WEIGHTS: Dict[InputEvent, float] = {
        InputEvent.UP: 1.0,
        InputEvent.DOWN: 1.0,
        InputEvent.LEFT: 1.0,
        InputEvent.RIGHT: 1.0,
        InputEvent.CONFIRM: 0.4,
        InputEvent.UNRECOGNIZED: 0.1,
    }

    def __init__(
        self,
        name: str = None,
        seed: Optional[int] = None,
        limit: Optional[int] = None,
        weights: Optional[Dict[Any, float]] = None,
        **_: Any,
    ):
        """
        Initialize random source.

        Args:
            name: Source name (default: "RandomInputSource")
            seed: Random seed for reproducibility (None = random)
            limit: Stop after this many events (None = never stop)
            weights: Optional event -> weight mapping (keys may be key names)
        """
        super().__init__(name)
        self.rng = random.Random(seed)
        self.limit = limit
        self.emitted = 0

        raw = weights if weights is not None else self.DEFAULT_WEIGHTS
        resolved: Dict[InputEvent, float] = {}
        for key, weight in raw.items():
            event = key if isinstance(key, InputEvent) else InputEvent.from_key(str(key))
            if weight < 0:
                raise ValueError(f"Weight for {event.value} cannot be negative: {weight}")
            resolved[event] = resolved.get(event, 0.0) + float(weight)
        if not any(resolved.values()):
            raise ValueError("At least one event weight must be positive")

        self._events = list(resolved)
        self._weights = [resolved[e] for e in self._events]

    def next_event(self, state: Optional["GameState"] = None) -> Optional[InputEvent]:
        if self.limit is not None and self.emitted >= self.limit:
            return None
        self.emitted += 1
        return self.rng.choices(self._events, weights=self._weights, k=1)[0]
