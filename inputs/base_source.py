"""
Base input source interface.

Anything that produces input events for a match (a key-capture loop, a
recorded script, a random key presser) implements this interface. Sources
only produce events; the TurnEngine decides what they mean.
"""

from abc import ABC, abstractmethod
from typing import Optional, TYPE_CHECKING

from tactics.core.types import InputEvent

if TYPE_CHECKING:
    from tactics.engine import GameState


class BaseInputSource(ABC):
    """
    Abstract base class for all input sources.

    One source feeds both seats: the match is hot-seat, so whoever holds
    the keyboard plays the active character.

    Attributes:
        name: Source name for logging/identification
    """

    def __init__(self, name: str = None):
        """
        Initialize the source.

        Args:
            name: Optional name (defaults to class name)
        """
        self.name = name or self.__class__.__name__

    @abstractmethod
    def next_event(self, state: Optional["GameState"] = None) -> Optional[InputEvent]:
        """
        Produce the next input event.

        Args:
            state: Current match state, read-only (sources may ignore it)

        Returns:
            The next event, or None when the source is exhausted
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
