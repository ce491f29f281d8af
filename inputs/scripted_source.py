"""
Scripted input source: replays a fixed list of events.

Used by the CLI (``--keys``) and by tests that need an exact sequence.
"""

from collections import deque
from typing import Any, Iterable, Optional, TYPE_CHECKING, Union

from tactics.core.types import InputEvent
from .base_source import BaseInputSource
from .registry import register_source

if TYPE_CHECKING:
    from tactics.engine import GameState


@register_source("scripted")
class ScriptedInputSource(BaseInputSource):
    """
    Replay events in order, then report exhaustion.

    Events may be given as InputEvent members or key names ("up",
    "space", ...); unknown key names become UNRECOGNIZED, just as an
    unmapped key press would.
    """

    def __init__(
        self,
        events: Iterable[Union[InputEvent, str]] = (),
        name: str = None,
        **_: Any,
    ):
        super().__init__(name)
        self._queue = deque(self._coerce(e) for e in events)

    @staticmethod
    def _coerce(event: Union[InputEvent, str]) -> InputEvent:
        if isinstance(event, InputEvent):
            return event
        return InputEvent.from_key(str(event))

    @classmethod
    def from_keys(cls, keys: str, name: str = None) -> "ScriptedInputSource":
        """Build from a comma or whitespace separated key string."""
        tokens = [t for t in keys.replace(",", " ").split() if t]
        return cls(tokens, name=name)

    def push(self, event: Union[InputEvent, str]) -> None:
        """Append one more event to the script."""
        self._queue.append(self._coerce(event))

    def next_event(self, state: Optional["GameState"] = None) -> Optional[InputEvent]:
        if not self._queue:
            return None
        return self._queue.popleft()

    @property
    def remaining(self) -> int:
        return len(self._queue)
