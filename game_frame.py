from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from tactics.engine import GameState, InputResult
from tactics.rendering import RenderStateBuilder


@dataclass
class Frame:
    """
    Snapshot of the match right after one input event, with helpers to
    serialize for transport.
    """

    turn: int
    render: Dict[str, Any]
    result: Optional[InputResult] = None

    @classmethod
    def capture(cls, state: GameState, result: Optional[InputResult] = None) -> Frame:
        """Freeze the current state into a frame (the render dict is a fresh copy)."""
        return cls(turn=state.turn, render=RenderStateBuilder.build(state), result=result)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the frame into a JSON-friendly dictionary.
        """
        frame: Dict[str, Any] = {
            "turn": self.turn,
            "render": self.render,
        }
        if self.result is not None:
            frame["result"] = self.result.to_dict()
        return frame
