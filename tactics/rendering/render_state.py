"""
Helper utilities for converting match state into render-friendly payloads.

Whatever draws the board (a framebuffer, a terminal, a browser) only gets
this read-only snapshot: terrain and occupant per tile, and position,
facing and (while targeting) the selector per character.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..core.types import Phase
from ..engine import GameState


class RenderStateBuilder:
    """Build JSON-serializable render snapshots."""

    @staticmethod
    def build(state: GameState) -> Dict[str, Any]:
        """
        Convert the match state into a JSON-friendly dict.

        Args:
            state: GameState held by the TurnEngine

        Returns:
            Dictionary ready to hand to a renderer
        """
        if state is None:
            raise ValueError("No match state to render; call TurnEngine.reset() first")

        return {
            "grid": {
                "width": state.map.width,
                "height": state.map.height,
            },
            "phase": state.phase.value,
            "tiles": RenderStateBuilder._serialize_tiles(state),
            "characters": RenderStateBuilder._serialize_characters(state),
        }

    @staticmethod
    def _serialize_tiles(state: GameState) -> List[Dict[str, Any]]:
        """Tiles in index order; occupant is None when nobody stands there."""
        return [
            {
                "position": list(pos),
                "terrain": tile.terrain.value,
                "occupant": tile.occupant,
            }
            for pos, tile in state.map.iter_tiles()
        ]

    @staticmethod
    def _serialize_characters(state: GameState) -> List[Dict[str, Any]]:
        serialized: List[Dict[str, Any]] = []
        for index, character in enumerate(state.characters):
            targeting = state.phase == Phase.ATTACK and index == state.active_index
            serialized.append(
                {
                    "id": character.id,
                    "position": list(character.pos),
                    "facing": character.facing.value,
                    # Only the active character shows a selector, and only in ATTACK.
                    "selector": list(character.selector) if targeting else None,
                }
            )
        return serialized
