from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class InputSourceSpec(BaseModel):
    """Declarative description of the input source that drives a match."""

    type: str = Field(description="Registered source type, e.g. 'scripted' or 'random'.")
    name: Optional[str] = Field(
        default=None,
        description="Display name used in logs (defaults to the class name).",
    )
    init_params: Dict[str, Any] = Field(
        default_factory=dict,
        description="Keyword arguments passed to the source constructor.",
    )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> InputSourceSpec:
        return cls.model_validate(data)
