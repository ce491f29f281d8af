"""Runtime settings read from the environment (and a local .env file)."""

from __future__ import annotations

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()

ENV_PREFIX = "TACTICS_"


class Settings(BaseModel):
    log_level: str = Field(
        default="INFO",
        description="Log level name for the project loggers.",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines instead of plain text.",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional log file (relative paths go under storage/logs).",
    )
    max_events: int = Field(
        default=500,
        ge=1,
        description="Upper bound on input events processed by one CLI run.",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


def get_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build settings from ``TACTICS_*`` variables.

    Unset variables fall back to the model defaults; pydantic handles the
    string-to-bool/int coercion.
    """
    environ = os.environ if environ is None else environ
    values = {}
    for name in Settings.model_fields:
        raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw != "":
            values[name] = raw
    return Settings(**values)
