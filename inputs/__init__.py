"""
Input sources for the tactics engine.

This module provides:
- BaseInputSource: Abstract interface for all input sources
- ScriptedInputSource: Replays a fixed list of events
- RandomInputSource: Seeded random key presses for soak runs
"""

from .base_source import BaseInputSource
from .factory import create_source_from_spec

from .registry import register_source, registered_types, resolve_source_class
from .spec import InputSourceSpec
from .scripted_source import ScriptedInputSource
from .random_source import RandomInputSource

__all__ = [
    "BaseInputSource",
    "InputSourceSpec",
    "create_source_from_spec",
    "register_source",
    "registered_types",
    "resolve_source_class",
    "ScriptedInputSource",
    "RandomInputSource",
]
