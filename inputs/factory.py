from __future__ import annotations

from .base_source import BaseInputSource
from .registry import resolve_source_class
from .spec import InputSourceSpec


def create_source_from_spec(spec: InputSourceSpec) -> BaseInputSource:
    """Instantiate the registered source class described by ``spec``."""
    source_cls = resolve_source_class(spec.type)
    return source_cls(name=spec.name, **spec.init_params)
