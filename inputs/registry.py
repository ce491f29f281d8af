"""Registry mapping input source type names to classes."""

from __future__ import annotations

from typing import Callable, Dict, Type

from .base_source import BaseInputSource

_REGISTRY: Dict[str, Type[BaseInputSource]] = {}


def register_source(type_name: str) -> Callable[[Type[BaseInputSource]], Type[BaseInputSource]]:
    """
    Class decorator registering an input source under ``type_name``.

    Example:
        @register_source("scripted")
        class ScriptedInputSource(BaseInputSource): ...
    """
    key = type_name.strip().lower()

    def decorator(cls: Type[BaseInputSource]) -> Type[BaseInputSource]:
        if not issubclass(cls, BaseInputSource):
            raise TypeError(f"{cls.__name__} must subclass BaseInputSource")
        existing = _REGISTRY.get(key)
        if existing is not None and existing is not cls:
            raise ValueError(f"Input source type '{key}' already registered to {existing.__name__}")
        _REGISTRY[key] = cls
        return cls

    return decorator


def resolve_source_class(type_name: str) -> Type[BaseInputSource]:
    """Look up a registered source class (case-insensitive)."""
    key = type_name.strip().lower()
    if key not in _REGISTRY:
        known = ", ".join(sorted(_REGISTRY)) or "none"
        raise ValueError(f"Unknown input source type '{type_name}' (known: {known})")
    return _REGISTRY[key]


def registered_types() -> list[str]:
    return sorted(_REGISTRY)
