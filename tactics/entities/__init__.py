from .character import Character

__all__ = ["Character"]
