from .map import Map, Tile

__all__ = ["Map", "Tile"]
