"""
Render snapshot toolkit.

Drawing itself lives outside this package; renderers consume the plain
dicts produced by ``RenderStateBuilder``.
"""

from .render_state import RenderStateBuilder

__all__ = ["RenderStateBuilder"]
