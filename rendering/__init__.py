"""Rendering components for the galaxy viewer."""

from .points import PointsRenderer
from .text import TextRenderer

__all__ = ["PointsRenderer", "TextRenderer"]
