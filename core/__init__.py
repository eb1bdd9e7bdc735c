"""
Core application components.

Submodules are imported directly (e.g. ``from core.application import
Application``) so that the GL-free panel can be used without an OpenGL
context.
"""

from .panel import ParameterPanel

__all__ = ["ParameterPanel"]
