"""Procedural spiral galaxy generation."""

from .parameters import GalaxyParameters, InvalidParameter, ParameterStore, parse_color
from .scene import BufferAttribute, BufferGeometry, Points, PointsMaterial, Scene
from .generator import GalaxyGenerator, ParticleField, generate_particle_field, warmup
from .animation import Timeline, Tween, build_intro_timeline, get_easing

__all__ = [
    "GalaxyParameters", "InvalidParameter", "ParameterStore", "parse_color",
    "BufferAttribute", "BufferGeometry", "Points", "PointsMaterial", "Scene",
    "GalaxyGenerator", "ParticleField", "generate_particle_field", "warmup",
    "Timeline", "Tween", "build_intro_timeline", "get_easing",
]
