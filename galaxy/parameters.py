"""Tunable galaxy parameters and the store that owns them."""

import math
from dataclasses import asdict, dataclass, fields, replace
from functools import partial
from typing import Dict, Tuple

import numpy as np
import pygame

from config import galaxy as config

Color = Tuple[float, float, float]

# Bound on radius, spread and |spin| so that r * cos(angle) + jitter stays
# finite in the float32 buffers and r * spin stays finite in float64
MAX_MAGNITUDE = float(np.finfo(np.float32).max) / 4


class InvalidParameter(ValueError):
    """A parameter value that would leave the galaxy undefined."""

    def __init__(self, name: str, value, reason: str):
        super().__init__(f"{name}={value!r}: {reason}")
        self.name = name
        self.value = value
        self.reason = reason


def parse_color(value, name: str = "color") -> Color:
    """
    Normalize a color to an (r, g, b) float triple in [0, 1].

    Accepts '#rrggbb' strings and other names pygame.Color understands,
    pygame.Color instances, 0-255 integer triples and 0-1 float triples.
    """
    if isinstance(value, str):
        try:
            value = pygame.Color(value)
        except ValueError:
            raise InvalidParameter(name, value, "unknown color") from None
    if isinstance(value, pygame.Color):
        return (value.r / 255.0, value.g / 255.0, value.b / 255.0)

    try:
        components = tuple(value)
    except TypeError:
        raise InvalidParameter(name, value, "expected a color string or RGB triple") from None
    if len(components) != 3:
        raise InvalidParameter(name, value, "expected exactly 3 components")

    if all(isinstance(c, int) and not isinstance(c, bool) for c in components):
        if not all(0 <= c <= 255 for c in components):
            raise InvalidParameter(name, value, "integer components must be in 0-255")
        return tuple(c / 255.0 for c in components)

    try:
        floats = tuple(float(c) for c in components)
    except (TypeError, ValueError):
        raise InvalidParameter(name, value, "components must be numbers") from None
    if not all(0.0 <= c <= 1.0 for c in floats):
        raise InvalidParameter(name, value, "float components must be in 0-1")
    return floats


def _coerce_float(name: str, value, minimum: float = None, exclusive: bool = False,
                  maximum: float = None) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidParameter(name, value, "not a number") from None
    if not math.isfinite(number):
        raise InvalidParameter(name, value, "must be finite")
    if minimum is not None:
        if number < minimum or (exclusive and number == minimum):
            bound = ">" if exclusive else ">="
            raise InvalidParameter(name, value, f"must be {bound} {minimum}")
    if maximum is not None and abs(number) > maximum:
        raise InvalidParameter(name, value, f"magnitude must be <= {maximum:g}")
    return number


def _coerce_int(name: str, value, minimum: int) -> int:
    # Range check happens before truncation so -0.5 is still rejected
    number = _coerce_float(name, value, minimum=minimum)
    return int(number)


_RULES = {
    "particle_size": partial(_coerce_float, "particle_size", minimum=0.0, exclusive=True),
    "particle_count": partial(_coerce_int, "particle_count", minimum=0),
    "galaxy_radius": partial(_coerce_float, "galaxy_radius", minimum=0.0,
                             maximum=MAX_MAGNITUDE),
    "branch_count": partial(_coerce_int, "branch_count", minimum=1),
    "spin_angle_coefficient": partial(_coerce_float, "spin_angle_coefficient",
                                      maximum=MAX_MAGNITUDE),
    "randomness_spread": partial(_coerce_float, "randomness_spread", minimum=0.0,
                                 maximum=MAX_MAGNITUDE),
    "randomness_power": partial(_coerce_float, "randomness_power", minimum=0.0),
    "inside_color": partial(parse_color, name="inside_color"),
    "outside_color": partial(parse_color, name="outside_color"),
}


@dataclass
class GalaxyParameters:
    """
    The full input of one galaxy generation.

    Attributes:
        particle_size: Point size in world units (> 0)
        particle_count: Number of particles (>= 0)
        galaxy_radius: Outer radius; 0 collapses every particle to the center
        branch_count: Number of spiral arms (>= 1)
        spin_angle_coefficient: Extra arm rotation per unit of radius
        randomness_spread: Linear scale of the per-axis jitter
        randomness_power: Exponent shaping the jitter toward 0
        inside_color: RGB at the center
        outside_color: RGB at the rim
    """
    particle_size: float = 0.001
    particle_count: int = 0
    galaxy_radius: float = 0.0
    branch_count: int = 3
    spin_angle_coefficient: float = 1.0
    randomness_spread: float = 0.2
    randomness_power: float = 3.0
    inside_color: Color = (1.0, 0.376, 0.188)
    outside_color: Color = (0.106, 0.224, 0.518)

    @classmethod
    def from_config(cls, cfg: dict = None) -> "GalaxyParameters":
        """Build validated parameters from a config dict (config.GALAXY by default)."""
        cfg = config.GALAXY if cfg is None else cfg
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in cfg.items() if k in names}).validated()

    def validated(self) -> "GalaxyParameters":
        """Return a coerced copy, raising InvalidParameter on the first bad field."""
        return replace(self, **{f.name: _RULES[f.name](getattr(self, f.name)) for f in fields(self)})


class ParameterStore:
    """
    Owner of the single GalaxyParameters record.

    The generator, the panel and the animator all hold a reference to the
    same store. Every write is coerced and validated; a rejected write
    raises InvalidParameter and leaves the record untouched.
    """

    def __init__(self, parameters: GalaxyParameters = None):
        if parameters is None:
            parameters = GalaxyParameters.from_config()
        self._parameters = parameters.validated()

    @staticmethod
    def names() -> Tuple[str, ...]:
        return tuple(f.name for f in fields(GalaxyParameters))

    def get(self, name: str):
        if name not in _RULES:
            raise InvalidParameter(name, None, "unknown parameter")
        return getattr(self._parameters, name)

    def set(self, name: str, value):
        """Coerce, validate and write a single parameter. Returns the stored value."""
        if name not in _RULES:
            raise InvalidParameter(name, value, "unknown parameter")
        coerced = _RULES[name](value)
        setattr(self._parameters, name, coerced)
        return coerced

    def update(self, **values):
        """Write several parameters at once; nothing is written if any is invalid."""
        for name in values:
            if name not in _RULES:
                raise InvalidParameter(name, values[name], "unknown parameter")
        coerced = {name: _RULES[name](value) for name, value in values.items()}
        self._parameters = replace(self._parameters, **coerced)

    def snapshot(self) -> GalaxyParameters:
        """Independent copy of the current record."""
        return replace(self._parameters)

    def as_dict(self) -> Dict[str, object]:
        return asdict(self._parameters)
