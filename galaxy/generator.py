"""
Procedural spiral galaxy point cloud.

Turns a GalaxyParameters record into interleaved position and color
buffers, and keeps exactly one resulting point cloud attached to the
scene across regenerations.

Key points:
- All random draws come from a numpy Generator, so a seeded generator
  reproduces a field exactly
- The per-particle math runs in a Numba kernel over preallocated buffers
- The new field is fully built before the old one is detached and disposed
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numba import njit, prange

from .parameters import GalaxyParameters, InvalidParameter, ParameterStore
from .scene import BufferAttribute, BufferGeometry, Points, PointsMaterial, Scene


# ============================================================================
# NUMBA KERNELS
# ============================================================================

@njit(cache=True)
def color_factor(r: float, galaxy_radius: float) -> float:
    """Normalized radius in [0, 1]; 0 for a zero-radius galaxy."""
    if galaxy_radius <= 0.0:
        return 0.0
    t = r / galaxy_radius
    if t < 0.0:
        return 0.0
    if t > 1.0:
        return 1.0
    return t


@njit(cache=True)
def lerp(a: float, b: float, t: float) -> float:
    """Exact at both ends: t=0 gives a, t=1 gives b."""
    return a * (1.0 - t) + b * t


@njit(parallel=True, cache=True)
def build_particle_buffers(
    radii: np.ndarray,        # (n,)
    jitter: np.ndarray,       # (n, 3)
    galaxy_radius: float,
    branch_count: int,
    spin_coefficient: float,
    inside: np.ndarray,       # (3,)
    outside: np.ndarray,      # (3,)
    positions: np.ndarray,    # (n, 3) output
    colors: np.ndarray,       # (n, 3) output
):
    """Place every particle on its arm and shade it by radius."""
    n = radii.shape[0]
    for i in prange(n):
        r = radii[i]
        spin_angle = r * spin_coefficient
        # Arm membership comes from the index, not from randomness
        branch_angle = (i % branch_count) / branch_count * (math.pi * 2.0)
        angle = branch_angle + spin_angle

        positions[i, 0] = math.cos(angle) * r + jitter[i, 0]
        positions[i, 1] = jitter[i, 1]
        positions[i, 2] = math.sin(angle) * r + jitter[i, 2]

        t = color_factor(r, galaxy_radius)
        colors[i, 0] = lerp(inside[0], outside[0], t)
        colors[i, 1] = lerp(inside[1], outside[1], t)
        colors[i, 2] = lerp(inside[2], outside[2], t)


def warmup():
    """Pre-compile the Numba kernels with a tiny input."""
    n = 8
    build_particle_buffers(
        np.linspace(0.0, 1.0, n),
        np.zeros((n, 3), dtype=np.float64),
        1.0, 3, 1.0,
        np.zeros(3, dtype=np.float64),
        np.ones(3, dtype=np.float64),
        np.zeros((n, 3), dtype=np.float32),
        np.zeros((n, 3), dtype=np.float32),
    )


# ============================================================================
# PARTICLE FIELD
# ============================================================================

@dataclass
class ParticleField:
    """
    One generation's output.

    Attributes:
        position: Flat float32 buffer, x/y/z interleaved, length 3 * count
        color: Flat float32 buffer, r/g/b interleaved, length 3 * count
        object: Points object built on the two buffers
        parameters: Snapshot the field was generated from
    """
    position: np.ndarray
    color: np.ndarray
    object: Points
    parameters: GalaxyParameters

    @property
    def count(self) -> int:
        return len(self.position) // 3

    @property
    def disposed(self) -> bool:
        return self.object.geometry.disposed

    def dispose(self):
        """Release geometry and material. Repeated calls do nothing."""
        if self.disposed:
            return
        self.object.dispose()


def draw_jitter(rng: np.random.Generator, count: int, power: float, spread: float) -> np.ndarray:
    """
    Per-axis jitter: uniform ** power, random sign, scaled by spread.

    Powers above 1 pull most samples toward 0 and leave a few far outliers.
    """
    jitter = rng.random((count, 3)) ** power
    jitter *= np.where(rng.random((count, 3)) < 0.5, 1.0, -1.0)
    jitter *= spread
    return jitter


def generate_particle_field(params: GalaxyParameters,
                            rng: Optional[np.random.Generator] = None) -> ParticleField:
    """Build a fresh field for params. The result is not attached to any scene."""
    if rng is None:
        rng = np.random.default_rng()
    n = params.particle_count

    position = np.zeros(n * 3, dtype=np.float32)
    color = np.zeros(n * 3, dtype=np.float32)

    # Uniform in radius rather than area, which crowds the core
    radii = rng.random(n) * params.galaxy_radius
    jitter = draw_jitter(rng, n, params.randomness_power, params.randomness_spread)

    build_particle_buffers(
        radii,
        jitter,
        float(params.galaxy_radius),
        int(params.branch_count),
        float(params.spin_angle_coefficient),
        np.asarray(params.inside_color, dtype=np.float64),
        np.asarray(params.outside_color, dtype=np.float64),
        position.reshape(n, 3),
        color.reshape(n, 3),
    )

    geometry = BufferGeometry()
    geometry.set_attribute("position", BufferAttribute(position, 3))
    geometry.set_attribute("color", BufferAttribute(color, 3))
    material = PointsMaterial(size=params.particle_size)

    return ParticleField(position, color, Points(geometry, material), params)


# ============================================================================
# GALAXY GENERATOR
# ============================================================================

class GalaxyGenerator:
    """
    Owns the scene's single galaxy point cloud.

    regenerate() snapshots the store, builds a complete new field, then
    detaches and disposes the previous one and attaches the new one, all
    in one synchronous call. The render loop must re-read current_object
    every frame since its identity changes on each regeneration.
    """

    def __init__(self, store: ParameterStore, scene: Scene,
                 seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None):
        self.store = store
        self.scene = scene
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._current: Optional[ParticleField] = None
        self.regeneration_count = 0

    @property
    def current_field(self) -> Optional[ParticleField]:
        return self._current

    @property
    def current_object(self) -> Optional[Points]:
        return self._current.object if self._current is not None else None

    def regenerate(self, params: Optional[GalaxyParameters] = None) -> Optional[ParticleField]:
        """
        Replace the live field with one built from params (default: the store).

        Invalid explicit params leave the previous field attached and return it.
        """
        if params is None:
            params = self.store.snapshot()
        else:
            try:
                params = params.validated()
            except InvalidParameter as e:
                print(f"[Galaxy] Rejected parameters ({e}), keeping previous field")
                return self._current

        field = generate_particle_field(params, self.rng)

        previous = self._current
        if previous is not None:
            self.scene.remove(previous.object)
            previous.dispose()
        self.scene.add(field.object)
        self._current = field
        self.regeneration_count += 1
        return field

    def on_parameter_change(self, name: str, value) -> bool:
        """Panel entry point: write through the store, then regenerate."""
        try:
            self.store.set(name, value)
        except InvalidParameter as e:
            print(f"[Params] Rejected {e}")
            return False
        self.regenerate()
        return True

    def on_tween_update(self):
        """Animator entry point: the tween already wrote the store."""
        self.regenerate()

    def dispose(self):
        """Detach and release the live field."""
        if self._current is None:
            return
        self.scene.remove(self._current.object)
        self._current.dispose()
        self._current = None
