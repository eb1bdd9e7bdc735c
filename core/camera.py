"""Orbital camera with damped rotation."""

import math
import numpy as np
from OpenGL.GL import *
from OpenGL.GLU import *
from config import galaxy as config


class Camera:
    """Orbits the origin; drag input feeds a velocity that decays each frame."""

    def __init__(self):
        self.radius = config.CAMERA["initial_radius"]
        self.target_radius = self.radius
        self.theta = config.CAMERA["initial_theta"]
        self.phi = config.CAMERA["initial_phi"]
        self.target = np.array([0.0, 0.0, 0.0])
        self.zoom_smoothing = config.CAMERA["zoom_smoothing"]
        self.damping_factor = config.CAMERA["damping_factor"]

        # Pending rotation in degrees, released over the next frames
        self._theta_velocity = 0.0
        self._phi_velocity = 0.0
        self._drag_anchor = None  # last pointer position while dragging

    def get_direction(self) -> np.ndarray:
        """Get the normalized direction vector from target to camera."""
        theta_rad = math.radians(self.theta)
        phi_rad = math.radians(self.phi)
        x = math.cos(phi_rad) * math.cos(theta_rad)
        y = math.sin(phi_rad)
        z = math.cos(phi_rad) * math.sin(theta_rad)
        return np.array([x, y, z])

    def get_position(self) -> np.ndarray:
        """Get the camera's world position."""
        return self.target + self.radius * self.get_direction()

    def rotate(self, d_theta: float, d_phi: float):
        """Rotate immediately by the given angles in degrees."""
        self.theta = (self.theta + d_theta) % 360
        self.phi = max(
            config.CAMERA["min_phi"],
            min(config.CAMERA["max_phi"], self.phi + d_phi)
        )

    def begin_drag(self, pos: tuple):
        self._drag_anchor = pos

    def drag_to(self, pos: tuple):
        """Queue the rotation for a pointer move; it eases out over the following frames."""
        if self._drag_anchor is None:
            return
        sensitivity = config.CAMERA["mouse_sensitivity"]
        self._theta_velocity += (pos[0] - self._drag_anchor[0]) * sensitivity
        self._phi_velocity += (pos[1] - self._drag_anchor[1]) * sensitivity
        self._drag_anchor = pos

    def end_drag(self):
        self._drag_anchor = None

    @property
    def dragging(self) -> bool:
        return self._drag_anchor is not None

    def zoom(self, delta: float):
        """Immediately zoom by the given amount."""
        self.radius = max(
            config.CAMERA["min_radius"],
            min(config.CAMERA["max_radius"], self.radius + delta)
        )
        self.target_radius = self.radius

    def zoom_smooth(self, delta: float):
        """Smoothly zoom by the given amount."""
        self.target_radius = max(
            config.CAMERA["min_radius"],
            min(config.CAMERA["max_radius"], self.target_radius + delta)
        )

    def update(self, dt: float):
        """Update camera state (called each frame)."""
        # Apply the damping fraction of the pending rotation, scaled to a 60 Hz frame
        step = min(1.0, self.damping_factor * dt * 60.0)
        self.rotate(self._theta_velocity * step, self._phi_velocity * step)
        self._theta_velocity *= 1.0 - step
        self._phi_velocity *= 1.0 - step

        self.radius += (self.target_radius - self.radius) * min(1.0, self.zoom_smoothing * dt)
        self.radius = max(
            config.CAMERA["min_radius"],
            min(config.CAMERA["max_radius"], self.radius)
        )

    def apply(self):
        """Apply the camera transformation to the OpenGL modelview matrix."""
        pos = self.get_position()
        glLoadIdentity()
        gluLookAt(
            pos[0], pos[1], pos[2],
            self.target[0], self.target[1], self.target[2],
            0, 1, 0
        )
