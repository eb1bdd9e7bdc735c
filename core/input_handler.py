"""Mouse and keyboard bindings for the orbit camera."""

import pygame
from pygame.locals import *
from config import galaxy as config

from .camera import Camera

# Held key -> (theta direction, phi direction)
ROTATE_KEYS = {
    K_a: (-1, 0),
    K_d: (1, 0),
    K_w: (0, 1),
    K_s: (0, -1),
}

# Held key -> zoom direction
ZOOM_KEYS = {
    K_q: -1,
    K_e: 1,
}


class InputHandler:
    """Routes pointer drags and held keys to the camera."""

    def __init__(self, camera: Camera):
        self.camera = camera

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns False when the event asks the application to quit."""
        if event.type == QUIT:
            return False
        if event.type == KEYDOWN and event.key == K_ESCAPE:
            return False

        if event.type == MOUSEBUTTONDOWN and event.button == 1:
            self.camera.begin_drag(event.pos)
        elif event.type == MOUSEBUTTONUP and event.button == 1:
            self.camera.end_drag()
        elif event.type == MOUSEMOTION and self.camera.dragging:
            self.camera.drag_to(event.pos)
        elif event.type == MOUSEWHEEL:
            self.camera.zoom_smooth(-event.y * config.CAMERA["keyboard_zoom_speed"] * 0.1)
        return True

    def handle_continuous_input(self, dt: float):
        """Apply held keys (called each frame)."""
        keys = pygame.key.get_pressed()
        rot_speed = config.CAMERA["keyboard_rotate_speed"] * dt
        zoom_speed = config.CAMERA["keyboard_zoom_speed"] * dt

        for key, (d_theta, d_phi) in ROTATE_KEYS.items():
            if keys[key]:
                self.camera.rotate(d_theta * rot_speed, d_phi * rot_speed)
        for key, direction in ZOOM_KEYS.items():
            if keys[key]:
                self.camera.zoom(direction * zoom_speed)
