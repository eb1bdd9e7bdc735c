"""Text rendering for HUD elements."""

import pygame
from OpenGL.GL import *


class TextRenderer:
    """Renders text overlays using pygame fonts and OpenGL."""

    def __init__(self, font_name: str = "monospace", font_size: int = 18,
                 cache_size: int = 128):
        pygame.font.init()
        self.font = pygame.font.SysFont(font_name, font_size)
        self.cache_size = cache_size
        # (text, color) -> (rgba bytes, width, height); HUD lines repeat every frame
        self._cache = {}

    def _rasterize(self, text: str, color: tuple):
        key = (text, color)
        cached = self._cache.get(key)
        if cached is None:
            if len(self._cache) >= self.cache_size:
                self._cache.clear()
            surface = self.font.render(text, True, color)
            w, h = surface.get_size()
            cached = (pygame.image.tostring(surface, "RGBA", True), w, h)
            self._cache[key] = cached
        return cached

    def draw_text(self, text: str, x: int, y: int, screen_size: tuple,
                  color: tuple = (230, 230, 230)):
        """
        Draw text at the given screen position.

        Args:
            text: The string to render
            x: X position from left edge
            y: Y position from top edge
            screen_size: (width, height) of the screen
            color: RGB in 0-255
        """
        text_data, w, h = self._rasterize(text, tuple(color))

        # Switch to orthographic projection for 2D rendering
        glMatrixMode(GL_PROJECTION)
        glPushMatrix()
        glLoadIdentity()
        glOrtho(0, screen_size[0], 0, screen_size[1], -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glPushMatrix()
        glLoadIdentity()

        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glRasterPos2f(x, screen_size[1] - y - h)
        glDrawPixels(w, h, GL_RGBA, GL_UNSIGNED_BYTE, text_data)
        glDisable(GL_BLEND)

        # Restore projection
        glPopMatrix()
        glMatrixMode(GL_PROJECTION)
        glPopMatrix()
        glMatrixMode(GL_MODELVIEW)
