"""VBO point sprite rendering for scene Points objects."""

import math
from OpenGL.GL import *
from OpenGL.arrays import vbo

from config import galaxy as config
from galaxy import BufferGeometry, Points, Scene


class PointsRenderer:
    """
    Draws Points objects from GPU buffers.

    Each geometry is uploaded once, on its first draw. The VBOs are deleted
    only when the geometry fires its dispose notification, so the number of
    live buffer pairs follows the number of undisposed geometries drawn.
    """

    def __init__(self):
        self.min_point_size = float(config.RENDER["min_point_size"])
        self.max_point_size = float(config.RENDER["max_point_size"])
        self._buffers = {}  # id(geometry) -> (positions VBO, colors VBO)

    def _get_buffers(self, geometry: BufferGeometry):
        key = id(geometry)
        buffers = self._buffers.get(key)
        if buffers is None:
            positions = geometry.get_attribute("position").array
            colors = geometry.get_attribute("color").array
            buffers = (
                vbo.VBO(positions, usage=GL_STATIC_DRAW),
                vbo.VBO(colors, usage=GL_STATIC_DRAW),
            )
            self._buffers[key] = buffers
            geometry.add_dispose_listener(self._release)
        return buffers

    def _release(self, geometry: BufferGeometry):
        buffers = self._buffers.pop(id(geometry), None)
        if buffers is None:
            return
        for buffer in buffers:
            buffer.delete()

    def release_all(self):
        for key in list(self._buffers):
            for buffer in self._buffers.pop(key):
                buffer.delete()

    def _apply_point_size(self, points: Points, viewport_height: int):
        material = points.material
        glPointParameterf(GL_POINT_SIZE_MIN, self.min_point_size)
        glPointParameterf(GL_POINT_SIZE_MAX, self.max_point_size)
        if material.size_attenuation:
            # size * (height / 2) / eye distance, the perspective sprite rule
            glPointSize(max(self.min_point_size, material.size * viewport_height * 0.5))
            glPointParameterfv(GL_POINT_DISTANCE_ATTENUATION, (0.0, 0.0, 1.0))
        else:
            glPointSize(max(self.min_point_size, material.size))
            glPointParameterfv(GL_POINT_DISTANCE_ATTENUATION, (1.0, 0.0, 0.0))

    def draw_scene(self, scene: Scene, viewport_height: int):
        for points in scene.points():
            self.draw(points, viewport_height)

    def draw(self, points: Points, viewport_height: int):
        """Render one point cloud with its material state."""
        count = points.count
        if count == 0 or points.geometry.disposed:
            return

        positions_vbo, colors_vbo = self._get_buffers(points.geometry)
        material = points.material

        glPushMatrix()
        glRotatef(math.degrees(points.rotation_y), 0.0, 1.0, 0.0)

        if material.depth_test:
            glEnable(GL_DEPTH_TEST)
        else:
            glDisable(GL_DEPTH_TEST)
        glDepthMask(GL_TRUE if material.depth_write else GL_FALSE)

        if material.transparent:
            glEnable(GL_BLEND)
            if material.blending == "additive":
                glBlendFunc(GL_SRC_ALPHA, GL_ONE)  # Additive blending for glow effect
            else:
                glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)

        glEnable(GL_POINT_SMOOTH)
        self._apply_point_size(points, viewport_height)

        positions_vbo.bind()
        glEnableClientState(GL_VERTEX_ARRAY)
        glVertexPointer(3, GL_FLOAT, 0, None)

        colors_vbo.bind()
        glEnableClientState(GL_COLOR_ARRAY)
        glColorPointer(3, GL_FLOAT, 0, None)

        glDrawArrays(GL_POINTS, 0, count)

        positions_vbo.unbind()
        colors_vbo.unbind()
        glDisableClientState(GL_VERTEX_ARRAY)
        glDisableClientState(GL_COLOR_ARRAY)

        glDisable(GL_POINT_SMOOTH)
        glDisable(GL_BLEND)
        glDepthMask(GL_TRUE)
        glPopMatrix()
