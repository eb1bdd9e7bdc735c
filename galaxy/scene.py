"""Minimal scene graph: point-cloud objects with disposable resources."""

from typing import Callable, Dict, List

import numpy as np


class BufferAttribute:
    """A flat float32 array read in groups of item_size."""

    def __init__(self, array: np.ndarray, item_size: int):
        self.array = array
        self.item_size = item_size

    @property
    def count(self) -> int:
        return len(self.array) // self.item_size


class BufferGeometry:
    """
    Named vertex attributes plus a dispose notification.

    Renderers that upload the attributes to the GPU register a listener
    with add_dispose_listener() and free their buffers when it fires.
    """

    def __init__(self):
        self.attributes: Dict[str, BufferAttribute] = {}
        self._dispose_listeners: List[Callable[["BufferGeometry"], None]] = []
        self.disposed = False

    def set_attribute(self, name: str, attribute: BufferAttribute):
        self.attributes[name] = attribute

    def get_attribute(self, name: str) -> BufferAttribute:
        return self.attributes[name]

    def add_dispose_listener(self, listener: Callable[["BufferGeometry"], None]):
        self._dispose_listeners.append(listener)

    def dispose(self):
        """Notify listeners once, then drop them."""
        if self.disposed:
            return
        self.disposed = True
        listeners, self._dispose_listeners = self._dispose_listeners, []
        for listener in listeners:
            listener(self)


class PointsMaterial:
    """Point sprite appearance settings."""

    def __init__(self, size: float, size_attenuation: bool = True,
                 vertex_colors: bool = True, depth_write: bool = False,
                 depth_test: bool = False, transparent: bool = True,
                 blending: str = "additive"):
        self.size = size
        self.size_attenuation = size_attenuation
        self.vertex_colors = vertex_colors
        self.depth_write = depth_write
        self.depth_test = depth_test
        self.transparent = transparent
        self.blending = blending
        self.disposed = False

    def dispose(self):
        self.disposed = True


class Points:
    """A renderable point cloud: geometry, material and a Y rotation."""

    def __init__(self, geometry: BufferGeometry, material: PointsMaterial):
        self.geometry = geometry
        self.material = material
        self.rotation_y = 0.0  # radians

    @property
    def count(self) -> int:
        if "position" not in self.geometry.attributes:
            return 0
        return self.geometry.get_attribute("position").count

    def dispose(self):
        self.geometry.dispose()
        self.material.dispose()


class Scene:
    """Flat list of top-level objects drawn each frame."""

    def __init__(self):
        self.children: List[object] = []

    def add(self, obj):
        if obj not in self.children:
            self.children.append(obj)

    def remove(self, obj):
        if obj in self.children:
            self.children.remove(obj)

    def points(self) -> List[Points]:
        return [child for child in self.children if isinstance(child, Points)]
