"""Keyboard-driven parameter panel drawn over the scene."""

from typing import Callable, List, Tuple

import pygame
from pygame.locals import *

from config import galaxy as config
from galaxy import ParameterStore


class ParameterPanel:
    """
    Lists the tunable parameters by folder and edits the selected one.

    Keys (panel visible):
        G: Show/hide
        Up/Down: Select parameter
        Left/Right: Step value (hold Shift for 10x)

    Every edit is handed to on_change(name, value), which is expected to
    write the store and regenerate.
    """

    def __init__(self, store: ParameterStore, on_change: Callable[[str, object], bool],
                 specs: dict = None):
        self.store = store
        self.on_change = on_change
        self.specs = config.PARAMETERS if specs is None else specs
        self.names = list(self.specs)
        self.selected = 0
        self.visible = False  # starts closed

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns True if the panel consumed the event."""
        if event.type != KEYDOWN:
            return False
        if event.key == K_g:
            self.visible = not self.visible
            return True
        if not self.visible:
            return False

        coarse = bool(event.mod & KMOD_SHIFT)
        if event.key == K_UP:
            self.selected = (self.selected - 1) % len(self.names)
        elif event.key == K_DOWN:
            self.selected = (self.selected + 1) % len(self.names)
        elif event.key == K_LEFT:
            self.nudge(-1, coarse)
        elif event.key == K_RIGHT:
            self.nudge(1, coarse)
        else:
            return False
        return True

    def nudge(self, direction: int, coarse: bool = False) -> bool:
        """
        Step the selected parameter up or down within its panel range.

        A value already outside the range (set by the intro, say) is only
        ever moved toward the range, never snapped across it. Returns False
        when nothing changed or the change was rejected.
        """
        name = self.names[self.selected]
        spec = self.specs[name]
        scale = 10 if coarse else 1
        current = self.store.get(name)

        if "hue_step" in spec:
            value = self._shift_hue(current, direction * spec["hue_step"] * scale)
        else:
            step = spec["step"]
            value = current + direction * step * scale
            value = round(value / step) * step
            low = min(spec["min"], current)
            high = max(spec["max"], current)
            value = min(high, max(low, value))
            if value == current:
                return False
        return self.on_change(name, value)

    @staticmethod
    def _shift_hue(rgb, degrees: float) -> Tuple[float, float, float]:
        color = pygame.Color(*(int(round(c * 255)) for c in rgb))
        h, s, v, a = color.hsva
        color.hsva = ((h + degrees) % 360, s, v, a)
        return (color.r / 255.0, color.g / 255.0, color.b / 255.0)

    def _format(self, name: str) -> str:
        value = self.store.get(name)
        if "hue_step" in self.specs[name]:
            return "#" + "".join(f"{int(round(c * 255)):02x}" for c in value)
        if isinstance(value, int):
            return f"{value:,}"
        return f"{value:.3f}"

    def lines(self) -> List[Tuple[str, bool]]:
        """Panel text as (line, is_selected) pairs, grouped by folder."""
        out = [("Parameters  [G] hide  [Up/Down] select  [Left/Right] change", False)]
        folder = None
        for i, name in enumerate(self.names):
            spec = self.specs[name]
            if spec.get("folder") != folder:
                folder = spec.get("folder")
                out.append((f"{folder}", False))
            marker = ">" if i == self.selected else " "
            out.append((f" {marker} {spec['label']}: {self._format(name)}", i == self.selected))
        return out

    def draw(self, text_renderer, x: int, y: int, screen_size: tuple, line_height: int = 22):
        if not self.visible:
            return
        for row, (text, highlighted) in enumerate(self.lines()):
            color = config.COLORS["highlight"] if highlighted else config.COLORS["text"]
            text_renderer.draw_text(text, x, y + row * line_height, screen_size, color=color)
