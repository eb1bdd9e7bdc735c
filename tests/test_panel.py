"""Tests for the keyboard parameter panel."""

import pygame
import pytest
from pygame.locals import *

from core.panel import ParameterPanel


def key(code, mod=0):
    return pygame.event.Event(KEYDOWN, key=code, mod=mod)


class Recorder:
    """on_change stand-in that writes through the store."""

    def __init__(self, store):
        self.store = store
        self.calls = []

    def __call__(self, name, value):
        self.calls.append((name, value))
        self.store.set(name, value)
        return True


@pytest.fixture
def recorder(store):
    return Recorder(store)


@pytest.fixture
def panel(store, recorder):
    panel = ParameterPanel(store, recorder)
    panel.visible = True
    return panel


def select(panel, name):
    panel.selected = panel.names.index(name)


class TestVisibility:
    """Only G reaches a hidden panel."""

    def test_starts_hidden(self, store, recorder):
        assert ParameterPanel(store, recorder).visible is False

    def test_g_toggles(self, panel):
        assert panel.handle_event(key(K_g)) is True
        assert panel.visible is False
        assert panel.handle_event(key(K_g)) is True
        assert panel.visible is True

    def test_hidden_panel_passes_other_keys(self, panel, store, recorder):
        panel.visible = False
        select(panel, "galaxy_radius")
        for code in (K_RIGHT, K_LEFT, K_UP, K_DOWN, K_r):
            assert panel.handle_event(key(code)) is False
        assert recorder.calls == []
        assert panel.selected == panel.names.index("galaxy_radius")
        assert store.get("galaxy_radius") == 0.0

    def test_non_key_events_pass_through(self, panel):
        event = pygame.event.Event(MOUSEBUTTONDOWN, button=1, pos=(10, 10))
        assert panel.handle_event(event) is False

    def test_unbound_key_passes_through(self, panel):
        assert panel.handle_event(key(K_h)) is False


class TestSelection:

    def test_up_wraps_to_last(self, panel):
        assert panel.handle_event(key(K_UP)) is True
        assert panel.selected == len(panel.names) - 1

    def test_down_wraps_to_first(self, panel):
        panel.selected = len(panel.names) - 1
        panel.handle_event(key(K_DOWN))
        assert panel.selected == 0


class TestStepping:
    """Left/Right move by the configured step, Shift by ten steps."""

    def test_right_adds_one_step(self, panel, store):
        store.set("galaxy_radius", 1.0)
        select(panel, "galaxy_radius")
        assert panel.handle_event(key(K_RIGHT)) is True
        assert store.get("galaxy_radius") == pytest.approx(1.01)

    def test_left_subtracts_one_step(self, panel, store):
        store.set("branch_count", 5)
        select(panel, "branch_count")
        panel.handle_event(key(K_LEFT))
        assert store.get("branch_count") == 4

    def test_shift_is_ten_steps(self, panel, store):
        store.set("galaxy_radius", 1.0)
        select(panel, "galaxy_radius")
        panel.handle_event(key(K_RIGHT, KMOD_LSHIFT))
        assert store.get("galaxy_radius") == pytest.approx(1.1)

    def test_result_snaps_to_step_grid(self, panel, store):
        store.set("particle_size", 0.0014)
        select(panel, "particle_size")
        panel.handle_event(key(K_RIGHT))
        assert store.get("particle_size") == pytest.approx(0.002)

    def test_clamps_at_panel_max(self, panel, store, recorder):
        store.set("galaxy_radius", 19.995)
        select(panel, "galaxy_radius")
        panel.handle_event(key(K_RIGHT))
        assert store.get("galaxy_radius") == pytest.approx(20.0)

        recorder.calls.clear()
        assert panel.nudge(1) is False
        assert recorder.calls == []

    def test_clamps_at_panel_min(self, panel, store, recorder):
        select(panel, "particle_count")
        assert panel.nudge(-1) is False
        assert store.get("particle_count") == 0
        assert recorder.calls == []


class TestValueAboveRange:
    """A value past the panel max (as the intro leaves the count) is never pulled down by Right."""

    def test_right_leaves_value_alone(self, store, generator):
        store.set("particle_count", 100000)
        generator.regenerate()
        panel = ParameterPanel(store, generator.on_parameter_change)
        panel.visible = True
        select(panel, "particle_count")

        assert panel.nudge(1) is False
        assert panel.nudge(1, coarse=True) is False
        assert store.get("particle_count") == 100000
        assert generator.regeneration_count == 1

    def test_left_steps_down_from_value(self, panel, store):
        store.set("particle_count", 100000)
        select(panel, "particle_count")
        assert panel.nudge(-1) is True
        assert store.get("particle_count") == 99999


class TestColors:
    """Color parameters rotate hue instead of stepping."""

    def test_right_shifts_hue(self, panel, store):
        before = pygame.Color(255, 0x60, 0x30).hsva[0]
        select(panel, "inside_color")
        panel.handle_event(key(K_RIGHT))

        r, g, b = (int(round(c * 255)) for c in store.get("inside_color"))
        after = pygame.Color(r, g, b).hsva[0]
        assert after == pytest.approx(before + 10.0, abs=2.0)

    def test_shift_left_wraps_hue(self, panel, store):
        before = pygame.Color(0x1b, 0x39, 0x84).hsva[0]
        select(panel, "outside_color")
        panel.handle_event(key(K_LEFT, KMOD_RSHIFT))

        r, g, b = (int(round(c * 255)) for c in store.get("outside_color"))
        after = pygame.Color(r, g, b).hsva[0]
        assert after == pytest.approx((before - 100.0) % 360, abs=2.0)


class TestRejectedChange:

    def test_rejected_value_reports_false(self, store, generator):
        specs = {"branch_count": {"label": "Branches", "folder": "Galaxy",
                                  "min": 0, "max": 5, "step": 1}}
        store.set("branch_count", 1)
        generator.regenerate()
        panel = ParameterPanel(store, generator.on_parameter_change, specs=specs)

        assert panel.nudge(-1) is False
        assert store.get("branch_count") == 1
        assert generator.regeneration_count == 1


class TestLines:

    def test_grouped_by_folder(self, panel):
        text = [line for line, _ in panel.lines()]
        assert "Particles" in text
        assert "Galaxy" in text
        assert text.index("Particles") < text.index("Galaxy")

    def test_selected_line_is_marked(self, panel):
        select(panel, "spin_angle_coefficient")
        marked = [line for line, highlighted in panel.lines() if highlighted]
        assert len(marked) == 1
        assert marked[0].startswith(" > ")
