"""Tests for the regeneration protocol and resource lifecycle."""

from collections import Counter

import numpy as np
import pytest

from galaxy import GalaxyGenerator, GalaxyParameters, ParameterStore, Scene


class TestLifecycle:
    """Empty -> Live -> Live' transitions."""

    def test_starts_empty(self, generator, scene):
        assert generator.current_field is None
        assert generator.current_object is None
        assert scene.points() == []

    def test_first_regeneration_attaches(self, generator, scene):
        field = generator.regenerate()
        assert scene.points() == [field.object]
        assert generator.current_field is field
        assert generator.current_object is field.object
        assert generator.regeneration_count == 1

    def test_each_regeneration_replaces_object(self, generator, store, scene):
        store.update(particle_count=50, galaxy_radius=2.0)
        first = generator.regenerate()
        second = generator.regenerate()
        assert second.object is not first.object
        assert scene.points() == [second.object]
        assert first.disposed
        assert first.object.material.disposed
        assert not second.disposed

    def test_never_more_than_one_attached(self, generator, store, scene):
        dispose_calls = Counter()
        fields = []
        for i in range(25):
            store.set("particle_count", i * 10)
            field = generator.regenerate()
            field.object.geometry.add_dispose_listener(lambda g: dispose_calls.update([id(g)]))
            fields.append(field)
            assert len(scene.points()) == 1
            assert scene.points()[0] is generator.current_object

        # Every replaced field was released exactly once, the live one not at all
        for old in fields[:-1]:
            assert old.disposed
            assert dispose_calls[id(old.object.geometry)] == 1
        assert not fields[-1].disposed
        assert dispose_calls[id(fields[-1].object.geometry)] == 0

    def test_field_dispose_is_idempotent(self, generator):
        field = generator.regenerate()
        calls = []
        field.object.geometry.add_dispose_listener(calls.append)
        field.dispose()
        field.dispose()
        assert calls == [field.object.geometry]

    def test_regenerate_uses_store_snapshot(self, generator, store):
        store.update(particle_count=40, galaxy_radius=3.0)
        field = generator.regenerate()
        store.set("galaxy_radius", 9.0)
        assert field.parameters.galaxy_radius == 3.0
        assert field.count == 40

    def test_explicit_parameters(self, generator, store):
        field = generator.regenerate(GalaxyParameters(particle_count=12, galaxy_radius=1.0))
        assert field.count == 12
        # The store is not written by an explicit regeneration
        assert store.get("particle_count") == 0

    def test_dispose_detaches(self, generator, scene):
        field = generator.regenerate()
        generator.dispose()
        assert scene.points() == []
        assert field.disposed
        assert generator.current_object is None
        generator.dispose()

    def test_zero_particles_gives_valid_empty_object(self, generator, scene):
        field = generator.regenerate()
        assert field.count == 0
        assert field.object.count == 0
        assert scene.points() == [field.object]

    def test_seeded_generators_agree(self):
        params = dict(particle_count=300, galaxy_radius=4.0)
        a = GalaxyGenerator(ParameterStore(GalaxyParameters(**params)), Scene(), seed=5)
        b = GalaxyGenerator(ParameterStore(GalaxyParameters(**params)), Scene(), seed=5)
        np.testing.assert_array_equal(a.regenerate().position, b.regenerate().position)


class TestRejection:
    """Invalid input leaves the previous field attached."""

    def test_invalid_panel_change_keeps_field(self, generator, store, scene):
        store.update(particle_count=30, galaxy_radius=2.0)
        field = generator.regenerate()

        assert generator.on_parameter_change("branch_count", 0) is False
        assert generator.current_field is field
        assert scene.points() == [field.object]
        assert not field.disposed
        assert generator.regeneration_count == 1
        assert store.get("branch_count") == 3

    def test_negative_count_rejected(self, generator, store):
        generator.regenerate()
        assert generator.on_parameter_change("particle_count", -10) is False
        assert store.get("particle_count") == 0

    def test_valid_panel_change_regenerates(self, generator, store, scene):
        generator.regenerate()
        assert generator.on_parameter_change("particle_count", 250) is True
        assert generator.current_field.count == 250
        assert generator.regeneration_count == 2
        assert len(scene.points()) == 1

    def test_invalid_explicit_parameters_keep_field(self, generator, scene):
        field = generator.regenerate()
        result = generator.regenerate(GalaxyParameters(branch_count=0))
        assert result is field
        assert scene.points() == [field.object]
        assert not field.disposed

    def test_invalid_explicit_parameters_before_first_field(self, generator, scene):
        assert generator.regenerate(GalaxyParameters(particle_count=-1)) is None
        assert scene.points() == []

    def test_tween_update_regenerates(self, generator, store):
        generator.regenerate()
        store.set("galaxy_radius", 1.5)
        generator.on_tween_update()
        assert generator.current_field.parameters.galaxy_radius == 1.5
        assert generator.regeneration_count == 2


class TestScene:
    """Scene bookkeeping used by the generator."""

    def test_add_is_idempotent(self, scene):
        obj = object()
        scene.add(obj)
        scene.add(obj)
        assert scene.children == [obj]

    def test_remove_absent_is_noop(self, scene):
        scene.remove(object())
        assert scene.children == []

    def test_points_filters_other_children(self, generator, scene):
        scene.add("camera")
        field = generator.regenerate()
        assert scene.points() == [field.object]
        assert len(scene.children) == 2
