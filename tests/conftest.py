"""Shared fixtures for the galaxy core tests."""

import numpy as np
import pytest

from galaxy import GalaxyGenerator, GalaxyParameters, ParameterStore, Scene


@pytest.fixture
def store():
    return ParameterStore(GalaxyParameters())


@pytest.fixture
def scene():
    return Scene()


@pytest.fixture
def generator(store, scene):
    return GalaxyGenerator(store, scene, seed=1234)


@pytest.fixture
def rng():
    return np.random.default_rng(7)
