"""Pytest configuration for raytracer tests.

Shared fixtures: a seeded random stream (every stochastic call in the
renderer takes one explicitly) and a few simple materials.
"""

import numpy as np
import pytest

from core.vector import Color
from materials.lambertian import Lambertian
from materials.metal import Metal


@pytest.fixture
def rng():
    """Fresh, seeded random stream per test."""
    return np.random.default_rng(1234)


@pytest.fixture
def grey():
    return Lambertian(Color(0.5, 0.5, 0.5))


@pytest.fixture
def mirror():
    return Metal(Color(0.9, 0.9, 0.9), fuzz=0.0)
