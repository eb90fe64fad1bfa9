"""Pytest configuration for path tracer tests.

Provides a seeded random generator and a few shared materials so that
statistical tests are reproducible.
"""

import numpy as np
import pytest

from pathtracer.core.vector import Vector3
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian


@pytest.fixture
def rng():
    """A fresh generator with a fixed seed for every test."""
    return np.random.default_rng(12345)


@pytest.fixture
def white():
    return Lambertian(Vector3(0.73, 0.73, 0.73))


@pytest.fixture
def lamp_material():
    return DiffuseLight(Vector3(7.0, 7.0, 7.0))

