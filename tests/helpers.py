"""Shared test helpers."""

import math

import numpy as np

from pathtracer.core.vector import Vector3


def uniform_sphere_directions(rng, n):
    """n directions uniformly distributed over the unit sphere."""
    v = rng.normal(size=(n, 3))
    v /= np.linalg.norm(v, axis=1, keepdims=True)
    return [Vector3(float(x), float(y), float(z)) for x, y, z in v]


def close(a, b, tol=1e-9):
    """Component-wise comparison of two Vector3 with a relative tolerance."""
    return all(math.isclose(x, y, rel_tol=tol, abs_tol=tol) for x, y in zip(a, b))
