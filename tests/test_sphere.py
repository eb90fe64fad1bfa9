"""Unit tests for spheres.

Tests cover:
- Ray/sphere intersection and surface coordinates
- Moving sphere center interpolation and time-dependent hits
- Cone sampling toward a sphere light
"""

import math

import pytest

from helpers import uniform_sphere_directions
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.sphere import MovingSphere, Sphere


class TestSphere:
    """Tests for the static sphere."""

    def test_hit_front(self, white):
        sphere = Sphere(Vector3(0, 0, -5), 1.0, white)
        rec = sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 0.001, math.inf)

        assert rec.t == pytest.approx(4.0)
        assert rec.front_face
        assert rec.normal.z == pytest.approx(1.0)
        assert 0.0 <= rec.u <= 1.0 and 0.0 <= rec.v <= 1.0

    def test_hit_from_inside(self, white):
        sphere = Sphere(Vector3(0, 0, 0), 2.0, white)
        rec = sphere.hit(Ray(Vector3(0, 0, 0), Vector3(1, 0, 0)), 0.001, math.inf)

        assert rec.t == pytest.approx(2.0)
        assert not rec.front_face
        assert rec.normal.x == pytest.approx(-1.0)

    def test_miss(self, white):
        sphere = Sphere(Vector3(0, 0, -5), 1.0, white)
        assert sphere.hit(Ray(Vector3(0, 3, 0), Vector3(0, 0, -1)), 0.001, math.inf) is None

    def test_bounding_box(self, white):
        box = Sphere(Vector3(1, 2, 3), 0.5, white).bounding_box(0, 1)
        assert box.minimum == Vector3(0.5, 1.5, 2.5)
        assert box.maximum == Vector3(1.5, 2.5, 3.5)


class TestMovingSphere:
    """Tests for the sphere that moves during the shutter interval."""

    def test_center_interpolates(self, white):
        sphere = MovingSphere(Vector3(0, 0, 0), Vector3(2, 0, 0), 0.0, 1.0, 0.5, white)
        assert sphere.center(0.5).x == pytest.approx(1.0)

    def test_hit_depends_on_ray_time(self, white):
        sphere = MovingSphere(Vector3(0, 0, -5), Vector3(4, 0, -5), 0.0, 1.0, 0.5, white)
        direction = Vector3(0, 0, -1)

        assert sphere.hit(Ray(Vector3(0, 0, 0), direction, 0.0), 0.001, math.inf) is not None
        assert sphere.hit(Ray(Vector3(0, 0, 0), direction, 1.0), 0.001, math.inf) is None

    def test_bounding_box_covers_the_motion(self, white):
        sphere = MovingSphere(Vector3(0, 0, 0), Vector3(2, 0, 0), 0.0, 1.0, 0.5, white)
        box = sphere.bounding_box(0.0, 1.0)
        assert box.minimum.x == pytest.approx(-0.5)
        assert box.maximum.x == pytest.approx(2.5)


class TestSphereLightSampling:
    """Tests for cone sampling toward a sphere."""

    def test_samples_hit_the_sphere(self, rng, white):
        sphere = Sphere(Vector3(0, 5, 0), 1.0, white)
        origin = Vector3(0.3, 0, -0.2)
        for _ in range(200):
            d = sphere.sample_direction(origin, rng)
            assert sphere.hit(Ray(origin, d), 0.001, math.inf) is not None
            assert sphere.pdf_value(origin, d) > 0

    def test_pdf_value_integrates_to_one(self, rng, white):
        sphere = Sphere(Vector3(0, 2, 0), 1.0, white)
        origin = Vector3(0, 0, 0)
        n = 40000
        total = sum(sphere.pdf_value(origin, d) for d in uniform_sphere_directions(rng, n))
        assert 4 * math.pi * total / n == pytest.approx(1.0, abs=0.06)
