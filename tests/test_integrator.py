"""Tests for the light-transport estimator.

Tests cover:
- Bounce budget cutoff and background on a miss
- Direct view of a one-sided light
- Light over a diffuse floor (end to end)
- Specular chains and a closed mirror box
- Zero sampling density and non-negative output
- Emission from every face of a closed box
"""

import math

import numpy as np
import pytest

from pathtracer.core.pdf import PDF
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.aarect import XZRect
from pathtracer.geometry.box import Box
from pathtracer.geometry.hittable import FlipFace
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.metal import Metal
from pathtracer.renderer.integrator import ray_color
from pathtracer.scenes import cornell_box, light_over_floor

BLACK = Vector3(0, 0, 0)
WHITE_SKY = Vector3(1, 1, 1)


class ZeroPDF(PDF):
    def value(self, direction):
        return 0.0

    def generate(self, rng):
        return Vector3(0, 1, 0)


class GlowingZeroPDFMaterial(Material):
    """Emits and scatters diffusely with a density that is zero everywhere."""

    def emitted(self, ray_in, rec, u, v, p):
        return Vector3(1, 2, 3)

    def scatter(self, ray_in, rec, rng):
        return ScatterRecord.diffuse(Vector3(1, 1, 1), ZeroPDF())

    def scattering_pdf(self, ray_in, rec, scattered):
        return 1.0


def average(ray, background, world, lights, depth, rng, n):
    total = Vector3(0, 0, 0)
    for _ in range(n):
        total = total + ray_color(ray, background, world, lights, depth, rng)
    return total / n


class TestTermination:
    """Tests for the trivial outcomes."""

    def test_exhausted_budget_is_black(self, rng, white):
        world = HittableList([XZRect(-1, 1, -1, 1, 0, white)])
        ray = Ray(Vector3(0, 1, 0), Vector3(0, -1, 0))
        assert ray_color(ray, WHITE_SKY, world, None, 0, rng) == BLACK

    def test_miss_returns_background(self, rng, white):
        world = HittableList([XZRect(-1, 1, -1, 1, 0, white)])
        ray = Ray(Vector3(0, 1, 0), Vector3(0, 1, 0))
        sky = Vector3(0.2, 0.3, 0.4)
        assert ray_color(ray, sky, world, None, 5, rng) == sky

    def test_absorbing_surface_returns_its_emission(self, rng):
        world = HittableList([XZRect(-1, 1, -1, 1, 0, Material())])
        ray = Ray(Vector3(0, 1, 0), Vector3(0, -1, 0))
        assert ray_color(ray, WHITE_SKY, world, None, 5, rng) == BLACK

    def test_zero_density_returns_emission_only(self, rng):
        world = HittableList([XZRect(-1, 1, -1, 1, 0, GlowingZeroPDFMaterial())])
        ray = Ray(Vector3(0, 1, 0), Vector3(0, -1, 0))
        assert ray_color(ray, WHITE_SKY, world, None, 5, rng) == Vector3(1, 2, 3)


class TestLightOverFloor:
    """End-to-end tests with a 7,7,7 light one unit above a white floor."""

    def test_looking_at_the_light_sees_its_radiance(self, rng):
        world, lights, _ = light_over_floor()
        ray = Ray(Vector3(0, 0.5, 0), Vector3(0, 1, 0))
        assert ray_color(ray, BLACK, world, lights, 10, rng) == Vector3(7, 7, 7)

    def test_back_of_the_light_is_dark(self, rng, lamp_material):
        """Without FlipFace the light faces up, away from the floor."""
        lamp = XZRect(-1, 1, -1, 1, 1, lamp_material)
        world = HittableList([lamp])
        ray = Ray(Vector3(0, 0.5, 0), Vector3(0, 1, 0))
        assert ray_color(ray, BLACK, world, HittableList([lamp]), 10, rng) == BLACK

    def test_toward_light_beats_away_from_light(self, rng):
        world, lights, _ = light_over_floor()
        toward = Ray(Vector3(0, 0.5, 0), Vector3(0.1, 1, 0))
        away = Ray(Vector3(0, 0.5, 0), Vector3(1, 0.2, 0))

        lit = average(toward, BLACK, world, lights, 10, rng, 16)
        dark = average(away, BLACK, world, lights, 10, rng, 16)

        assert dark == BLACK
        assert lit.x > dark.x and lit.y > dark.y and lit.z > dark.z

    def test_floor_under_the_light_is_lit(self, rng):
        world, lights, _ = light_over_floor()
        ray = Ray(Vector3(0, 0.5, -0.5), Vector3(0, -1, 0.3))
        color = average(ray, BLACK, world, lights, 10, rng, 200)
        assert color.x > 0.1
        assert color.x == color.y == color.z

    def test_material_sampling_only_also_converges_to_light(self, rng):
        world, lights, _ = light_over_floor()
        ray = Ray(Vector3(0, 0.5, -0.5), Vector3(0, -1, 0.3))
        with_lights = average(ray, BLACK, world, lights, 10, rng, 400)
        without = average(ray, BLACK, world, None, 10, rng, 4000)
        assert without.x > 0
        assert without.x == pytest.approx(with_lights.x, rel=0.35)


class TestSpecular:
    """Tests for deterministic continuation rays."""

    def test_mirror_floor_reflects_the_light(self, rng, lamp_material):
        floor = XZRect(-10, 10, -10, 10, 0, Metal(Vector3(0.5, 0.5, 0.5), 0.0))
        lamp = XZRect(-1, 1, -1, 1, 2, lamp_material)
        world = HittableList([floor, FlipFace(lamp)])
        ray = Ray(Vector3(-4, 2, 0), Vector3(1, -1, 0))

        color = ray_color(ray, BLACK, world, HittableList([lamp]), 5, rng)

        assert color.x == pytest.approx(3.5)

    @pytest.mark.parametrize("direction", [
        Vector3(1, 0, 0),
        Vector3(1, 0.37, 0.21),
    ])
    def test_mirrored_box_runs_out_of_bounces(self, direction, rng):
        mirror = Metal(Vector3(1, 1, 1), 0.0)
        world = HittableList([Box(Vector3(-1, -1, -1), Vector3(1, 1, 1), mirror)])
        ray = Ray(Vector3(0.1, 0.05, -0.2), direction)

        assert ray_color(ray, WHITE_SKY, world, None, 25, rng) == BLACK


class TestNonNegative:
    """The estimator never produces negative or non-finite radiance."""

    def test_glass_and_diffuse_scene(self, rng, white, lamp_material):
        lamp = XZRect(-1, 1, -1, 1, 3, lamp_material)
        world = HittableList([
            XZRect(-20, 20, -20, 20, 0, white),
            Sphere(Vector3(0, 1, 0), 1.0, Dielectric(1.5)),
            Sphere(Vector3(2.5, 1, 0), 1.0, Metal(Vector3(0.8, 0.6, 0.2), 0.3)),
            FlipFace(lamp),
        ])
        lights = HittableList([lamp])
        for _ in range(300):
            d = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 0.2), rng.uniform(-1, 1))
            if d.near_zero():
                continue
            ray = Ray(Vector3(0.3, 1.5, -4), d)
            c = ray_color(ray, Vector3(0.05, 0.05, 0.05), world, lights, 8, rng)
            for component in c:
                assert math.isfinite(component)
                assert component >= 0

    def test_cornell_box_samples(self, rng):
        world, lights, camera = cornell_box()
        for _ in range(40):
            ray = camera.get_ray(rng.random(), rng.random(), rng)
            c = ray_color(ray, BLACK, world, lights, 6, rng)
            assert all(math.isfinite(x) and x >= 0 for x in c)

    def test_independent_streams_are_reproducible(self):
        world, lights, _ = light_over_floor()
        ray = Ray(Vector3(0, 0.5, -0.5), Vector3(0, -1, 0.3))
        a = ray_color(ray, BLACK, world, lights, 10, np.random.default_rng(7))
        b = ray_color(ray, BLACK, world, lights, 10, np.random.default_rng(7))
        assert a == b


class TestEmissiveBox:
    """A glowing box looks the same from every side."""

    @pytest.mark.parametrize("axis", [0, 1, 2])
    @pytest.mark.parametrize("side", [-1, 1])
    def test_each_face_emits_outward(self, axis, side, rng):
        glow = DiffuseLight(Vector3(4, 4, 4))
        world = HittableList([Box(Vector3(-1, -1, -1), Vector3(1, 1, 1), glow)])
        origin = [0.3, 0.1, -0.2]
        origin[axis] = 6.0 * side
        direction = [0.0, 0.0, 0.0]
        direction[axis] = -side
        ray = Ray(Vector3.from_axes(origin), Vector3.from_axes(direction))

        assert ray_color(ray, BLACK, world, None, 5, rng) == Vector3(4, 4, 4)
