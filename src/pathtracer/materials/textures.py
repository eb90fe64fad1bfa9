# materials/textures.py
import math
import os
from typing import Optional, Union

import numpy as np
from PIL import Image

from pathtracer.core.vector import Vector3

class Texture:
    """Base class for all textures: a color at surface coordinates (u, v) and point p."""
    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        raise NotImplementedError("value() must be implemented by texture subclasses.")

class SolidColor(Texture):
    """A solid color texture."""
    def __init__(self, color: Vector3):
        self.color = color

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        return self.color

def as_texture(value: Union[Vector3, Texture]) -> Texture:
    """Wrap a plain color in a SolidColor; textures pass through."""
    if isinstance(value, Texture):
        return value
    return SolidColor(value)

class CheckerTexture(Texture):
    """
    A 3D checker pattern alternating between two textures, driven by the
    sign of sin(scale*x) * sin(scale*y) * sin(scale*z).
    """
    def __init__(self, even: Union[Vector3, Texture], odd: Union[Vector3, Texture],
                 scale: float = 10.0):
        self.even = as_texture(even)
        self.odd = as_texture(odd)
        self.scale = scale

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        sines = (math.sin(self.scale * p.x) *
                 math.sin(self.scale * p.y) *
                 math.sin(self.scale * p.z))
        if sines < 0:
            return self.odd.value(u, v, p)
        return self.even.value(u, v, p)

class Perlin:
    """
    Gradient noise over random unit vectors on a 256-point lattice.
    """
    POINT_COUNT = 256

    def __init__(self, rng: Optional[np.random.Generator] = None):
        rng = rng if rng is not None else np.random.default_rng()
        vectors = rng.uniform(-1.0, 1.0, size=(self.POINT_COUNT, 3))
        norms = np.linalg.norm(vectors, axis=1, keepdims=True)
        self.ranvec = vectors / np.maximum(norms, 1e-12)
        self.perm_x = rng.permutation(self.POINT_COUNT)
        self.perm_y = rng.permutation(self.POINT_COUNT)
        self.perm_z = rng.permutation(self.POINT_COUNT)

    def noise(self, p: Vector3) -> float:
        u = p.x - math.floor(p.x)
        v = p.y - math.floor(p.y)
        w = p.z - math.floor(p.z)
        i = math.floor(p.x)
        j = math.floor(p.y)
        k = math.floor(p.z)

        # Hermite smoothing
        uu = u * u * (3 - 2 * u)
        vv = v * v * (3 - 2 * v)
        ww = w * w * (3 - 2 * w)

        accum = 0.0
        for di in range(2):
            for dj in range(2):
                for dk in range(2):
                    idx = (self.perm_x[(i + di) & 255] ^
                           self.perm_y[(j + dj) & 255] ^
                           self.perm_z[(k + dk) & 255])
                    g = self.ranvec[idx]
                    weight = (u - di) * g[0] + (v - dj) * g[1] + (w - dk) * g[2]
                    accum += ((di * uu + (1 - di) * (1 - uu)) *
                              (dj * vv + (1 - dj) * (1 - vv)) *
                              (dk * ww + (1 - dk) * (1 - ww)) * weight)
        return float(accum)

    def turb(self, p: Vector3, depth: int = 7) -> float:
        accum = 0.0
        temp_p = p
        weight = 1.0
        for _ in range(depth):
            accum += weight * self.noise(temp_p)
            weight *= 0.5
            temp_p = temp_p * 2
        return abs(accum)

class NoiseTexture(Texture):
    """A marble-like procedural texture."""
    def __init__(self, scale: float = 4.0, rng: Optional[np.random.Generator] = None):
        self.noise = Perlin(rng)
        self.scale = scale

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        shade = 0.5 * (1.0 + math.sin(self.scale * p.z + 10 * self.noise.turb(p)))
        return Vector3(1, 1, 1) * shade

class ImageTexture(Texture):
    """A texture from an image file."""
    def __init__(self, image_path: str):
        if not os.path.exists(image_path):
            raise FileNotFoundError(f"Texture file not found: {image_path}")
        with Image.open(image_path) as img:
            # Convert to RGB if necessary
            if img.mode != 'RGB':
                img = img.convert('RGB')
            # Convert to numpy array for faster access
            self.data = np.asarray(img, dtype=np.float64) / 255.0  # Normalize to [0,1]
            self.width = img.width
            self.height = img.height

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        # Clamp into the image
        u = min(max(u, 0.0), 1.0)
        v = 1.0 - min(max(v, 0.0), 1.0)  # Flip V: image rows run top to bottom

        # Convert to pixel coordinates
        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        color = self.data[y, x]
        return Vector3(float(color[0]), float(color[1]), float(color[2]))
