# renderer/raytracer.py
import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import numpy as np
from PIL import Image

from pathtracer.camera.camera import Camera
from pathtracer.config import RenderSettings
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable
from pathtracer.geometry.world import HittableList
from pathtracer.renderer.integrator import ray_color
from pathtracer.renderer.tone_mapping import gamma_encode, reinhard_tone_mapping

logger = logging.getLogger(__name__)

class Renderer:
    """
    Renders a scene by averaging ``samples_per_pixel`` radiance estimates per
    pixel.

    Rows are independent tasks on a thread pool. Each row draws from its own
    generator spawned off ``SeedSequence(settings.seed)``, so the image only
    depends on the seed, not on the worker count or scheduling order. The
    scene graph is shared read-only between tasks.
    """
    def __init__(self, settings: Optional[RenderSettings] = None):
        self.settings = settings if settings is not None else RenderSettings()
        self.width = self.settings.width
        self.height = self.settings.height
        self.background = Vector3(*self.settings.background)

    def render(self, world: Hittable, camera: Camera,
               lights: Optional[Hittable] = None) -> np.ndarray:
        """
        Returns an (height, width, 3) float32 array of mean linear radiance,
        row 0 at the top of the image.
        """
        if isinstance(lights, HittableList) and len(lights) == 0:
            raise ValueError("lights must contain at least one object; pass None to disable light sampling")

        s = self.settings
        logger.info("Rendering %dx%d, %d spp, depth %d, workers=%s",
                    self.width, self.height, s.samples_per_pixel, s.max_depth, s.workers)
        start = time.perf_counter()

        row_seeds = np.random.SeedSequence(s.seed).spawn(self.height)
        image = np.zeros((self.height, self.width, 3), dtype=np.float32)

        with ThreadPoolExecutor(max_workers=s.workers) as executor:
            futures = [
                executor.submit(self._render_row, j, row_seeds[j], world, camera, lights)
                for j in range(self.height)
            ]
            for done, future in enumerate(futures, start=1):
                j, row = future.result()
                # Image row 0 is the top scanline, i.e. the largest t.
                image[self.height - 1 - j] = row
                if done % 16 == 0 or done == self.height:
                    logger.debug("Finished %d/%d scanlines", done, self.height)

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return image

    def _render_row(self, j: int, seed: np.random.SeedSequence, world: Hittable,
                    camera: Camera, lights: Optional[Hittable]):
        rng = np.random.default_rng(seed)
        s = self.settings
        # Thread-local accumulation buffer for this scanline
        row = np.zeros((self.width, 3), dtype=np.float64)
        u_scale = 1.0 / max(self.width - 1, 1)
        v_scale = 1.0 / max(self.height - 1, 1)
        for i in range(self.width):
            r = g = b = 0.0
            for _ in range(s.samples_per_pixel):
                u = (i + rng.random()) * u_scale
                v = (j + rng.random()) * v_scale
                ray = camera.get_ray(u, v, rng)
                color = ray_color(ray, self.background, world, lights, s.max_depth, rng)
                # Non-finite samples count as black.
                if not (math.isfinite(color.x) and math.isfinite(color.y) and math.isfinite(color.z)):
                    continue
                r += color.x
                g += color.y
                b += color.z
            row[i] = (r, g, b)
        row /= s.samples_per_pixel
        return j, row

    def to_image(self, radiance: np.ndarray) -> np.ndarray:
        """Encode mean radiance to an 8-bit RGB array with the configured tone map."""
        if self.settings.tone_map == "reinhard":
            return reinhard_tone_mapping(radiance)
        return gamma_encode(radiance)

    def save(self, radiance: np.ndarray, path: str) -> None:
        """Tone map ``radiance`` and write it to ``path`` (format from the extension)."""
        Image.fromarray(self.to_image(radiance)).save(path)
        logger.info("Wrote %s", path)
