# materials/diffuse_light.py
from typing import Union

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import BLACK, Material
from pathtracer.materials.textures import Texture, as_texture

class DiffuseLight(Material):
    """
    Emissive material that provides constant radiance with optional texture support.

    Light leaves only through the front face; wrap the shape in FlipFace to
    make it shine the other way. The texture can be used to create patterns
    in the emitted light.
    """
    def __init__(self, emit: Union[Vector3, Texture]):
        self.emit = as_texture(emit)

    def emitted(self, ray_in: Ray, rec: HitRecord, u: float, v: float, p: Vector3) -> Vector3:
        """
        Return the emitted radiance.

        Args:
            ray_in (Ray): The ray that reached the light.
            rec (HitRecord): The hit on the emitting surface.
            u (float): The horizontal texture coordinate.
            v (float): The vertical texture coordinate.
            p (Vector3): The hit point.

        Returns:
            Vector3: The emission color, black when seen from behind.
        """
        if not rec.front_face:
            return BLACK
        return self.emit.value(u, v, p)
