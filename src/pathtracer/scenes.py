"""Scene factories.

Each factory returns ``(world, lights, camera)``: the scene root, the
hittables to importance-sample toward (or None), and a camera framing the
scene for the requested aspect ratio.
"""
from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3
from pathtracer.geometry.aarect import XYRect, XZRect, YZRect
from pathtracer.geometry.box import Box
from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.hittable import FlipFace, RotateY, Translate
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal

def cornell_box(aspect_ratio: float = 1.0, glass_sphere: bool = True):
    """
    The classic 555-unit Cornell box with a ceiling light, one tall
    aluminium box and either a glass sphere or a short diffuse box.
    """
    red = Lambertian(Vector3(0.65, 0.05, 0.05))
    white = Lambertian(Vector3(0.73, 0.73, 0.73))
    green = Lambertian(Vector3(0.12, 0.45, 0.15))
    light = DiffuseLight(Vector3(15, 15, 15))

    objects = HittableList()
    objects.add(YZRect(0, 555, 0, 555, 555, green))
    objects.add(YZRect(0, 555, 0, 555, 0, red))
    # The light faces down into the box.
    objects.add(FlipFace(XZRect(213, 343, 227, 332, 554, light)))
    objects.add(XZRect(0, 555, 0, 555, 0, white))
    objects.add(XZRect(0, 555, 0, 555, 555, white))
    objects.add(XYRect(0, 555, 0, 555, 555, white))

    aluminum = Metal(Vector3(0.8, 0.85, 0.88), 0.0)
    box1 = Box(Vector3(0, 0, 0), Vector3(165, 330, 165), aluminum)
    box1 = RotateY(box1, 15)
    box1 = Translate(box1, Vector3(265, 0, 295))
    objects.add(box1)

    lights = HittableList()
    # Only the geometry of a light matters for sampling.
    lights.add(XZRect(213, 343, 227, 332, 554, Material()))

    if glass_sphere:
        objects.add(Sphere(Vector3(190, 90, 190), 90, Dielectric(1.5)))
        lights.add(Sphere(Vector3(190, 90, 190), 90, Material()))
    else:
        box2 = Box(Vector3(0, 0, 0), Vector3(165, 165, 165), white)
        box2 = RotateY(box2, -18)
        box2 = Translate(box2, Vector3(130, 0, 65))
        objects.add(box2)

    world = BVHNode(objects.objects)
    camera = Camera(
        lookfrom=Vector3(278, 278, -800),
        lookat=Vector3(278, 278, 0),
        vup=Vector3(0, 1, 0),
        vfov=40.0,
        aspect_ratio=aspect_ratio,
        aperture=0.0,
        focus_dist=10.0,
        time0=0.0,
        time1=1.0,
    )
    return world, lights, camera

def light_over_floor(aspect_ratio: float = 1.0, intensity: float = 7.0):
    """
    A white diffuse floor lit by a square light one unit above it.
    """
    floor = XZRect(-50, 50, -50, 50, 0, Lambertian(Vector3(0.73, 0.73, 0.73)))
    lamp = XZRect(-1, 1, -1, 1, 1, DiffuseLight(Vector3(intensity, intensity, intensity)))

    world = HittableList([floor, FlipFace(lamp)])
    lights = HittableList([lamp])
    camera = Camera(
        lookfrom=Vector3(0, 0.5, -6),
        lookat=Vector3(0, 0.5, 0),
        vfov=60.0,
        aspect_ratio=aspect_ratio,
    )
    return world, lights, camera

SCENES = {
    "cornell": cornell_box,
    "cornell-boxes": lambda aspect_ratio=1.0: cornell_box(aspect_ratio, glass_sphere=False),
    "light-over-floor": light_over_floor,
}
