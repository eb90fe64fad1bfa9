# main.py
import argparse
import logging
import sys

from pathtracer.config import QUALITY_LEVELS, RenderSettings, TONE_MAPS
from pathtracer.renderer.raytracer import Renderer
from pathtracer.scenes import SCENES

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render a built-in scene with the Monte Carlo path tracer.")
    parser.add_argument("--scene", choices=sorted(SCENES), default="cornell")
    parser.add_argument("--quality", choices=sorted(QUALITY_LEVELS), default="balanced",
                        help="samples/depth preset")
    parser.add_argument("--width", type=int, default=200)
    parser.add_argument("--height", type=int, default=None,
                        help="defaults to the width")
    parser.add_argument("--samples", type=int, default=None,
                        help="samples per pixel, overrides the preset")
    parser.add_argument("--depth", type=int, default=None,
                        help="bounce budget, overrides the preset")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--tone-map", choices=TONE_MAPS, default="gamma")
    parser.add_argument("--no-light-sampling", action="store_true",
                        help="sample material lobes only")
    parser.add_argument("-o", "--output", default="render.png")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        settings = RenderSettings.from_quality(
            args.quality,
            width=args.width,
            height=args.height if args.height is not None else args.width,
            seed=args.seed,
            workers=args.workers,
            tone_map=args.tone_map,
        ).with_overrides(samples_per_pixel=args.samples, max_depth=args.depth)
    except ValueError as e:
        logger.error("Invalid settings: %s", e)
        return 2

    world, lights, camera = SCENES[args.scene](aspect_ratio=settings.aspect_ratio)
    if args.no_light_sampling:
        lights = None

    renderer = Renderer(settings)
    radiance = renderer.render(world, camera, lights)
    renderer.save(radiance, args.output)
    return 0

if __name__ == "__main__":
    sys.exit(main())
