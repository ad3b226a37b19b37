# main.py
"""Command-line driver: build a demo scene, render it, write a PNG."""
import argparse
import logging
import os
import sys
import numpy as np
from geometry.world import build_world
from renderer.raytracer import MAX_DEPTH, SAMPLES_PER_PIXEL, Renderer
from renderer.tone_mapping import save_png, to_rgb8
from scenes import SCENES, build_scene

logger = logging.getLogger("raytracer")


LOG_HANDLER_NAME = "raytracer-console"


def init_logger(verbose: bool = False):
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    # Repeated calls in one process reuse the console handler.
    if any(h.get_name() == LOG_HANDLER_NAME for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.set_name(LOG_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"))
    root.addHandler(handler)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Stochastic path tracer")
    parser.add_argument("--scene", choices=sorted(SCENES), default="random_spheres",
                        help="Scene to render")
    parser.add_argument("--width", type=int, default=400, help="Image width in pixels")
    parser.add_argument("--aspect-ratio", type=float, default=None,
                        help="Width / height; defaults to the scene's own ratio")
    parser.add_argument("--samples", type=int, default=SAMPLES_PER_PIXEL,
                        help="Samples per pixel")
    parser.add_argument("--max-depth", type=int, default=MAX_DEPTH,
                        help="Maximum number of bounces per path")
    parser.add_argument("--workers", type=int, default=os.cpu_count() or 1,
                        help="Worker processes")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--output", default="render.png", help="Output PNG path")
    parser.add_argument("--texture", default=None, help="Image for textured scenes")
    parser.add_argument("--preview", action="store_true",
                        help="Show the finished image in a window")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def show_preview(rgb8: np.ndarray, title: str = "render"):
    """Display an (height, width, 3) uint8 image until the window is closed or Esc is pressed."""
    import pygame

    pygame.init()
    try:
        height, width = rgb8.shape[:2]
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        # pygame surfaces are indexed (x, y).
        surface = pygame.surfarray.make_surface(rgb8.swapaxes(0, 1))
        screen.blit(surface, (0, 0))
        pygame.display.flip()
        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()


def main(argv=None) -> int:
    args = parse_args(argv)
    init_logger(args.verbose)

    scene_seed, render_seed = np.random.SeedSequence(args.seed).spawn(2)
    scene_rng = np.random.default_rng(scene_seed)

    try:
        scene = build_scene(args.scene, scene_rng, args.texture)
        world = build_world(scene.objects, scene.time0, scene.time1, scene_rng)
        camera = scene.camera(args.aspect_ratio)
        height = max(1, int(args.width / camera.aspect_ratio))
        renderer = Renderer(args.width, height, args.samples, args.max_depth,
                            args.workers, seed=int(render_seed.generate_state(1)[0]))
    except ValueError as e:
        logger.error("%s", e)
        return 2

    image = renderer.render(camera, world, scene.background)
    save_png(args.output, image)
    logger.info("Wrote %s", args.output)

    if args.preview:
        show_preview(to_rgb8(image), args.scene)
    return 0


if __name__ == "__main__":
    sys.exit(main())
