#!/usr/bin/env python3
"""
SphereForge - A Python Path Tracer

Main entry point for rendering scenes.
"""

import argparse
import logging
import os
import sys
import time
from pathlib import Path

import numpy as np

from sphereforge.errors import ConfigurationError
from sphereforge.image import save_image
from sphereforge.renderer import Renderer, RenderSettings
from sphereforge.scenes import SCENES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='SphereForge - A Python Path Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene random --output render.png
  python main.py --height 720 --samples 512 --output hd_render.png
  python main.py --scene bubble --width 400 --height 300 --seed 7
        '''
    )

    parser.add_argument('--height', type=int, default=225, help='Image height (default: 225)')
    parser.add_argument('--aspect', type=float, default=16.0 / 9.0,
                        help='Width / height ratio used when --width is omitted (default: 16/9)')
    parser.add_argument('--width', type=int, default=None, help='Image width (overrides --aspect)')
    parser.add_argument('--samples', type=int, default=100, help='Samples per pixel (default: 100)')
    parser.add_argument('--depth', type=int, default=50, help='Max ray depth (default: 50)')
    parser.add_argument('--threads', type=int, default=0, help='Number of threads (0=auto)')
    parser.add_argument('--tile-size', type=int, default=16, help='Tile edge in pixels (default: 16)')
    parser.add_argument('--seed', type=int, default=None, help='Seed for a reproducible render')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('--scene', type=str, default='random', choices=sorted(SCENES),
                        help='Scene to render (default: random)')
    parser.add_argument('--verbose', action='store_true', help='Log per-tile progress')
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    print("=" * 60)
    print("SphereForge Path Tracer")
    print("=" * 60)
    print(f"CPU Cores: {os.cpu_count()}")

    common = dict(
        samples_per_pixel=args.samples,
        max_depth=args.depth,
        tile_size=args.tile_size,
        num_threads=args.threads,
        seed=args.seed
    )
    try:
        if args.width is not None:
            settings = RenderSettings(width=args.width, height=args.height, **common)
        else:
            settings = RenderSettings.from_aspect_ratio(args.height, args.aspect, **common)

        scene_factory, camera_factory = SCENES[args.scene]
        camera = camera_factory(settings.aspect_ratio)
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Threads: {settings.num_threads}")

    print(f"\nCreating scene: {args.scene}")
    scene_rng = np.random.default_rng(args.seed)
    world = scene_factory(scene_rng)
    print(f"  Objects in scene: {len(world)}")

    renderer = Renderer(settings)

    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    image = renderer.render(world, camera)

    elapsed = time.time() - start_time
    print(f"\nRender took {elapsed:.2f} seconds")

    output_path = Path(args.output)
    print(f"\nSaving to: {args.output}")
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        save_image(image, output_path)
    except (OSError, ValueError) as e:
        print(f"Could not write image: {e}", file=sys.stderr)
        return 2

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
