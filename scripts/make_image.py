"""
Render a fractal to an image file.

Run:
    python scripts/make_image.py --config configs/mandelbrot.yaml
    python scripts/make_image.py --fractal julia --c "-0.8+0.156j" --palette ocean --outfile figures/julia.png

Flags given on the command line override values from --config.
"""

import argparse
import os
import sys
import time
from pathlib import Path

# Ensure repository root is on sys.path so `from fractal_canvas...` works when
# running this script directly (e.g. `python scripts/make_image.py`).
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from fractal_canvas.canvas import Viewport, evaluate
from fractal_canvas.config import RESOLUTIONS, RenderConfig, load_config, resolution
from fractal_canvas.field import fractal_field
from fractal_canvas.iterators import FAMILIES, pick_iterator
from fractal_canvas.palette import PALETTES
from fractal_canvas.render import MODES, rasterize, save_image
from fractal_canvas.utils import parse_complex


def build_parser():
    parser = argparse.ArgumentParser(description="Escape-time fractal renderer")
    parser.add_argument("--config", type=str, default=None, help="Path to a render .yaml config")
    parser.add_argument("--fractal", type=str, choices=FAMILIES)
    parser.add_argument("--c", type=str, default=None, help="Julia constant, e.g. '-0.8+0.156j'")
    parser.add_argument("--left", type=float)
    parser.add_argument("--right", type=float)
    parser.add_argument("--top", type=float)
    parser.add_argument("--bottom", type=float)
    parser.add_argument("--resolution", type=str, choices=list(RESOLUTIONS))
    parser.add_argument("--width", type=int)
    parser.add_argument("--height", type=int)
    parser.add_argument("--max_iter", type=int)
    parser.add_argument("--escape", type=float, help="escape radius")
    parser.add_argument("--palette", type=str, choices=list(PALETTES))
    parser.add_argument("--invert", action="store_true", default=None)
    parser.add_argument("--mode", type=str, choices=MODES)
    parser.add_argument("--workers", type=int)
    parser.add_argument("--outfile", type=str)
    return parser


def resolve_config(args) -> RenderConfig:
    cfg = load_config(args.config) if args.config else RenderConfig()

    width, height = args.width, args.height
    if args.resolution:
        width, height = resolution(args.resolution)

    vp = cfg.viewport
    viewport = Viewport(
        left=vp.left if args.left is None else args.left,
        right=vp.right if args.right is None else args.right,
        top=vp.top if args.top is None else args.top,
        bottom=vp.bottom if args.bottom is None else args.bottom,
    )

    return cfg.override(
        fractal=args.fractal,
        julia_c=parse_complex(args.c) if args.c else None,
        viewport=viewport,
        width=width,
        height=height,
        max_iter=args.max_iter,
        escape_radius=args.escape,
        palette=args.palette,
        invert=args.invert,
        mode=args.mode,
        workers=args.workers,
        outfile=args.outfile,
    )


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.config and not Path(args.config).exists():
        print(f"Error: Config file not found: {args.config}")
        return 1

    cfg = resolve_config(args)
    out_path = Path(cfg.outfile)

    print(f"[run] fractal={cfg.fractal}, {cfg.width}x{cfg.height}, max_iter={cfg.max_iter}, "
          f"palette={cfg.palette}{' (inverted)' if cfg.invert else ''}")
    if cfg.julia_c is not None and cfg.fractal != "julia":
        print(f"[run] note: julia constant {cfg.julia_c} ignored for fractal={cfg.fractal}")

    field = fractal_field(pick_iterator(cfg.fractal, k=cfg.julia_c), cfg.escape_radius, cfg.max_iter)

    start = time.time()
    grid = evaluate(cfg.viewport, cfg.width, cfg.height, field, workers=cfg.workers)
    print(f"[run] field evaluated in {time.time() - start:.2f}s")

    start = time.time()
    pixels = rasterize(grid, cfg.width, cfg.height, cfg.build_palette(), mode=cfg.mode)
    print(f"[run] rasterized ({cfg.mode}) in {time.time() - start:.2f}s")

    save_image(pixels, out_path)
    print(f"[run] saved to {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
