"""
Rasterization: scalar grid -> RGB pixels through a Palette, plus the
end-to-end render_grid pipeline and the Pillow image sink.
"""

import numpy as np
from pathlib import Path

from fractal_canvas.canvas import Viewport, evaluate
from fractal_canvas.field import fractal_field
from fractal_canvas.iterators import pick_iterator

MODES = ("interpolated", "nearest")


def rasterize(grid, width, height, palette, mode="interpolated"):
    """
    Map a flat row-major grid of values in [0, 1] through a palette.

    mode:
        "interpolated" -> palette.color per pixel
        "nearest"      -> palette.nearest_color per pixel

    Returns a (height, width, 3) uint8 array; pixel (x, y) comes from
    grid[y * width + x].
    """
    grid = np.asarray(grid, dtype=np.float32)
    if grid.size != width * height:
        raise ValueError(f"grid has {grid.size} values, expected {width}x{height}")

    values = grid.reshape(height, width)
    if mode == "interpolated":
        return palette.colors_for(values)
    if mode == "nearest":
        return palette.nearest_colors_for(values)
    raise ValueError(f"Unknown mode: {mode}")


def draw(grid, width, height, palette):
    return rasterize(grid, width, height, palette, mode="interpolated")


def draw_nearest(grid, width, height, palette):
    return rasterize(grid, width, height, palette, mode="nearest")


def render_grid(
    *,
    palette,
    fractal="mandelbrot",
    k=None,
    viewport=Viewport(-2.0, 0.5, 1.125, -1.125),
    width=1000, height=1000,
    max_iter=255,
    escape_radius=4.0,
    mode="interpolated",
    workers=None,
):
    """
    Render a fractal straight to pixels.

      render_grid(palette=wiki(), fractal="mandelbrot", ...)
      render_grid(palette=ocean(), fractal="julia", k=-0.8+0.156j, ...)
    """
    field = fractal_field(pick_iterator(fractal, k=k), escape_radius, max_iter)
    grid = evaluate(viewport, width, height, field, workers=workers)
    return rasterize(grid, width, height, palette, mode=mode)


def save_image(pixels, path):
    """Write a (height, width, 3) uint8 buffer; format follows the extension."""
    from PIL import Image

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(np.asarray(pixels, dtype=np.uint8)).save(path)
    return path
