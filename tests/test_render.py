import numpy as np
import pytest
from pathlib import Path
import sys

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from fractal_canvas.canvas import Viewport, evaluate
from fractal_canvas.field import fractal_field, normalize
from fractal_canvas.iterators import mandelbrot, pick_iterator
from fractal_canvas.palette import Palette, wiki
from fractal_canvas.render import draw, draw_nearest, rasterize, render_grid, save_image

BW = Palette.uniform([(0, 0, 0), (255, 255, 255)])
VIEW = Viewport(left=-2.0, right=0.5, top=1.125, bottom=-1.125)


def test_rasterize_pointwise():
    grid = np.array([0.0, 0.5, 1.0, 0.25, 0.75, 1.0], dtype=np.float32)
    img = rasterize(grid, 3, 2, BW)

    assert img.shape == (2, 3, 3)
    assert img.dtype == np.uint8
    # pixel (x=1, y=0) <- grid[1]
    assert tuple(img[0, 1]) == (127, 127, 127)
    # pixel (x=0, y=1) <- grid[3]
    assert tuple(img[1, 0]) == (63, 63, 63)
    assert tuple(img[1, 2]) == (255, 255, 255)


def test_rasterize_nearest():
    grid = np.array([0.2, 0.5, 0.8, 1.0], dtype=np.float32)
    img = draw_nearest(grid, 2, 2, BW)
    assert [tuple(px) for px in img.reshape(-1, 3)] == [
        (0, 0, 0), (0, 0, 0), (255, 255, 255), (255, 255, 255),
    ]


def test_rasterize_checks_input():
    with pytest.raises(ValueError):
        rasterize(np.zeros(5, dtype=np.float32), 2, 2, BW)
    with pytest.raises(ValueError):
        rasterize(np.zeros(4, dtype=np.float32), 2, 2, BW, mode="smooth")
    with pytest.raises(ValueError):
        rasterize(np.full(4, 1.5, dtype=np.float32), 2, 2, BW)


def test_end_to_end_is_deterministic():
    """4x4 Mandelbrot, radius 4, 255 iterations, black->white, rendered repeatedly."""
    field = fractal_field(pick_iterator("mandelbrot"), 4.0, 255)

    first = draw(evaluate(VIEW, 4, 4, field), 4, 4, BW)
    for workers in (1, 2, 8):
        grid = evaluate(VIEW, 4, 4, field, workers=workers, chunk_size=3)
        np.testing.assert_array_equal(draw(grid, 4, 4, BW), first)

    # pixel (0, 0) is c = -2 - 1.125i, which escapes radius 4 on the third update
    assert mandelbrot(complex(-2.0, -1.125), 4.0, 255) == 3
    assert tuple(first[0, 0]) == BW.color(normalize(3, 255))
    # pixel (3, 2) is c = -0.125 + 0i, inside the set
    assert tuple(first[2, 3]) == (255, 255, 255)


def test_render_grid_matches_pipeline():
    img = render_grid(palette=wiki(), width=16, height=12, max_iter=50, workers=2)
    field = fractal_field(pick_iterator("mandelbrot"), 4.0, 50)
    expected = draw(evaluate(VIEW, 16, 12, field, workers=1), 16, 12, wiki())
    np.testing.assert_array_equal(img, expected)


def test_render_grid_julia_nearest():
    img = render_grid(palette=BW, fractal="julia", k=-0.8 + 0.156j,
                      viewport=Viewport(-1.6, 1.6, 0.9, -0.9),
                      width=10, height=6, max_iter=40, mode="nearest")
    assert img.shape == (6, 10, 3)
    assert set(np.unique(img)) <= {0, 255}


def test_save_image(tmp_path):
    from PIL import Image

    img = draw(np.linspace(0, 1, 12, dtype=np.float32), 4, 3, BW)
    out = save_image(img, tmp_path / "sub" / "ramp.png")

    assert out.exists()
    with Image.open(out) as im:
        assert im.size == (4, 3)
        np.testing.assert_array_equal(np.asarray(im.convert("RGB")), img)


def test_module_documented():
    import fractal_canvas.render as render

    assert "Rasterization" in render.__doc__
