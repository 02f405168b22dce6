import numpy as np
import pytest
from pathlib import Path
import sys

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from fractal_canvas.iterators import (
    JULIA_C, escape_count, escape_time, julia, mandelbrot, pick_iterator,
)
from fractal_canvas.field import fractal_field, normalize


@pytest.mark.parametrize("n", [1, 10, 255, 1000])
def test_origin_never_escapes(n):
    assert escape_count(0j, 2.0, n) == n


def test_far_point_escapes_after_one_step():
    # z1 = c, |c| = 10 > 2
    assert mandelbrot(10 + 0j, 2.0, 255) == 1


def test_known_counts():
    """c = 1: z = 1, 2, 5 -> escapes radius 2 on the third update."""
    assert mandelbrot(1 + 0j, 2.0, 255) == 3
    # c = -1 cycles 0, -1, 0, -1 forever
    assert mandelbrot(-1 + 0j, 2.0, 50) == 50


@pytest.mark.parametrize("c", [0.3 + 0.5j, -0.75 + 0.1j, 0.26 + 0.0015j, -1.5 + 0.2j, 0.1 + 0.9j])
def test_conjugate_symmetry(c):
    assert escape_count(c.conjugate(), 4.0, 255) == escape_count(c, 4.0, 255)


def test_julia_seed_outside_radius_is_zero():
    assert julia(5 + 5j, 2.0, 100) == 0


def test_julia_uses_constant():
    """Julia at z with constant k matches the generic loop seeded at z."""
    z = 0.1 + 0.2j
    assert julia(z, 4.0, 255) == escape_time(z, JULIA_C, 4.0, 255)
    assert julia(z, 4.0, 255, k=0j) == 255  # z -> z^2 shrinks toward 0


def test_array_matches_scalar():
    rng = np.random.default_rng(0)
    pts = (rng.uniform(-2, 0.5, 64) + 1j * rng.uniform(-1.2, 1.2, 64)).astype(np.complex64)

    counts = mandelbrot(pts, 4.0, 100)
    assert counts.dtype == np.uint32
    assert counts.shape == (64,)
    for p, n in zip(pts, counts):
        assert mandelbrot(complex(p), 4.0, 100) == n


def test_scalar_returns_int():
    assert isinstance(mandelbrot(0.5 + 0.5j, 4.0, 50), int)


def test_pick_iterator():
    it = pick_iterator("Julia", k=0j)
    assert it(0.5 + 0j, 4.0, 20) == 20
    assert pick_iterator("mandelbrot") is mandelbrot
    with pytest.raises(ValueError):
        pick_iterator("burning_ship")


def test_zero_budget():
    assert mandelbrot(0j, 2.0, 0) == 0


def test_normalize_endpoints():
    assert normalize(255, 255) == 1.0
    assert normalize(0, 255) == 0.0
    assert normalize(64, 256) == pytest.approx(0.5)


def test_normalize_array():
    out = normalize(np.array([0, 25, 100]), 100)
    np.testing.assert_allclose(out, [0.0, 0.5, 1.0], rtol=1e-6)
    assert out.dtype == np.float32


def test_normalize_rejects_zero_budget():
    with pytest.raises(ValueError):
        normalize(1, 0)


def test_fractal_field():
    field = fractal_field(pick_iterator("mandelbrot"), 4.0, 255)
    assert field(0.0, 0.0) == 1.0

    xs = np.array([0.0, 10.0], dtype=np.float32)
    ys = np.zeros(2, dtype=np.float32)
    out = field(xs, ys)
    np.testing.assert_allclose(out, [1.0, np.sqrt(1 / 255)], rtol=1e-6)


def test_boundary_uses_float32_norm():
    """|4 + 0.001i| rounds to exactly 4.0 in float32, so the seed has not escaped yet."""
    assert julia(complex(4.0, 0.001), 4.0, 10) == 1
    pts = np.array([4.0 + 0.001j, 0.001 + 4.0j], dtype=np.complex64)
    np.testing.assert_array_equal(julia(pts, 4.0, 10), [1, 1])
