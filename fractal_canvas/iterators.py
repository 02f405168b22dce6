"""
Escape-time kernels.

Every family shares one loop, `escape_time(z0, c, ...)`:

    z = z0
    while |z| <= escape_radius and n < max_iter:
        z = z*z + c
        n += 1

Mandelbrot seeds with 0 and adds the point, Julia seeds with the point and
adds a fixed constant. The magnitude test is float32 hypot(re, im) against
escape_radius. Squaring both sides rounds differently near the boundary and
changes counts there.

All kernels accept a scalar or a numpy array of points. Arrays are iterated
with a mask so each element stops exactly where the scalar loop would.
"""

import numpy as np

JULIA_C = complex(-0.8, 0.156)

FAMILIES = ("mandelbrot", "julia")


def _norm(z):
    return np.hypot(z.real, z.imag)


def escape_time(z0, c, escape_radius: float, max_iter: int):
    """
    Count iterations of z -> z^2 + c from z0 until |z| > escape_radius
    or max_iter updates have been applied.

    Returns an int for scalar input, a uint32 array otherwise.
    """
    z = np.array(z0, dtype=np.complex64)
    c = np.broadcast_to(np.asarray(c, dtype=np.complex64), z.shape)
    radius = np.float32(escape_radius)

    counts = np.zeros(z.shape, dtype=np.uint32)
    with np.errstate(over="ignore", invalid="ignore"):
        active = _norm(z) <= radius
        for _ in range(int(max_iter)):
            if not active.any():
                break
            za = z[active]
            z[active] = za * za + c[active]
            counts[active] += 1
            active &= _norm(z) <= radius

    if counts.ndim == 0:
        return int(counts)
    return counts


def mandelbrot(c, escape_radius: float, max_iter: int):
    return escape_time(np.zeros(np.shape(c), dtype=np.complex64), c, escape_radius, max_iter)


def julia(z, escape_radius: float, max_iter: int, k: complex = JULIA_C):
    return escape_time(z, k, escape_radius, max_iter)


def pick_iterator(name: str, k=None):
    """Return a kernel with signature iterator(point, escape_radius, max_iter) -> counts.

    `k` is the Julia constant; ignored for mandelbrot.
    """
    name = name.lower()

    if name == "mandelbrot":
        return mandelbrot

    if name == "julia":
        k = JULIA_C if k is None else complex(k)

        def iterator(z, escape_radius, max_iter):
            return julia(z, escape_radius, max_iter, k=k)
        return iterator

    raise ValueError(f"Unknown fractal: {name}")


def escape_count(c, radius: float, max_iters: int, variant: str = "mandelbrot", k=None):
    """Escape count of point(s) `c` under the named family."""
    return pick_iterator(variant, k=k)(c, radius, max_iters)
