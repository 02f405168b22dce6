"""
Per-pixel scalar field: escape count squashed into [0, 1].
"""

import numpy as np


def normalize(count, max_iter: int):
    """
    sqrt(count / max_iter) in float32.

    The square root stretches low counts over a wider range so the exterior
    does not collapse into a thin band next to the interior.
    """
    if max_iter <= 0:
        raise ValueError("max_iter must be positive")
    value = np.sqrt(np.asarray(count, dtype=np.float32) / np.float32(max_iter))
    if value.ndim == 0:
        return float(value)
    return value


def fractal_field(iterator, escape_radius: float, max_iter: int):
    """
    Bind a kernel from `pick_iterator` into a function of plane coordinates.

    The returned field(x, y) works elementwise on scalars or float32 arrays
    and returns normalized values in [0, 1].
    """
    if max_iter <= 0:
        raise ValueError("max_iter must be positive")

    def field(x, y):
        x = np.asarray(x, dtype=np.float32)
        y = np.asarray(y, dtype=np.float32)
        c = np.empty(np.broadcast(x, y).shape, dtype=np.complex64)
        c.real = x
        c.imag = y
        return normalize(iterator(c, escape_radius, max_iter), max_iter)

    return field
