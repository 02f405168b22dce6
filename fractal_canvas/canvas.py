"""
Viewport to pixel mapping and parallel evaluation of a scalar field.

Pixel (px, py) maps to

    x = px * (right - left) / width  + left
    y = py * (top - bottom) / height + bottom

so row 0 of the grid is the *bottom* edge of the viewport. The grid is flat
and row-major: index = py * width + px.
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np

DEFAULT_CHUNK_SIZE = 4096


@dataclass(frozen=True)
class Viewport:
    left: float
    right: float
    top: float
    bottom: float

    @property
    def extent(self):
        """[left, right, bottom, top], the order matplotlib's imshow expects."""
        return [self.left, self.right, self.bottom, self.top]


def _check_size(width: int, height: int):
    if width <= 0 or height <= 0:
        raise ValueError(f"width and height must be positive, got {width}x{height}")


def plane_coordinates(viewport: Viewport, width: int, height: int, index):
    """Return float32 (x, y) plane coordinates for flat pixel indices."""
    _check_size(width, height)
    index = np.asarray(index, dtype=np.int64)

    left = np.float32(viewport.left)
    bottom = np.float32(viewport.bottom)
    scale_x = (np.float32(viewport.right) - left) / np.float32(width)
    scale_y = (np.float32(viewport.top) - bottom) / np.float32(height)

    px = (index % width).astype(np.float32)
    py = (index // width).astype(np.float32)
    return px * scale_x + left, py * scale_y + bottom


def evaluate(viewport: Viewport, width: int, height: int, func, workers=None,
             chunk_size: int = DEFAULT_CHUNK_SIZE) -> np.ndarray:
    """
    Evaluate func(x, y) over every pixel and return a flat float32 grid of
    length width * height.

    `func` must be pure and elementwise: it is called with float32 arrays of
    coordinates for a contiguous block of indices, from several threads at
    once. Each block writes only its own slice of the output.
    A function written for one point at a time (Python `if`, `math.*`) must be
    wrapped first, e.g. `np.vectorize(f, otypes=[np.float32])`.

    workers=1 runs in the calling thread; None lets the executor pick.
    """
    _check_size(width, height)
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    n = width * height
    grid = np.empty(n, dtype=np.float32)

    def _fill(start):
        stop = min(start + chunk_size, n)
        x, y = plane_coordinates(viewport, width, height, np.arange(start, stop))
        grid[start:stop] = func(x, y)

    starts = range(0, n, chunk_size)
    if workers == 1 or n <= chunk_size:
        for start in starts:
            _fill(start)
        return grid

    if workers is None:
        workers = min(32, (os.cpu_count() or 1) + 4)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        # list() re-raises the first failure from any block
        list(pool.map(_fill, starts))

    return grid
