"""
Color gradients.

A Palette is an ordered list of stops (position in [0, 1], RGB color),
sorted ascending by position. Two lookups are offered:

- color(v):          piecewise-linear blend of the two stops around v,
                     truncated to uint8 per channel; clamped at both ends.
- nearest_color(v):  color of the stop closest to v. On a tie the first stop
                     in ascending order wins. This follows from scanning for a
                     strict minimum and carries no other meaning.

Positions are float32 and all blending is done in float32.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np

Color = Tuple[int, int, int]
Stop = Tuple[float, Color]


def _as_color(color) -> Color:
    rgb = tuple(int(ch) for ch in color)
    if len(rgb) != 3 or any(ch < 0 or ch > 255 for ch in rgb):
        raise ValueError(f"color must be 3 channels in 0..255, got {color!r}")
    return rgb


def _check_value(value):
    if not (0.0 <= value <= 1.0):
        raise ValueError(f"value must be between 0 and 1, got {value!r}")


class Palette:
    """Sorted, immutable sequence of gradient stops. Build with uniform() or levels()."""

    def __init__(self, stops: Iterable[Stop]):
        stops = [(np.float32(pos), _as_color(col)) for pos, col in stops]
        if len(stops) < 2:
            raise ValueError("must have at least 2 colors")
        for pos, _ in stops:
            if not (0.0 <= pos <= 1.0):
                raise ValueError("value must be between 0 and 1")
        if any(a[0] > b[0] for a, b in zip(stops, stops[1:])):
            raise ValueError("stops must be sorted by position")

        self._positions = np.array([pos for pos, _ in stops], dtype=np.float32)
        self._colors = tuple(col for _, col in stops)
        self._table = np.array(self._colors, dtype=np.float32)
        self._positions.flags.writeable = False

    # -- construction -----------------------------------------------------

    @classmethod
    def uniform(cls, colors: Sequence) -> "Palette":
        """Space the colors evenly over [0, 1], keeping their order."""
        colors = list(colors)
        if len(colors) < 2:
            raise ValueError("must have at least 2 colors")
        last = np.float32(len(colors) - 1)
        return cls((np.float32(i) / last, col) for i, col in enumerate(colors))

    @classmethod
    def levels(cls, stops: Iterable) -> "Palette":
        """Build from explicit (position, color) pairs in any order."""
        # sorted() is stable, so equal positions keep their input order
        return cls(sorted(stops, key=lambda stop: float(stop[0])))

    def inverse(self) -> "Palette":
        """Mirror every position (p -> 1 - p); colors are unchanged."""
        one = np.float32(1.0)
        return Palette.levels((one - pos, col) for pos, col in zip(self._positions, self._colors))

    # -- accessors --------------------------------------------------------

    @property
    def positions(self) -> np.ndarray:
        return self._positions

    @property
    def colors(self) -> Tuple[Color, ...]:
        return self._colors

    @property
    def stops(self) -> List[Stop]:
        return [(float(pos), col) for pos, col in zip(self._positions, self._colors)]

    def __len__(self):
        return len(self._colors)

    def __repr__(self):
        return f"Palette({self.stops!r})"

    # -- scalar lookups ---------------------------------------------------

    def color(self, value: float) -> Color:
        _check_value(value)
        value = np.float32(value)
        positions = self._positions

        if value <= positions[0]:
            return self._colors[0]

        for i in range(len(positions) - 1):
            lo, hi = positions[i], positions[i + 1]
            if lo <= value <= hi:
                return _interpolate((value - lo) / (hi - lo), self._colors[i + 1], self._colors[i])

        return self._colors[-1]

    def nearest_color(self, value: float) -> Color:
        _check_value(value)
        value = np.float32(value)

        best = 0
        best_dist = abs(self._positions[0] - value)
        for i in range(1, len(self._positions)):
            dist = abs(self._positions[i] - value)
            if dist < best_dist:
                best, best_dist = i, dist
        return self._colors[best]

    # -- batch lookups ----------------------------------------------------

    def colors_for(self, values) -> np.ndarray:
        """Vectorised color(): (..., ) float values -> (..., 3) uint8."""
        values = self._check_values(values)
        positions = self._positions
        n = len(positions)

        # first stop >= value closes the bracketing pair
        upper = np.clip(np.searchsorted(positions, values, side="left"), 1, n - 1)
        lo = positions[upper - 1]
        hi = positions[upper]
        with np.errstate(divide="ignore", invalid="ignore"):
            frac = (values - lo) / (hi - lo)
        frac = np.asarray(frac)[..., None]
        blend = (np.float32(1.0) - frac) * self._table[upper - 1] + frac * self._table[upper]
        out = np.clip(np.nan_to_num(blend), 0, 255).astype(np.uint8)

        out[values <= positions[0]] = self._colors[0]
        out[values > positions[-1]] = self._colors[-1]
        return out

    def nearest_colors_for(self, values) -> np.ndarray:
        """Vectorised nearest_color(): (..., ) float values -> (..., 3) uint8."""
        values = self._check_values(values)
        dist = np.abs(self._positions - values[..., None])
        # argmin returns the first minimum, same tie-break as the scalar scan
        index = np.argmin(dist, axis=-1)
        return self._table[index].astype(np.uint8)

    @staticmethod
    def _check_values(values) -> np.ndarray:
        values = np.asarray(values, dtype=np.float32)
        if not np.all((values >= 0.0) & (values <= 1.0)):
            raise ValueError("value must be between 0 and 1")
        return values


def _interpolate(frac, upper: Color, lower: Color) -> Color:
    """Blend channel by channel, truncating toward zero."""
    if not (0.0 <= frac <= 1.0):
        raise ValueError("value must be between 0 and 1")
    one = np.float32(1.0)
    frac = np.float32(frac)
    return tuple(
        int(min(255.0, (one - frac) * np.float32(lo) + frac * np.float32(hi)))
        for lo, hi in zip(lower, upper)
    )


# ---------------------------------------------------------------------------
# Bundled palettes
# ---------------------------------------------------------------------------

def monochrome() -> Palette:
    return Palette.uniform([
        (0, 0, 0),        # black
        (64, 64, 64),     # dark gray
        (128, 128, 128),  # gray
        (192, 192, 192),  # light gray
        (255, 255, 255),  # white
    ])


def ocean() -> Palette:
    return Palette.uniform([
        (7, 3, 89),       # deep ocean blue
        (9, 106, 183),    # mid ocean blue
        (78, 168, 222),   # shallow water blue
        (144, 224, 239),  # surf blue
        (0, 0, 0),        # black
    ])


def dragon() -> Palette:
    return Palette.uniform([
        (17, 9, 0),       # deep ember
        (128, 9, 0),      # smoldering red
        (255, 150, 0),    # blaze orange
        (255, 255, 102),  # hot yellow
        (0, 0, 0),        # black
    ])


def fire() -> Palette:
    return Palette.uniform([
        (17, 9, 0),       # deep ember
        (128, 9, 0),      # smoldering red
        (255, 69, 0),     # bright fire
        (255, 150, 0),    # blaze orange
        (255, 255, 102),  # hot yellow
    ])


def wiki() -> Palette:
    return Palette.uniform([
        (66, 30, 15),     # dark brown
        (25, 7, 26),      # dark violet
        (4, 4, 73),       # darkest blue
        (104, 151, 199),  # dark blue
        (78, 9, 0),       # smoldering red
        (134, 181, 229),  # dark blue
        (171, 206, 218),  # lightest blue
        (241, 233, 191),  # lightest yellow
        (255, 170, 0),    # dirty yellow
        (204, 128, 0),    # brown 0
        (106, 52, 3),     # brown 1
        (0, 0, 0),        # black
    ])


def rgb() -> Palette:
    return Palette.uniform([
        (255, 0, 0),
        (0, 255, 0),
        (0, 0, 255),
    ])


PALETTES = {
    "monochrome": monochrome,
    "ocean": ocean,
    "dragon": dragon,
    "fire": fire,
    "wiki": wiki,
    "rgb": rgb,
}


def get_palette(name: str, invert: bool = False) -> Palette:
    try:
        palette = PALETTES[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown palette: {name} (choose from {', '.join(PALETTES)})") from None
    return palette.inverse() if invert else palette
