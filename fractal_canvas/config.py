"""
Render settings.

Plain values passed into the pipeline. A YAML file may override any of them:

    fractal: julia
    julia_c: "-0.8+0.156j"
    viewport: {left: -1.6, right: 1.6, top: 0.9, bottom: -0.9}
    resolution: fhd          # or width/height
    max_iter: 255
    escape_radius: 4.0
    palette: {name: ocean, invert: false, mode: interpolated}
    workers: null
    outfile: figures/julia.png
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

import yaml

from fractal_canvas.canvas import Viewport
from fractal_canvas.iterators import FAMILIES
from fractal_canvas.palette import PALETTES, get_palette
from fractal_canvas.render import MODES
from fractal_canvas.utils import parse_complex

HD = (1280, 720)
FHD = (1920, 1080)
QHD = (2560, 1440)
UHD = (3840, 2160)

RESOLUTIONS = {"hd": HD, "fhd": FHD, "qhd": QHD, "uhd": UHD}

MAX_ITERS = 255
ESCAPE_RADIUS = 4.0
DEFAULT_VIEWPORT = Viewport(left=-2.0, right=0.5, top=1.125, bottom=-1.125)


@dataclass
class RenderConfig:
    fractal: str = "mandelbrot"
    julia_c: Optional[complex] = None
    viewport: Viewport = field(default_factory=lambda: DEFAULT_VIEWPORT)
    width: int = 1000
    height: int = 1000
    max_iter: int = MAX_ITERS
    escape_radius: float = ESCAPE_RADIUS
    palette: str = "wiki"
    invert: bool = False
    mode: str = "interpolated"
    workers: Optional[int] = None
    outfile: str = "figures/mandelbrot.png"

    def __post_init__(self):
        if self.fractal not in FAMILIES:
            raise ValueError(f"Unknown fractal: {self.fractal}")
        if self.palette not in PALETTES:
            raise ValueError(f"Unknown palette: {self.palette}")
        if self.mode not in MODES:
            raise ValueError(f"Unknown mode: {self.mode}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"width and height must be positive, got {self.width}x{self.height}")
        if self.max_iter <= 0:
            raise ValueError("max_iter must be positive")

    def build_palette(self):
        return get_palette(self.palette, invert=self.invert)

    def override(self, **changes):
        """Copy with every non-None change applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def resolution(name: str):
    try:
        return RESOLUTIONS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown resolution: {name} (choose from {', '.join(RESOLUTIONS)})") from None


def config_from_dict(cfg: dict) -> RenderConfig:
    cfg = cfg or {}
    defaults = RenderConfig()

    width = int(cfg.get("width", defaults.width))
    height = int(cfg.get("height", defaults.height))
    if cfg.get("resolution"):
        width, height = resolution(cfg["resolution"])

    vp = cfg.get("viewport") or {}
    viewport = Viewport(
        left=float(vp.get("left", defaults.viewport.left)),
        right=float(vp.get("right", defaults.viewport.right)),
        top=float(vp.get("top", defaults.viewport.top)),
        bottom=float(vp.get("bottom", defaults.viewport.bottom)),
    )

    pal = cfg.get("palette") or {}
    if isinstance(pal, str):
        pal = {"name": pal}

    julia_c = cfg.get("julia_c")
    workers = cfg.get("workers")

    return RenderConfig(
        fractal=str(cfg.get("fractal", defaults.fractal)).lower(),
        julia_c=parse_complex(julia_c) if julia_c is not None else None,
        viewport=viewport,
        width=width,
        height=height,
        max_iter=int(cfg.get("max_iter", defaults.max_iter)),
        escape_radius=float(cfg.get("escape_radius", defaults.escape_radius)),
        palette=str(pal.get("name", defaults.palette)).lower(),
        invert=bool(pal.get("invert", defaults.invert)),
        mode=str(pal.get("mode", defaults.mode)).lower(),
        workers=int(workers) if workers is not None else None,
        outfile=str(cfg.get("outfile", defaults.outfile)),
    )


def load_config(path) -> RenderConfig:
    with open(Path(path), "r") as f:
        cfg = yaml.safe_load(f)
    return config_from_dict(cfg)
