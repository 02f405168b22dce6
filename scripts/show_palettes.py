"""
Draw every bundled palette as a horizontal swatch, interpolated and nearest.

Run:
    python scripts/show_palettes.py --outfile figures/palettes.png
"""

import argparse
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from fractal_canvas.palette import PALETTES
from fractal_canvas.render import draw, draw_nearest


def swatch(palette, width=256, height=16, nearest=False):
    ramp = np.tile(np.linspace(0.0, 1.0, width, dtype=np.float32), height)
    if nearest:
        return draw_nearest(ramp, width, height, palette)
    return draw(ramp, width, height, palette)


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument("--outfile", type=str, default="figures/palettes.png")
    parser.add_argument("--invert", action="store_true")
    args = parser.parse_args(argv)

    names = list(PALETTES)
    fig, axes = plt.subplots(len(names), 2, figsize=(8, 0.6 * len(names) + 0.6))

    for row, name in enumerate(names):
        palette = PALETTES[name]()
        if args.invert:
            palette = palette.inverse()
        for col, nearest in enumerate((False, True)):
            ax = axes[row, col]
            ax.imshow(swatch(palette, nearest=nearest), aspect="auto")
            ax.set_xticks([])
            ax.set_yticks([])
            if col == 0:
                ax.set_ylabel(name, rotation=0, ha="right", va="center")
            if row == 0:
                ax.set_title("nearest" if nearest else "interpolated")

    out_path = Path(args.outfile)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"[run] palette swatches saved to {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
