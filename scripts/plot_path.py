from __future__ import annotations

import argparse
import os
from typing import List, Optional

import matplotlib.pyplot as plt
import numpy as np

from numpath.curves import CURVES, make_curve
from numpath.numerical_path import NumericalPath, PathParams


def draw_path(path: NumericalPath, ax, point_count: int = 400, normals: int = 16, normal_len: float = 0.3):
    """Polyline from the path's points iterator plus a few normals along it."""
    pts = np.array(list(path.iterator(point_count)), dtype=float)
    ax.plot(pts[:, 0], pts[:, 1], "-", lw=1.5, label=path.table.name)

    if normals > 0:
        ps = np.linspace(path.start_p, path.finish_p, normals, endpoint=not path.closed_loop)
        for p in ps:
            ppt = path.slope_at(float(p))
            ax.plot([ppt.x, ppt.x + normal_len * ppt.normal_x],
                    [ppt.y, ppt.y + normal_len * ppt.normal_y], "r-", lw=0.8)

    b = path.bounds
    pad = 0.1 * max(b.width, b.height, 1e-9)
    ax.set_xlim(b.x_min - pad, b.x_max + pad)
    ax.set_ylim(b.y_min - pad, b.y_max + pad)
    ax.set_aspect("equal")
    ax.grid(True, alpha=0.3)
    return ax


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Tabulate a named curve and plot it with its normals.")
    p.add_argument("--curve", default="loop", choices=sorted(CURVES))
    p.add_argument("--samples", type=int, default=PathParams().sample_count, help="Table size")
    p.add_argument("--points", type=int, default=400, help="Points drawn along the path")
    p.add_argument("--normals", type=int, default=16, help="Number of normals drawn (0 = none)")
    p.add_argument("--out", default="outputs/path.png", help="Output .png path")
    p.add_argument("--show", action="store_true")
    args = p.parse_args(argv)

    path = NumericalPath(make_curve(args.curve), PathParams(sample_count=args.samples))
    print(path)

    fig, ax = plt.subplots(figsize=(7, 6))
    draw_path(path, ax, point_count=args.points, normals=args.normals)
    ax.set_title(f"{args.curve}: length {path.length:.4f}")

    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    fig.savefig(args.out, dpi=120)
    print(f"saved {args.out}")
    if args.show:
        plt.show()
    plt.close(fig)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
