from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Tuple


@dataclass
class PathPoint:
    """
    A point on a NumericalPath, used for both input and output of queries.

    The caller owns it: set `p` (and optionally keep `idx` from a previous
    query as a search hint), pass it to a query, read the outputs back.
    `idx = -1` means "no hint". `sequence` records which table build the
    hint came from (-1: unknown, the hint is trusted); a hint from an
    older build is ignored.

    normal is a unit vector on the left of the direction of increasing p;
    (slope_x, slope_y) is the unit tangent in the direction of increasing p.
    """

    p: float = 0.0
    radius_flag: bool = False
    x: float = 0.0
    y: float = 0.0
    slope: float = math.nan        # may be +-inf on vertical sections
    radius: float = math.nan       # radius of curvature, only with radius_flag
    direction: int = 1             # +1: x grows with p (or y, if vertical); -1 otherwise
    idx: int = -1
    sequence: int = -1
    normal_x: float = 0.0
    normal_y: float = 0.0
    normal_xdp: float = 0.0
    normal_ydp: float = 0.0
    slope_x: float = 0.0
    slope_y: float = 0.0
    dxdp: float = 0.0
    dydp: float = 0.0

    def copy_from(self, other: "PathPoint") -> None:
        for f in fields(self):
            setattr(self, f.name, getattr(other, f.name))

    def reset_hint(self) -> None:
        self.idx = -1
        self.sequence = -1

    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    def normal(self) -> Tuple[float, float]:
        return self.normal_x, self.normal_y

    def tangent(self) -> Tuple[float, float]:
        """Unit tangent in direction of increasing p."""
        return self.slope_x, self.slope_y

    def distance_to_normal_line(self, point) -> float:
        """
        Distance from point (x, y) to the line through this point along the normal.

        Line through (x0, y0) with direction (nx, ny):
          -ny x + nx y + (ny x0 - nx y0) = 0
        """
        px, py = float(point[0]), float(point[1])
        err = abs(self.normal_x * self.normal_x + self.normal_y * self.normal_y - 1.0)
        assert err < 1e-12, f"normal is not a unit vector: ({self.normal_x}, {self.normal_y})"
        if abs(self.normal_x) < 1e-16:
            # vertical normal
            return abs(px - self.x)
        a = -self.normal_y
        b = self.normal_x
        c = self.normal_y * self.x - self.normal_x * self.y
        return abs(a * px + b * py + c) / math.hypot(a, b)
