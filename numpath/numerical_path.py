"""
NumericalPath: queries on a tabulated parametric curve, addressed by path
distance p (chord length from the start of the curve).

Slope is never interpolated. The table holds dx/dp and dy/dp, those are
interpolated, and slope = (dy/dp) / (dx/dp) is formed only when needed:
slope is unbounded on vertical sections and a cubic fitted through slope
values can swing wildly between samples even where the curve is smooth.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from numpath.errors import NonMonotonicXError
from numpath.interpolation import interp4
from numpath.nearest import find_nearest_global, find_nearest_local
from numpath.path_point import PathPoint
from numpath.points_iterator import PointsIterator
from numpath.search import binary_search, clamp_index
from numpath.table import DATA_POINTS, Bounds, PathTable, build_table


@dataclass(frozen=True)
class PathParams:
    sample_count: int = DATA_POINTS  # table size
    vertical_eps: float = 1e-12      # |dx/dp| below this is a vertical section
    axis_eps: float = 1e-16          # axis-aligned normals when building the table
    local_tol: float = 1e-6          # final step of find_nearest_local


class NumericalPath:
    """
    Table-backed approximation of a parametric curve.

    Build it from any curve with x(t), y(t), t_start, t_finish and
    closed_loop (see numpath.curves). The curve is sampled once; after that
    only the table is used. rebuild() replaces the table; index hints in
    PathPoints from before the rebuild are then ignored.
    """

    def __init__(self, curve, params: Optional[PathParams] = None):
        self.params = params if params is not None else PathParams()
        self.curve = curve
        self.sequence = 0
        self.table: PathTable = build_table(curve, self.params.sample_count, axis_eps=self.params.axis_eps)
        self._init_end_points()

    def _init_end_points(self) -> None:
        # used for the straight-line extension past the ends of open paths
        self.start_point = PathPoint(p=self.table.start_p)
        self.end_point = PathPoint(p=self.table.finish_p)
        self.map_p_to_slope(self.start_point)
        self.map_p_to_slope(self.end_point)

    def rebuild(self, curve=None, sample_count: Optional[int] = None) -> None:
        """Re-tabulate (optionally a different curve or table size), replacing the table."""
        if curve is not None:
            self.curve = curve
        n = self.params.sample_count if sample_count is None else int(sample_count)
        table = build_table(self.curve, n, axis_eps=self.params.axis_eps)
        self.table = table
        self.sequence += 1
        self._init_end_points()

    def __repr__(self) -> str:
        b = self.table.bounds
        return (f"NumericalPath(name={self.table.name!r}, length={self.length:.5f}, "
                f"closed_loop={self.closed_loop}, bounds=({b.x_min:.5g}, {b.y_min:.5g}, {b.x_max:.5g}, {b.y_max:.5g}))")

    # ---- metadata

    @property
    def length(self) -> float:
        return self.table.length

    @property
    def start_p(self) -> float:
        return self.table.start_p

    @property
    def finish_p(self) -> float:
        return self.table.finish_p

    @property
    def closed_loop(self) -> bool:
        return self.table.closed_loop

    @property
    def bounds(self) -> Bounds:
        return self.table.bounds

    is_closed_loop = closed_loop
    bounds_world = bounds

    @property
    def sample_count(self) -> int:
        return self.table.size

    @property
    def x_monotonic(self) -> bool:
        return self.table.x_monotonic

    def iterator(self, point_count: int) -> PointsIterator:
        return PointsIterator(self.table, point_count)

    # ---- p helpers

    def mod_p(self, p: float) -> float:
        """
        p modulo total length for closed loops, else p unchanged (even outside the path).

        e.g. on a unit circle mod_p(2*pi + 1) == 1, mod_p(pi) == pi.
        """
        return self.table.mod_p(p)

    def limit_p(self, p: float) -> float:
        """mod_p for closed loops; clamped to [start_p, finish_p] otherwise."""
        return self.table.limit_p(p)

    def _hint(self, ppt: PathPoint) -> int:
        if ppt.sequence >= 0 and ppt.sequence != self.sequence:
            return -1
        return ppt.idx

    def map_p_to_index(self, p: float) -> int:
        """Largest k with table p[k] <= p; 0 before the start, N-1 past the end."""
        k = binary_search(self.table.p, self.mod_p(p))
        return clamp_index(k, 0, self.table.size - 1)

    table_index_at = map_p_to_index

    # ---- p -> position, slope, normal

    def _extend(self, ppt: PathPoint, end: PathPoint, p: float) -> None:
        # straight line along the tangent at the end point
        radius_flag = ppt.radius_flag
        k = clamp_index(end.idx, 0, self.table.size - 2)
        ppt.copy_from(end)
        ppt.p = p
        ppt.idx = k
        ppt.sequence = self.sequence
        ppt.radius_flag = radius_flag
        ppt.radius = math.inf if radius_flag else math.nan
        ppt.x = end.x + (p - end.p) * end.slope_x
        ppt.y = end.y + (p - end.p) * end.slope_y

    def position_at(self, p: float) -> Tuple[float, float]:
        """
        (x, y) at path distance p. Open paths continue as straight lines past
        their ends; closed loops wrap p around.
        """
        t = self.table
        now_p = self.mod_p(p)
        if not t.closed_loop:
            end = None
            if now_p < t.start_p:
                end = self.start_point
            elif now_p > t.finish_p:
                end = self.end_point
            if end is not None:
                return (end.x + (now_p - end.p) * end.slope_x,
                        end.y + (now_p - end.p) * end.slope_y)
        k = binary_search(t.p, now_p)
        return interp4(t.p, t.x, now_p, k - 1), interp4(t.p, t.y, now_p, k - 1)

    map_p_to_vector = position_at

    def map_p_to_slope(self, ppt: PathPoint) -> None:
        """
        Fill ppt from its path distance ppt.p: position, dx/dp, dy/dp, slope,
        direction, unit tangent, unit normal, derivative of the normal, and
        the radius of curvature when ppt.radius_flag is set.

        ppt.idx is reused when it brackets p, otherwise found by binary search.
        Open paths use a straight-line extension before the start and after
        the end.
        """
        t = self.table
        n = t.size
        save_p = ppt.p
        now_p = self.mod_p(ppt.p)

        k = self._hint(ppt)
        if k < 0 or k > n - 2 or t.p[k] > now_p or t.p[k + 1] <= now_p:
            k = binary_search(t.p, now_p)
        k = clamp_index(k, 0, n - 2)
        ppt.idx = k
        ppt.sequence = self.sequence

        if not t.closed_loop and self.start_point.idx >= 0:
            if now_p < t.start_p:
                self._extend(ppt, self.start_point, now_p)
                return
            if now_p > t.finish_p:
                self._extend(ppt, self.end_point, now_p)
                return

        ppt.x = interp4(t.p, t.x, now_p, k - 1)
        ppt.y = interp4(t.p, t.y, now_p, k - 1)
        ppt.dxdp = interp4(t.p, t.dxdp, now_p, k - 1)
        ppt.dydp = interp4(t.p, t.dydp, now_p, k - 1)

        if abs(ppt.dxdp) < self.params.vertical_eps:
            # vertical
            ppt.dxdp = 0.0
            if ppt.dydp > 0:
                # going up with increasing p
                ppt.direction = 1
                ppt.slope = math.inf
                ppt.slope_x, ppt.slope_y = 0.0, 1.0
                ppt.normal_x, ppt.normal_y = -1.0, 0.0
            else:
                ppt.direction = -1
                ppt.slope = -math.inf
                ppt.slope_x, ppt.slope_y = 0.0, -1.0
                ppt.normal_x, ppt.normal_y = 1.0, 0.0
        else:
            # direction: +1 when x grows with p
            ppt.direction = 1 if ppt.dxdp > 0 else -1
            ppt.slope = ppt.dydp / ppt.dxdp
            s2 = math.sqrt(1.0 + ppt.slope * ppt.slope)
            ppt.slope_x = ppt.direction / s2
            ppt.slope_y = ppt.direction * ppt.slope / s2
            if abs(ppt.slope) > self.params.vertical_eps:
                # tangent turned +90 degrees: stays on the same side as p grows
                ppt.normal_x = -ppt.slope_y
                ppt.normal_y = ppt.slope_x
            else:
                # horizontal
                ppt.normal_x = 0.0
                ppt.normal_y = 1.0 if ppt.direction > 0 else -1.0

        ppt.normal_xdp = interp4(t.p, t.normal_xdp, now_p, k - 1)
        ppt.normal_ydp = interp4(t.p, t.normal_ydp, now_p, k - 1)

        ppt.radius = self._radius(k, ppt.slope) if ppt.radius_flag else math.nan

        assert math.isfinite(ppt.x) and math.isfinite(ppt.y), f"non-finite position at p={save_p}"
        assert math.isfinite(ppt.normal_x) and math.isfinite(ppt.normal_y), f"non-finite normal at p={save_p}"
        assert not math.isnan(ppt.slope), f"slope is NaN at p={save_p}"
        assert ppt.p == save_p

    def slope_at(self, p: float, idx: int = -1, radius: bool = False) -> PathPoint:
        """map_p_to_slope on a new PathPoint; idx is an optional index hint."""
        ppt = PathPoint(p=p, radius_flag=radius, idx=idx)
        self.map_p_to_slope(ppt)
        return ppt

    def _radius(self, k: int, slope: float) -> float:
        """
        Signed radius of curvature ds/dphi near table index k, phi = atan(slope);
        positive where the path turns counterclockwise.

        Slopes b1, b2 are taken from chords on either side of k:

            k-2   k-1    k    k+1   k+2   k+3
            <---- p1 ---->    <---- p2 ---->

        radius = (p2 - p1) / (atan(b2) - atan(b1))

        Infinite within 2 samples of the table ends, on vertical sections
        (sign of slope) and on straight sections.
        """
        t = self.table
        if k < 2 or k > t.size - 4:
            return math.inf
        if not math.isfinite(slope):
            return slope
        a1 = _chord_angle(float(t.x[k] - t.x[k - 2]), float(t.y[k] - t.y[k - 2]))
        a2 = _chord_angle(float(t.x[k + 3] - t.x[k + 1]), float(t.y[k + 3] - t.y[k + 1]))
        dphi = a2 - a1
        if math.isnan(dphi):
            return math.inf
        # atan angles are defined mod pi: chords either side of a vertical tangent
        if dphi > math.pi / 2:
            dphi -= math.pi
        elif dphi <= -math.pi / 2:
            dphi += math.pi
        if dphi == 0.0:
            return math.inf
        r = float(t.p[k + 2] - t.p[k - 1]) / dphi
        if not math.isfinite(r):
            return math.inf
        return r

    # ---- x-indexed queries (need x monotonic)

    def _require_x_monotonic(self) -> None:
        if not self.table.x_monotonic:
            raise NonMonotonicXError(f"x is not monotonic on path {self.table.name!r}")

    def x_at(self, p: float) -> float:
        self._require_x_monotonic()
        return self.position_at(p)[0]

    def y_at(self, p: float) -> float:
        self._require_x_monotonic()
        return self.position_at(p)[1]

    def x_to_p(self, x: float) -> float:
        """Path distance p at horizontal position x."""
        self._require_x_monotonic()
        t = self.table
        k = binary_search(t.x, x)
        return interp4(t.x, t.p, x, k - 1)

    def x_to_y(self, x: float) -> float:
        """Height y of the path at horizontal position x."""
        self._require_x_monotonic()
        t = self.table
        k = binary_search(t.x, x)
        return interp4(t.x, t.y, x, k - 1)

    def map_x_to_y_p(self, ppt: PathPoint) -> None:
        """Set ppt.y and ppt.p from ppt.x."""
        self._require_x_monotonic()
        t = self.table
        k = binary_search(t.x, ppt.x)
        ppt.y = interp4(t.x, t.y, ppt.x, k - 1)
        ppt.p = interp4(t.x, t.p, ppt.x, k - 1)

    # ---- nearest point

    def find_nearest_global(self, point) -> PathPoint:
        """Closest table sample to point (x, y); no interpolation."""
        ppt = find_nearest_global(self.table, point)
        ppt.sequence = self.sequence
        return ppt

    def find_nearest_local(self, target, ppt: PathPoint) -> PathPoint:
        """
        Closest interpolated path point to target near ppt.idx; sets ppt.p and ppt.idx.
        See numpath.nearest.find_nearest_local.
        """
        if self._hint(ppt) < 0:
            ppt.idx = -1
        find_nearest_local(self.table, target, ppt, tol=self.params.local_tol)
        ppt.sequence = self.sequence
        return ppt

    def find_point_by_distance(self, p1, p2, distance: float, max_iter: int = 100) -> Tuple[float, float]:
        """
        Point on the path at straight-line distance from p1, on the side of p1 where p2 is.

        p1 and p2 are (x, y) positions, mapped to the nearest path points first.
        """
        x1, y1 = float(p1[0]), float(p1[1])
        ppt = self.find_nearest_global(p1)
        self.find_nearest_local(p1, ppt)
        p1p = ppt.p
        self.find_nearest_local(p2, ppt)
        p2p = ppt.p
        if self.closed_loop:
            # shorter way around the loop
            dp = self.mod_p(p2p - p1p)
            if dp > self.length / 2:
                dp -= self.length
            p2p = p1p + dp

        q = self.position_at(p2p)
        dist = math.hypot(q[0] - x1, q[1] - y1)
        if dist < 1e-6:
            # both mapped to the same path point; pick a direction
            p2p = p1p + distance
            q = self.position_at(p2p)
            dist = math.hypot(q[0] - x1, q[1] - y1)

        for _ in range(max_iter):
            if abs(dist - distance) <= 1e-10 or dist < 1e-12:
                break
            p2p = p1p + (distance / dist) * (p2p - p1p)
            q = self.position_at(p2p)
            dist = math.hypot(q[0] - x1, q[1] - y1)
        return q

    def as_array(self) -> np.ndarray:
        return self.table.as_array()


def _chord_angle(dx: float, dy: float) -> float:
    # atan of the chord slope dy/dx, pi/2 with the sign of dy when vertical
    if dx == 0.0:
        if dy == 0.0:
            return math.nan
        return math.copysign(math.pi / 2, dy)
    return math.atan(dy / dx)
