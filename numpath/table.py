from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from numpath.errors import MalformedPathError
from numpath.interpolation import deriv3_table
from numpath.search import clamp_index, is_monotonic

logger = logging.getLogger(__name__)

DATA_POINTS = 9000


@dataclass(frozen=True)
class Bounds:
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def contains(self, x: float, y: float) -> bool:
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max


@dataclass(frozen=True, eq=False)
class PathTable:
    """
    Tabulated curve: N samples of position, path distance p, dx/dp, dy/dp,
    unit normal and derivative of the normal w.r.t. p.

    Built once by build_table and read-only afterwards; a path that changes
    shape gets a new table.
    """

    name: str
    x: np.ndarray
    y: np.ndarray
    p: np.ndarray
    dxdp: np.ndarray
    dydp: np.ndarray
    normal_x: np.ndarray
    normal_y: np.ndarray
    normal_xdp: np.ndarray
    normal_ydp: np.ndarray
    closed_loop: bool
    bounds: Bounds
    x_monotonic: bool

    @property
    def size(self) -> int:
        return int(self.p.shape[0])

    @property
    def start_p(self) -> float:
        return float(self.p[0])

    @property
    def finish_p(self) -> float:
        return float(self.p[-1])

    @property
    def length(self) -> float:
        return float(self.p[-1] - self.p[0])

    def mod_p(self, p: float) -> float:
        """p modulo total length for closed loops, in [0, length); unchanged for open paths."""
        if self.closed_loop:
            return wrap_p(p, self.length)
        return float(p)

    def limit_p(self, p: float) -> float:
        """mod_p for closed loops; clamp to [start_p, finish_p] for open paths."""
        if self.closed_loop:
            return wrap_p(p, self.length)
        return min(max(float(p), self.start_p), self.finish_p)

    def modk(self, k: int) -> int:
        """Table index wrapped around for closed loops, clamped to the ends otherwise."""
        n = self.size
        if self.closed_loop:
            return int(k) % n
        return clamp_index(int(k), 0, n - 1)

    def as_array(self) -> np.ndarray:
        """
        Copy of the table, shape (N, 9), columns:
          p, x, y, dxdp, dydp, normal_x, normal_y, normal_xdp, normal_ydp
        """
        return np.column_stack([
            self.p, self.x, self.y, self.dxdp, self.dydp,
            self.normal_x, self.normal_y, self.normal_xdp, self.normal_ydp,
        ])


def wrap_p(p: float, length: float) -> float:
    """
    Wrap path distance into [0, length).

    e.g. with length 2*pi: wrap_p(2*pi + 1) == 1, wrap_p(-1) == 2*pi - 1.
    """
    if length <= 0:
        raise ValueError("length must be > 0")
    r = float(p) % length
    if r >= length:
        # -tiny % length rounds up to length
        r = 0.0
    return r


def compute_normals(dxdp: np.ndarray, dydp: np.ndarray, axis_eps: float = 1e-16) -> Tuple[np.ndarray, np.ndarray]:
    """
    Unit normal per sample, on the left of the direction of increasing p.

    Vertical tangent: (+1, 0) going down, (-1, 0) going up.
    Horizontal tangent: (0, +1) going right, (0, -1) going left.
    Otherwise the tangent (dxdp, dydp) rotated by +90 degrees and normalized,
    so the normal never flips side as p moves along the curve.
    """
    dxdp = np.asarray(dxdp, dtype=float)
    dydp = np.asarray(dydp, dtype=float)

    vertical = np.abs(dxdp) < axis_eps
    horizontal = ~vertical & (np.abs(dydp) < axis_eps)
    general = ~(vertical | horizontal)

    nx = np.zeros_like(dxdp)
    ny = np.zeros_like(dxdp)

    nx[vertical] = np.where(dydp[vertical] < 0, 1.0, -1.0)
    ny[horizontal] = np.where(dxdp[horizontal] > 0, 1.0, -1.0)

    norm = np.hypot(dxdp[general], dydp[general])
    nx[general] = -dydp[general] / norm
    ny[general] = dxdp[general] / norm
    return nx, ny


def build_table(curve, sample_count: int = DATA_POINTS, axis_eps: float = 1e-16) -> PathTable:
    """
    Sample curve at sample_count uniform steps of t and tabulate it.

    curve must provide x(t), y(t), t_start, t_finish, closed_loop (see
    numpath.curves.ParametricCurve).

    Path distance p is the running sum of chord lengths between samples,
    starting at 0. Derivatives w.r.t. p use the three-point formula.

    Raises MalformedPathError if p is not strictly increasing or samples are
    not finite.
    """
    n = int(sample_count)
    if n < 4:
        raise MalformedPathError(f"sample_count must be >= 4, got {sample_count}")

    name = str(getattr(curve, "name", type(curve).__name__))
    t_start = float(curve.t_start)
    t_finish = float(curve.t_finish)
    closed_loop = bool(curve.closed_loop)
    logger.debug("build_table %s: t in [%g, %g], %d samples, closed=%s", name, t_start, t_finish, n, closed_loop)

    ts = np.linspace(t_start, t_finish, n)
    x = np.array([curve.x(t) for t in ts], dtype=float)
    y = np.array([curve.y(t) for t in ts], dtype=float)
    if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
        raise MalformedPathError(f"curve {name} produced non-finite samples")

    ds = np.hypot(np.diff(x), np.diff(y))
    p = np.concatenate([[0.0], np.cumsum(ds)])
    if not is_monotonic(p, strict=True) or not p[-1] > p[0]:
        bad = int(np.argmin(np.diff(p) > 0.0))
        raise MalformedPathError(
            f"path distance of {name} is not strictly increasing near sample {bad}; "
            "the curve is degenerate or does not progress with t"
        )

    bounds = Bounds(float(x.min()), float(y.min()), float(x.max()), float(y.max()))

    dxdp = deriv3_table(p, x)
    dydp = deriv3_table(p, y)
    normal_x, normal_y = compute_normals(dxdp, dydp, axis_eps=axis_eps)
    normal_xdp = deriv3_table(p, normal_x)
    normal_ydp = deriv3_table(p, normal_y)

    if closed_loop:
        # one-sided formulas at the stitch, same as an open curve
        logger.debug("build_table %s: normal derivative at the loop point uses one-sided differences", name)

    arrays = (x, y, p, dxdp, dydp, normal_x, normal_y, normal_xdp, normal_ydp)
    for a in arrays:
        assert np.all(np.isfinite(a)), f"non-finite values in table for {name}"
        a.flags.writeable = False

    return PathTable(
        name=name,
        x=x,
        y=y,
        p=p,
        dxdp=dxdp,
        dydp=dydp,
        normal_x=normal_x,
        normal_y=normal_y,
        normal_xdp=normal_xdp,
        normal_ydp=normal_ydp,
        closed_loop=closed_loop,
        bounds=bounds,
        x_monotonic=is_monotonic(x, strict=True),
    )
