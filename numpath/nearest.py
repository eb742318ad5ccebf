from __future__ import annotations

import logging

import numpy as np

from numpath.interpolation import interp4
from numpath.path_point import PathPoint
from numpath.search import clamp_index, linear_search
from numpath.table import PathTable, wrap_p

logger = logging.getLogger(__name__)


def _nearest_index(table: PathTable, px: float, py: float) -> int:
    d2 = (table.x - px) ** 2 + (table.y - py) ** 2
    return int(np.argmin(d2))


def find_nearest_global(table: PathTable, point) -> PathPoint:
    """
    Closest table sample to point (x, y), by scanning the whole table.

    No interpolation between samples: use it as a starting guess for
    find_nearest_local. Returns a PathPoint with x, y, p and idx set.
    """
    px, py = float(point[0]), float(point[1])
    i = _nearest_index(table, px, py)
    return PathPoint(p=float(table.p[i]), x=float(table.x[i]), y=float(table.y[i]), idx=i)


def table_spacing(table: PathTable, k: int) -> float:
    """p[k+1] - p[k-1], with the indexes shifted (open) or wrapped (closed) at the ends."""
    n = table.size
    if table.closed_loop:
        j = table.modk(k - 1)
        j2 = table.modk(j + 2)
        d = float(table.p[j2] - table.p[j])
        if j2 < j:
            d += table.length
        return d
    j = table.modk(k)
    if j == 0:
        j2 = 2
    elif j == n - 1:
        j = n - 3
        j2 = n - 1
    else:
        j = j - 1
        j2 = j + 2
    return float(table.p[j2] - table.p[j])


def carry_laps(old_p: float, new_mod_p: float, length: float) -> float:
    """
    Continue an unbounded path distance around a closed loop.

    old_p is the caller's previous p (any number of laps), new_mod_p the new
    position in [0, length). Crossing the stitch point from the last sixth of
    the loop to the first sixth (or back) adds (or removes) a lap. Only valid
    if the point moved less than a third of the loop since old_p.
    """
    old_mod = wrap_p(old_p, length)
    if old_mod < length / 6 and new_mod_p > 5 * length / 6:
        # low p to high p, going backwards over the stitch
        return old_p + (new_mod_p - length) - old_mod
    if new_mod_p < length / 6 and old_mod > 5 * length / 6:
        # high p to low p, going forwards over the stitch
        return old_p + (new_mod_p + length) - old_mod
    return old_p + (new_mod_p - old_mod)


def _dist2_table(table: PathTable, px: float, py: float, i: int) -> float:
    dx = px - float(table.x[i])
    dy = py - float(table.y[i])
    return dx * dx + dy * dy


def _dist2_interp(table: PathTable, px: float, py: float, p: float, k: int) -> float:
    dx = px - interp4(table.p, table.x, p, k - 1)
    dy = py - interp4(table.p, table.y, p, k - 1)
    return dx * dx + dy * dy


def find_nearest_local(table: PathTable, target, ppt: PathPoint, tol: float = 1e-6) -> PathPoint:
    """
    Closest point of the interpolated path to target, searching only around ppt.idx.

    Hill-climbing on distance squared: compare the current point with the
    points one step d before and after, move towards the smaller one, halve d
    when neither is smaller:

      y0 = f(p-d);  y1 = f(p);  y2 = f(p+d)
      if y0 < y1 and y0 < y2:  p = p - d
      elif y2 < y1:            p = p + d
      else:                    d = d/2

    First over table indices with step N/20 (table search mode), then, once
    the step is down to one sample, over interpolated points starting with
    the local table spacing (interpolation mode) until d < tol. Staying near
    the start keeps the point from hopping to another branch where the path
    crosses itself.

    ppt.idx is the start index; without a hint (idx outside the table) the
    search starts at the nearest table sample. On return ppt.p and ppt.idx
    are set; for closed loops ppt.p keeps counting laps (see carry_laps),
    except after a search without a hint, where ppt.p is the wrapped p.
    Returns ppt.
    """
    n = table.size
    px, py = float(target[0]), float(target[1])

    hinted = 0 <= ppt.idx < n
    if hinted:
        k = table.modk(ppt.idx)
    else:
        k = _nearest_index(table, px, py)

    dk = n // 20
    d = table.length / 20
    p = float(table.p[k])
    ctr = 0
    while True:
        if dk > 1:
            # table search mode
            p = float(table.p[k])
            y0 = _dist2_table(table, px, py, table.modk(k - dk))
            y1 = _dist2_table(table, px, py, k)
            y2 = _dist2_table(table, px, py, table.modk(k + dk))
        else:
            # interpolation mode
            p0 = table.limit_p(p - d)
            y0 = _dist2_interp(table, px, py, p0, linear_search(table.p, p0, k))
            y1 = _dist2_interp(table, px, py, p, k)
            p2 = table.limit_p(p + d)
            y2 = _dist2_interp(table, px, py, p2, linear_search(table.p, p2, k))

        if y0 < y1 and y0 < y2:
            # shift left
            if dk > 1:
                k = table.modk(k - dk)
                p = float(table.p[k])
            else:
                p = table.limit_p(p - d)
                k = linear_search(table.p, p, k)
        elif y2 < y1:
            # shift right
            if dk > 1:
                k = table.modk(k + dk)
                p = float(table.p[k])
            else:
                p = table.limit_p(p + d)
                k = linear_search(table.p, p, k)
        else:
            # reduce search range
            if dk > 1:
                dk = dk // 2
                if dk <= 1:
                    d = table_spacing(table, k)
            else:
                d = d / 2

        ctr += 1
        if ctr == 1000:
            logger.warning("find_nearest_local on %s: slow convergence, p=%.5f d=%.3g k=%d", table.name, p, d, k)
        if not (dk > 1 or d > tol):
            break

    if table.closed_loop and hinted:
        ppt.p = carry_laps(ppt.p, p, table.length)
    else:
        ppt.p = p
    ppt.idx = clamp_index(k, 0, n - 1)
    assert np.isfinite(ppt.p), f"non-finite p from find_nearest_local on {table.name}"
    return ppt
