from __future__ import annotations

import numpy as np


def interp4(xx: np.ndarray, yy: np.ndarray, x: float, k: int) -> float:
    """
    Value at x of the cubic through the 4 points (xx[i], yy[i]), i = k..k+3.

    k is clamped to [0, n-4], so near either end of the table the end four
    samples are used (which also extrapolates a little past the ends).

    Newton form of the interpolant:
      P(x) = c1 + c2 (x-x1) + c3 (x-x1)(x-x2) + c4 (x-x1)(x-x2)(x-x3)
    with divided-difference coefficients, evaluated by nested multiplication
    (Van Loan, Introduction to Scientific Computing, ch. 2).

    Works on any pair of parallel arrays: (p, x), (p, dxdp), (x, p), ...
    Slope dy/dx is never passed through here; it blows up on vertical
    sections, so callers interpolate dx/dp and dy/dp and divide afterwards.
    """
    n = len(xx)
    if len(yy) != n:
        raise ValueError(f"xx and yy must have the same length, got {n} and {len(yy)}")
    if n < 4:
        raise ValueError("need at least 4 points for cubic interpolation")

    i = int(k)
    if i > n - 4:
        i = n - 4
    elif i < 0:
        i = 0

    x0, x1, x2, x3 = float(xx[i]), float(xx[i + 1]), float(xx[i + 2]), float(xx[i + 3])
    y0, y1, y2, y3 = float(yy[i]), float(yy[i + 1]), float(yy[i + 2]), float(yy[i + 3])

    c1 = y0
    c2 = (y1 - c1) / (x1 - x0)
    c3 = (y2 - (c1 + c2 * (x2 - x0))) / ((x2 - x0) * (x2 - x1))
    c4 = y3 - (c1 + c2 * (x3 - x0) + c3 * (x3 - x0) * (x3 - x1))
    c4 = c4 / ((x3 - x0) * (x3 - x1) * (x3 - x2))

    x = float(x)
    return ((c4 * (x - x2) + c3) * (x - x1) + c2) * (x - x0) + c1


def deriv3(xx: np.ndarray, yy: np.ndarray, k: int, which: int) -> float:
    """
    Three-point derivative dy/dx from samples k, k+1, k+2 (uneven spacing ok).

    which = 0, 1, 2 gives the derivative at xx[k] (left), xx[k+1] (center)
    or xx[k+2] (right). Burden & Faires, Numerical Analysis, eq. 4.3, in
    divided-difference form: the parabola through the three samples has
      P'(x) = d01 + (2x - x0 - x1) d012
    with d01 = (y1-y0)/(x1-x0) and d012 the second divided difference.
    Exact (zero) on runs of equal y.
    """
    if which not in (0, 1, 2):
        raise ValueError("which must be 0 (left), 1 (center) or 2 (right)")
    if k < 0 or k > len(xx) - 3:
        raise ValueError(f"k={k} out of range for {len(xx)} samples")

    x0, x1, x2 = float(xx[k]), float(xx[k + 1]), float(xx[k + 2])
    y0, y1, y2 = float(yy[k]), float(yy[k + 1]), float(yy[k + 2])
    d01 = (y1 - y0) / (x1 - x0)
    d12 = (y2 - y1) / (x2 - x1)
    d012 = (d12 - d01) / (x2 - x0)
    xj = (x0, x1, x2)[which]
    return d01 + (2 * xj - x0 - x1) * d012


def deriv3_table(xx: np.ndarray, yy: np.ndarray) -> np.ndarray:
    """
    dy/dx at every sample: center formula inside, left formula at the first
    sample, right formula at the last. Vectorized form of deriv3.
    """
    xx = np.asarray(xx, dtype=float)
    yy = np.asarray(yy, dtype=float)
    if xx.shape != yy.shape or xx.ndim != 1:
        raise ValueError("xx and yy must be 1D arrays of the same length")
    if xx.shape[0] < 3:
        raise ValueError("need at least 3 points for a three-point derivative")

    h = np.diff(xx)
    d = np.diff(yy) / h
    h1, h2 = h[:-1], h[1:]
    d01, d12 = d[:-1], d[1:]

    out = np.empty_like(xx)
    # center: weighted mean of the two neighbouring chord slopes
    out[1:-1] = (h2 * d01 + h1 * d12) / (h1 + h2)
    out[0] = deriv3(xx, yy, 0, 0)
    out[-1] = deriv3(xx, yy, xx.shape[0] - 3, 2)
    return out
