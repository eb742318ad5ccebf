"""
Parametric curves f(t) = (x(t), y(t)) to be tabulated by build_table.

A curve only has to provide x(t), y(t), t_start, t_finish, closed_loop and a
name; ParametricCurve is a convenient base class, not a requirement.
"""

from __future__ import annotations

import math
from typing import Callable


class ParametricCurve:
    """Base class: subclasses implement x(t) and y(t)."""

    def __init__(self, name: str, t_start: float, t_finish: float, closed_loop: bool = False):
        if not t_finish > t_start:
            raise ValueError(f"t_finish must be > t_start, got [{t_start}, {t_finish}]")
        self.name = name
        self.t_start = float(t_start)
        self.t_finish = float(t_finish)
        self.closed_loop = bool(closed_loop)

    def x(self, t: float) -> float:
        raise NotImplementedError

    def y(self, t: float) -> float:
        raise NotImplementedError

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(name={self.name!r}, t=[{self.t_start:g}, {self.t_finish:g}], "
                f"closed_loop={self.closed_loop})")


class CustomCurve(ParametricCurve):
    """Curve given by two callables of t."""

    def __init__(
        self,
        x_fn: Callable[[float], float],
        y_fn: Callable[[float], float],
        t_start: float,
        t_finish: float,
        closed_loop: bool = False,
        name: str = "custom",
    ):
        super().__init__(name, t_start, t_finish, closed_loop)
        self._x_fn = x_fn
        self._y_fn = y_fn

    def x(self, t: float) -> float:
        return float(self._x_fn(t))

    def y(self, t: float) -> float:
        return float(self._y_fn(t))


class CircleCurve(ParametricCurve):
    """
    Circle of given radius, counterclockwise.

    Default start is the top of the circle (t = -3pi/2), as on a loop track;
    pass t_start to begin elsewhere (t = 0 starts at the east-most point).
    """

    def __init__(self, radius: float = 3.0, center=(0.0, 0.0), t_start: float = -1.5 * math.pi):
        if radius <= 0:
            raise ValueError("radius must be > 0")
        super().__init__("circle", t_start, t_start + 2 * math.pi, closed_loop=True)
        self.radius = float(radius)
        self.cx, self.cy = float(center[0]), float(center[1])

    def x(self, t: float) -> float:
        return self.cx + self.radius * math.cos(t)

    def y(self, t: float) -> float:
        return self.cy + self.radius * math.sin(t)


class OvalCurve(ParametricCurve):
    """
    Stadium: two unit half-circles joined by vertical straights of length s.

    Starts at the top (0, s + 1) going counterclockwise, so t - pi/2 is the
    path distance:
      [pi/2, pi]          top-left quarter arc, center (0, s)
      [pi, pi+s]          straight down at x = -1
      [pi+s, 2pi+s]       bottom half circle, center (0, 0)
      [2pi+s, 2pi+2s]     straight up at x = +1
      [2pi+2s, 5pi/2+2s]  top-right quarter arc back to the start
    """

    def __init__(self, straight: float = 2.0):
        if straight <= 0:
            raise ValueError("straight must be > 0")
        self.s = float(straight)
        super().__init__("oval", math.pi / 2, 2.5 * math.pi + 2 * self.s, closed_loop=True)
        self.t1 = math.pi
        self.t2 = self.t1 + self.s
        self.t3 = self.t2 + math.pi
        self.t4 = self.t3 + self.s

    def x(self, t: float) -> float:
        if t < self.t1:
            return math.cos(t)
        if t < self.t2:
            return -1.0
        if t < self.t3:
            return math.cos(math.pi + t - self.t2)
        if t < self.t4:
            return 1.0
        return math.cos(t - self.t4)

    def y(self, t: float) -> float:
        if t < self.t1:
            return self.s + math.sin(t)
        if t < self.t2:
            return self.s - (t - self.t1)
        if t < self.t3:
            return math.sin(math.pi + t - self.t2)
        if t < self.t4:
            return t - self.t3
        return self.s + math.sin(t - self.t4)


class FlatCurve(ParametricCurve):
    """Horizontal line y = 0 for x in [-5, 5]."""

    def __init__(self, half_width: float = 5.0):
        super().__init__("flat", -half_width, half_width)

    def x(self, t: float) -> float:
        return t

    def y(self, t: float) -> float:
        return 0.0


class LineCurve(ParametricCurve):
    """Straight segment from (x0, y0) to (x1, y1), t in [0, 1]."""

    def __init__(self, x0: float, y0: float, x1: float, y1: float):
        super().__init__("line", 0.0, 1.0)
        self.x0, self.y0 = float(x0), float(y0)
        self.x1, self.y1 = float(x1), float(y1)

    def x(self, t: float) -> float:
        return self.x0 + t * (self.x1 - self.x0)

    def y(self, t: float) -> float:
        return self.y0 + t * (self.y1 - self.y0)


class ParabolaCurve(ParametricCurve):
    """y = a x^2 for x in [t_start, t_finish]."""

    def __init__(self, a: float = 1.0, t_start: float = -1.0, t_finish: float = 1.0):
        super().__init__("parabola", t_start, t_finish)
        self.a = float(a)

    def x(self, t: float) -> float:
        return t

    def y(self, t: float) -> float:
        return self.a * t * t


class HumpCurve(ParametricCurve):
    """Two valleys and a hump: y = 3 - (7/6) x^2 + (1/6) x^4, x in [-4, 4]."""

    def __init__(self):
        super().__init__("hump", -4.0, 4.0)

    def x(self, t: float) -> float:
        return t

    def y(self, t: float) -> float:
        return 3.0 + t * t * (-7.0 / 6.0 + t * t / 6.0)


class LemniscateCurve(ParametricCurve):
    """
    Lemniscate of Bernoulli, a figure-eight crossing itself at the origin.

      x = a cos t / (1 + sin^2 t),  y = a sin t cos t / (1 + sin^2 t)

    t from -pi/2 to 3pi/2 starts and ends at the crossing point.
    """

    def __init__(self, size: float = 2.0):
        super().__init__("lemniscate", -math.pi / 2, 1.5 * math.pi, closed_loop=True)
        self.a = float(size)

    def x(self, t: float) -> float:
        s = math.sin(t)
        return self.a * math.cos(t) / (1.0 + s * s)

    def y(self, t: float) -> float:
        s = math.sin(t)
        return self.a * s * math.cos(t) / (1.0 + s * s)


class LoopTheLoopCurve(ParametricCurve):
    """
    Prolate trochoid x = r t - d sin t, y = d cos t - r with d > r: a track
    that climbs through a vertical loop and comes back down, crossing itself
    once per loop. Top of the (first) loop is at t = 0.
    """

    def __init__(self, r: float = 1.0, d: float = 2.0, loops: int = 1):
        if d <= r:
            raise ValueError("d must be > r for the curve to loop")
        super().__init__("loop-the-loop", -math.pi, math.pi + 2 * math.pi * (loops - 1))
        self.r = float(r)
        self.d = float(d)

    def x(self, t: float) -> float:
        return self.r * t - self.d * math.sin(t)

    def y(self, t: float) -> float:
        return self.d * math.cos(t) - self.r


class CardioidCurve(ParametricCurve):
    """Cardioid x = a(2cos t - cos 2t), y = a(2sin t - sin 2t); closed, with a cusp at t = 0."""

    def __init__(self, a: float = 1.0):
        super().__init__("cardioid", 0.0, 2 * math.pi, closed_loop=True)
        self.a = float(a)

    def x(self, t: float) -> float:
        return self.a * (2 * math.cos(t) - math.cos(2 * t))

    def y(self, t: float) -> float:
        return self.a * (2 * math.sin(t) - math.sin(2 * t))


class SpiralCurve(ParametricCurve):
    """Archimedean spiral r = a + b t, open."""

    def __init__(self, a: float = 1.0, b: float = 0.3, turns: float = 2.0):
        super().__init__("spiral", 0.0, 2 * math.pi * turns)
        self.a = float(a)
        self.b = float(b)

    def x(self, t: float) -> float:
        return (self.a + self.b * t) * math.cos(t)

    def y(self, t: float) -> float:
        return (self.a + self.b * t) * math.sin(t)


class BrachistochroneCurve(ParametricCurve):
    """
    Cycloid through the origin and (3, -2): x = c(t - sin t), y = -c(1 - cos t).

    Past t = 2 pi it rises vertically, so a ball can coast beyond the end.
    """

    def __init__(self, t_finish: float = 2 * math.pi, c: float = 1.00133):
        super().__init__("brachistochrone", 0.0, t_finish)
        self.c = float(c)

    def x(self, t: float) -> float:
        t = min(max(t, 0.0), 2 * math.pi)
        return self.c * (t - math.sin(t))

    def y(self, t: float) -> float:
        if t > 2 * math.pi:
            return t - 2 * math.pi
        if t < 0:
            return -t
        return -self.c * (1 - math.cos(t))


CURVES = {
    "circle": CircleCurve,
    "oval": OvalCurve,
    "flat": FlatCurve,
    "parabola": ParabolaCurve,
    "hump": HumpCurve,
    "lemniscate": LemniscateCurve,
    "loop": LoopTheLoopCurve,
    "cardioid": CardioidCurve,
    "spiral": SpiralCurve,
    "brachistochrone": BrachistochroneCurve,
}


def make_curve(name: str) -> ParametricCurve:
    """Build one of the named curves with default parameters."""
    try:
        cls = CURVES[name]
    except KeyError:
        raise ValueError(f"unknown curve {name!r}, expected one of: {', '.join(sorted(CURVES))}") from None
    return cls()
