from __future__ import annotations

from typing import Iterator, Tuple

from numpath.errors import MalformedPathError
from numpath.table import PathTable


class PointsIterator:
    """
    (x, y) table samples spread roughly evenly along a path, e.g. for drawing.

    Starts at the first sample, then takes each next sample whose p is at
    least delta = length / point_count past the previous one, and ends with
    the last sample. Every iter() starts over from the beginning.
    """

    def __init__(self, table: PathTable, point_count: int):
        if point_count <= 0:
            raise ValueError("point_count must be > 0")
        if table.finish_p <= table.start_p:
            raise MalformedPathError("path data is out of order")
        self.table = table
        self.point_count = min(int(point_count), table.size)
        self.delta = table.length / self.point_count

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        p, x, y = self.table.p, self.table.x, self.table.y
        n = self.table.size
        idx = 0
        yield float(x[0]), float(y[0])
        while idx < n - 1:
            p_prev = p[idx]
            while True:
                idx += 1
                if idx >= n - 1:
                    idx = n - 1
                    break
                if p[idx] - p_prev >= self.delta:
                    break
            yield float(x[idx]), float(y[idx])
