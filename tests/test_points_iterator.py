import math
import unittest
import numpy as np

from numpath.curves import CircleCurve, LineCurve
from numpath.numerical_path import NumericalPath, PathParams
from numpath.points_iterator import PointsIterator


class TestPointsIterator(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.path = NumericalPath(CircleCurve(radius=1.0, t_start=0.0), PathParams(sample_count=3600))

    def test_endpoints_and_count(self):
        pts = list(self.path.iterator(100))
        self.assertEqual(pts[0], (1.0, 0.0))
        t = self.path.table
        self.assertEqual(pts[-1], (float(t.x[-1]), float(t.y[-1])))
        self.assertGreaterEqual(len(pts), 100)
        self.assertLessEqual(len(pts), 102)

    def test_spacing(self):
        it = self.path.iterator(60)
        pts = np.array(list(it))
        steps = np.hypot(np.diff(pts[:-1, 0]), np.diff(pts[:-1, 1]))
        # chord of an arc of length delta on the unit circle
        self.assertTrue(np.all(steps >= 2 * math.sin(it.delta / 2) - 1e-9))

    def test_restartable(self):
        it = self.path.iterator(50)
        first = list(it)
        second = list(it)
        self.assertEqual(first, second)

    def test_count_capped_at_table_size(self):
        path = NumericalPath(LineCurve(0.0, 0.0, 1.0, 2.0), PathParams(sample_count=50))
        it = path.iterator(10 ** 6)
        self.assertEqual(it.point_count, 50)
        pts = list(it)
        self.assertEqual(len(pts), 50)
        np.testing.assert_allclose(np.array(pts)[:, 0], path.table.x)

    def test_bad_count(self):
        with self.assertRaises(ValueError):
            PointsIterator(self.path.table, 0)


if __name__ == "__main__":
    unittest.main()
