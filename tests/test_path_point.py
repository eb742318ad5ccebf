import math
import unittest
from dataclasses import fields

from numpath.path_point import PathPoint


class TestPathPoint(unittest.TestCase):
    def test_defaults(self):
        ppt = PathPoint()
        self.assertEqual(ppt.idx, -1)
        self.assertTrue(math.isnan(ppt.slope))
        self.assertFalse(ppt.radius_flag)

    def test_copy_from_copies_everything(self):
        src = PathPoint(p=1.5, x=2.0, y=3.0, slope=0.5, dxdp=0.8, dydp=0.4, idx=12, sequence=3,
                        normal_x=-0.6, normal_y=0.8, radius_flag=True, radius=7.0)
        dst = PathPoint()
        dst.copy_from(src)
        for f in fields(PathPoint):
            self.assertEqual(getattr(dst, f.name), getattr(src, f.name), f.name)
        self.assertEqual(dst.dydp, 0.4)

    def test_reset_hint(self):
        ppt = PathPoint(idx=5, sequence=2)
        ppt.reset_hint()
        self.assertEqual((ppt.idx, ppt.sequence), (-1, -1))

    def test_accessors(self):
        ppt = PathPoint(x=1.0, y=2.0, normal_x=0.0, normal_y=1.0, slope_x=1.0, slope_y=0.0)
        self.assertEqual(ppt.position(), (1.0, 2.0))
        self.assertEqual(ppt.normal(), (0.0, 1.0))
        self.assertEqual(ppt.tangent(), (1.0, 0.0))

    def test_distance_to_normal_line(self):
        up = PathPoint(x=0.0, y=0.0, normal_x=0.0, normal_y=1.0)
        self.assertAlmostEqual(up.distance_to_normal_line((3.0, 5.0)), 3.0)
        right = PathPoint(x=0.0, y=1.0, normal_x=1.0, normal_y=0.0)
        self.assertAlmostEqual(right.distance_to_normal_line((3.0, 5.0)), 4.0)
        s = 1.0 / math.sqrt(2.0)
        diag = PathPoint(x=0.0, y=0.0, normal_x=s, normal_y=s)
        self.assertAlmostEqual(diag.distance_to_normal_line((1.0, -1.0)), math.sqrt(2.0))


if __name__ == "__main__":
    unittest.main()
