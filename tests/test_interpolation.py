import unittest
import numpy as np

from numpath.interpolation import deriv3, deriv3_table, interp4


def cubic(x):
    return x ** 3 - 2.0 * x + 1.0


class TestInterp4(unittest.TestCase):
    def setUp(self):
        self.xx = np.array([0.0, 1.0, 2.5, 3.0, 4.2, 5.0])
        self.yy = cubic(self.xx)

    def test_exact_for_cubic(self):
        self.assertAlmostEqual(interp4(self.xx, self.yy, 2.7, 1), cubic(2.7), places=10)
        self.assertAlmostEqual(interp4(self.xx, self.yy, 0.3, 0), cubic(0.3), places=10)

    def test_hits_samples(self):
        for k in range(3):
            self.assertAlmostEqual(interp4(self.xx, self.yy, self.xx[k + 1], k), self.yy[k + 1], places=12)

    def test_k_clamped(self):
        # k past the end uses the last four samples
        self.assertAlmostEqual(interp4(self.xx, self.yy, 4.5, 10), cubic(4.5), places=10)
        self.assertAlmostEqual(interp4(self.xx, self.yy, 0.5, -3), cubic(0.5), places=10)

    def test_bad_input(self):
        with self.assertRaises(ValueError):
            interp4(self.xx, self.yy[:-1], 1.0, 0)
        with self.assertRaises(ValueError):
            interp4(self.xx[:3], self.yy[:3], 1.0, 0)


class TestDeriv3(unittest.TestCase):
    def test_exact_for_quadratic_uneven_spacing(self):
        xx = np.array([0.0, 0.5, 1.5])
        yy = xx ** 2
        self.assertAlmostEqual(deriv3(xx, yy, 0, 0), 0.0, places=12)
        self.assertAlmostEqual(deriv3(xx, yy, 0, 1), 1.0, places=12)
        self.assertAlmostEqual(deriv3(xx, yy, 0, 2), 3.0, places=12)

    def test_zero_on_constant(self):
        xx = np.array([0.1, 0.37, 0.9])
        yy = np.full(3, -1.0)
        for which in (0, 1, 2):
            self.assertEqual(deriv3(xx, yy, 0, which), 0.0)

    def test_bad_args(self):
        xx = np.array([0.0, 1.0, 2.0, 3.0])
        with self.assertRaises(ValueError):
            deriv3(xx, xx, 0, 3)
        with self.assertRaises(ValueError):
            deriv3(xx, xx, 2, 0)

    def test_table_matches_pointwise(self):
        rng = np.random.default_rng(0)
        xx = np.cumsum(rng.uniform(0.05, 0.2, size=40))
        yy = 3.0 * xx ** 2 - xx
        d = deriv3_table(xx, yy)
        np.testing.assert_allclose(d, 6.0 * xx - 1.0, atol=1e-9)
        self.assertAlmostEqual(d[0], deriv3(xx, yy, 0, 0), places=12)
        self.assertAlmostEqual(d[10], deriv3(xx, yy, 9, 1), places=9)
        self.assertAlmostEqual(d[-1], deriv3(xx, yy, 37, 2), places=12)


if __name__ == "__main__":
    unittest.main()
