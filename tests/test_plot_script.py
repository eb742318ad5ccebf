import importlib.util
import os
import tempfile
import unittest

import matplotlib
matplotlib.use("Agg")

SCRIPT = os.path.join(os.path.dirname(__file__), "..", "scripts", "plot_path.py")


def load_script():
    spec = importlib.util.spec_from_file_location("plot_path", SCRIPT)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


class TestPlotScriptSmoke(unittest.TestCase):
    def test_saves_png(self):
        mod = load_script()
        with tempfile.TemporaryDirectory() as d:
            out = os.path.join(d, "oval.png")
            rc = mod.main(["--curve", "oval", "--samples", "400", "--points", "80", "--out", out])
            self.assertEqual(rc, 0)
            self.assertTrue(os.path.exists(out))
            self.assertGreater(os.path.getsize(out), 0)

    def test_open_curve_without_normals(self):
        mod = load_script()
        with tempfile.TemporaryDirectory() as d:
            out = os.path.join(d, "sub", "spiral.png")
            rc = mod.main(["--curve", "spiral", "--samples", "300", "--normals", "0", "--out", out])
            self.assertEqual(rc, 0)
            self.assertTrue(os.path.exists(out))


if __name__ == "__main__":
    unittest.main()
