import os
import unittest
import importlib.util

os.environ.setdefault("MPLBACKEND", "Agg")

import matplotlib.pyplot as plt

EXAMPLES_DIR = os.path.join(os.path.dirname(__file__), "..", "examples")


def load_example(name):
    path = os.path.join(EXAMPLES_DIR, name + ".py")
    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestExamples(unittest.TestCase):
    def tearDown(self):
        plt.close("all")

    def test_01(self):
        load_example("gpcv_example01_leave_one_out").main()

    def test_02(self):
        load_example("gpcv_example02_tune").main()

    def test_03(self):
        load_example("gpcv_example03_multiple_datasets").main()


if __name__ == "__main__":
    unittest.main()
