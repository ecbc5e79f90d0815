import unittest
import gpcv.num as gnp
from gpcv.evaluation import scoringrules


class TestScoringRules(unittest.TestCase):
    def test_crps_01(self):
        # CRPS(N(0, 1), 0) = 2 phi(0) - 1 / sqrt(pi)
        x = gnp.to_scalar(scoringrules.crps_gaussian(0.0, 1.0, 0.0))
        self.assertAlmostEqual(x, 0.2336949772730)

    def test_crps_02(self):
        # location-scale equivariance
        a = gnp.to_scalar(scoringrules.crps_gaussian(0.0, 1.0, 0.7))
        b = gnp.to_scalar(scoringrules.crps_gaussian(3.0, 2.0, 3.0 + 2.0 * 0.7))
        self.assertAlmostEqual(b, 2.0 * a)

    def test_crps_03(self):
        # degenerate predictive distribution
        x = scoringrules.crps_gaussian([1.0, 1.0], [0.0, 0.0], [3.0, -1.0])
        self.assertAlmostEqual(gnp.to_scalar(gnp.norm(x - gnp.array([2.0, 2.0]))), 0.0)

    def test_log_score(self):
        x = scoringrules.log_score_gaussian([0.0, 1.0], [1.0, 4.0], [1.0, 1.0])
        x_expected = gnp.array(
            [0.5 * (1.0 + gnp.log(2 * gnp.pi)), 0.5 * gnp.log(8 * gnp.pi)]
        )
        self.assertAlmostEqual(gnp.to_scalar(gnp.norm(x - x_expected)), 0.0)


if __name__ == "__main__":
    unittest.main()
