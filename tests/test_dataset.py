import unittest

import gpcv.num as gnp
from gpcv.core import JointDistribution, MarginalDistribution, RegressionDataset
from gpcv.exceptions import InvalidArgument


class TestDistributions(unittest.TestCase):
    def test_marginal_defaults_to_exact_values(self):
        d = MarginalDistribution([1.0, 2.0, 3.0])
        self.assertEqual(d.size, 3)
        self.assertFalse(d.has_covariance())
        self.assertTrue(gnp.allclose(d.covariance_matrix(), gnp.zeros((3, 3))))

    def test_size_mismatch(self):
        with self.assertRaises(InvalidArgument):
            MarginalDistribution([1.0, 2.0], [1.0])
        with self.assertRaises(InvalidArgument):
            JointDistribution([1.0, 2.0], gnp.eye(3))

    def test_joint_marginal_and_subset(self):
        cov = gnp.array([[2.0, 0.5, 0.1], [0.5, 3.0, 0.2], [0.1, 0.2, 4.0]])
        d = JointDistribution([1.0, 2.0, 3.0], cov)
        m = d.marginal()
        self.assertTrue(gnp.allclose(m.variance, [2.0, 3.0, 4.0]))
        s = d.subset([2, 0])
        self.assertTrue(gnp.allclose(s.mean, [3.0, 1.0]))
        self.assertTrue(gnp.allclose(s.covariance, [[4.0, 0.1], [0.1, 2.0]]))


class TestRegressionDataset(unittest.TestCase):
    def test_size_mismatch(self):
        with self.assertRaises(InvalidArgument):
            RegressionDataset([1.0, 2.0, 3.0], [1.0, 2.0])

    def test_subset_keeps_metadata_and_order(self):
        ds = RegressionDataset(
            gnp.array([0.0, 1.0, 2.0, 3.0]),
            MarginalDistribution([10.0, 11.0, 12.0, 13.0], [0.1, 0.2, 0.3, 0.4]),
            {"name": "toy"},
        )
        sub = ds.subset([3, 1])
        self.assertEqual(len(sub), 2)
        self.assertTrue(gnp.allclose(sub.features, [3.0, 1.0]))
        self.assertTrue(gnp.allclose(sub.targets.mean, [13.0, 11.0]))
        self.assertTrue(gnp.allclose(sub.targets.variance, [0.4, 0.2]))
        self.assertEqual(sub.metadata, {"name": "toy"})

    def test_list_features(self):
        ds = RegressionDataset(["a", "b", "c"], [1.0, 2.0, 3.0])
        self.assertEqual(ds.subset([2, 0]).features, ["c", "a"])

    def test_equality(self):
        a = RegressionDataset(gnp.array([0.0, 1.0]), [1.0, 2.0], {"k": "v"})
        b = RegressionDataset(gnp.array([0.0, 1.0]), [1.0, 2.0], {"k": "v"})
        c = RegressionDataset(gnp.array([0.0, 1.0]), [1.0, 2.5], {"k": "v"})
        self.assertEqual(a, b)
        self.assertNotEqual(a, c)


if __name__ == "__main__":
    unittest.main()
