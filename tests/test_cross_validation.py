import math
import unittest
from collections import OrderedDict

import numpy as np

import gpcv.num as gnp
from gpcv.core import MarginalDistribution, PredictType, RegressionDataset
from gpcv.core.prediction import FixedPrediction
from gpcv.core.distribution import JointDistribution
from gpcv.evaluation import (
    ChiSquared,
    ContinuousRankedProbabilityScore,
    CrossValidatedMetric,
    KFold,
    LeaveOneGroupOut,
    LeaveOneOut,
    LeaveOneOutLikelihood,
    LeaveOneOutRMSE,
    NegativeLogLikelihood,
    Residuals,
    RootMeanSquareError,
    aggregate_dataset_scores,
    concatenate_marginal_predictions,
    concatenate_mean_predictions,
    cross_validated_scores,
    folds_from_indexer,
    max_aggregator,
    mean_aggregator,
    sum_aggregator,
)
from gpcv.exceptions import InvalidArgument
from gpcv.misc.toydata import make_toy_gp_model, make_toy_linear_data
from gpcv.models import LeastSquaresRegression


def fixed(mean, variance):
    return FixedPrediction(JointDistribution(mean, gnp.diag(gnp.asdouble(variance))))


class TestReassembly(unittest.TestCase):
    def test_concatenate_means(self):
        indexer = OrderedDict([("a", [2, 0]), ("b", [1, 3])])
        means = {"b": [11.0, 13.0], "a": [12.0, 10.0]}
        out = concatenate_mean_predictions(indexer, means)
        self.assertTrue(gnp.allclose(out, [10.0, 11.0, 12.0, 13.0]))

    def test_concatenate_marginals(self):
        indexer = OrderedDict([("a", [1]), ("b", [0, 2])])
        marginals = {
            "a": MarginalDistribution([1.0], [0.1]),
            "b": MarginalDistribution([0.0, 2.0], [0.0, 0.2]),
        }
        out = concatenate_marginal_predictions(indexer, marginals)
        self.assertTrue(gnp.allclose(out.mean, [0.0, 1.0, 2.0]))
        self.assertTrue(gnp.allclose(out.variance, [0.0, 0.1, 0.2]))

    def test_concatenate_size_mismatch(self):
        with self.assertRaises(InvalidArgument):
            concatenate_mean_predictions({"a": [0, 1]}, {"a": [1.0]})

    def test_scores_independent_of_prediction_order(self):
        ds = RegressionDataset(gnp.arange(4).astype(float), [1.0, 2.0, 3.0, 4.0])
        indexer = OrderedDict([("x", [3, 0]), ("y", [1, 2])])
        folds = folds_from_indexer(ds, indexer)
        preds = {
            "x": fixed([3.5, 1.0], [1.0, 1.0]),
            "y": fixed([2.0, 2.0], [1.0, 1.0]),
        }
        reversed_preds = OrderedDict(reversed(list(preds.items())))

        per_row = cross_validated_scores(Residuals(), folds, preds)
        self.assertTrue(gnp.allclose(per_row, [0.0, 0.0, 1.0, 0.5]))
        self.assertTrue(
            gnp.array_equal(per_row, cross_validated_scores(Residuals(), folds, reversed_preds))
        )

        per_group = cross_validated_scores(RootMeanSquareError(), folds, reversed_preds)
        self.assertEqual(per_group.shape, (2,))
        self.assertAlmostEqual(float(per_group[0]), math.sqrt(0.125))
        self.assertAlmostEqual(float(per_group[1]), math.sqrt(0.5))


class TestMetrics(unittest.TestCase):
    def test_negative_log_likelihood(self):
        pred = fixed([0.0, 1.0], [1.0, 2.0])
        targets = MarginalDistribution([0.5, 1.0], [0.0, 2.0])
        joint = NegativeLogLikelihood(PredictType.JOINT)(pred, targets)
        marginal = NegativeLogLikelihood(PredictType.MARGINAL)(pred, targets)
        self.assertEqual(marginal.shape, (2,))
        expected = [
            0.5 * (0.25 + math.log(2 * math.pi)),
            0.5 * math.log(2 * math.pi * 4.0),
        ]
        self.assertTrue(gnp.allclose(marginal, expected))
        # independent predictions: joint = sum of marginals
        self.assertAlmostEqual(joint, float(gnp.sum(marginal)))
        with self.assertRaises(InvalidArgument):
            NegativeLogLikelihood(PredictType.MEAN)

    def test_chi_squared_and_crps(self):
        pred = fixed([0.0, 0.0], [4.0, 1.0])
        targets = [2.0, -1.0]
        self.assertAlmostEqual(ChiSquared()(pred, targets), 2.0)
        crps = ContinuousRankedProbabilityScore()(pred, targets)
        self.assertEqual(crps.shape, (2,))
        self.assertTrue(gnp.all(crps > 0.0))

    def test_size_mismatch(self):
        with self.assertRaises(InvalidArgument):
            RootMeanSquareError()(fixed([0.0], [1.0]), [1.0, 2.0])


class TestCrossValidation(unittest.TestCase):
    def test_loo_scores_have_dataset_size(self):
        ds = make_toy_linear_data()
        model = make_toy_gp_model()
        scores = LeaveOneOutLikelihood()(ds, model)
        self.assertEqual(scores.shape, (len(ds),))
        self.assertTrue(gnp.all(gnp.isfinite(scores)))
        self.assertFalse(model.has_been_fit())

    def test_loo_rmse_of_exact_line(self):
        x = gnp.arange(8).astype(float)
        ds = RegressionDataset(x, 3.0 * x - 1.0)
        scores = LeaveOneOutRMSE()(ds, LeastSquaresRegression())
        self.assertEqual(scores.shape, (8,))
        self.assertTrue(gnp.allclose(scores, gnp.zeros((8,)), atol=1e-8))

    def test_mean_predictions_in_original_order(self):
        ds = make_toy_linear_data(2.0, 4.0, 0.0)
        cv = LeastSquaresRegression().cross_validate()
        strategy = LeaveOneGroupOut([0, 1, 0, 1, 2, 2, 0, 1, 2, 0])
        means = cv.mean_predictions(ds, strategy)
        self.assertTrue(gnp.allclose(means, ds.targets.mean))
        self.assertEqual(list(cv.predictions(ds, strategy)), [0, 1, 2])

    def test_marginal_predictions_and_kfold(self):
        ds = make_toy_linear_data()
        cv = make_toy_gp_model().cross_validate()
        marginal = cv.marginal_predictions(ds, KFold(5, seed=1))
        self.assertEqual(len(marginal), len(ds))
        self.assertTrue(gnp.all(marginal.variance > 0.0))
        self.assertEqual(len(cv.folds(ds)), len(ds))

    def test_cross_validated_metric_with_groups(self):
        ds = make_toy_linear_data()
        metric = CrossValidatedMetric(
            NegativeLogLikelihood(PredictType.JOINT), LeaveOneGroupOut(lambda x: x < 5)
        )
        scores = metric(ds, make_toy_gp_model())
        self.assertEqual(scores.shape, (2,))


class TestAggregation(unittest.TestCase):
    def test_aggregators(self):
        scores = [np.array([1.0, 3.0]), np.array([5.0]), [0.0, 0.0, 3.0]]
        self.assertAlmostEqual(aggregate_dataset_scores(scores, mean_aggregator), 8.0 / 3.0)
        self.assertAlmostEqual(aggregate_dataset_scores(scores, sum_aggregator), 8.0)
        self.assertAlmostEqual(aggregate_dataset_scores(scores, max_aggregator), 5.0)

    def test_order_independent(self):
        rng = np.random.default_rng(0)
        scores = [rng.normal(size=n) * 1e6 for n in (3, 17, 5)]
        a = aggregate_dataset_scores(scores)
        b = aggregate_dataset_scores([s[::-1] for s in reversed(scores)])
        self.assertEqual(a, b)

    def test_empty(self):
        with self.assertRaises(InvalidArgument):
            aggregate_dataset_scores([[]])
        with self.assertRaises(InvalidArgument):
            aggregate_dataset_scores([])


if __name__ == "__main__":
    unittest.main()
