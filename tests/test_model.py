import unittest
import warnings

import numpy as np

import gpcv.num as gnp
from gpcv.config import get_config
from gpcv.core import (
    FitModel,
    JointDistribution,
    MarginalDistribution,
    PredictType,
    RegressionDataset,
    RegressionModel,
)
from gpcv.core.model import RegressionModel as BaseModel
from gpcv.evaluation import LeaveOneGroupOut, LeaveOneOut
from gpcv.exceptions import IllegalState, InvalidArgument, PredictionFallbackWarning
from gpcv.kernel import IndependentNoise, Matern
from gpcv.misc.toydata import make_toy_gp_model, make_toy_linear_data
from gpcv.models import GaussianProcessRegression, LeastSquaresRegression


class JointOnlyModel(RegressionModel):
    """Predicts the mean of the training targets with unit covariance."""

    supported_predict_types = frozenset([PredictType.JOINT])

    def __init__(self):
        super().__init__({"scale": 1.0})
        self.joint_calls = 0

    def _fit_impl(self, features, targets):
        return float(gnp.mean(targets.mean))

    def _predict_joint_impl(self, fit, features):
        self.joint_calls += 1
        m = len(features)
        scale = self.get_param_value("scale")
        return JointDistribution(gnp.full((m,), fit * scale), gnp.eye(m))


class MarginalOnlyModel(RegressionModel):
    supported_predict_types = frozenset([PredictType.MARGINAL])

    def _fit_impl(self, features, targets):
        return float(gnp.mean(targets.mean))

    def _predict_marginal_impl(self, fit, features):
        m = len(features)
        return MarginalDistribution(gnp.full((m,), fit), gnp.ones((m,)))


class WrongSizeModel(RegressionModel):
    supported_predict_types = frozenset([PredictType.MEAN])

    def _fit_impl(self, features, targets):
        return None

    def _predict_mean_impl(self, fit, features):
        return gnp.zeros((len(features) + 1,))


class ConfigTestCase(unittest.TestCase):
    def setUp(self):
        self._fallback = get_config().prediction_fallback

    def tearDown(self):
        get_config().update(prediction_fallback=self._fallback)


class TestFitAndPredict(ConfigTestCase):
    def setUp(self):
        super().setUp()
        self.dataset = make_toy_linear_data()

    def test_predict_before_fit(self):
        model = LeastSquaresRegression()
        self.assertFalse(model.has_been_fit())
        with self.assertRaises(IllegalState):
            model.predict(self.dataset.features)

    def test_fit_returns_fit_model(self):
        model = LeastSquaresRegression()
        fit_model = model.fit(self.dataset)
        self.assertIsInstance(fit_model, FitModel)
        self.assertTrue(model.has_been_fit())
        self.assertFalse(fit_model.model.has_been_fit())
        mean = model.predict(self.dataset.features).mean()
        self.assertEqual(mean.shape[0], len(self.dataset))
        self.assertTrue(gnp.allclose(mean, fit_model.predict(self.dataset.features).mean()))

    def test_fit_validates_sizes(self):
        model = LeastSquaresRegression()
        with self.assertRaises(InvalidArgument):
            model.fit(gnp.zeros((0,)), gnp.zeros((0,)))
        with self.assertRaises(InvalidArgument):
            model.fit(gnp.zeros((3,)), gnp.zeros((2,)))
        with self.assertRaises(InvalidArgument):
            model.fit(gnp.zeros((3,)))

    def test_fit_and_predict_matches_fit_then_predict(self):
        model = LeastSquaresRegression()
        xt = gnp.array([0.5, 20.0])
        direct = model.fit_and_predict(self.dataset.features, self.dataset.targets, xt)
        other = LeastSquaresRegression()
        other.fit(self.dataset.features, self.dataset.targets)
        self.assertTrue(gnp.allclose(direct.mean(), other.predict(xt).mean()))

    def test_least_squares_recovers_line(self):
        x = gnp.arange(6).astype(float)
        model = LeastSquaresRegression()
        model.fit(x, 4.0 + 2.0 * x)
        mean = model.predict(gnp.array([10.0])).mean()
        self.assertAlmostEqual(float(mean[0]), 24.0)
        with self.assertRaises(IllegalState):
            model.predict(x).marginal()
        with self.assertRaises(IllegalState):
            model.predict(x).joint()

    def test_wrong_prediction_size(self):
        model = WrongSizeModel()
        model.fit(self.dataset)
        with self.assertRaises(IllegalState):
            model.predict(self.dataset.features).mean()

    def test_fit_is_a_snapshot(self):
        model = JointOnlyModel()
        fit_model = model.fit([0.0, 1.0], [2.0, 4.0])
        model.set_param("scale", 10.0)
        joint = fit_model.predict([5.0]).joint()
        self.assertAlmostEqual(float(joint.mean[0]), 3.0)


class TestPredictionDispatch(ConfigTestCase):
    def setUp(self):
        super().setUp()
        self.features = [0.0, 1.0, 2.0]
        self.targets = [1.0, 2.0, 3.0]

    def test_marginal_from_joint_warns(self):
        model = JointOnlyModel()
        model.fit(self.features, self.targets)
        get_config().update(prediction_fallback="warn")
        with self.assertWarns(PredictionFallbackWarning):
            marginal = model.predict(self.features).marginal()
        self.assertTrue(gnp.allclose(marginal.variance, gnp.ones((3,))))
        with self.assertWarns(PredictionFallbackWarning):
            mean = model.predict(self.features).mean()
        self.assertTrue(gnp.allclose(mean, marginal.mean))

    def test_fallback_error_mode(self):
        model = JointOnlyModel()
        model.fit(self.features, self.targets)
        get_config().update(prediction_fallback="error")
        with self.assertRaises(IllegalState):
            model.predict(self.features).marginal()
        joint = model.predict(self.features).joint()
        self.assertEqual(len(joint), 3)

    def test_fallback_ignore_mode(self):
        model = JointOnlyModel()
        model.fit(self.features, self.targets)
        get_config().update(prediction_fallback="ignore")
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            model.predict(self.features).marginal()
        self.assertFalse(
            any(issubclass(w.category, PredictionFallbackWarning) for w in caught)
        )

    def test_mean_from_marginal(self):
        model = MarginalOnlyModel()
        model.fit(self.features, self.targets)
        get_config().update(prediction_fallback="error")
        mean = model.predict(self.features).mean()
        self.assertTrue(gnp.allclose(mean, gnp.full((3,), 2.0)))
        self.assertTrue(model.can_predict(PredictType.MEAN))
        self.assertFalse(model.can_predict(PredictType.JOINT))
        with self.assertRaises(IllegalState):
            model.predict(self.features).joint()

    def test_views_are_cached(self):
        model = JointOnlyModel()
        fit_model = model.fit(self.features, self.targets)
        prediction = fit_model.predict(self.features)
        prediction.joint()
        prediction.joint()
        self.assertEqual(fit_model.model.joint_calls, 1)


class TestModelIdentity(unittest.TestCase):
    def test_equality(self):
        a = JointOnlyModel()
        b = JointOnlyModel()
        self.assertEqual(a, b)
        b.set_param("scale", 2.0)
        self.assertNotEqual(a, b)

    def test_equality_after_fit(self):
        a = JointOnlyModel()
        b = JointOnlyModel()
        a.fit([0.0], [1.0])
        with self.assertRaises(IllegalState):
            a == b

    def test_clone_is_unfit_and_independent(self):
        a = JointOnlyModel()
        a.fit([0.0], [1.0])
        c = a.clone()
        self.assertFalse(c.has_been_fit())
        c.set_param("scale", 5.0)
        self.assertEqual(a.get_param_value("scale"), 1.0)


class TestGaussianProcessRegression(unittest.TestCase):
    def setUp(self):
        self.model = GaussianProcessRegression(
            Matern(p=2, sigma=2.0, length_scale=1.5) + IndependentNoise(sigma=0.1)
        )
        x = gnp.linspace(0.0, 5.0, 8)
        self.dataset = RegressionDataset(x, np.sin(x))

    def test_parameters_are_the_covariance_parameters(self):
        names = list(self.model.get_params())
        self.assertEqual(
            names, ["matern_sigma", "matern_length_scale", "noise_sigma"]
        )
        self.model.set_param("noise_sigma", 0.2)
        self.assertEqual(self.model.covariance.terms[1].get_param_value("noise_sigma"), 0.2)

    def test_representations_are_consistent(self):
        self.model.fit(self.dataset)
        xt = gnp.array([0.3, 2.2, 4.9])
        prediction = self.model.predict(xt)
        joint = prediction.joint()
        marginal = prediction.marginal()
        self.assertTrue(gnp.allclose(joint.variance, marginal.variance))
        self.assertTrue(gnp.allclose(joint.mean, prediction.mean()))
        self.assertTrue(gnp.all(marginal.variance >= 0.0))

    def test_fit_state_is_read_only(self):
        fit_model = self.model.fit(self.dataset)
        with self.assertRaises(ValueError):
            fit_model.fit.information[0] = 1.0

    def assert_cross_validation_matches_folds(self, dataset, strategy):
        indexer = strategy.indexer(dataset)
        fast = self.model.cross_validated_predictions(dataset, indexer)
        slow = BaseModel.cross_validated_predictions(self.model, dataset, indexer)
        self.assertEqual(list(fast), list(slow))
        for key in indexer:
            self.assertTrue(gnp.allclose(fast[key].mean(), slow[key].mean()))
            self.assertTrue(
                gnp.allclose(
                    fast[key].joint().covariance,
                    slow[key].joint().covariance,
                    atol=1e-8,
                )
            )

    def test_virtual_cross_validation_matches_folds(self):
        targets = MarginalDistribution(self.dataset.targets.mean, gnp.full((8,), 0.01))
        dataset = RegressionDataset(self.dataset.features, targets)
        for strategy in (LeaveOneOut(), LeaveOneGroupOut([0, 0, 1, 1, 1, 2, 2, 3])):
            self.assert_cross_validation_matches_folds(dataset, strategy)

    def test_cross_validation_with_correlated_target_noise(self):
        x = self.dataset.features
        noise = 0.3 * gnp.exp(-gnp.abs(x.reshape(-1, 1) - x.reshape(1, -1)))
        dataset = RegressionDataset(x, JointDistribution(self.dataset.targets.mean, noise))
        for strategy in (LeaveOneOut(), LeaveOneGroupOut([0, 0, 1, 1, 1, 2, 2, 3])):
            self.assert_cross_validation_matches_folds(dataset, strategy)

    def test_cross_validation_with_noise_correlated_within_groups(self):
        groups = [0, 0, 1, 1, 1, 2, 2, 3]
        same = gnp.array([[float(a == b) for b in groups] for a in groups])
        noise = 0.01 * gnp.eye(8) + 0.005 * (same - gnp.eye(8))
        dataset = RegressionDataset(
            self.dataset.features, JointDistribution(self.dataset.targets.mean, noise)
        )
        self.assert_cross_validation_matches_folds(dataset, LeaveOneGroupOut(groups))

    def test_set_params_round_trip_keeps_predictions(self):
        model = make_toy_gp_model()
        dataset = make_toy_linear_data()
        xt = gnp.array([0.5, 3.3, 11.0])
        before = model.fit(dataset).predict(xt).joint()
        params = model.get_params()
        model.set_params(model.get_params())
        self.assertEqual(model.get_params(), params)
        after = model.fit(dataset).predict(xt).joint()
        self.assertTrue(gnp.array_equal(before.mean, after.mean))
        self.assertTrue(gnp.array_equal(before.covariance, after.covariance))


if __name__ == "__main__":
    unittest.main()
