# gpcv/evaluation/metrics.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Evaluation metrics.

Prediction metrics score a Prediction against target distributions:

    metric(prediction, targets) -> float or ndarray, shape (m,)

A scalar scores the whole group of predicted points, a vector scores each
point. `predict_type` is the representation the metric reads from the
prediction. Target variances are added to predictive variances.

Cross-validated metrics score a model on a dataset:

    metric(dataset, model) -> ndarray

and are the objectives used for tuning.
"""
import gpcv.num as gnp
from gpcv.core.distribution import as_distribution
from gpcv.core.prediction import PredictType
from gpcv.exceptions import InvalidArgument
from .folds import LeaveOneOut
from .scoringrules import crps_gaussian, log_score_gaussian


class PredictionMetric:
    """Base class of prediction metrics."""

    name = "metric"
    predict_type = PredictType.MEAN

    def __call__(self, prediction, targets):
        targets = as_distribution(targets)
        pred = prediction.get(self.predict_type)
        if len(prediction) != len(targets):
            raise InvalidArgument(
                f"{len(prediction)} predictions for {len(targets)} targets"
            )
        return self._evaluate(pred, targets)

    def _evaluate(self, pred, targets):
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}({self.predict_type.value})"


class NegativeLogLikelihood(PredictionMetric):
    """Gaussian negative log-likelihood of the targets.

    With JOINT, returns the negative log-density of the whole group under
    N(mean, cov + Σ_targets). With MARGINAL, returns one value per point,
    ignoring correlations.
    """

    name = "negative_log_likelihood"

    def __init__(self, predict_type=PredictType.JOINT):
        predict_type = PredictType(predict_type)
        if predict_type is PredictType.MEAN:
            raise InvalidArgument("NegativeLogLikelihood needs a distribution")
        self.predict_type = predict_type

    def _evaluate(self, pred, targets):
        if self.predict_type is PredictType.MARGINAL:
            return log_score_gaussian(pred.mean, pred.variance + targets.variance, targets.mean)
        residuals = targets.mean - pred.mean
        S = pred.covariance_matrix() + targets.covariance_matrix()
        Sinv_r, C = gnp.cholesky_solve(S, residuals)
        n = residuals.shape[0]
        return float(
            0.5 * gnp.sum(residuals * Sinv_r)
            + 0.5 * gnp.logdet_from_factor(C)
            + 0.5 * n * gnp.log(2.0 * gnp.pi)
        )


class RootMeanSquareError(PredictionMetric):
    name = "root_mean_square_error"
    predict_type = PredictType.MEAN

    def _evaluate(self, pred, targets):
        residuals = targets.mean - pred
        return float(gnp.sqrt(gnp.mean(residuals**2)))


class Residuals(PredictionMetric):
    """Per-point residuals target - predicted mean."""

    name = "residuals"
    predict_type = PredictType.MEAN

    def _evaluate(self, pred, targets):
        return targets.mean - pred


class ChiSquared(PredictionMetric):
    """r^T (cov + Σ_targets)^{-1} r with r = target - predicted mean."""

    name = "chi_squared"
    predict_type = PredictType.JOINT

    def _evaluate(self, pred, targets):
        residuals = targets.mean - pred.mean
        S = pred.covariance_matrix() + targets.covariance_matrix()
        Sinv_r, _ = gnp.cholesky_solve(S, residuals)
        return float(gnp.sum(residuals * Sinv_r))


class ContinuousRankedProbabilityScore(PredictionMetric):
    """Closed-form CRPS of the Gaussian marginal predictions, per point."""

    name = "crps"
    predict_type = PredictType.MARGINAL

    def _evaluate(self, pred, targets):
        sigma = gnp.sqrt(pred.variance + targets.variance)
        return crps_gaussian(pred.mean, sigma, targets.mean)


# ------------------------------------------------------------------
# Cross-validated metrics
# ------------------------------------------------------------------
class CrossValidatedMetric:
    """Scores of a prediction metric under a cross-validation strategy.

    Parameters
    ----------
    metric : PredictionMetric
    strategy : LeaveOneOut, LeaveOneGroupOut, KFold or dict, optional
        Defaults to leave-one-out.
    """

    def __init__(self, metric, strategy=None):
        self.metric = metric
        self.strategy = LeaveOneOut() if strategy is None else strategy

    def __repr__(self):
        return f"{type(self).__name__}({self.metric!r}, {self.strategy!r})"

    def __call__(self, dataset, model):
        return model.cross_validate().scores(self.metric, dataset, self.strategy)


class LeaveOneOutLikelihood(CrossValidatedMetric):
    """Per-row negative log predictive density under leave-one-out."""

    def __init__(self):
        super().__init__(NegativeLogLikelihood(PredictType.MARGINAL), LeaveOneOut())


class LeaveOneOutRMSE(CrossValidatedMetric):
    """Leave-one-out prediction error of each row."""

    def __init__(self):
        super().__init__(RootMeanSquareError(), LeaveOneOut())
