# gpcv/models/gp.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian process regression with a zero prior mean.

Given training points x_i with targets y ~ N(m, Σ), the model uses

    K = k(x_i) + Σ,

factorised once at fit time as K = C C^T, and the kriging equations

    mean(x_t)     = k(x_i, x_t)^T K^{-1} m
    cov(x_t)      = k(x_t) - v^T v,   v = C^{-1} k(x_i, x_t).

Cross-validated predictions use the virtual cross-validation formulas:
with A = K^{-1} computed once on the full dataset, the prediction of a
held-out group g given the remaining rows is

    Σ_g = (A_gg)^{-1} - Σ_gg
    μ_g = m_g - (A_gg)^{-1} (A m)_g,

which avoids refitting the model for every fold. The formulas hold when Σ
has no entry between two different groups. Otherwise the model is refit
fold by fold.
"""
from collections import OrderedDict
from dataclasses import dataclass

import gpcv.num as gnp
from gpcv.config import get_config, get_logger
from gpcv.core.distribution import JointDistribution, MarginalDistribution
from gpcv.core.model import RegressionModel
from gpcv.core.prediction import FixedPrediction, PredictType

_logger = get_logger()


@dataclass(frozen=True)
class GPFit:
    """Fit state of a GaussianProcessRegression.

    Attributes
    ----------
    train_features : ndarray, shape (n, d)
    cholesky : ndarray, shape (n, n)
        Lower Cholesky factor of k(x_i) + Σ.
    information : ndarray, shape (n,)
        (k(x_i) + Σ)^{-1} m.
    """

    train_features: gnp.ndarray
    cholesky: gnp.ndarray
    information: gnp.ndarray


def _clean_variances(variance):
    if gnp.any(variance < 0.0):
        _logger.warning("Negative variances detected. Consider adding a noise term.")
        if get_config().zero_neg_variances:
            variance = gnp.maximum(variance, 0.0)
    return variance


class GaussianProcessRegression(RegressionModel):
    """Zero-mean Gaussian process regression.

    Parameters
    ----------
    covariance : gpcv.kernel.CovarianceFunction
        Prior covariance. Its parameters are the parameters of the model.
    name : str, optional

    Examples
    --------
    >>> from gpcv.kernel import Matern, IndependentNoise
    >>> model = GaussianProcessRegression(Matern(p=2) + IndependentNoise(0.1))
    >>> fit_model = model.fit(x, y)
    >>> marginal = fit_model.predict(xt).marginal()
    """

    supported_predict_types = frozenset(
        [PredictType.MEAN, PredictType.MARGINAL, PredictType.JOINT]
    )

    def __init__(self, covariance, name=None):
        super().__init__(name=name)
        self.covariance = covariance

    def get_params(self):
        return self.covariance.get_params()

    def unchecked_set_param(self, name, param):
        self.covariance.unchecked_set_param(name, param)

    def _fit_impl(self, features, targets):
        xi = gnp.as_design_matrix(features)
        K = self.covariance(xi) + targets.covariance_matrix()
        information, C = gnp.cholesky_solve(K, targets.mean)
        return GPFit(gnp.readonly(xi), gnp.readonly(C), gnp.readonly(information))

    def _cross_terms(self, fit, features):
        xt = gnp.as_design_matrix(features)
        Kit = self.covariance(fit.train_features, xt)
        return xt, Kit

    def _predict_mean_impl(self, fit, features):
        _, Kit = self._cross_terms(fit, features)
        return gnp.matmul(Kit.T, fit.information)

    def _predict_marginal_impl(self, fit, features):
        xt, Kit = self._cross_terms(fit, features)
        mean = gnp.matmul(Kit.T, fit.information)
        v = gnp.solve_triangular(fit.cholesky, Kit, lower=True)
        variance = self.covariance(xt, pairwise=True) - gnp.sum(v * v, axis=0)
        return MarginalDistribution(mean, _clean_variances(variance))

    def _predict_joint_impl(self, fit, features):
        xt, Kit = self._cross_terms(fit, features)
        mean = gnp.matmul(Kit.T, fit.information)
        v = gnp.solve_triangular(fit.cholesky, Kit, lower=True)
        covariance = self.covariance(xt) - gnp.matmul(v.T, v)
        return JointDistribution(mean, _with_clean_diagonal(covariance))

    def cross_validated_predictions(self, dataset, indexer):
        """Held-out predictions from a single factorisation of the full dataset.

        Returns the same predictions as fitting a fresh model on every fold,
        keyed like `indexer`. Falls back to per-fold refits when the target
        covariance couples rows of different groups.
        """
        from gpcv.evaluation.folds import _as_indexer, check_indexer

        indexer = _as_indexer(indexer)
        check_indexer(indexer, len(dataset))
        target_cov = dataset.targets.covariance_matrix()
        if _couples_groups(target_cov, indexer):
            _logger.debug("Target covariance couples groups, refitting per fold")
            return super().cross_validated_predictions(dataset, indexer)

        xi = gnp.as_design_matrix(dataset.features)
        y = dataset.targets.mean
        K = self.covariance(xi) + target_cov
        C = gnp.cholesky(K)
        A = gnp.cholesky_inv_from_factor(C)
        Ay = gnp.matmul(A, y)

        predictions = OrderedDict()
        for key, idx in indexer.items():
            block = gnp.ix_(idx, idx)
            inv_Agg = gnp.inv(A[block])
            mean = y[idx] - gnp.matmul(inv_Agg, Ay[idx])
            covariance = inv_Agg - target_cov[block]
            covariance = 0.5 * (covariance + covariance.T)
            predictions[key] = FixedPrediction(
                JointDistribution(mean, _with_clean_diagonal(covariance))
            )
        return predictions


def _with_clean_diagonal(covariance):
    variance = gnp.diag(covariance)
    cleaned = _clean_variances(variance)
    if cleaned is variance:
        return covariance
    covariance = gnp.copy(covariance)
    n = covariance.shape[0]
    covariance[gnp.arange(n), gnp.arange(n)] = cleaned
    return covariance


def _couples_groups(target_cov, indexer):
    """True if the target covariance has a nonzero entry between two groups."""
    labels = gnp.zeros((target_cov.shape[0],), dtype=int)
    for label, idx in enumerate(indexer.values()):
        labels[idx] = label
    across = labels.reshape(-1, 1) != labels.reshape(1, -1)
    return bool(gnp.any((target_cov != 0.0) & across))
