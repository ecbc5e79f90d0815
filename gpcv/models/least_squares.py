# gpcv/models/least_squares.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Ordinary least squares regression on numeric features."""
from dataclasses import dataclass

import gpcv.num as gnp
from gpcv.core.model import RegressionModel
from gpcv.core.prediction import PredictType


@dataclass(frozen=True)
class LeastSquaresFit:
    coefficients: gnp.ndarray
    add_intercept: bool


def _regressors(features, add_intercept):
    X = gnp.as_design_matrix(features)
    if add_intercept:
        X = gnp.hstack((gnp.ones((X.shape[0], 1)), X))
    return X


class LeastSquaresRegression(RegressionModel):
    """Linear model fit by least squares.

    Only point predictions are available: marginal and joint requests
    raise IllegalState.
    """

    supported_predict_types = frozenset([PredictType.MEAN])

    def __init__(self, add_intercept=True, name=None):
        super().__init__(name=name)
        self.add_intercept = add_intercept

    def _fit_impl(self, features, targets):
        X = _regressors(features, self.add_intercept)
        coefficients = gnp.lstsq(X, targets.mean, rcond=None)[0]
        return LeastSquaresFit(gnp.readonly(coefficients), self.add_intercept)

    def _predict_mean_impl(self, fit, features):
        X = _regressors(features, fit.add_intercept)
        return gnp.matmul(X, fit.coefficients)
