# gpcv/models/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Concrete regression models.

Public API
----------
GaussianProcessRegression : class
    Zero-mean GP with mean, marginal and joint predictions, and virtual
    cross-validation.
GPFit : class
    Fit state of a GaussianProcessRegression.
LeastSquaresRegression : class
    Linear least squares, mean predictions only.
"""

from .gp import GaussianProcessRegression, GPFit
from .least_squares import LeastSquaresRegression, LeastSquaresFit

__all__ = [
    "GaussianProcessRegression",
    "GPFit",
    "LeastSquaresRegression",
    "LeastSquaresFit",
]
