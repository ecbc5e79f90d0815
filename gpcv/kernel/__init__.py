# gpcv/kernel/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Covariance functions.

Modules
-------
base
    CovarianceFunction base class, sums, constant and white-noise terms.
exponential
    Exponential kernel and covariance.
matern
    Matérn family of kernels with half-integer regularity.

Public API
-----------
- Base classes:
    CovarianceFunction, StationaryCovarianceFunction, SumOfCovarianceFunctions
- Covariance functions:
    Constant, IndependentNoise, Exponential, Matern
- Kernels:
    exponential_kernel, maternp_kernel
"""

from .base import (
    CovarianceFunction,
    StationaryCovarianceFunction,
    SumOfCovarianceFunctions,
    Constant,
    IndependentNoise,
)
from .exponential import exponential_kernel, Exponential
from .matern import maternp_kernel, Matern

__all__ = [
    "CovarianceFunction",
    "StationaryCovarianceFunction",
    "SumOfCovarianceFunctions",
    "Constant",
    "IndependentNoise",
    "exponential_kernel",
    "Exponential",
    "maternp_kernel",
    "Matern",
]
