# gpcv/tune/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Hyperparameter tuning.

Public API
----------
DerivativeFreeOptimizer : class
    Bounded Nelder-Mead / Powell minimizer returning the best point seen.
Tuner : class
    Minimizes a prior-regularized cross-validated metric over the tunable
    parameters of a model.
get_tuner : function
    Tuner with the default optimizer.
tune_model : function
    Tuned copy of a model.
"""

from .optimizer import DerivativeFreeOptimizer
from .tuner import Tuner, get_tuner, tune_model

__all__ = ["DerivativeFreeOptimizer", "Tuner", "get_tuner", "tune_model"]
