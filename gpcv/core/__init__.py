# gpcv/core/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------

"""
Core components of the gpcv package.

This subpackage contains the data model (distributions and datasets) and
the model / fit / prediction triad shared by all regression models.

Public API
----------
RegressionModel : class
    Base class of models, with capability-based prediction dispatch.
FitModel : class
    A model snapshot paired with its fit state.
Prediction, FixedPrediction : class
    Deferred and precomputed predictions.
PredictType : enum
    MEAN, MARGINAL, JOINT.
MarginalDistribution, JointDistribution : class
    Gaussian distributions over a finite set of points.
RegressionDataset : class
    Features, targets and metadata.
"""

from .distribution import MarginalDistribution, JointDistribution, as_distribution
from .dataset import RegressionDataset
from .prediction import Prediction, FixedPrediction, PredictType
from .model import RegressionModel, FitModel

__all__ = [
    "MarginalDistribution",
    "JointDistribution",
    "as_distribution",
    "RegressionDataset",
    "Prediction",
    "FixedPrediction",
    "PredictType",
    "RegressionModel",
    "FitModel",
]
