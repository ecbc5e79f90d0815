# gpcv/evaluation/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Cross-validation and evaluation metrics.

Modules
-------
folds
    Group indexers, fold strategies and fold construction.
cross_validation
    CrossValidation helper, reassembly of per-fold results and
    aggregation of scores over datasets.
metrics
    Prediction metrics and cross-validated metrics.
scoringrules
    Closed-form Gaussian scoring rules.
"""

from .folds import (
    GroupIndexer,
    KFold,
    LeaveOneGroupOut,
    LeaveOneOut,
    RegressionFold,
    check_indexer,
    dataset_size_from_indexer,
    folds_from_indexer,
)
from .cross_validation import (
    CrossValidation,
    aggregate_dataset_scores,
    concatenate_marginal_predictions,
    concatenate_mean_predictions,
    cross_validated_scores,
    max_aggregator,
    mean_aggregator,
    sum_aggregator,
)
from .metrics import (
    ChiSquared,
    ContinuousRankedProbabilityScore,
    CrossValidatedMetric,
    LeaveOneOutLikelihood,
    LeaveOneOutRMSE,
    NegativeLogLikelihood,
    PredictionMetric,
    Residuals,
    RootMeanSquareError,
)
from .scoringrules import crps_gaussian, log_score_gaussian

__all__ = [
    "GroupIndexer",
    "KFold",
    "LeaveOneGroupOut",
    "LeaveOneOut",
    "RegressionFold",
    "check_indexer",
    "dataset_size_from_indexer",
    "folds_from_indexer",
    "CrossValidation",
    "aggregate_dataset_scores",
    "concatenate_marginal_predictions",
    "concatenate_mean_predictions",
    "cross_validated_scores",
    "max_aggregator",
    "mean_aggregator",
    "sum_aggregator",
    "ChiSquared",
    "ContinuousRankedProbabilityScore",
    "CrossValidatedMetric",
    "LeaveOneOutLikelihood",
    "LeaveOneOutRMSE",
    "NegativeLogLikelihood",
    "PredictionMetric",
    "Residuals",
    "RootMeanSquareError",
    "crps_gaussian",
    "log_score_gaussian",
]
