# gpcv/evaluation/cross_validation.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Cross-validation of regression models.

Predictions are produced per held-out group, then reassembled:

- per-row results (means, variances, per-row scores) are scattered back to
  the original row positions through the group indices;
- per-group scalar results form a vector in indexer key order.

Reassembly only looks predictions up by group key, so the result does not
depend on the order in which the folds were evaluated.
"""
import math
from collections import OrderedDict

import gpcv.num as gnp
from gpcv.core.distribution import MarginalDistribution
from gpcv.exceptions import InvalidArgument
from .folds import (
    LeaveOneOut,
    _as_indexer,
    check_indexer,
    dataset_size_from_indexer,
    folds_from_indexer,
)


def _scatter(indexer, values_by_key, n):
    out = gnp.zeros((n,))
    for key, idx in indexer.items():
        values = gnp.asdouble(values_by_key[key]).reshape(-1)
        if values.shape[0] != idx.shape[0]:
            raise InvalidArgument(
                f"Group {key!r} has {idx.shape[0]} rows but {values.shape[0]} values"
            )
        out[idx] = values
    return out


def concatenate_mean_predictions(indexer, means):
    """Full-length mean vector from per-group means."""
    indexer = _as_indexer(indexer)
    check_indexer(indexer)
    return _scatter(indexer, means, dataset_size_from_indexer(indexer))


def concatenate_marginal_predictions(indexer, marginals):
    """Full-length MarginalDistribution from per-group marginals."""
    indexer = _as_indexer(indexer)
    check_indexer(indexer)
    n = dataset_size_from_indexer(indexer)
    mean = _scatter(indexer, {k: m.mean for k, m in marginals.items()}, n)
    variance = _scatter(indexer, {k: m.variance for k, m in marginals.items()}, n)
    return MarginalDistribution(mean, variance)


def cross_validated_scores(metric, folds, predictions):
    """Evaluate `metric` on each fold and reassemble the results.

    Parameters
    ----------
    metric : callable
        metric(prediction, targets), returning either a scalar for the group
        or one value per held-out row.
    folds : list of RegressionFold
    predictions : dict
        Fold name -> Prediction at the test rows of that fold.

    Returns
    -------
    scores : ndarray
        If the metric returns scalars, one score per fold in fold order.
        Otherwise one score per row of the dataset, at its original position.
    """
    results = []
    for fold in folds:
        value = gnp.asdouble(metric(predictions[fold.name], fold.test_dataset.targets))
        results.append(value)

    if all(r.ndim == 0 for r in results):
        return gnp.array([float(r) for r in results], dtype=float)
    if any(r.ndim == 0 for r in results):
        raise InvalidArgument(
            "A metric must return either a scalar or per-row values for every fold"
        )
    indexer = OrderedDict((fold.name, gnp.asint(fold.test_indices)) for fold in folds)
    values = OrderedDict((fold.name, r) for fold, r in zip(folds, results))
    return _scatter(indexer, values, dataset_size_from_indexer(indexer))


def mean_aggregator(values):
    values = list(values)
    return math.fsum(values) / len(values)


def sum_aggregator(values):
    return math.fsum(values)


def max_aggregator(values):
    return float(gnp.max(gnp.asdouble(list(values))))


def aggregate_dataset_scores(scores, aggregator=mean_aggregator):
    """Reduce each dataset's score vector to its mean, then aggregate.

    Parameters
    ----------
    scores : sequence of array_like
        One score vector per dataset.
    aggregator : callable
        Maps the list of per-dataset means to a single value.
    """
    means = []
    for s in scores:
        s = gnp.asdouble(s).reshape(-1)
        if s.shape[0] == 0:
            raise InvalidArgument("Cannot aggregate an empty score vector")
        means.append(math.fsum(s.tolist()) / s.shape[0])
    if not means:
        raise InvalidArgument("No dataset scores to aggregate")
    return float(aggregator(means))


def _resolve_indexer(dataset, strategy):
    if strategy is None:
        strategy = LeaveOneOut()
    if hasattr(strategy, "indexer"):
        return strategy.indexer(dataset)
    return _as_indexer(strategy)


class CrossValidation:
    """Cross-validation helper bound to a model.

    Every method takes a dataset and a fold strategy (LeaveOneOut,
    LeaveOneGroupOut, KFold) or an explicit group indexer; leave-one-out is
    used when none is given.
    """

    def __init__(self, model):
        self.model = model

    def folds(self, dataset, strategy=None):
        return folds_from_indexer(dataset, _resolve_indexer(dataset, strategy))

    def predictions(self, dataset, strategy=None):
        indexer = _resolve_indexer(dataset, strategy)
        return self.model.cross_validated_predictions(dataset, indexer)

    def means(self, dataset, strategy=None):
        return OrderedDict(
            (k, p.mean()) for k, p in self.predictions(dataset, strategy).items()
        )

    def marginals(self, dataset, strategy=None):
        return OrderedDict(
            (k, p.marginal()) for k, p in self.predictions(dataset, strategy).items()
        )

    def joints(self, dataset, strategy=None):
        return OrderedDict(
            (k, p.joint()) for k, p in self.predictions(dataset, strategy).items()
        )

    def mean_predictions(self, dataset, strategy=None):
        indexer = _resolve_indexer(dataset, strategy)
        predictions = self.model.cross_validated_predictions(dataset, indexer)
        means = OrderedDict((k, p.mean()) for k, p in predictions.items())
        return concatenate_mean_predictions(indexer, means)

    def marginal_predictions(self, dataset, strategy=None):
        indexer = _resolve_indexer(dataset, strategy)
        predictions = self.model.cross_validated_predictions(dataset, indexer)
        marginals = OrderedDict((k, p.marginal()) for k, p in predictions.items())
        return concatenate_marginal_predictions(indexer, marginals)

    def scores(self, metric, dataset, strategy=None):
        """Cross-validated scores of `metric` on `dataset`."""
        indexer = _resolve_indexer(dataset, strategy)
        folds = folds_from_indexer(dataset, indexer)
        predictions = self.model.cross_validated_predictions(dataset, indexer)
        return cross_validated_scores(metric, folds, predictions)
