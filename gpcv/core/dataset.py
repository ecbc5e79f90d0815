# gpcv/core/dataset.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Regression datasets.

A RegressionDataset holds an ordered sequence of features, one target per
feature and a string-keyed metadata mapping. Features are opaque to this
module: any list, or any array whose first axis indexes the rows, is
accepted. Models interpret them.
"""
from typing import Dict, Optional

import gpcv.num as gnp
from gpcv.exceptions import InvalidArgument
from .distribution import as_distribution


def features_size(features) -> int:
    if gnp.isarray(features):
        return features.shape[0] if features.ndim > 0 else 0
    return len(features)


def subset_features(features, indices):
    if gnp.isarray(features):
        return features[gnp.asint(indices)]
    return [features[i] for i in indices]


class RegressionDataset:
    """Features, targets and metadata of a regression problem.

    Parameters
    ----------
    features : sequence
        One entry per row.
    targets : array_like, MarginalDistribution or JointDistribution
        One target per row. A plain vector is read as exact observations.
    metadata : dict, optional
        String-keyed mapping carried along with the data.
    """

    def __init__(self, features, targets, metadata: Optional[Dict[str, str]] = None):
        self.features = features
        self.targets = as_distribution(targets)
        self.metadata = dict(metadata) if metadata is not None else {}
        n = features_size(features)
        if n != len(self.targets):
            raise InvalidArgument(
                f"features and targets sizes differ: {n} != {len(self.targets)}"
            )

    def __len__(self):
        return features_size(self.features)

    @property
    def size(self):
        return len(self)

    def __eq__(self, other):
        if not isinstance(other, RegressionDataset):
            return NotImplemented
        if gnp.isarray(self.features) or gnp.isarray(other.features):
            same_features = gnp.array_equal(
                gnp.asarray(self.features), gnp.asarray(other.features)
            )
        else:
            same_features = list(self.features) == list(other.features)
        return (
            bool(same_features)
            and self.targets == other.targets
            and self.metadata == other.metadata
        )

    def __repr__(self):
        return f"RegressionDataset(size={len(self)}, metadata={self.metadata})"

    def subset(self, indices):
        """Return the rows at `indices`, in that order, with the same metadata."""
        return RegressionDataset(
            subset_features(self.features, indices),
            self.targets.subset(indices),
            self.metadata,
        )
