# gpcv/core/distribution.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian distributions over a finite set of points.

MarginalDistribution keeps a mean vector and a vector of variances
(diagonal covariance). JointDistribution keeps a mean vector and a full
covariance matrix. Both are used for dataset targets and for predictions.
"""
import gpcv.num as gnp
from gpcv.exceptions import InvalidArgument


class MarginalDistribution:
    """Mean and per-point variance, no cross-covariance."""

    def __init__(self, mean, variance=None):
        self.mean = gnp.asdouble(mean).reshape(-1)
        if variance is None:
            self.variance = gnp.zeros(self.mean.shape[0])
        else:
            self.variance = gnp.asdouble(variance).reshape(-1)
        if self.variance.shape[0] != self.mean.shape[0]:
            raise InvalidArgument(
                f"mean and variance sizes differ: {self.mean.shape[0]} != {self.variance.shape[0]}"
            )

    def __len__(self):
        return self.mean.shape[0]

    @property
    def size(self):
        return len(self)

    def __eq__(self, other):
        if not isinstance(other, MarginalDistribution):
            return NotImplemented
        return gnp.array_equal(self.mean, other.mean) and gnp.array_equal(
            self.variance, other.variance
        )

    def __repr__(self):
        return f"MarginalDistribution(size={len(self)})"

    def has_covariance(self):
        return bool(gnp.any(self.variance != 0.0))

    def covariance_matrix(self):
        return gnp.diag(self.variance)

    def subset(self, indices):
        indices = gnp.asint(indices)
        return MarginalDistribution(self.mean[indices], self.variance[indices])


class JointDistribution:
    """Mean vector and full covariance matrix."""

    def __init__(self, mean, covariance):
        self.mean = gnp.asdouble(mean).reshape(-1)
        self.covariance = gnp.asdouble(covariance)
        n = self.mean.shape[0]
        if self.covariance.shape != (n, n):
            raise InvalidArgument(
                f"covariance must have shape ({n}, {n}), got {self.covariance.shape}"
            )

    def __len__(self):
        return self.mean.shape[0]

    @property
    def size(self):
        return len(self)

    @property
    def variance(self):
        return gnp.diag(self.covariance).copy()

    def __eq__(self, other):
        if not isinstance(other, JointDistribution):
            return NotImplemented
        return gnp.array_equal(self.mean, other.mean) and gnp.array_equal(
            self.covariance, other.covariance
        )

    def __repr__(self):
        return f"JointDistribution(size={len(self)})"

    def has_covariance(self):
        return bool(gnp.any(self.covariance != 0.0))

    def covariance_matrix(self):
        return self.covariance

    def marginal(self):
        return MarginalDistribution(self.mean, self.variance)

    def subset(self, indices):
        indices = gnp.asint(indices)
        return JointDistribution(
            self.mean[indices], self.covariance[gnp.ix_(indices, indices)]
        )


def as_distribution(targets):
    """Targets given as a plain vector are read as exact observations."""
    if isinstance(targets, (MarginalDistribution, JointDistribution)):
        return targets
    return MarginalDistribution(targets)
