# gpcv/misc/priors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Priors attached to scalar model parameters.

A prior plays two roles: it defines the support of a parameter (used to
reject candidates and to bound the search during tuning) and it provides a
log-density used to regularize the tuning objective.

Classes
-------
UninformativePrior
    Flat, improper prior on the real line (default).
FixedPrior
    Marks a parameter as non-tunable.
PositivePrior, NonNegativePrior
    Flat, improper priors on (0, inf) and [0, inf).
UniformPrior
    Uniform density on [lower, upper].
GaussianPrior
    Normal density with mean mu and standard deviation sigma.
LogNormalPrior
    Log-normal density, log(x) ~ N(mu, sigma^2).
"""
import math
from dataclasses import dataclass
from typing import Tuple

import gpcv.num as gnp
from gpcv.exceptions import InvalidArgument


@dataclass(frozen=True)
class Prior:
    """Base class of the prior variants."""

    name = "prior"
    is_fixed = False

    def is_valid(self, x) -> bool:
        return bool(math.isfinite(x))

    def log_likelihood(self, x) -> float:
        raise NotImplementedError

    def bounds(self) -> Tuple[float, float]:
        return (-gnp.inf, gnp.inf)

    def to_dict(self) -> dict:
        d = {"name": self.name}
        d.update(self.__dict__)
        return d


@dataclass(frozen=True)
class UninformativePrior(Prior):
    name = "uninformative"

    def log_likelihood(self, x):
        return 0.0 if self.is_valid(x) else -gnp.inf


@dataclass(frozen=True)
class FixedPrior(Prior):
    name = "fixed"
    is_fixed = True

    def log_likelihood(self, x):
        return 0.0


@dataclass(frozen=True)
class PositivePrior(Prior):
    name = "positive"

    def is_valid(self, x):
        return bool(math.isfinite(x) and x > 0.0)

    def log_likelihood(self, x):
        return 0.0 if self.is_valid(x) else -gnp.inf

    def bounds(self):
        # smallest bound that is still inside the open support
        return (float(gnp.eps), gnp.inf)


@dataclass(frozen=True)
class NonNegativePrior(Prior):
    name = "non_negative"

    def is_valid(self, x):
        return bool(math.isfinite(x) and x >= 0.0)

    def log_likelihood(self, x):
        return 0.0 if self.is_valid(x) else -gnp.inf

    def bounds(self):
        return (0.0, gnp.inf)


@dataclass(frozen=True)
class UniformPrior(Prior):
    lower: float = 0.0
    upper: float = 1.0
    name = "uniform"

    def __post_init__(self):
        if not self.lower < self.upper:
            raise InvalidArgument(
                f"UniformPrior requires lower < upper, got [{self.lower}, {self.upper}]"
            )

    def is_valid(self, x):
        return bool(self.lower <= x <= self.upper)

    def log_likelihood(self, x):
        if not self.is_valid(x):
            return -gnp.inf
        return -math.log(self.upper - self.lower)

    def bounds(self):
        return (self.lower, self.upper)


@dataclass(frozen=True)
class GaussianPrior(Prior):
    mu: float = 0.0
    sigma: float = 1.0
    name = "gaussian"

    def __post_init__(self):
        if not self.sigma > 0.0:
            raise InvalidArgument(f"GaussianPrior requires sigma > 0, got {self.sigma}")

    def log_likelihood(self, x):
        if not self.is_valid(x):
            return -gnp.inf
        return float(gnp.normal.logpdf(x, loc=self.mu, scale=self.sigma))


@dataclass(frozen=True)
class LogNormalPrior(Prior):
    mu: float = 0.0
    sigma: float = 1.0
    name = "log_normal"

    def __post_init__(self):
        if not self.sigma > 0.0:
            raise InvalidArgument(f"LogNormalPrior requires sigma > 0, got {self.sigma}")

    def is_valid(self, x):
        return bool(math.isfinite(x) and x > 0.0)

    def log_likelihood(self, x):
        if not self.is_valid(x):
            return -gnp.inf
        return float(gnp.lognorm.logpdf(x, s=self.sigma, scale=math.exp(self.mu)))

    def bounds(self):
        return (float(gnp.eps), gnp.inf)
