# gpcv/kernel/base.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Covariance functions with named parameters.

A covariance function is called as

    k(x)                 -> (n, n) covariance at x
    k(x, pairwise=True)  -> (n,) variances at x
    k(x, y)              -> (nx, ny) cross-covariance
    k(x, y, pairwise=True) -> (n,) values k(x_i, y_i)

Features are converted with `gnp.as_design_matrix`: a 1D array is read as
n points in dimension 1.
"""
from collections import OrderedDict

import gpcv.num as gnp
from gpcv.exceptions import InvalidArgument, InvalidParameter
from gpcv.misc.param import Parameter, ParameterHandlingMixin
from gpcv.misc.priors import PositivePrior


class CovarianceFunction(ParameterHandlingMixin):
    """Base class of covariance functions.

    Parameters
    ----------
    params : dict
        Short parameter name -> initial value or Parameter. Bare values get
        a PositivePrior.
    name_prefix : str
        Prepended to every parameter name.
    """

    default_prefix = ""

    def __init__(self, params=None, name_prefix=None):
        super().__init__()
        self.name_prefix = self.default_prefix if name_prefix is None else name_prefix
        for short_name, param in (params or {}).items():
            if not isinstance(param, Parameter):
                param = Parameter(param, PositivePrior())
            self.params[self.name_prefix + short_name] = param

    def __repr__(self):
        return f"<gpcv.kernel.{type(self).__name__} {list(self.get_params())}>"

    def _value(self, short_name):
        return self.params[self.name_prefix + short_name].value

    def __call__(self, x, y=None, pairwise=False):
        x = gnp.as_design_matrix(x)
        if y is not None:
            y = gnp.as_design_matrix(y)
            if pairwise and y.shape[0] != x.shape[0]:
                raise InvalidArgument(
                    f"pairwise evaluation needs equal sizes, got {x.shape[0]} and {y.shape[0]}"
                )
        return self._compute(x, y, pairwise)

    def _compute(self, x, y, pairwise):
        raise NotImplementedError

    def __add__(self, other):
        if not isinstance(other, CovarianceFunction):
            return NotImplemented
        return SumOfCovarianceFunctions(_terms(self) + _terms(other))


def _terms(cov):
    if isinstance(cov, SumOfCovarianceFunctions):
        return list(cov.terms)
    return [cov]


class SumOfCovarianceFunctions(CovarianceFunction):
    """Sum of covariance functions.

    The parameters of all the terms are exposed as a single store. A name
    owned by several terms is shared: setting it updates every owner.
    """

    def __init__(self, terms):
        super().__init__()
        self.terms = list(terms)

    def get_params(self):
        merged = OrderedDict()
        for term in self.terms:
            for name, param in term.get_params().items():
                merged.setdefault(name, param)
        return merged

    def unchecked_set_param(self, name, param):
        owners = [t for t in self.terms if name in t.get_params()]
        if not owners:
            raise InvalidParameter(f"Unknown parameter '{name}'")
        for term in owners:
            term.unchecked_set_param(name, param)

    def _compute(self, x, y, pairwise):
        total = self.terms[0]._compute(x, y, pairwise)
        for term in self.terms[1:]:
            total = total + term._compute(x, y, pairwise)
        return total


def _shape(x, y, pairwise):
    if pairwise:
        return (x.shape[0],)
    if y is None:
        return (x.shape[0], x.shape[0])
    return (x.shape[0], y.shape[0])


class Constant(CovarianceFunction):
    """Constant covariance sigma^2, a random offset shared by all points."""

    default_prefix = "constant_"

    def __init__(self, sigma=1.0, name_prefix=None):
        super().__init__({"sigma": sigma}, name_prefix)

    def _compute(self, x, y, pairwise):
        return self._value("sigma") ** 2 * gnp.ones(_shape(x, y, pairwise))


class IndependentNoise(CovarianceFunction):
    """White noise sigma^2 on the diagonal of k(x).

    The noise only appears when a covariance function is evaluated at a
    single set of points: cross-covariances k(x, y) are zero, even where x
    and y share points.
    """

    default_prefix = "noise_"

    def __init__(self, sigma=0.1, name_prefix=None):
        super().__init__({"sigma": sigma}, name_prefix)

    def _compute(self, x, y, pairwise):
        sigma2 = self._value("sigma") ** 2
        if y is not None:
            return gnp.zeros(_shape(x, y, pairwise))
        if pairwise:
            return sigma2 * gnp.ones((x.shape[0],))
        return sigma2 * gnp.eye(x.shape[0])


class StationaryCovarianceFunction(CovarianceFunction):
    """Isotropic stationary covariance sigma^2 k(|x - y| / length_scale).

    Subclasses define `kernel(h)`, a correlation function of the scaled
    distance with kernel(0) = 1.
    """

    def __init__(self, sigma=1.0, length_scale=1.0, name_prefix=None):
        super().__init__({"sigma": sigma, "length_scale": length_scale}, name_prefix)

    def kernel(self, h):
        raise NotImplementedError

    def _compute(self, x, y, pairwise):
        sigma2 = self._value("sigma") ** 2
        loginvrho = -gnp.log(self._value("length_scale")) * gnp.ones((x.shape[1],))
        if pairwise:
            h = gnp.scaled_distance_elementwise(loginvrho, x, y)
            return sigma2 * self.kernel(h)
        if y is None:
            h = gnp.scaled_distance(loginvrho, x, x)
            nugget = 10.0 * sigma2 * gnp.eps
            return sigma2 * self.kernel(h) + nugget * gnp.eye(x.shape[0])
        h = gnp.scaled_distance(loginvrho, x, y)
        return sigma2 * self.kernel(h)
