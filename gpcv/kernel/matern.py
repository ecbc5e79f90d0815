# gpcv/kernel/matern.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
from math import sqrt
import gpcv.num as gnp
from gpcv.exceptions import InvalidArgument
from .base import StationaryCovarianceFunction


def maternp_kernel(p: int, h):
    """Matérn kernel with half-integer regularity :math:`\\nu = p + 1/2`.

    Using the half-integer simplification (Watson 1922; Abramowitz & Stegun):

    .. math::
        K(h) = \\exp(-2\\sqrt{\\nu}\\,h)\\,
               \\frac{\\Gamma(p+1)}{\\Gamma(2p+1)}
               \\sum_{i=0}^{p} \\frac{(p+i)!}{i!(p-i)!}\\,(4\\sqrt{\\nu}h)^{\\,p-i}

    Parameters
    ----------
    p : int
        Nonnegative integer with :math:`\\nu = p+1/2`.
    h : gnp.array
        Distances.

    Returns
    -------
    gnp.array
        Kernel values.
    """
    gln = gnp.compute_gammaln(p)
    h = gnp.inftobigf(h)
    c = 2.0 * sqrt(p + 0.5)
    twoch = 2.0 * c * h
    polynomial = gnp.ones(h.shape)
    for i in range(p):
        exp_log_combination = gnp.exp(
            gln[p + 1] - gln[2 * p + 1] + gln[p + i + 1] - gln[i + 1] - gln[p - i + 1]
        )
        polynomial += exp_log_combination * (twoch ** (p - i))
    return gnp.exp(-c * h) * polynomial


class Matern(StationaryCovarianceFunction):
    """Matérn covariance with regularity :math:`\\nu = p + 1/2`.

    .. math::
        k(x, y) = \\sigma^2 K_p(\\|x - y\\| / \\rho)

    Parameters
    ----------
    p : int, default=2
        Nonnegative integer; p = 0 is the exponential covariance.
    sigma : float or Parameter
        Standard deviation.
    length_scale : float or Parameter
        Range :math:`\\rho`.
    name_prefix : str, optional
        Defaults to "matern_".
    """

    default_prefix = "matern_"

    def __init__(self, p=2, sigma=1.0, length_scale=1.0, name_prefix=None):
        if int(p) != p or p < 0:
            raise InvalidArgument(f"Matern regularity p must be a nonnegative integer, got {p}")
        self.p = int(p)
        super().__init__(sigma, length_scale, name_prefix)

    def kernel(self, h):
        return maternp_kernel(self.p, h)
