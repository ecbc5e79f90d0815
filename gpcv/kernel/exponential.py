# gpcv/kernel/exponential.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import gpcv.num as gnp
from .base import StationaryCovarianceFunction


def exponential_kernel(h):
    """Exponential kernel.

    .. math::
        k(h) = \\exp(-h)

    Parameters
    ----------
    h : gnp.array, shape (n,)
        Distances between points.

    Returns
    -------
    gnp.array, shape (n,)
        Kernel values.
    """
    return gnp.exp(-h)


class Exponential(StationaryCovarianceFunction):
    """Exponential covariance sigma^2 exp(-|x - y| / length_scale)."""

    default_prefix = "exponential_"

    def kernel(self, h):
        return exponential_kernel(h)
