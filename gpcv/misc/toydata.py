# gpcv/misc/toydata.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Small synthetic datasets and a default model, used by the examples and
the tests.
"""
import numpy as np

from gpcv.core.dataset import RegressionDataset
from gpcv.kernel import Constant, IndependentNoise, Matern
from gpcv.models import GaussianProcessRegression


def make_toy_linear_data(slope=1.0, intercept=5.0, sigma=0.1, n=10, seed=2012):
    """Noisy observations of a line at x = 0, 1, ..., n - 1.

    Parameters
    ----------
    slope, intercept : float
    sigma : float
        Standard deviation of the Gaussian observation noise.
    n : int
    seed : int
        Seed of the local generator; the global gpcv generator is not used.

    Returns
    -------
    RegressionDataset
        1D float features, exact targets (the noise is in the values).
    """
    rng = np.random.default_rng(seed)
    x = np.arange(n, dtype=float)
    y = intercept + slope * x + sigma * rng.standard_normal(n)
    return RegressionDataset(x, y, {"source": "toy_linear"})


def make_toy_sine_data(n=20, sigma=0.05, seed=2012):
    """Noisy observations of sin(x) at n sorted uniform points in [0, 2 pi]."""
    rng = np.random.default_rng(seed)
    x = np.sort(rng.uniform(0.0, 2.0 * np.pi, n))
    y = np.sin(x) + sigma * rng.standard_normal(n)
    return RegressionDataset(x, y, {"source": "toy_sine"})


def make_toy_gp_model():
    """GP with a constant offset, a Matérn 5/2 term and white noise."""
    covariance = (
        Constant(sigma=10.0)
        + Matern(p=2, sigma=2.0, length_scale=3.0)
        + IndependentNoise(sigma=1.0)
    )
    return GaussianProcessRegression(covariance, name="toy_gp")
