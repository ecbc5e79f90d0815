## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2023-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
import gpcv.num as gnp


def crps_gaussian(mu, sigma, z):
    """
    Compute the CRPS for the Gaussian case.

    Parameters
    ----------
    mu : ndarray, shape (n,)
        Mean values of the Gaussian distribution.
    sigma : ndarray, shape (n,)
        Standard deviations of the Gaussian distribution.
    z : ndarray, shape (n,)
        Observations.

    Returns
    -------
    crps : ndarray, shape (n,)
        The computed CRPS values for each element in mu, sigma, and z.
        Where sigma is zero the CRPS reduces to the absolute error.
    """
    mu = gnp.asdouble(mu)
    sigma = gnp.asdouble(sigma)
    z = gnp.asdouble(z)

    degenerate = sigma <= 0.0
    safe_sigma = gnp.where(degenerate, 1.0, sigma)
    t = (z - mu) / safe_sigma
    term1 = t * (2 * gnp.normal.cdf(t) - 1)
    term2 = 2 * gnp.normal.pdf(t)
    term3 = 1 / gnp.sqrt(gnp.pi)
    crps = safe_sigma * (term1 + term2 - term3)
    return gnp.where(degenerate, gnp.abs(z - mu), crps)


def log_score_gaussian(mu, sigma2, z):
    """
    Negative log predictive density of Gaussian predictions.

    Parameters
    ----------
    mu : ndarray, shape (n,)
        Predictive means.
    sigma2 : ndarray, shape (n,)
        Predictive variances.
    z : ndarray, shape (n,)
        Observations.

    Returns
    -------
    ndarray, shape (n,)
        0.5 * ((z - mu)^2 / sigma2 + log(2 pi sigma2)).
    """
    mu = gnp.asdouble(mu)
    sigma2 = gnp.asdouble(sigma2)
    z = gnp.asdouble(z)
    return 0.5 * ((z - mu) ** 2 / sigma2 + gnp.log(2.0 * gnp.pi * sigma2))
