# gpcv/num/numpy_backend.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""NumPy numerical backend for gpcv.

This module defines the NumPy implementation of the gpcv.num API.
"""

import builtins
from typing import Any, Optional, Union
from gpcv.config import get_config, init_backend, get_logger

Scalar = Union[int, float]
ArrayLike = Any

_gpcv_backend_: str = init_backend()
_config = get_config()
_logger = get_logger()
_logger.debug("Using backend: %s", _gpcv_backend_)

_LINALG_ERROR_KEYWORDS = (
    "singular",
    "not positive definite",
    "not positive-definite",
    "cholesky",
    "decomposition",
    "factorization",
    "matrix is not invertible",
    "svd did not converge",
    "ill-conditioned",
    "linalg",
    "lapack",
    "array must not contain infs or nans",
)


# -----------------------------------------------------
#
#                      NUMPY
#
# -----------------------------------------------------

import numpy
from numpy.typing import NDArray

_np_dtype = numpy.float64

ndarray = NDArray[numpy.floating]
from numpy import (
    copy,
    array_equal,
    where,
    any,
    isfinite,
    allclose,
    hstack,
    concatenate,
    split,
    diag,
    arange,
    ix_,
    abs,
    sqrt,
    exp,
    log,
    sum,
    cumsum,
    mean,
    sort,
    max,
    maximum,
    matmul,
    all,
)
from numpy.linalg import norm, cholesky, inv, lstsq
from numpy import pi, inf, nan
from numpy import finfo, float64
from scipy.special import gammaln
from scipy.linalg import solve_triangular
from scipy.spatial.distance import cdist
from scipy.stats import norm as normal
from scipy.stats import lognorm

# ..................................................

eps = finfo(_np_dtype).eps
fmax = numpy.finfo(_np_dtype).max

# ..................................................


def _is_linalg_exception(exc: Exception) -> bool:
    if isinstance(exc, numpy.linalg.LinAlgError):
        return True
    msg = str(exc).lower()
    return builtins.any(keyword in msg for keyword in _LINALG_ERROR_KEYWORDS)


# ..................................................


def array(x, dtype=None):
    if dtype is not None:
        return numpy.array(x, dtype=dtype)
    out = numpy.array(x)
    if numpy.issubdtype(out.dtype, numpy.floating):
        return out.astype(_np_dtype, copy=False)
    return out


def asarray(x, dtype=None):
    if dtype is not None:
        return numpy.asarray(x, dtype=dtype)
    if isinstance(x, numpy.ndarray):
        if numpy.issubdtype(x.dtype, numpy.floating):
            return x.astype(_np_dtype, copy=False)
        return x
    elif isinstance(x, (int, float)):
        dt = _np_dtype if isinstance(x, float) else None
        return numpy.array([x], dtype=dt)
    else:
        out = numpy.asarray(x)
        if numpy.issubdtype(out.dtype, numpy.floating):
            return out.astype(_np_dtype, copy=False)
        return out


def asdouble(x):
    return numpy.asarray(x).astype(float64, copy=False)


def asint(x):
    return numpy.asarray(x).astype(int, copy=False)


def zeros(shape, dtype=None):
    return numpy.zeros(shape, dtype=_np_dtype if dtype is None else dtype)


def ones(shape, dtype=None):
    return numpy.ones(shape, dtype=_np_dtype if dtype is None else dtype)


def full(shape, fill_value, dtype=None):
    return numpy.full(
        shape, fill_value, dtype=_np_dtype if dtype is None else dtype
    )


def eye(n, m=None, k=0, dtype=None):
    return numpy.eye(n, M=m, k=k, dtype=_np_dtype if dtype is None else dtype)


def linspace(start, stop, num=50, endpoint=True, dtype=None):
    return numpy.linspace(
        start, stop, num=num, endpoint=endpoint,
        dtype=_np_dtype if dtype is None else dtype,
    )


def to_scalar(x):
    return numpy.asarray(x).item()


def isarray(x):
    return isinstance(x, numpy.ndarray)


def inftobigf(a, bigf=fmax / 1000.0):
    a = where(numpy.isinf(a), numpy.full_like(a, bigf), a)
    return a


def readonly(x):
    """Return x as an array that cannot be written to."""
    x = numpy.array(x, copy=True)
    x.setflags(write=False)
    return x


# ..................................................


def as_design_matrix(x) -> ArrayLike:
    """Return features as a 2D (n, d) float array; 1D input gives d = 1."""
    x = asdouble(x)
    if x.ndim == 1:
        return x.reshape(-1, 1)
    if x.ndim != 2:
        raise ValueError("features must be a 1D or 2D array of numbers")
    return x


def scaled_distance(loginvrho: ArrayLike, x: ArrayLike, y: ArrayLike) -> ArrayLike:
    invrho = exp(loginvrho)
    xs = invrho * x
    ys = invrho * y
    return cdist(xs, ys)


def scaled_distance_elementwise(
    loginvrho: ArrayLike, x: ArrayLike, y: Optional[ArrayLike]
) -> ArrayLike:
    if x is y or y is None:
        d = zeros((x.shape[0],))
    else:
        invrho = exp(loginvrho)
        d = sqrt(sum((invrho * (x - y)) ** 2, axis=1))
    return d


# ..................................................


def cholesky_solve(A, b):
    L = cholesky(A)
    y = solve_triangular(L, b, lower=True)
    x = solve_triangular(L.T, y, lower=False)
    return x, L


def cholesky_inv_from_factor(L):
    """Return A^{-1} from the lower Cholesky factor L of A."""
    n = L.shape[0]
    T = solve_triangular(L, eye(n), lower=True)
    return matmul(T.T, T)


def logdet_from_factor(L):
    return 2.0 * sum(log(diag(L)))


# ..................................................

# Build one global RNG (or let the user set the seed somewhere):
_np_rng = numpy.random.default_rng(seed=_config.seed)


def set_seed(seed: int) -> None:
    """Set the global NumPy generator seed."""
    global _np_rng
    _np_rng = numpy.random.default_rng(seed=seed)


def permutation(x: ArrayLike) -> ArrayLike:
    return _np_rng.permutation(x)
