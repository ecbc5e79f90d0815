# gpcv/tune/optimizer.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Derivative-free minimization with SciPy.

The optimizer minimizes an objective that may be undefined (nan) at some
points. Undefined or infinite values are passed to SciPy as +inf, which the
simplex and direction-set methods treat as a rejected candidate. The best
finite point visited is returned, whatever the state SciPy ends in.
"""
import math
import time

import numpy as np
from scipy.optimize import minimize

from gpcv.config import get_config, get_logger
from gpcv.exceptions import InvalidArgument, OptimizationFailure

_logger = get_logger()


class DerivativeFreeOptimizer:
    """Bounded derivative-free minimizer (Nelder-Mead or Powell).

    Parameters
    ----------
    method : {"Nelder-Mead", "Powell"}, optional
        Defaults to `get_config().optimizer_method`.
    maxeval : int, optional
        Maximum number of objective evaluations. Defaults to
        `get_config().optimizer_maxeval`.
    xtol, ftol : float
        Absolute tolerances on the point and on the objective value.

    Attributes
    ----------
    last_result : scipy.optimize.OptimizeResult or None
        Result of the last call to `minimize`, with the added fields
        ``history_params``, ``history_criterion``, ``initial_params``,
        ``nfev_total``, ``total_time`` and ``best_value_returned``.
    """

    def __init__(self, method=None, maxeval=None, xtol=1e-6, ftol=1e-8):
        config = get_config()
        self.method = method if method is not None else config.get_optimizer_method()
        if self.method not in ("Nelder-Mead", "Powell"):
            raise InvalidArgument(f"Unsupported optimization method {self.method!r}")
        self.set_maxeval(maxeval if maxeval is not None else config.optimizer_maxeval)
        self.xtol = xtol
        self.ftol = ftol
        self.lower_bounds = None
        self.upper_bounds = None
        self.last_result = None

    def __repr__(self):
        return f"DerivativeFreeOptimizer(method={self.method!r}, maxeval={self.maxeval})"

    def set_maxeval(self, maxeval):
        if int(maxeval) != maxeval or maxeval < 1:
            raise InvalidArgument(f"maxeval must be a positive integer, got {maxeval}")
        self.maxeval = int(maxeval)

    def get_maxeval(self):
        return self.maxeval

    def set_lower_bounds(self, lower):
        self.lower_bounds = np.asarray(lower, dtype=float).reshape(-1)

    def set_upper_bounds(self, upper):
        self.upper_bounds = np.asarray(upper, dtype=float).reshape(-1)

    def _bounds(self, n):
        lower = self.lower_bounds if self.lower_bounds is not None else np.full(n, -np.inf)
        upper = self.upper_bounds if self.upper_bounds is not None else np.full(n, np.inf)
        if lower.shape[0] != n or upper.shape[0] != n:
            raise InvalidArgument(
                f"Bounds have sizes {lower.shape[0]} and {upper.shape[0]}, expected {n}"
            )
        if np.all(np.isinf(lower)) and np.all(np.isinf(upper)):
            return None
        return [
            (None if math.isinf(lo) else lo, None if math.isinf(hi) else hi)
            for lo, hi in zip(lower, upper)
        ]

    def _options(self):
        options = {"maxfev": self.maxeval, "maxiter": self.maxeval}
        if self.method == "Nelder-Mead":
            options.update(xatol=self.xtol, fatol=self.ftol)
        else:
            options.update(xtol=self.xtol, ftol=self.ftol)
        return options

    def minimize(self, objective, x0):
        """Minimize `objective` starting from `x0`.

        Parameters
        ----------
        objective : callable
            objective(x) -> float, possibly nan.
        x0 : array_like, shape (n,)

        Returns
        -------
        ndarray, shape (n,)
            Best point with a finite objective value.

        Raises
        ------
        OptimizationFailure
            No evaluated point had a finite objective value.
        """
        tic = time.time()
        x0 = np.asarray(x0, dtype=float).reshape(-1)
        bounds = self._bounds(x0.shape[0])

        history_params, history_criterion = [], []
        best_params, best_criterion = None, float("inf")

        def record(p, J):
            nonlocal best_params, best_criterion
            history_params.append(p.copy())
            history_criterion.append(J)
            if J < best_criterion:
                best_criterion, best_params = J, p.copy()

        def criterion_with_history(p):
            J = float(objective(p))
            if not math.isfinite(J):
                J = float("inf")
            record(p, J)
            return J

        r = minimize(
            criterion_with_history,
            x0,
            method=self.method,
            bounds=bounds,
            options=self._options(),
        )

        r.history_params = history_params
        r.history_criterion = history_criterion
        r.initial_params = x0
        r.nfev_total = len(history_criterion)
        r.total_time = time.time() - tic
        self.last_result = r

        if best_params is None:
            raise OptimizationFailure(
                f"No finite objective value in {len(history_criterion)} evaluations"
            )
        # ensure returning best seen
        r.best_value_returned = bool(r.fun <= best_criterion)
        r.x, r.fun = best_params, best_criterion
        _logger.debug(
            "%s: %d evaluations, best value %g, %.2fs",
            self.method,
            r.nfev_total,
            best_criterion,
            r.total_time,
        )
        return best_params
