# gpcv/exceptions.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Exception and warning types raised by gpcv.

InvalidArgument and IllegalState are programming errors and propagate
immediately. InvalidParameter is raised by the parameter store; during
tuning, invalid candidates are turned into an undefined objective value
instead. OptimizationFailure is raised when a tuning run never reaches a
point with a finite objective value.
"""


class GPCVError(Exception):
    """Base class for gpcv errors."""


class InvalidArgument(GPCVError, ValueError):
    """Size mismatch, empty input or otherwise malformed argument."""


class IllegalState(GPCVError, RuntimeError):
    """Operation not allowed in the current state of an object."""


class InvalidParameter(GPCVError, ValueError):
    """Unknown parameter name or value outside the prior support."""


class OptimizationFailure(GPCVError, RuntimeError):
    """The optimizer did not find any point with a defined objective value."""


class PredictionFallbackWarning(RuntimeWarning):
    """A marginal or mean prediction was derived from a full joint prediction."""
