# gpcv/misc/param.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Parameter: named scalar parameters with priors

This module provides the parameter store shared by models and covariance
functions.

Features:
- Each parameter is a scalar value with an attached prior
- Parameters are addressed by name and kept in insertion order
- Parameters whose prior is FixedPrior are excluded from tuning
- Bounds for the tunable parameters are read from their priors

Objects holding parameters inherit from ParameterHandlingMixin. Composite
objects (a model wrapping a covariance function, a sum of covariance
functions) override `get_params` and `unchecked_set_param` so that the
derived operations see a single flat store.
"""

import copy
import math
from collections import OrderedDict
from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, NamedTuple, Union

import numpy as np
import gpcv.num as gnp
from gpcv.exceptions import InvalidArgument, InvalidParameter
from gpcv.misc.priors import Prior, UninformativePrior


def ftos(x, fp=3):
    if x == float("inf"):
        return "+Inf"
    elif x == float("-inf"):
        return "-Inf"
    elif x != x:
        return "NaN"
    abs_x = abs(x)
    if x == 0:
        return "0.0"
    elif abs_x >= 0.1 and abs_x < 1000:
        return f"{x:.{fp}f}"
    elif abs_x >= 0.01 and abs_x < 0.1:
        return f"{x:.{fp+1}f}"
    else:
        exponent = int(np.floor(np.log10(abs_x)))
        coeff = x / 10**exponent
        return f"{coeff:.{fp}f}e{exponent}"


@dataclass
class Parameter:
    value: float
    prior: Prior = field(default_factory=UninformativePrior)

    def __post_init__(self):
        self.value = float(self.value)

    def is_valid(self) -> bool:
        return self.prior.is_valid(self.value)

    def is_fixed(self) -> bool:
        return self.prior.is_fixed

    def log_likelihood(self) -> float:
        return self.prior.log_likelihood(self.value)


ParameterStore = Dict[str, Parameter]


class TunableParameters(NamedTuple):
    names: List[str]
    values: gnp.ndarray
    lower_bounds: gnp.ndarray
    upper_bounds: gnp.ndarray


class ParameterHandlingMixin:
    """Parameter store for models and covariance functions.

    Subclasses register their parameters in `self.params` (an ordered
    mapping name -> Parameter) or override the two primitives
    `get_params` and `unchecked_set_param`.
    """

    def __init__(self, params=None):
        self.params = OrderedDict()
        if params is not None:
            for name, param in params.items():
                self.params[name] = _as_parameter(param)

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------
    def get_params(self) -> ParameterStore:
        """Return an ordered copy of the name -> Parameter mapping."""
        return OrderedDict((name, copy.copy(p)) for name, p in self.params.items())

    def unchecked_set_param(self, name: str, param: Parameter) -> None:
        if name not in self.params:
            raise InvalidParameter(f"Unknown parameter '{name}'")
        self.params[name] = param

    # ------------------------------------------------------------------
    # Derived operations
    # ------------------------------------------------------------------
    def set_params(self, params: Mapping[str, Union[Parameter, float]]) -> None:
        for name, param in params.items():
            self.set_param(name, param)

    def set_param(self, name: str, param: Union[Parameter, float]) -> None:
        """Set a parameter; a bare number keeps the current prior."""
        current = self.get_params()
        if name not in current:
            raise InvalidParameter(
                f"Unknown parameter '{name}', expected one of {list(current)}"
            )
        if isinstance(param, Parameter):
            new_param = copy.copy(param)
        else:
            new_param = replace(current[name], value=float(param))
        self.unchecked_set_param(name, new_param)

    def set_param_value(self, name: str, value: float) -> None:
        self.set_param(name, float(value))

    def set_prior(self, name: str, prior: Prior) -> None:
        current = self.get_params()
        if name not in current:
            raise InvalidParameter(f"Unknown parameter '{name}'")
        self.unchecked_set_param(name, Parameter(current[name].value, prior))

    def get_param_value(self, name: str) -> float:
        params = self.get_params()
        if name not in params:
            raise InvalidParameter(f"Unknown parameter '{name}'")
        return params[name].value

    def params_are_valid(self) -> bool:
        return all(p.is_valid() for p in self.get_params().values())

    def prior_log_likelihood(self) -> float:
        return math.fsum(p.log_likelihood() for p in self.get_params().values())

    def get_params_as_vector(self) -> gnp.ndarray:
        return gnp.array([p.value for p in self.get_params().values()], dtype=float)

    def get_tunable_parameters(self) -> TunableParameters:
        names, values, lower, upper = [], [], [], []
        for name, p in self.get_params().items():
            if p.is_fixed():
                continue
            lo, hi = p.prior.bounds()
            names.append(name)
            values.append(p.value)
            lower.append(lo)
            upper.append(hi)
        return TunableParameters(
            names,
            gnp.array(values, dtype=float),
            gnp.array(lower, dtype=float),
            gnp.array(upper, dtype=float),
        )

    def set_tunable_params_values(self, values) -> None:
        names = self.get_tunable_parameters().names
        values = gnp.asdouble(values).reshape(-1)
        if values.shape[0] != len(names):
            raise InvalidArgument(
                f"Expected {len(names)} tunable values, got {values.shape[0]}"
            )
        for name, value in zip(names, values):
            self.set_param_value(name, value)

    def to_simple_dict(self) -> dict:
        return {name: p.value for name, p in self.get_params().items()}

    def params_to_dict(self) -> dict:
        return {
            name: {"value": p.value, "prior": p.prior.to_dict()}
            for name, p in self.get_params().items()
        }

    def pretty_string(self) -> str:
        params = self.get_params()
        if not params:
            return "(no parameters)"
        raw_data = []
        for name, p in params.items():
            lo, hi = p.prior.bounds()
            bounds = f"[{ftos(lo)}, {ftos(hi)}]"
            raw_data.append((name + ":", ftos(p.value), p.prior.name, bounds))

        headers = ("Name:", "Value", "Prior", "Bounds")
        columns = list(zip(*raw_data))
        widths = [
            max(len(h), max(len(val) for val in col))
            for h, col in zip(headers, columns)
        ]
        lines = ["    ".join(h.rjust(w) for h, w in zip(headers, widths))]
        for row in raw_data:
            lines.append("    ".join(val.rjust(w) for val, w in zip(row, widths)))
        return "\n".join(lines)


def _as_parameter(param) -> Parameter:
    if isinstance(param, Parameter):
        return copy.copy(param)
    return Parameter(param)


def copy_params(params: Mapping[str, Parameter]) -> ParameterStore:
    return OrderedDict((name, copy.copy(p)) for name, p in params.items())


def params_values_equal(a: Mapping[str, Parameter], b: Mapping[str, Parameter]) -> bool:
    if list(a) != list(b):
        return False
    return all(a[name].value == b[name].value for name in a)
