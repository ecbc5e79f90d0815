# gpcv/tune/tuner.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Hyperparameter tuning by minimization of a cross-validated metric.

The objective at a point x (the values of the tunable parameters, in the
order of `get_tunable_parameters`) is

    J(x) = aggregate_d ( mean_i score_d,i(x) ) - log p(x),

where score_d is the cross-validated metric on dataset d and log p the
prior log-likelihood of all the parameters (omitted with use_prior=False).
J(x) is nan when x lies outside the support of a prior or when a linear
system cannot be solved at x. The optimizer treats such points as rejected
candidates.
"""
import copy
import math
from collections import OrderedDict

import gpcv.num as gnp
from gpcv.config import get_logger
from gpcv.core.dataset import RegressionDataset
from gpcv.evaluation.cross_validation import aggregate_dataset_scores, mean_aggregator
from gpcv.evaluation.folds import KFold
from gpcv.exceptions import InvalidArgument, InvalidParameter
from gpcv.misc.param import copy_params, ftos
from .optimizer import DerivativeFreeOptimizer

_logger = get_logger()


class Tuner:
    """Tune the parameters of a model against a cross-validated metric.

    Parameters
    ----------
    model : RegressionModel
        Copied; the model passed in is never modified.
    metric : callable
        metric(dataset, model) -> score vector, for example
        LeaveOneOutLikelihood().
        A KFold strategy must be seeded.
    datasets : RegressionDataset or sequence of RegressionDataset
    aggregator : callable, optional
        Combines the per-dataset mean scores.
    output_stream : file-like, optional
        Receives one progress line per objective evaluation.
    optimizer : DerivativeFreeOptimizer, optional
        Its evaluation ceiling is left as is.
    use_prior : bool, default=True
        Add the negative prior log-likelihood to the objective.
    """

    def __init__(
        self,
        model,
        metric,
        datasets,
        aggregator=mean_aggregator,
        output_stream=None,
        optimizer=None,
        use_prior=True,
    ):
        strategy = getattr(metric, "strategy", None)
        if isinstance(strategy, KFold) and strategy.seed is None:
            raise InvalidArgument(
                "KFold needs a seed when tuning, otherwise each evaluation draws new folds"
            )
        self.model = model.clone()
        self.metric = metric
        if isinstance(datasets, RegressionDataset):
            datasets = [datasets]
        self.datasets = list(datasets)
        if not self.datasets:
            raise InvalidArgument("Tuning needs at least one dataset")
        self.aggregator = aggregator
        self.output_stream = output_stream
        self.optimizer = optimizer if optimizer is not None else DerivativeFreeOptimizer()
        self.use_prior = use_prior
        self.iterations = 0

    def objective(self, x):
        """Objective value at the tunable parameter values x, or nan."""
        self.iterations += 1
        try:
            self.model.set_tunable_params_values(x)
            if not self.model.params_are_valid():
                value = gnp.nan
            else:
                value = self._evaluate()
        except InvalidParameter as exc:
            _logger.debug("Rejected candidate: %s", exc)
            value = gnp.nan
        except Exception as exc:
            if gnp._is_linalg_exception(exc):
                _logger.debug("Linear algebra failure: %s", exc)
                value = gnp.nan
            else:
                raise
        self._report(value)
        return value

    def _evaluate(self):
        scores = [self.metric(dataset, self.model) for dataset in self.datasets]
        value = aggregate_dataset_scores(scores, self.aggregator)
        if self.use_prior:
            value -= self.model.prior_log_likelihood()
        return value

    def _report(self, value):
        params = ", ".join(
            f"{name}: {ftos(v)}" for name, v in self.model.to_simple_dict().items()
        )
        line = f"iteration: {self.iterations}  objective: {ftos(value)}  params: {{{params}}}"
        _logger.debug(line)
        if self.output_stream is not None:
            self.output_stream.write(line + "\n")

    def tune(self):
        """Run the optimizer and return the best parameters found.

        Returns
        -------
        OrderedDict
            Parameter name -> Parameter, for all the parameters of the model.

        Raises
        ------
        OptimizationFailure
            No candidate had a defined objective value.
        """
        tunable = self.model.get_tunable_parameters()
        if not tunable.names:
            _logger.info("No tunable parameters in %s", self.model.get_name())
            return copy_params(self.model.get_params())

        self.optimizer.set_lower_bounds(tunable.lower_bounds)
        self.optimizer.set_upper_bounds(tunable.upper_bounds)
        _logger.info(
            "Tuning %d parameters of %s on %d dataset(s)",
            len(tunable.names),
            self.model.get_name(),
            len(self.datasets),
        )
        self.iterations = 0
        best = self.optimizer.minimize(self.objective, tunable.values)

        self.model.set_tunable_params_values(best)
        result = self.optimizer.last_result
        _logger.info(
            "Tuning done after %d evaluations, objective: %s",
            self.iterations,
            ftos(result.fun if result is not None else math.nan),
        )
        return copy_params(self.model.get_params())


def get_tuner(
    model, metric, dataset_or_datasets, aggregator=mean_aggregator, output_stream=None
):
    """Build a Tuner with the default derivative-free optimizer."""
    return Tuner(
        model,
        metric,
        dataset_or_datasets,
        aggregator=aggregator,
        output_stream=output_stream,
    )


def tune_model(model, metric, dataset_or_datasets, **kwargs):
    """Tune a copy of `model` and return it with the tuned parameters set."""
    params = Tuner(model, metric, dataset_or_datasets, **kwargs).tune()
    tuned = model.clone()
    tuned.set_params(copy.deepcopy(params))
    return tuned
