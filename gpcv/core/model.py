# gpcv/core/model.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Regression model base class and fit model.
"""
import copy
import warnings
from collections import OrderedDict

from gpcv.config import get_config, get_logger
from gpcv.exceptions import IllegalState, InvalidArgument, PredictionFallbackWarning
from gpcv.misc.param import ParameterHandlingMixin, params_values_equal
from .dataset import RegressionDataset, features_size
from .distribution import as_distribution
from .prediction import Prediction, PredictType

_logger = get_logger()


class FitModel:
    """A model paired with the fit state it produced.

    The pair is the only handle used for prediction. The model is a snapshot
    taken at fit time, so later changes to the parameters of the model that
    was fit do not affect predictions made from this object.
    """

    def __init__(self, model, fit):
        self._model = model
        self._fit = fit

    def __repr__(self):
        return f"<gpcv.core.FitModel of {self._model.get_name()}> " + hex(id(self))

    @property
    def model(self):
        return self._model

    @property
    def fit(self):
        return self._fit

    def get_fit(self):
        return self._fit

    def predict(self, features):
        return Prediction(self._model, self._fit, features)


class RegressionModel(ParameterHandlingMixin):
    """Regression model base class.

    A concrete model implements `_fit_impl` and at least one of
    `_predict_mean_impl`, `_predict_marginal_impl`, `_predict_joint_impl`,
    and lists the representations it implements in
    `supported_predict_types`.

    Attributes
    ----------
    supported_predict_types : frozenset of PredictType
        Representations computed by the model's own operations. A
        representation outside this set is derived when possible:
        the mean from the marginal, or the marginal and the mean from the
        joint distribution. The latter is asymptotically more expensive and
        is signalled according to `gpcv.config.get_config().prediction_fallback`.

    Public API (methods)
    --------------------
    fit
        Fit on (features, targets) or on a RegressionDataset.
    predict
        Prediction at query features, from the last fit.
    fit_and_predict
        Fit, then predict.
    cross_validate
        Cross-validation helper bound to this model.
    cross_validated_predictions
        Per-fold predictions for a dataset and a group indexer.
    """

    supported_predict_types = frozenset()

    def __init__(self, params=None, name=None):
        super().__init__(params)
        self._name = name
        self._fit_model = None

    def get_name(self):
        return self._name if self._name is not None else type(self).__name__

    def __repr__(self):
        return f"<gpcv.core.{type(self).__name__} object> " + hex(id(self))

    def __str__(self):
        return self.pretty_string()

    def pretty_string(self):
        return f"{self.get_name()}\n{super().pretty_string()}"

    def __eq__(self, other):
        if not isinstance(other, RegressionModel):
            return NotImplemented
        # a fit may modify model internals that have no generic comparison
        if self.has_been_fit() or other.has_been_fit():
            raise IllegalState(
                "Cannot compare models once fit; override __eq__ to compare fit models."
            )
        return (
            self.get_name() == other.get_name()
            and params_values_equal(self.get_params(), other.get_params())
            and self.has_been_fit() == other.has_been_fit()
        )

    __hash__ = None

    def has_been_fit(self):
        return self._fit_model is not None

    def clone(self):
        """Return an unfit deep copy of the model."""
        # the copy neither shares nor duplicates the current fit
        memo = {} if self._fit_model is None else {id(self._fit_model): None}
        return copy.deepcopy(self, memo)

    # ------------------------------------------------------------------
    # Fit and predict
    # ------------------------------------------------------------------
    def fit(self, features, targets=None):
        """Fit the model.

        Parameters
        ----------
        features : sequence or RegressionDataset
            Training features, or a dataset if `targets` is None.
        targets : array_like or distribution, optional
            Training targets. A plain vector is read as exact observations.

        Returns
        -------
        FitModel
            The fit state paired with a snapshot of the model. It is also
            kept by the model and used by `predict`.
        """
        if targets is None:
            if not isinstance(features, RegressionDataset):
                raise InvalidArgument("fit expects (features, targets) or a dataset")
            features, targets = features.features, features.targets
        targets = as_distribution(targets)
        n = features_size(features)
        if n == 0:
            raise InvalidArgument("Cannot fit a model without features")
        if n != len(targets):
            raise InvalidArgument(
                f"features and targets sizes differ: {n} != {len(targets)}"
            )
        fit = self._fit_impl(features, targets)
        self._fit_model = FitModel(self.clone(), fit)
        return self._fit_model

    def predict(self, features):
        if self._fit_model is None:
            raise IllegalState(f"{self.get_name()} must be fit before predicting")
        return self._fit_model.predict(features)

    def fit_and_predict(self, train_features, train_targets, test_features):
        """Fit on the training data, then predict at test features.

        Equivalent to `fit` followed by `predict`; models may override it
        to share work between the two steps.
        """
        self.fit(train_features, train_targets)
        return self.predict(test_features)

    def can_predict(self, predict_type):
        predict_type = PredictType(predict_type)
        supported = self.supported_predict_types
        if predict_type in supported or PredictType.JOINT in supported:
            return True
        return predict_type is PredictType.MEAN and PredictType.MARGINAL in supported

    def predict_with_fit(self, fit, features, predict_type):
        """Compute one representation of the prediction at `features`."""
        predict_type = PredictType(predict_type)
        supported = self.supported_predict_types
        if predict_type is PredictType.MEAN:
            if PredictType.MEAN in supported:
                pred = self._predict_mean_impl(fit, features)
            elif PredictType.MARGINAL in supported:
                pred = self._predict_marginal_impl(fit, features).mean
            elif PredictType.JOINT in supported:
                pred = self._predict_mean_impl(fit, features)
            else:
                raise self._cannot_predict(predict_type)
            size = pred.shape[0]
        elif predict_type is PredictType.MARGINAL:
            if not (PredictType.MARGINAL in supported or PredictType.JOINT in supported):
                raise self._cannot_predict(predict_type)
            pred = self._predict_marginal_impl(fit, features)
            size = len(pred)
        else:
            if PredictType.JOINT not in supported:
                raise self._cannot_predict(predict_type)
            pred = self._predict_joint_impl(fit, features)
            size = len(pred)

        n = features_size(features)
        if size != n:
            raise IllegalState(
                f"{self.get_name()} returned {size} {predict_type.value} predictions for {n} features"
            )
        return pred

    def _cannot_predict(self, predict_type):
        return IllegalState(
            f"{self.get_name()} cannot produce a {predict_type.value} prediction"
        )

    # ------------------------------------------------------------------
    # Operations implemented by concrete models
    # ------------------------------------------------------------------
    def _fit_impl(self, features, targets):
        raise NotImplementedError

    def _predict_joint_impl(self, fit, features):
        raise NotImplementedError

    def _predict_marginal_impl(self, fit, features):
        _signal_fallback(self.get_name(), PredictType.MARGINAL)
        return self._predict_joint_impl(fit, features).marginal()

    def _predict_mean_impl(self, fit, features):
        _signal_fallback(self.get_name(), PredictType.MEAN)
        return self._predict_joint_impl(fit, features).mean

    # ------------------------------------------------------------------
    # Cross-validation
    # ------------------------------------------------------------------
    def cross_validate(self):
        from gpcv.evaluation.cross_validation import CrossValidation

        return CrossValidation(self)

    def cross_validated_predictions(self, dataset, indexer):
        """Fit a fresh copy of the model on each fold and predict the held-out rows.

        Parameters
        ----------
        dataset : RegressionDataset
        indexer : dict
            Group key -> row indices, partitioning the dataset.

        Returns
        -------
        predictions : OrderedDict
            Group key -> Prediction at the rows of that group.
        """
        from gpcv.evaluation.folds import folds_from_indexer

        predictions = OrderedDict()
        for fold in folds_from_indexer(dataset, indexer):
            fold_model = self.clone()
            predictions[fold.name] = fold_model.fit_and_predict(
                fold.train_dataset.features,
                fold.train_dataset.targets,
                fold.test_dataset.features,
            )
        return predictions


def _signal_fallback(model_name, predict_type):
    mode = get_config().get_prediction_fallback()
    msg = (
        f"A {predict_type.value} prediction from {model_name} is being derived "
        "from a full joint prediction, which is much more expensive."
    )
    if mode == "error":
        raise IllegalState(msg)
    _logger.debug(msg)
    if mode == "warn":
        warnings.warn(msg, PredictionFallbackWarning, stacklevel=3)
