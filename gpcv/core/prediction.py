# gpcv/core/prediction.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Prediction objects.

A Prediction is bound to a model, a fit state and query features. Nothing
is computed until one of its views is requested:

- mean() : array_like, shape (m,)
- marginal() : MarginalDistribution (mean and per-point variance)
- joint() : JointDistribution (mean and full covariance)

Which model operation produces each view is decided by the model (see
`RegressionModel.predict_with_fit`). Each view is computed at most once.
"""
from enum import Enum

from .dataset import features_size


class PredictType(Enum):
    MEAN = "mean"
    MARGINAL = "marginal"
    JOINT = "joint"


class Prediction:
    """Deferred prediction of a fit model at query features."""

    def __init__(self, model, fit, features):
        self._model = model
        self._fit = fit
        self._features = features
        self._cache = {}

    def __len__(self):
        return features_size(self._features)

    def __repr__(self):
        return f"<Prediction of {self._model.get_name()} at {len(self)} points>"

    @property
    def features(self):
        return self._features

    def get(self, predict_type):
        predict_type = PredictType(predict_type)
        if predict_type not in self._cache:
            self._cache[predict_type] = self._model.predict_with_fit(
                self._fit, self._features, predict_type
            )
        return self._cache[predict_type]

    def mean(self):
        return self.get(PredictType.MEAN)

    def marginal(self):
        return self.get(PredictType.MARGINAL)

    def joint(self):
        return self.get(PredictType.JOINT)


class FixedPrediction(Prediction):
    """Prediction whose joint distribution is already known."""

    def __init__(self, joint):
        self._model = None
        self._fit = None
        self._features = None
        self._cache = {
            PredictType.JOINT: joint,
            PredictType.MARGINAL: joint.marginal(),
            PredictType.MEAN: joint.mean,
        }

    def __len__(self):
        return len(self._cache[PredictType.JOINT])

    def __repr__(self):
        return f"<FixedPrediction at {len(self)} points>"

    def get(self, predict_type):
        return self._cache[PredictType(predict_type)]
