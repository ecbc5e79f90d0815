# gpcv/__init__.py

from . import config
from . import num
from . import core
from . import kernel
from . import models
from . import evaluation
from . import tune
from . import misc
from .core import (
    RegressionDataset,
    RegressionModel,
    PredictType,
    MarginalDistribution,
    JointDistribution,
)
from .models import GaussianProcessRegression, LeastSquaresRegression
from .tune import get_tuner

__version__ = config.get_config().version

__all__ = [
    "num",
    "kernel",
    "models",
    "evaluation",
    "tune",
    "RegressionDataset",
    "RegressionModel",
    "PredictType",
    "MarginalDistribution",
    "JointDistribution",
    "GaussianProcessRegression",
    "LeastSquaresRegression",
    "get_tuner",
    "__version__",
]
