"""
Tune one set of parameters against several datasets, with grouped
cross-validation

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import numpy as np
import gpcv as gp
from gpcv.core import PredictType
from gpcv.evaluation import (
    CrossValidatedMetric,
    LeaveOneGroupOut,
    NegativeLogLikelihood,
    RootMeanSquareError,
    max_aggregator,
)
from gpcv.misc.toydata import make_toy_gp_model, make_toy_linear_data


def grouped_scores(model, datasets, metric):
    return [float(np.mean(metric(dataset, model))) for dataset in datasets]


def main():
    datasets = [
        make_toy_linear_data(2.0, 4.0, 0.2),
        make_toy_linear_data(1.0, 5.0, 0.1),
    ]
    model = make_toy_gp_model()

    # hold out blocks of consecutive points
    metric = CrossValidatedMetric(
        NegativeLogLikelihood(PredictType.JOINT), LeaveOneGroupOut(lambda x: int(x) // 3)
    )
    print("Grouped CV NLL before tuning:", grouped_scores(model, datasets, metric))

    tuner = gp.get_tuner(model, metric, datasets, aggregator=max_aggregator)
    tuner.optimizer.set_maxeval(60)
    model.set_params(tuner.tune())
    print("Grouped CV NLL after tuning :", grouped_scores(model, datasets, metric))
    print(model.pretty_string())

    least_squares = gp.LeastSquaresRegression()
    rmse = CrossValidatedMetric(RootMeanSquareError(), LeaveOneGroupOut(lambda x: int(x) // 3))
    print("\nGrouped CV RMSE")
    print("  gp           :", grouped_scores(model, datasets, rmse))
    print("  least squares:", grouped_scores(least_squares, datasets, rmse))


if __name__ == "__main__":
    main()
