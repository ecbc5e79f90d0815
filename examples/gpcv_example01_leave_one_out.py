"""
Leave-one-out cross-validation of a GP regression model

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import numpy as np
import gpcv as gp
from gpcv.evaluation import (
    ContinuousRankedProbabilityScore,
    LeaveOneOut,
    NegativeLogLikelihood,
)
from gpcv.misc.plotutils import Figure, plot_cv
from gpcv.misc.toydata import make_toy_sine_data


def visualize_results(dataset, model, loo):
    """
    Posterior GP on a grid, and LOO predictions against the data.

    Parameters
    ----------
    dataset : gpcv.RegressionDataset
    model : gpcv.GaussianProcessRegression
        Fit model.
    loo : gpcv.MarginalDistribution
        Reassembled leave-one-out predictions.
    """
    xt = np.linspace(0.0, 2.0 * np.pi, 200)
    posterior = model.predict(xt).marginal()

    fig = Figure(isinteractive=True)
    fig.plot(xt, np.sin(xt), "k", linewidth=1, linestyle=(0, (5, 5)))
    fig.plotdata(dataset.features, dataset.targets.mean)
    fig.plotgp(xt, posterior)
    fig.xylabels("$x$", "$z$")
    fig.title("Posterior GP")
    fig.show(grid=True, legend=True, block=False)

    plot_cv(dataset.targets.mean, loo, title="LOO predictions with 95% intervals", show=False)


def main():
    dataset = make_toy_sine_data()
    covariance = gp.kernel.Matern(p=2, sigma=1.0, length_scale=1.0) + gp.kernel.IndependentNoise(0.05)
    model = gp.GaussianProcessRegression(covariance)
    print(model)

    cv = model.cross_validate()
    loo = cv.marginal_predictions(dataset, LeaveOneOut())
    nll = cv.scores(NegativeLogLikelihood(gp.PredictType.MARGINAL), dataset)
    crps = cv.scores(ContinuousRankedProbabilityScore(), dataset)
    print(f"\nLOO negative log-likelihood: {np.mean(nll):.4f}")
    print(f"LOO CRPS                   : {np.mean(crps):.4f}")

    model.fit(dataset)
    visualize_results(dataset, model, loo)


if __name__ == "__main__":
    main()
