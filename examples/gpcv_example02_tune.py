"""
Select the parameters of a GP by minimizing the LOO negative log-likelihood

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import sys
import numpy as np
import gpcv as gp
from gpcv.evaluation import LeaveOneOutLikelihood
from gpcv.misc.plotutils import Figure, plot_tuning_history
from gpcv.misc.priors import LogNormalPrior
from gpcv.misc.toydata import make_toy_sine_data


def main():
    dataset = make_toy_sine_data(n=15, sigma=0.1)

    covariance = gp.kernel.Matern(p=1, sigma=0.5, length_scale=3.0) + gp.kernel.IndependentNoise(1.0)
    model = gp.GaussianProcessRegression(covariance)
    # weakly informative prior on the range
    model.set_prior("matern_length_scale", LogNormalPrior(0.0, 1.0))

    tuner = gp.get_tuner(model, LeaveOneOutLikelihood(), dataset, output_stream=sys.stdout)
    tuner.optimizer.set_maxeval(100)
    params = tuner.tune()

    model.set_params(params)
    print("\nSelected parameters")
    print("-------------------")
    print(model.pretty_string())

    model.fit(dataset)
    xt = np.linspace(0.0, 2.0 * np.pi, 200)
    fig = Figure(isinteractive=True)
    fig.plot(xt, np.sin(xt), "k", linewidth=1, linestyle=(0, (5, 5)))
    fig.plotdata(dataset.features, dataset.targets.mean)
    fig.plotgp(xt, model.predict(xt).marginal())
    fig.xylabels("$x$", "$z$")
    fig.title("Posterior GP with parameters selected by LOO")
    fig.show(grid=True, legend=True, block=False)

    plot_tuning_history(tuner.optimizer.last_result.history_criterion, show=False)


if __name__ == "__main__":
    main()
