## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
"""
Plotting helpers for predictions and cross-validation results.

Figure wraps a matplotlib figure with a current axis. plot_cv draws
held-out predictions against observed targets, plot_tuning_history the
objective values visited during tuning.
"""
import sys
import numpy as np
import scipy.stats as stats
import matplotlib.pyplot as plt
from matplotlib import interactive


class Figure:
    """Figures manager class.

    Parameters
    ----------
    nrows, ncols : int
        Subplot grid.
    isinteractive : bool
        Turn matplotlib interactive mode on when run from an interpreter.
    boxoff : bool
        Hide the top and right spines.
    **kargs
        Passed to `plt.figure`.
    """

    def __init__(self, nrows=1, ncols=1, isinteractive=True, boxoff=True, **kargs):
        self.interpreter = bool(getattr(sys, "ps1", None)) or bool(sys.flags.interactive)
        if isinteractive and self.interpreter:
            interactive(True)

        self.boxoff = boxoff
        self.fig = plt.figure(**kargs)
        self.axes = [
            self.fig.add_subplot(nrows, ncols, i + 1) for i in range(nrows * ncols)
        ]
        self.ax = self.axes[0]
        if self.boxoff:
            self.set_boxoff()

    def set_boxoff(self):
        self.ax.spines["right"].set_visible(False)
        self.ax.spines["top"].set_visible(False)
        self.ax.tick_params(direction="in")

    def subplot(self, i):
        self.ax = self.axes[i - 1]
        if self.boxoff:
            self.set_boxoff()

    def show(self, grid=None, legend=None, block=None):
        if grid:
            self.grid()
        if legend:
            self.legend()
        plt.show(block=block)

    def close(self):
        plt.close(self.fig)

    def plot(self, x, z, *args, **kargs):
        self.ax.plot(x, z, *args, **kargs)

    def plotdata(self, x, z, label="data"):
        self.ax.plot(x, z, "rs", markerfacecolor="none", markersize=6, label=label)

    def xylabels(self, sx="", sy=""):
        self.ax.set_xlabel(sx)
        self.ax.set_ylabel(sy)

    def title(self, s):
        self.ax.set_title(s)

    def legend(self, **kwargs):
        self.ax.legend(**kwargs)

    def grid(self, visible=True, which="major", linestyle=(0, (1, 5)), linewidth=0.5):
        self.ax.grid(visible, which, linestyle=linestyle, linewidth=linewidth)

    def plotgp(self, x, marginal, ci=0.95, mean_label="posterior mean", **kwargs):
        """Mean and coverage interval of a marginal prediction along x.

        Parameters
        ----------
        x : array_like, shape (n,)
        marginal : MarginalDistribution
        ci : float
            Level of the coverage interval.
        """
        x = np.asarray(x).reshape(-1)
        order = np.argsort(x)
        x = x[order]
        mean = np.asarray(marginal.mean)[order]
        sd = np.sqrt(np.asarray(marginal.variance)[order])
        delta = stats.norm.ppf((1 + ci) / 2)

        self.ax.plot(x, mean, "#F2404C", linewidth=2.0, label=mean_label)
        self.ax.fill(
            np.hstack((x, x[::-1])),
            np.hstack((mean + delta * sd, (mean - delta * sd)[::-1])),
            color="#BFBFBF",
            alpha=0.8,
            linewidth=0.5,
            label=f"CI {100 * ci:g}%",
            **kwargs,
        )


def plot_cv(targets, marginal, title="cross-validated predictions", show=True):
    """Held-out predictions against observed values, with 95% intervals.

    Parameters
    ----------
    targets : array_like, shape (n,)
    marginal : MarginalDistribution
        Reassembled cross-validated predictions, in the order of targets.
    """
    fig = Figure()
    fig.ax.errorbar(
        targets, marginal.mean, 1.96 * np.sqrt(marginal.variance), fmt="ko", ls="None"
    )
    fig.xylabels("true values", "predicted")
    fig.title(title)
    (xmin, xmax), (ymin, ymax) = fig.ax.get_xlim(), fig.ax.get_ylim()
    xmin = min(xmin, ymin)
    xmax = max(xmax, ymax)
    fig.ax.plot([xmin, xmax], [xmin, xmax], "--")
    fig.grid()
    if show:
        fig.show()
    return fig


def plot_tuning_history(history_criterion, show=True):
    """Objective values visited by the optimizer and their running minimum."""
    values = np.asarray(history_criterion, dtype=float)
    finite = np.isfinite(values)
    iterations = np.arange(1, values.shape[0] + 1)
    running_min = np.minimum.accumulate(np.where(finite, values, np.inf))

    fig = Figure()
    fig.plot(iterations[finite], values[finite], "k.", label="objective")
    fig.plot(iterations, running_min, "#F2404C", label="best so far")
    fig.xylabels("evaluation", "objective")
    fig.title("tuning history")
    fig.legend()
    fig.grid()
    if show:
        fig.show()
    return fig
