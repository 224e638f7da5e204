import matplotlib.pyplot as plt
import numpy as np
from matplotlib import cm
from types import SimpleNamespace
from typing import Optional, Tuple
from .stat_utils import (
    blocking,
    correlation_coefficient,
    fit_correlation_coefficient,
)


def plot_energy_sweep(
    table: SimpleNamespace,
    e0: Optional[float] = None,
    show_variance: bool = False,
) -> None:
    """Plot the energy as a function of the variational parameter.

    Args:
        table (SimpleNamespace): statistics table of a solver (alpha, energy, error, variance)
        e0 (float, optional): Target value for the energy. Defaults to None.
        show_variance (bool, optional): Show the variance if True. Defaults to False.
    """

    fig = plt.figure()
    ax = fig.add_subplot(111)

    ax.errorbar(table.alpha, table.energy, yerr=table.error,
                fmt="o-", color="#144477", capsize=3)
    if e0 is not None:
        ax.axhline(e0, color="black", linestyle="--")

    ax.grid()
    ax.set_xlabel("alpha")
    ax.set_ylabel("Energy", color="black")

    if show_variance:
        ax2 = ax.twinx()
        ax2.plot(table.alpha, table.variance, color="blue")
        ax2.set_ylabel("variance", color="blue")
        ax2.tick_params(axis="y", labelcolor="blue")
        fig.tight_layout()

    plt.show()


def plot_energy_log(
    eloc: np.ndarray, alphas: Optional[np.ndarray] = None
) -> np.ndarray:
    """Plot the running average of the energy along the cycles for each alpha

    Args:
        eloc (np.ndarray): Local energy log (Ncycles, Nvariations)
        alphas (np.ndarray, optional): values of alpha used for the legend

    Returns:
        np.ndarray: running averages (Ncycles, Nvariations)
    """
    ncycles, nvar = eloc.shape
    celoc = np.cumsum(eloc, axis=0) / np.arange(1, ncycles + 1)[:, None]

    cmap = cm.viridis(np.linspace(0, 1, nvar))
    for i in range(nvar):
        label = None if alphas is None else "alpha=%1.3f" % alphas[i]
        plt.plot(celoc[:, i], color=cmap[i], label=label)

    if alphas is not None:
        plt.legend()
    plt.grid()
    plt.xlabel("Monte Carlo cycles")
    plt.ylabel("Energy")
    plt.show()

    return celoc


def plot_correlation_coefficient(
    eloc: np.ndarray, size_max: int = 100
) -> Tuple[np.ndarray, float]:
    """
    Plot the correlation coefficient of the local energy
    and fit the curve to an exp to extract the correlation time.

    Parameters
    ----------
    eloc : np.ndarray
        values of the local energy (Ncycles, Nvariations)
    size_max : int, optional
        maximu number of MC cycles to consider. Defaults to 100.

    Returns
    -------
    rho : np.ndarray
        correlation coefficients (size_max, Nvariations)
    tau_fit : float
        correlation time
    """
    rho = correlation_coefficient(eloc)
    tau_fit, fitted = fit_correlation_coefficient(rho.mean(1)[:size_max])

    plt.plot(rho, alpha=0.25)
    plt.plot(rho.mean(1), linewidth=3, c="black")
    plt.plot(fitted, "--", c="grey")
    plt.xlim([0, size_max])
    plt.ylim([-0.25, 1.5])
    plt.xlabel("MC cycles")
    plt.ylabel("Correlation coefficient")
    plt.text(
        0.5 * size_max, 1.05, "tau=%1.3f" % tau_fit, {"color": "black", "fontsize": 15}
    )
    plt.grid()
    plt.show()

    return rho, tau_fit


def plot_block(eloc: np.ndarray) -> np.ndarray:
    """Plot the standard error of the blocked energies as a function of the block size.

    Args:
        eloc (np.ndarray): Values of the local energy (Ncycles, Nvariations).

    Returns:
        np.ndarray: standard errors (Nsizes, Nvariations)
    """

    nstep, _ = eloc.shape
    max_block_size = nstep // 2

    evar = []
    for size in range(1, max_block_size):
        eb = blocking(eloc, size)
        nblock = eb.shape[0]
        evar.append(np.sqrt(np.var(eb, axis=0) / (nblock - 1)))

    evar = np.array(evar)
    plt.plot(np.arange(1, max_block_size), evar)
    plt.xlabel("Blocking size")
    plt.ylabel("Standard error")
    plt.show()

    return evar
