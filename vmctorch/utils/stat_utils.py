import numpy as np
from scipy.optimize import curve_fit
from scipy.signal import fftconvolve
from typing import Tuple


def blocking(x: np.ndarray, block_size: int, expand: bool = False) -> np.ndarray:
    """Average consecutive cycles of the energy log in blocks.

    The last cycles that do not fill a complete block are dropped.

    Args:
        x (np.ndarray): energy log, size (Ncycles, Nvariations)
        block_size (int): number of cycles per block
        expand (bool, optional): repeat each block average block_size times. Defaults to False.

    Returns:
        np.ndarray: block averages, size (Nblocks, Nvariations)
    """
    ncycles, nvar = x.shape
    nblock = ncycles // block_size

    xb = x[: block_size * nblock].reshape(nblock, block_size, nvar).mean(axis=1)

    if expand:
        xb = np.repeat(xb, block_size, axis=0)

    return xb


def sampling_error(x: np.ndarray, block_size: int = 1) -> np.ndarray:
    """Statistical uncertainty of the mean of each column.

    The samples are averaged in blocks first so that the error is not
    underestimated for correlated samples. Block size 1 assumes the
    samples are uncorrelated.

    Args:
        x (np.ndarray): size (Ncycles,) or (Ncycles, Nvariations)
        block_size (int, optional): size of the block. Defaults to 1.

    Returns:
        np.ndarray: standard error of each column
    """
    x = np.asarray(x, dtype=float)
    if x.ndim == 1:
        x = x[:, None]
    xb = blocking(x, max(1, min(block_size, x.shape[0])))
    nblock = xb.shape[0]
    if nblock < 2:
        return np.zeros(xb.shape[1])
    return np.sqrt(xb.var(axis=0, ddof=1) / nblock)


def correlation_coefficient(eloc: np.ndarray, norm: bool = True) -> np.ndarray:
    """Autocorrelation of the local energy along the cycles.

    The lagged products are obtained at once with an FFT convolution.

    Args:
        eloc (np.ndarray): energy log, size (Ncycles, Nvariations)
        norm (bool, optional): divide by the zero lag value. Defaults to True.
            A constant column has no fluctuation and is reported as uncorrelated,
            i.e. 1 at lag 0 and 0 elsewhere.

    Returns:
        np.ndarray: correlation for lags 0 to Ncycles-1, size (Ncycles, Nvariations)
    """
    ncycles = eloc.shape[0]
    fluct = eloc - eloc.mean(axis=0)
    corr = fftconvolve(fluct, fluct[::-1], axes=0)[ncycles - 1:]

    if norm:
        constant = np.all(eloc == eloc[0], axis=0)
        scale = np.where(constant, 1., corr[0])
        corr /= scale
        corr[:, constant] = 0.
        corr[0, constant] = 1.

    return corr


def integrated_autocorrelation_time(rho: np.ndarray, size_max: int) -> np.ndarray:
    """Running estimate 1 + 2 sum_k rho(k) of the integrated autocorrelation time.

    Args:
        rho (np.ndarray): correlation coefficients, size (Ncycles, Nvariations)
        size_max (int): largest lag included

    Returns:
        np.ndarray: estimate for the cutoffs 1 to size_max-1
    """
    return 1. + 2. * np.cumsum(rho[1:size_max], axis=0)


def _exp_decay(lag: np.ndarray, tau: float) -> np.ndarray:
    return np.exp(-lag / tau)


def fit_correlation_coefficient(rho: np.ndarray) -> Tuple[float, np.ndarray]:
    """Fit exp(-k/tau) to a correlation curve.

    Args:
        rho (np.ndarray): correlation coefficients of one chain

    Returns:
        float: correlation time tau
        np.ndarray: fitted curve
    """
    lag = np.arange(len(rho))
    popt, _ = curve_fit(_exp_decay, lag, rho, p0=[1.])
    return popt[0], _exp_decay(lag, popt[0])
