import numpy as np
from typing import Optional, Sequence

COLUMN_WIDTH = 20
PRECISION = 10


def _format_row(values: Sequence[float]) -> str:
    return ''.join('{0:>{w}.{p}g}'.format(v, w=COLUMN_WIDTH, p=PRECISION)
                   for v in values)


def write_statistics(fname: str,
                     alphas: Sequence[float],
                     variances: Sequence[float],
                     energies: Sequence[float],
                     nparticles: Optional[int] = None) -> None:
    """Write the statistics table.

    Three right aligned columns of width 20: alpha, variance_energy
    and expected_energy, one row per variational parameter.

    Args:
        fname (str): name of the output file
        alphas (Sequence[float]): variational parameters
        variances (Sequence[float]): variances of the energy
        energies (Sequence[float]): expectation values of the energy
        nparticles (int, optional): if given the energy per particle E/N and its
                                    variance Var(E)/N^2 are written. Defaults to None.

    Raises:
        ValueError: if the columns do not have the same length
        OSError: if the file cannot be written
    """
    alphas = np.asarray(alphas, dtype=float)
    variances = np.asarray(variances, dtype=float)
    energies = np.asarray(energies, dtype=float)
    if not len(alphas) == len(variances) == len(energies):
        raise ValueError('alphas, variances and energies must have the same length')

    if nparticles is not None:
        variances = variances / nparticles**2
        energies = energies / nparticles

    with open(fname, 'w') as f:
        f.write(''.join('{0:>{w}}'.format(name, w=COLUMN_WIDTH)
                        for name in ['alpha', 'variance_energy', 'expected_energy']))
        f.write('\n')
        for row in zip(alphas, variances, energies):
            f.write(_format_row(row) + '\n')


def write_energies(fname: str,
                   alphas: Sequence[float],
                   energies: np.ndarray) -> None:
    """Write the per cycle energy log.

    The first line holds the variational parameters, then one line per
    Monte Carlo cycle with one column per variational parameter.

    Args:
        fname (str): name of the output file
        alphas (Sequence[float]): variational parameters
        energies (np.ndarray): local energies, size (ncycles, nvariations)

    Raises:
        ValueError: if the number of columns does not match the number of alphas
        OSError: if the file cannot be written
    """
    energies = np.atleast_2d(np.asarray(energies, dtype=float))
    if energies.shape[1] != len(alphas):
        raise ValueError('energies must have one column per alpha')

    with open(fname, 'w') as f:
        f.write(_format_row(alphas) + '\n')
        np.savetxt(f, energies)


def write_results(obs, prefix: str, nparticles: Optional[int] = None) -> None:
    """Write the statistics table and the energy log of a run.

    Args:
        obs (SimpleNamespace): results of a solver (table and energies)
        prefix (str): the files are prefix + '_statistics.txt' and prefix + '_energies.txt'
        nparticles (int, optional): normalize the statistics per particle. Defaults to None.
    """
    write_statistics(prefix + '_statistics.txt', obs.table.alpha,
                     obs.table.variance, obs.table.energy, nparticles)
    write_energies(prefix + '_energies.txt', obs.table.alpha, obs.energies)


def load_statistics(fname: str) -> np.ndarray:
    """Read a statistics table, size (nvariations, 3)."""
    return np.atleast_2d(np.loadtxt(fname, skiprows=1))


def load_energies(fname: str):
    """Read an energy log.

    Returns:
        np.ndarray: variational parameters
        np.ndarray: local energies, size (ncycles, nvariations)
    """
    with open(fname, 'r') as f:
        alphas = np.array(f.readline().split(), dtype=float)
        energies = np.loadtxt(f, ndmin=2)
    return alphas, energies
