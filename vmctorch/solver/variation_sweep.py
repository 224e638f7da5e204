from types import SimpleNamespace
from typing import Optional, Sequence

import numpy as np

from .. import log
from ..sampler import SamplerBase
from ..wavefunction import TrialWaveFunction, check_alpha
from .solver_base import SolverBase


class VariationSweep(SolverBase):

    def __init__(self,
                 wf: TrialWaveFunction,
                 sampler: SamplerBase,
                 alphas: Optional[Sequence[float]] = None,
                 nvariations: int = 40,
                 alpha_start: Optional[float] = None,
                 alpha_step: float = 0.025,
                 **kwargs) -> None:
        """Scan a fixed grid of variational parameters

        The grid is either given explicitly or built as the arithmetic
        sequence alpha_i = alpha_start + i * alpha_step. Without alpha_start
        the grid starts at alpha_step, i.e. alpha_i = (i + 1) * alpha_step.

        Args:
            wf (TrialWaveFunction): trial wave function
            sampler (SamplerBase): sampler
            alphas (Sequence[float], optional): increasing values of alpha. Defaults to None.
            nvariations (int, optional): number of values on the grid. Defaults to 40.
            alpha_start (float, optional): first value of the grid. Defaults to alpha_step.
            alpha_step (float, optional): spacing of the grid. Defaults to 0.025.
            **kwargs: see SolverBase

        Examples::
            >>> wf = TrialWaveFunction(ndim=1, nparticles=1)
            >>> sampler = BruteForce(nparticles=1, ndim=1, step_size=1.)
            >>> solver = VariationSweep(wf, sampler, alphas=[0.4, 0.5, 0.6], ncycles=1000)
            >>> obs = solver.run()
        """
        super().__init__(wf, sampler, **kwargs)

        if alphas is None:
            if nvariations < 1:
                raise ValueError('number of variations must be at least 1')
            if alpha_start is None:
                alpha_start = alpha_step
            alphas = alpha_start + alpha_step * np.arange(nvariations)

        alphas = tuple(check_alpha(a) for a in alphas)
        if len(alphas) == 0:
            raise ValueError('no variational parameter to sample')
        if any(a1 >= a2 for a1, a2 in zip(alphas[:-1], alphas[1:])):
            raise ValueError('the variational parameters must be increasing')

        self.alphas = alphas
        self.nvariations = len(alphas)

        log.info('  Number of variations: {0}', self.nvariations)
        log.info('  Alpha range         : [{0}, {1}]', alphas[0], alphas[-1])

    def run(self, hdf5_group: str = 'variation_sweep') -> SimpleNamespace:
        """Sample all the values of the grid in increasing order.

        Args:
            hdf5_group (str, optional): hdf5 group where to store the data.
                                        Defaults to 'variation_sweep'.

        Returns:
            SimpleNamespace: statistics table and energy log
        """
        self.reset()
        for alpha in self.alphas:
            self.advance(alpha)
        return self.save(hdf5_group)
