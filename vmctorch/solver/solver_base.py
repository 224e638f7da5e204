from concurrent.futures import ThreadPoolExecutor
from time import time
from types import SimpleNamespace
from typing import List, Optional

import numpy as np
import torch

from .. import log
from ..sampler import SamplerBase
from ..utils import dump_to_hdf5, add_group_attr, sampling_error
from ..wavefunction import TrialWaveFunction
from .accumulator import Accumulator


class SolverBase:

    def __init__(self,
                 wf: TrialWaveFunction,
                 sampler: SamplerBase,
                 ncycles: int = 10000,
                 seed: int = 1337,
                 nworkers: int = 1,
                 ntherm: int = 0,
                 block_size: int = 1,
                 output: Optional[str] = None) -> None:
        """Base class of the VMC solvers

        Runs the Monte Carlo cycles of one value of the variational
        parameter at a time and keeps the statistics table and the per
        cycle energy log of all the values already computed.

        Args:
            wf (TrialWaveFunction): trial wave function
            sampler (SamplerBase): sampler
            ncycles (int, optional): number of MC cycles per alpha. Defaults to 10000.
            seed (int, optional): master seed of the random streams. Defaults to 1337.
            nworkers (int, optional): number of threads sharing the cycles. Defaults to 1.
            ntherm (int, optional): thermalization cycles of each worker. Defaults to 0.
            block_size (int, optional): block size of the error estimate. Defaults to 1.
            output (str, optional): hdf5 filename. Defaults to None, i.e. no hdf5 output.
        """
        if wf.nparticles != sampler.nparticles or wf.ndim != sampler.ndim:
            raise ValueError('wave function and sampler sizes do not match')
        if ncycles < 1:
            raise ValueError('number of cycles must be at least 1')
        if nworkers < 1 or nworkers > ncycles:
            raise ValueError('number of workers must be in [1, ncycles]')
        if ntherm < 0:
            raise ValueError('number of thermalization cycles must be positive')
        if block_size < 1:
            raise ValueError('block size must be at least 1')

        self.wf = wf
        self.sampler = sampler
        self.ncycles = ncycles
        self.seed = seed
        self.nworkers = nworkers
        self.ntherm = ntherm
        self.block_size = block_size
        self.hdf5file = output

        self.statistics: List[SimpleNamespace] = []
        self.energy_log: List[np.ndarray] = []

        log.info('')
        log.info(' Variational Monte Carlo')
        log.info('  Solver              : {0}', self.__class__.__name__)
        log.info('  Number of cycles    : {0}', self.ncycles)
        log.info('  Number of workers   : {0}', self.nworkers)
        log.info('  Seed                : {0}', self.seed)

    def worker_generator(self, ivariation: int, iworker: int) -> torch.Generator:
        """Independent random stream of a worker.

        The seed only depends on the master seed, the index of the
        variational parameter and the index of the worker.

        Args:
            ivariation (int): index of the variational parameter
            iworker (int): index of the worker

        Returns:
            torch.Generator: seeded generator
        """
        seq = np.random.SeedSequence(self.seed, spawn_key=(ivariation, iworker))
        return torch.Generator().manual_seed(int(seq.generate_state(1)[0]))

    def _split_cycles(self) -> List[np.ndarray]:
        """Contiguous blocks of cycle indexes, one per worker."""
        return np.array_split(np.arange(self.ncycles), self.nworkers)

    def _run_worker(self, alpha: float, ivariation: int, iworker: int,
                    cycles: np.ndarray, energies: np.ndarray) -> Accumulator:
        """Sample a block of cycles with private walkers and sums."""
        accumulator = Accumulator()
        self.sampler.run_cycles(self.wf, alpha, len(cycles),
                                self.worker_generator(ivariation, iworker),
                                accumulator,
                                energies=energies,
                                offset=int(cycles[0]),
                                ntherm=self.ntherm,
                                with_tqdm=self.sampler.with_tqdm and iworker == 0)
        return accumulator

    def advance(self, alpha: float) -> SimpleNamespace:
        """Sample one value of the variational parameter.

        Args:
            alpha (float): variational parameter

        Raises:
            ValueError: if alpha is not strictly positive

        Returns:
            SimpleNamespace: statistics of alpha
        """
        alpha = self.wf.validate(alpha)
        ivariation = len(self.statistics)
        energies = np.zeros(self.ncycles)
        blocks = self._split_cycles()

        tstart = time()
        if self.nworkers == 1:
            accumulators = [self._run_worker(alpha, ivariation, 0,
                                             blocks[0], energies)]
        else:
            with ThreadPoolExecutor(max_workers=self.nworkers) as executor:
                futures = [executor.submit(self._run_worker, alpha, ivariation,
                                           iw, cycles, energies)
                           for iw, cycles in enumerate(blocks)]
                accumulators = [f.result() for f in futures]

        obs = sum(accumulators, Accumulator()).finalize()
        obs.alpha = alpha
        obs.error = float(sampling_error(energies, self.block_size)[0])

        self.statistics.append(obs)
        self.energy_log.append(energies)

        log.info('  alpha {0:8.5f}  energy {1:12.6f} +/- {2:9.6f}  variance {3:12.6f}'
                 '  acceptance {4:6.2f} %  ({5:.2f} sec.)',
                 alpha, obs.energy, obs.error, obs.variance,
                 100 * obs.acceptance_rate, time() - tstart)

        return obs

    def run(self) -> SimpleNamespace:
        raise NotImplementedError('Solver must have a run method')

    def reset(self) -> None:
        """Forget the statistics already computed."""
        self.statistics = []
        self.energy_log = []

    @property
    def table(self) -> SimpleNamespace:
        """Statistics table, one entry per variational parameter."""
        keys = ['alpha', 'energy', 'variance', 'error', 'derivative',
                'acceptance', 'acceptance_rate']
        return SimpleNamespace(**{
            k: np.array([getattr(obs, k) for obs in self.statistics])
            for k in keys})

    @property
    def energies(self) -> np.ndarray:
        """Per cycle energy log, size (ncycles, nvariations)."""
        if len(self.energy_log) == 0:
            return np.zeros((self.ncycles, 0))
        return np.column_stack(self.energy_log)

    def results(self) -> SimpleNamespace:
        """Statistics table and energy log of the run."""
        return SimpleNamespace(table=self.table, energies=self.energies)

    def save(self, hdf5_group: str) -> SimpleNamespace:
        """Dump the results in the hdf5 file if one is defined.

        Args:
            hdf5_group (str): name of the group where to store the data

        Returns:
            SimpleNamespace: results of the run
        """
        obs = self.results()
        if self.hdf5file is not None:
            dump_to_hdf5(obs, self.hdf5file, root_name=hdf5_group)
            add_group_attr(self.hdf5file, hdf5_group,
                           {'type': self.__class__.__name__,
                            'wavefunction': repr(self.wf),
                            'sampler': repr(self.sampler)})
        return obs
