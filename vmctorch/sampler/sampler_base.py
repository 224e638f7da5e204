import math
import torch
import numpy as np
from tqdm import tqdm
from typing import Optional
from .. import log
from .walkers import Walkers


def check_positive(value: float, name: str) -> float:
    """Check that a sampling parameter is finite and strictly positive."""
    value = float(value)
    if not math.isfinite(value) or value <= 0.:
        raise ValueError(
            '%s must be a finite strictly positive number, got %s' % (name, value))
    return value


class SamplerBase:
    def __init__(
        self,
        nparticles: int,
        ndim: int,
        step_size: float,
        with_tqdm: bool = False,
    ) -> None:
        """Base class for the single particle move samplers

        Args:
            nparticles (int): number of particles
            ndim (int): number of cartesian dimension
            step_size (float): size of the steps (time step for importance sampling)
            with_tqdm (bool, optional): show a progress bar over the cycles. Defaults to False.
        """
        if nparticles < 1:
            raise ValueError('number of particles must be at least 1')
        if ndim not in [1, 2, 3]:
            raise ValueError('unsupported dimensionality %s' % ndim)

        self.nparticles = nparticles
        self.ndim = ndim
        self.step_size = check_positive(step_size, 'step_size')
        self.with_tqdm = with_tqdm
        self.max_init_attempts = 1000

        log.info("")
        log.info(" Monte-Carlo Sampler")
        log.info("  Sampler             : {0}", self.__class__.__name__)
        log.info("  Number of particles : {0}", self.nparticles)
        log.info("  Number of dims      : {0}", self.ndim)
        log.info("  Step size           : {0}", self.step_size)

    def initialize(self, wf, alpha: float, generator: torch.Generator) -> Walkers:
        """Place the particles and evaluate the wave function there.

        With a hard sphere interaction the positions are drawn again
        until no pair of particles overlaps.

        Args:
            wf (TrialWaveFunction): wave function
            alpha (float): variational parameter
            generator (torch.Generator): random stream

        Raises:
            ValueError: if no configuration without overlap is found

        Returns:
            Walkers: initial state
        """
        for _ in range(self.max_init_attempts):
            pos = self.initial_positions(generator)
            if not (wf.interaction and wf.jastrow.overlap(pos)):
                return self.make_walkers(wf, alpha, pos)

        raise ValueError(
            'could not place %d particles without hard core overlap in %d attempts'
            % (self.nparticles, self.max_init_attempts))

    def initial_positions(self, generator: torch.Generator) -> torch.Tensor:
        """Draw a starting configuration of size (ndim, nparticles)."""
        raise NotImplementedError("Sampler must have an initial_positions method")

    def make_walkers(self, wf, alpha: float, pos: torch.Tensor) -> Walkers:
        """Walkers at pos with the exponent of the wave function."""
        return Walkers(pos, wf.exponent(pos, alpha))

    def step(self, wf, alpha: float, walkers: Walkers, particle: int,
             generator: torch.Generator) -> bool:
        """Propose, evaluate and accept or reject the move of one particle.

        Args:
            wf (TrialWaveFunction): wave function
            alpha (float): variational parameter
            walkers (Walkers): current state, updated in place on acceptance
            particle (int): index of the particle to move
            generator (torch.Generator): random stream

        Returns:
            bool: True if the move was accepted
        """
        raise NotImplementedError("Sampler must have a step method")

    def __call__(self, wf, alpha: float, *args, **kwargs):
        """Run the cycles, see run_cycles."""
        return self.run_cycles(wf, alpha, *args, **kwargs)

    def __repr__(self) -> str:
        return (
            self.__class__.__name__
            + " sampler with %d particles in %dD" % (self.nparticles, self.ndim)
        )

    def cycle(self, wf, alpha: float, walkers: Walkers,
              generator: torch.Generator, accumulator=None) -> float:
        """Move every particle once.

        Args:
            wf (TrialWaveFunction): wave function
            alpha (float): variational parameter
            walkers (Walkers): current state
            generator (torch.Generator): random stream
            accumulator (Accumulator, optional): where to add the samples.
                                                 Defaults to None, i.e. no sampling.

        Returns:
            float: local energy after the last move, None if not sampled
        """
        eloc = None
        for particle in range(self.nparticles):
            accepted = self.step(wf, alpha, walkers, particle, generator)
            if accumulator is not None:
                eloc, dlog = walkers.observe(wf, alpha)
                accumulator.add(eloc, dlog, accepted)
        return eloc

    def run_cycles(
        self,
        wf,
        alpha: float,
        ncycles: int,
        generator: torch.Generator,
        accumulator,
        energies: Optional[np.ndarray] = None,
        offset: int = 0,
        ntherm: int = 0,
        walkers: Optional[Walkers] = None,
        with_tqdm: Optional[bool] = None,
    ) -> Walkers:
        """Run Monte Carlo cycles and accumulate the local energy.

        Args:
            wf (TrialWaveFunction): wave function
            alpha (float): variational parameter
            ncycles (int): number of cycles to sample
            generator (torch.Generator): random stream
            accumulator (Accumulator): running sums
            energies (np.ndarray, optional): per cycle energy log. Defaults to None.
            offset (int, optional): row of the first cycle in the energy log. Defaults to 0.
            ntherm (int, optional): number of cycles to thermalize. Defaults to 0.
            walkers (Walkers, optional): initial state. Defaults to None, i.e. fresh start.
            with_tqdm (bool, optional): overrides the progress bar setting. Defaults to None.

        Returns:
            Walkers: final state
        """
        if with_tqdm is None:
            with_tqdm = self.with_tqdm

        with torch.no_grad():

            if walkers is None:
                walkers = self.initialize(wf, alpha, generator)

            for _ in range(ntherm):
                self.cycle(wf, alpha, walkers, generator)

            rng = tqdm(range(ncycles),
                       desc='INFO:VMCTorch|  Sampling',
                       disable=not with_tqdm)

            for icycle in rng:
                eloc = self.cycle(wf, alpha, walkers, generator, accumulator)
                if energies is not None:
                    energies[offset + icycle] = eloc

        return walkers

    @staticmethod
    def _accept(proba: torch.Tensor, generator: torch.Generator) -> bool:
        """accept the move or not

        Args:
            proba (torch.Tensor): acceptance probability of the move
            generator (torch.Generator): random stream

        Returns:
            bool: True if the move is accepted
        """
        tau = torch.rand((), generator=generator, dtype=proba.dtype)
        return bool(tau < proba)
