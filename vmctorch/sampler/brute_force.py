import torch
from .sampler_base import SamplerBase


class BruteForce(SamplerBase):

    def __init__(self,
                 nparticles: int = 1,
                 ndim: int = 3,
                 step_size: float = 1.,
                 with_tqdm: bool = False):
        """Brute force Metropolis sampler

        Each step moves a single particle by a uniform displacement
        in [-step_size/2, step_size/2] along every dimension and accepts
        the move with probability min(1, |Psi_new / Psi_old|^2).

        Args:
            nparticles (int, optional): number of particles. Defaults to 1.
            ndim (int, optional): number of cartesian dimension. Defaults to 3.
            step_size (float, optional): length of the step. Defaults to 1.
            with_tqdm (bool, optional): show a progress bar. Defaults to False.

        Examples::
            >>> wf = TrialWaveFunction(ndim=3, nparticles=10)
            >>> sampler = BruteForce(nparticles=10, ndim=3, step_size=0.5)
            >>> acc = Accumulator()
            >>> walkers = sampler(wf, 0.5, 1000, torch.Generator().manual_seed(0), acc)
        """
        SamplerBase.__init__(self, nparticles, ndim, step_size, with_tqdm)

    def initial_positions(self, generator):
        """Uniform positions in a box of width step_size centered on the origin."""
        dtype = torch.get_default_dtype()
        return self.step_size * (torch.rand(
            (self.ndim, self.nparticles), generator=generator, dtype=dtype) - 0.5)

    def step(self, wf, alpha, walkers, particle, generator):

        # new positions
        new_pos = walkers.pos.clone()
        new_pos[:, particle] += self._move(generator, new_pos.dtype)

        # new function
        new_wave = wf.exponent(new_pos, alpha)
        proba = torch.exp(2. * (new_wave - walkers.wave))

        # accept the move
        accepted = self._accept(proba, generator)
        if accepted:
            walkers.move(particle, new_pos, new_wave)
        return accepted

    def _move(self, generator: torch.Generator, dtype: torch.dtype) -> torch.Tensor:
        """propose a displacement for one particle

        Args:
            generator (torch.Generator): random stream
            dtype (torch.dtype): type of the positions

        Returns:
            torch.Tensor: displacement (ndim,)
        """
        d = torch.rand(self.ndim, generator=generator, dtype=dtype)
        return self.step_size * (d - 0.5)
