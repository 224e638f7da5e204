import math
import torch
from .. import log
from .sampler_base import SamplerBase, check_positive
from .walkers import Walkers


class ImportanceSampling(SamplerBase):
    def __init__(
        self,
        nparticles: int = 1,
        ndim: int = 3,
        time_step: float = 0.1,
        diffusion: float = 0.5,
        with_tqdm: bool = False,
    ) -> None:
        """Importance sampling with a Langevin drift (Fokker-Planck) proposal

        .. math::
            x_{new} = x_{old} + D F(x_{old}) \\delta t + \\xi \\sqrt{\\delta t}

        with xi a normal random variable and F = 2 grad(Psi)/Psi the quantum force.
        The move is accepted with the Metropolis-Hastings ratio built from the
        Green's functions of the proposal.

        Args:
            nparticles (int, optional): number of particles. Defaults to 1.
            ndim (int, optional): number of dimensions. Defaults to 3.
            time_step (float, optional): time step of the diffusion. Defaults to 0.1.
            diffusion (float, optional): diffusion coefficient. Defaults to 0.5.
            with_tqdm (bool, optional): show a progress bar. Defaults to False.

        Returns:
            None
        """
        SamplerBase.__init__(self, nparticles, ndim, time_step, with_tqdm)
        self.time_step = self.step_size
        self.diffusion = check_positive(diffusion, 'diffusion')
        self._sqrt_dt = math.sqrt(self.time_step)

        log.info("  Diffusion constant  : {0}", self.diffusion)

    def initial_positions(self, generator):
        """Gaussian positions of width sqrt(time_step)."""
        dtype = torch.get_default_dtype()
        return self._sqrt_dt * torch.randn(
            (self.ndim, self.nparticles), generator=generator, dtype=dtype)

    def make_walkers(self, wf, alpha, pos):
        return Walkers(pos, wf.exponent(pos, alpha), wf.quantum_force(pos, alpha))

    def step(self, wf, alpha, walkers, particle, generator):

        old = walkers.pos[:, particle]
        fold = walkers.qforce[:, particle]

        # new positions
        new_pos = walkers.pos.clone()
        new_pos[:, particle] = self.move(old, fold, generator)

        # new function and drift
        new_wave = wf.exponent(new_pos, alpha)
        new_qforce = wf.quantum_force(new_pos, alpha)
        fnew = new_qforce[:, particle]

        # transitions
        greens = self.greens_ratio(old, new_pos[:, particle], fold, fnew)
        proba = torch.exp(greens) * torch.exp(2. * (new_wave - walkers.wave))

        # accept the move
        accepted = self._accept(proba, generator)
        if accepted:
            walkers.move(particle, new_pos, new_wave, new_qforce)
        return accepted

    def move(self, old: torch.Tensor, force: torch.Tensor,
             generator: torch.Generator) -> torch.Tensor:
        """Drift-diffusion move of one particle.

        Args:
            old (torch.Tensor): position of the particle (ndim,)
            force (torch.Tensor): quantum force at that position (ndim,)
            generator (torch.Generator): random stream

        Returns:
            torch.Tensor: new position of the particle (ndim,)
        """
        xi = torch.randn(self.ndim, generator=generator, dtype=old.dtype)
        return old + self.diffusion * force * self.time_step + xi * self._sqrt_dt

    def greens_ratio(self, old: torch.Tensor, new: torch.Tensor,
                     fold: torch.Tensor, fnew: torch.Tensor) -> torch.Tensor:
        """Logarithm of the ratio of the Green's functions G(old, new)/G(new, old)

        Args:
            old (torch.Tensor): old position of the particle
            new (torch.Tensor): proposed position of the particle
            fold (torch.Tensor): quantum force at the old position
            fnew (torch.Tensor): quantum force at the new position

        Returns:
            torch.Tensor: log of the transition ratio
        """
        drift = 0.5 * self.diffusion * self.time_step * (fold - fnew)
        return (0.5 * (fold + fnew) * (drift - new + old)).sum()
