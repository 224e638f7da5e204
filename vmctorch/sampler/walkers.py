import torch
from typing import Optional
from .. import log


class Walkers:
    def __init__(
        self,
        pos: torch.Tensor,
        wave: torch.Tensor,
        qforce: Optional[torch.Tensor] = None,
    ) -> None:
        """State of the random walk.

        Holds the current configuration, the exponent of the trial
        wave function at that configuration and, for importance
        sampling, the quantum force. The local energy and the alpha
        derivative of the configuration are cached until the next
        accepted move.

        Args:
            pos (torch.Tensor): positions of the particles, shape (ndim, nparticles)
            wave (torch.Tensor): exponent of the wave function at pos
            qforce (torch.Tensor, optional): quantum force at pos, shape (ndim, nparticles).
                                             Defaults to None.
        """
        self.pos = pos
        self.wave = wave
        self.qforce = qforce
        self.ndim, self.nparticles = pos.shape

        self.local_energy = None
        self.alpha_derivative = None

    def move(
        self,
        particle: int,
        new_pos: torch.Tensor,
        new_wave: torch.Tensor,
        new_qforce: Optional[torch.Tensor] = None,
    ) -> None:
        """Commit an accepted single particle move.

        Args:
            particle (int): index of the particle that moved
            new_pos (torch.Tensor): proposed configuration
            new_wave (torch.Tensor): exponent at the proposed configuration
            new_qforce (torch.Tensor, optional): quantum force at the proposed configuration
        """
        self.pos[:, particle] = new_pos[:, particle]
        self.wave = new_wave
        if new_qforce is not None:
            self.qforce = new_qforce

        self.local_energy = None
        self.alpha_derivative = None

    def observe(self, wf, alpha: float):
        """Local energy and d ln(Psi)/d alpha of the current configuration.

        Args:
            wf (TrialWaveFunction): wave function
            alpha (float): variational parameter

        Returns:
            float, float: local energy, alpha derivative
        """
        if self.local_energy is None:
            self.local_energy = wf.local_energy(self.pos, alpha).item()
            self.alpha_derivative = wf.alpha_derivative(self.pos).item()
        return self.local_energy, self.alpha_derivative

    def clone(self) -> "Walkers":
        """Private copy of the state."""
        qforce = None if self.qforce is None else self.qforce.clone()
        return Walkers(self.pos.clone(), self.wave.clone(), qforce)

    def check_consistency(self, wf, alpha: float, atol: float = 1E-8) -> bool:
        """Compare the running exponent with a full recomputation.

        Args:
            wf (TrialWaveFunction): wave function
            alpha (float): variational parameter
            atol (float, optional): absolute tolerance. Defaults to 1E-8.

        Returns:
            bool: True if the running values match the configuration
        """
        wave = wf.exponent(self.pos, alpha)
        ok = bool(torch.allclose(self.wave, wave, atol=atol))
        if self.qforce is not None:
            ok = ok and bool(torch.allclose(
                self.qforce, wf.quantum_force(self.pos, alpha), atol=atol))
        if not ok:
            log.debug('  Walkers state out of sync with the configuration')
        return ok
