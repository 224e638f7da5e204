import torch

from .. import log
from ..utils.torch_utils import gradients, laplacian
from .jastrow import HardSphereJastrow
from .orbitals import check_alpha, make_orbital


class TrialWaveFunction:

    def __init__(self, ndim: int, nparticles: int, beta: float = 1.) -> None:
        r"""Separable Gaussian trial wave function of bosons in a harmonic trap

        .. math::
            \Psi_T(R) = \prod_i \exp(-\alpha (x_i^2 + y_i^2 + \beta z_i^2))

        The configuration R is a tensor of size (ndim, nparticles).
        The variational parameter alpha is passed to each call, it is not
        part of the state of the wave function.

        Args:
            ndim (int): number of cartesian dimensions (1, 2 or 3)
            nparticles (int): number of particles
            beta (float, optional): anisotropy of the trap. Defaults to 1.

        Raises:
            ValueError: if the dimensionality or the number of particles is not valid

        Examples::
            >>> wf = TrialWaveFunction(ndim=3, nparticles=10)
            >>> pos = torch.rand(3, 10)
            >>> eloc = wf.local_energy(pos, 0.5)
        """
        if nparticles < 1:
            raise ValueError('number of particles must be at least 1')

        self.orbital = make_orbital(ndim, beta)
        self.ndim = ndim
        self.nparticles = nparticles
        self.beta = self.orbital.beta
        self.interaction = False

    def log_data(self) -> None:
        """log data about the wave function."""
        log.info('')
        log.info(' Wave Function')
        log.info('  Orbital             : {0}', self.orbital)
        log.info('  Number of dims      : {0}', self.ndim)
        log.info('  Number of particles : {0}', self.nparticles)
        log.info('  Interaction         : {0}', self.interaction)

    def validate(self, alpha: float) -> float:
        """Check the variational parameter before any sampling."""
        return check_alpha(alpha)

    def exponent(self, pos: torch.Tensor, alpha: float) -> torch.Tensor:
        """Total exponent ln(Psi_T) of the configuration.

        Args:
            pos (torch.Tensor): positions (ndim, nparticles)
            alpha (float): variational parameter

        Returns:
            torch.Tensor: scalar exponent
        """
        return self.orbital.exponent(pos, alpha).sum()

    def values(self, pos: torch.Tensor, alpha: float) -> torch.Tensor:
        """Value of the wave function."""
        return torch.exp(self.exponent(pos, alpha))

    def pdf(self, pos: torch.Tensor, alpha: float) -> torch.Tensor:
        """Density of the wave function."""
        return torch.exp(2 * self.exponent(pos, alpha))

    def quantum_force(self, pos: torch.Tensor, alpha: float) -> torch.Tensor:
        """Quantum force F = 2 grad(Psi)/Psi of all the particles.

        Args:
            pos (torch.Tensor): positions (ndim, nparticles)
            alpha (float): variational parameter

        Returns:
            torch.Tensor: forces (ndim, nparticles)
        """
        return self.orbital.quantum_force(pos, alpha)

    def local_energy(self, pos: torch.Tensor, alpha: float) -> torch.Tensor:
        """Local energy of the whole configuration.

        Args:
            pos (torch.Tensor): positions (ndim, nparticles)
            alpha (float): variational parameter

        Returns:
            torch.Tensor: scalar local energy
        """
        return self.orbital.local_energy(pos, alpha).sum()

    def alpha_derivative(self, pos: torch.Tensor) -> torch.Tensor:
        """d ln(Psi_T) / d alpha of the configuration."""
        return self.orbital.alpha_derivative(pos).sum()

    def potential(self, pos: torch.Tensor) -> torch.Tensor:
        """Trap potential energy of the configuration."""
        return self.orbital.potential(pos).sum()

    def kinetic_energy_autograd(self, pos: torch.Tensor, alpha: float) -> torch.Tensor:
        """Kinetic energy -0.5 lap(Psi)/Psi computed with autograd.

        Uses lap(Psi)/Psi = lap(ln Psi) + |grad(ln Psi)|^2

        Args:
            pos (torch.Tensor): positions (ndim, nparticles)
            alpha (float): variational parameter

        Returns:
            torch.Tensor: scalar kinetic energy
        """
        pos = pos.detach().clone().requires_grad_(True)
        out = self.exponent(pos, alpha)
        hess, jacob = laplacian(out, pos)
        return -0.5 * (hess + (jacob**2).sum())

    def quantum_force_autograd(self, pos: torch.Tensor, alpha: float) -> torch.Tensor:
        """Quantum force computed with autograd."""
        pos = pos.detach().clone().requires_grad_(True)
        return 2. * gradients(self.exponent(pos, alpha), pos)

    def kinetic_energy_finite_difference(self, pos: torch.Tensor,
                                         alpha: float,
                                         eps: float = 1E-4) -> torch.Tensor:
        """Kinetic energy computed with central finite differences.

        The ratios Psi(R +/- h)/Psi(R) are computed from the exponents.

        Args:
            pos (torch.Tensor): positions (ndim, nparticles)
            alpha (float): variational parameter
            eps (float, optional): finite difference step. Defaults to 1E-4.

        Returns:
            torch.Tensor: scalar kinetic energy
        """
        ref = self.exponent(pos, alpha)
        lap = torch.zeros_like(ref)
        for idim in range(self.ndim):
            for ipart in range(self.nparticles):
                pplus = pos.clone()
                pplus[idim, ipart] += eps
                pmin = pos.clone()
                pmin[idim, ipart] -= eps
                lap += torch.exp(self.exponent(pplus, alpha) - ref) \
                    + torch.exp(self.exponent(pmin, alpha) - ref) - 2.
        return -0.5 * lap / eps**2

    def __repr__(self) -> str:
        return self.__class__.__name__ + \
            '(ndim=%d, nparticles=%d, beta=%f)' % (
                self.ndim, self.nparticles, self.beta)


class InteractingTrialWaveFunction(TrialWaveFunction):

    def __init__(self, ndim: int, nparticles: int, beta: float = 1.,
                 radius: float = 0.0043) -> None:
        r"""Gaussian trial wave function with a hard sphere Jastrow factor

        .. math::
            \Psi_T(R) = \prod_i \exp(-\alpha (x_i^2 + y_i^2 + \beta z_i^2)) \prod_{i<j} f(r_{ij})

        Args:
            ndim (int): number of cartesian dimensions (1, 2 or 3)
            nparticles (int): number of particles
            beta (float, optional): anisotropy of the trap. Defaults to 1.
            radius (float, optional): hard sphere radius. Defaults to 0.0043.
        """
        super().__init__(ndim, nparticles, beta)
        self.jastrow = HardSphereJastrow(nparticles, ndim, radius)
        self.interaction = True

    def log_data(self) -> None:
        super().log_data()
        log.info('  Jastrow             : {0}', self.jastrow)

    def exponent(self, pos, alpha):
        return self.orbital.exponent(pos, alpha).sum() + self.jastrow.exponent(pos)

    def quantum_force(self, pos, alpha):
        return 2. * (self.orbital.gradient_ratio(pos, alpha) + self.jastrow.gradient(pos))

    def local_energy(self, pos, alpha):
        """Local energy including the pair terms.

        .. math::
            \\frac{\\nabla_k^2 \\Psi}{\\Psi} = \\frac{\\nabla_k^2 \\phi_k}{\\phi_k}
                + 2 \\frac{\\nabla_k \\phi_k}{\\phi_k} \\cdot \\nabla_k \\ln J
                + |\\nabla_k \\ln J|^2 + \\nabla_k^2 \\ln J

        The hard core potential is infinite when two particles overlap.
        """
        if self.jastrow.overlap(pos):
            return pos.new_tensor(float('inf'))

        gphi = self.orbital.gradient_ratio(pos, alpha)
        gjas = self.jastrow.gradient(pos)
        lap = self.orbital.laplacian_ratio(pos, alpha) \
            + 2. * (gphi * gjas).sum(0) \
            + (gjas**2).sum(0) \
            + self.jastrow.laplacian(pos)
        return (-0.5 * lap + self.orbital.potential(pos)).sum()

    def __repr__(self) -> str:
        return self.__class__.__name__ + \
            '(ndim=%d, nparticles=%d, beta=%f, radius=%f)' % (
                self.ndim, self.nparticles, self.beta, self.jastrow.radius)


def make_wavefunction(ndim: int, nparticles: int, beta: float = 1.,
                      interaction: bool = False,
                      radius: float = 0.0043) -> TrialWaveFunction:
    """Create the trial wave function selected by the interaction flag.

    Args:
        ndim (int): number of cartesian dimensions (1, 2 or 3)
        nparticles (int): number of particles
        beta (float, optional): anisotropy of the trap. Defaults to 1.
        interaction (bool, optional): include the hard sphere pair term. Defaults to False.
        radius (float, optional): hard sphere radius. Defaults to 0.0043.

    Returns:
        TrialWaveFunction: wave function
    """
    if interaction:
        wf = InteractingTrialWaveFunction(ndim, nparticles, beta, radius)
    else:
        wf = TrialWaveFunction(ndim, nparticles, beta)
    wf.log_data()
    return wf
