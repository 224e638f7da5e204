import math
import torch
from typing import Dict, Type


def check_alpha(alpha: float) -> float:
    """Check that the variational parameter is usable.

    Args:
        alpha (float): variational parameter

    Raises:
        ValueError: if alpha is not a finite strictly positive number

    Returns:
        float: alpha
    """
    alpha = float(alpha)
    if not math.isfinite(alpha) or alpha <= 0.:
        raise ValueError(
            'alpha must be a finite strictly positive number, got %s' % alpha)
    return alpha


class GaussianOrbital:

    ndim = None

    def __init__(self, beta: float = 1.) -> None:
        r"""Single particle Gaussian in a harmonic trap

        .. math::
            \phi(r) = \exp(-\alpha (x^2 + y^2 + \beta z^2))

        All the methods take the positions with the cartesian
        dimension as first axis, i.e. (ndim,) for a single particle
        or (ndim, nparticles) for a set of particles, and return one
        value per particle. None of them checks alpha.

        Args:
            beta (float, optional): anisotropy of the trap. Defaults to 1.
        """
        self.beta = float(beta)

    def squared_radius(self, pos: torch.Tensor) -> torch.Tensor:
        """Weighted square distance to the trap center: x^2 + y^2 + beta z^2."""
        raise NotImplementedError('Orbital must have a squared_radius method')

    def potential(self, pos: torch.Tensor) -> torch.Tensor:
        """Trap potential: 0.5 (x^2 + y^2 + beta^2 z^2)."""
        raise NotImplementedError('Orbital must have a potential method')

    def gradient_ratio(self, pos: torch.Tensor, alpha: float) -> torch.Tensor:
        """Gradient of the orbital divided by the orbital."""
        raise NotImplementedError('Orbital must have a gradient_ratio method')

    def laplacian_ratio(self, pos: torch.Tensor, alpha: float) -> torch.Tensor:
        """Laplacian of the orbital divided by the orbital."""
        raise NotImplementedError('Orbital must have a laplacian_ratio method')

    def local_energy(self, pos: torch.Tensor, alpha: float) -> torch.Tensor:
        """Analytic local energy of the particle(s)."""
        raise NotImplementedError('Orbital must have a local_energy method')

    def exponent(self, pos: torch.Tensor, alpha: float) -> torch.Tensor:
        """Exponent of the orbital, i.e. ln(phi).

        Args:
            pos (torch.Tensor): positions (ndim, ...)
            alpha (float): variational parameter

        Returns:
            torch.Tensor: -alpha (x^2 + y^2 + beta z^2)
        """
        return -alpha * self.squared_radius(pos)

    def quantum_force(self, pos: torch.Tensor, alpha: float) -> torch.Tensor:
        """Quantum force F = 2 grad(phi) / phi.

        Args:
            pos (torch.Tensor): positions (ndim, ...)
            alpha (float): variational parameter

        Returns:
            torch.Tensor: force, same shape as pos
        """
        return 2. * self.gradient_ratio(pos, alpha)

    def alpha_derivative(self, pos: torch.Tensor) -> torch.Tensor:
        """Derivative of ln(phi) with respect to alpha."""
        return -self.squared_radius(pos)

    def __repr__(self) -> str:
        return self.__class__.__name__ + '(beta=%f)' % self.beta


class Gaussian1D(GaussianOrbital):

    ndim = 1

    def squared_radius(self, pos):
        return pos[0]**2

    def potential(self, pos):
        return 0.5 * pos[0]**2

    def gradient_ratio(self, pos, alpha):
        return -2. * alpha * pos

    def laplacian_ratio(self, pos, alpha):
        return -2. * alpha + 4. * alpha**2 * pos[0]**2

    def local_energy(self, pos, alpha):
        return alpha + pos[0]**2 * (0.5 - 2. * alpha**2)


class Gaussian2D(GaussianOrbital):

    ndim = 2

    def squared_radius(self, pos):
        return pos[0]**2 + pos[1]**2

    def potential(self, pos):
        return 0.5 * (pos[0]**2 + pos[1]**2)

    def gradient_ratio(self, pos, alpha):
        return -2. * alpha * pos

    def laplacian_ratio(self, pos, alpha):
        return -4. * alpha + 4. * alpha**2 * (pos[0]**2 + pos[1]**2)

    def local_energy(self, pos, alpha):
        r2 = pos[0]**2 + pos[1]**2
        return 2. * alpha + r2 * (0.5 - 2. * alpha**2)


class Gaussian3D(GaussianOrbital):

    ndim = 3

    def squared_radius(self, pos):
        return pos[0]**2 + pos[1]**2 + self.beta * pos[2]**2

    def potential(self, pos):
        return 0.5 * (pos[0]**2 + pos[1]**2 + self.beta**2 * pos[2]**2)

    def gradient_ratio(self, pos, alpha):
        # the z component carries the anisotropy
        return -2. * alpha * torch.cat([pos[:2], self.beta * pos[2:]])

    def laplacian_ratio(self, pos, alpha):
        rperp2 = pos[0]**2 + pos[1]**2
        return -2. * alpha * (2. + self.beta) \
            + 4. * alpha**2 * (rperp2 + self.beta**2 * pos[2]**2)

    def local_energy(self, pos, alpha):
        rperp2 = pos[0]**2 + pos[1]**2
        b2 = self.beta**2
        return (2. + self.beta) * alpha \
            + rperp2 * (0.5 - 2. * alpha**2) \
            + pos[2]**2 * (0.5 * b2 - 2. * alpha**2 * b2)


ORBITALS: Dict[int, Type[GaussianOrbital]] = {
    1: Gaussian1D,
    2: Gaussian2D,
    3: Gaussian3D,
}


def make_orbital(ndim: int, beta: float = 1.) -> GaussianOrbital:
    """Select the orbital of the requested dimensionality.

    Args:
        ndim (int): number of cartesian dimensions (1, 2 or 3)
        beta (float, optional): anisotropy of the trap. Defaults to 1.

    Raises:
        ValueError: if the dimensionality is not supported

    Returns:
        GaussianOrbital: orbital instance
    """
    if ndim not in ORBITALS:
        raise ValueError(
            'unsupported dimensionality %s, valid values are %s'
            % (ndim, list(ORBITALS.keys())))
    return ORBITALS[ndim](beta=beta)
