import torch
from typing import Tuple


class HardSphereJastrow:

    def __init__(self, nparticles: int, ndim: int = 3, radius: float = 0.0043) -> None:
        r"""Hard sphere two-body Jastrow factor

        .. math::
            J = \prod_{i<j} f(r_{ij}) \quad f(r) = 1 - a/r \text{ if } r > a \text{ else } 0

        With u = ln f the derivatives used for the local energy are

        .. math::
            u'(r) = \frac{a}{r(r-a)} \quad u''(r) = \frac{a^2 - 2ar}{r^2(r-a)^2}

        Args:
            nparticles (int): number of particles
            ndim (int, optional): number of cartesian dimensions. Defaults to 3.
            radius (float, optional): hard sphere radius a. Defaults to 0.0043.

        Examples::
            >>> jastrow = HardSphereJastrow(10, 3, radius=0.0043)
            >>> pos = torch.rand(3, 10)
            >>> val = jastrow.exponent(pos)
        """
        if radius < 0:
            raise ValueError('hard sphere radius must be positive')
        self.nparticles = nparticles
        self.ndim = ndim
        self.radius = float(radius)
        self._eye = torch.eye(nparticles, dtype=torch.bool)
        self._triu = torch.triu_indices(nparticles, nparticles, 1)

    def distance(self, pos: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor]:
        """Pairwise separation vectors and distances.

        The diagonal of the distance matrix is set to a + 1 so that
        the pair functions stay finite there.

        Args:
            pos (torch.Tensor): positions (ndim, nparticles)

        Returns:
            torch.Tensor: r_i - r_j, size (ndim, nparticles, nparticles)
            torch.Tensor: r_ij, size (nparticles, nparticles)
        """
        diff = pos[:, :, None] - pos[:, None, :]
        r2 = (diff**2).sum(0)
        r2 = torch.where(self._eye, r2.new_tensor((self.radius + 1.)**2), r2)
        return diff, torch.sqrt(r2)

    def pair_distances(self, pos: torch.Tensor) -> torch.Tensor:
        """Distances of the i<j pairs."""
        _, r = self.distance(pos)
        return r[self._triu[0], self._triu[1]]

    def overlap(self, pos: torch.Tensor) -> bool:
        """True if at least two particles are within the hard core."""
        return bool((self.pair_distances(pos) <= self.radius).any())

    def exponent(self, pos: torch.Tensor) -> torch.Tensor:
        """ln J, -inf if two particles overlap.

        Args:
            pos (torch.Tensor): positions (ndim, nparticles)

        Returns:
            torch.Tensor: scalar value
        """
        rij = self.pair_distances(pos)
        if (rij <= self.radius).any():
            return pos.new_tensor(float('-inf'))
        return torch.log(1. - self.radius / rij).sum()

    def _first_derivative(self, r: torch.Tensor) -> torch.Tensor:
        du = self.radius / (r * (r - self.radius))
        return du.masked_fill(self._eye, 0.)

    def _second_derivative(self, r: torch.Tensor) -> torch.Tensor:
        a = self.radius
        d2u = (a**2 - 2 * a * r) / (r**2 * (r - a)**2)
        return d2u.masked_fill(self._eye, 0.)

    def gradient(self, pos: torch.Tensor) -> torch.Tensor:
        """Gradient of ln J with respect to each particle.

        .. math::
            \\nabla_k \\ln J = \\sum_{j \\neq k} \\frac{r_k - r_j}{r_{kj}} u'(r_{kj})

        Args:
            pos (torch.Tensor): positions (ndim, nparticles)

        Returns:
            torch.Tensor: gradient (ndim, nparticles)
        """
        diff, r = self.distance(pos)
        return (diff / r * self._first_derivative(r)).sum(-1)

    def laplacian(self, pos: torch.Tensor) -> torch.Tensor:
        """Laplacian of ln J with respect to each particle.

        .. math::
            \\nabla^2_k \\ln J = \\sum_{j \\neq k} u''(r_{kj}) + \\frac{d-1}{r_{kj}} u'(r_{kj})

        Args:
            pos (torch.Tensor): positions (ndim, nparticles)

        Returns:
            torch.Tensor: laplacian (nparticles,)
        """
        _, r = self.distance(pos)
        du = self._first_derivative(r)
        d2u = self._second_derivative(r)
        return (d2u + (self.ndim - 1) / r * du).sum(-1)

    def __repr__(self) -> str:
        return self.__class__.__name__ + '(radius=%f)' % self.radius
