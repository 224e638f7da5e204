import unittest

import torch

from vmctorch.utils import set_torch_double_precision
from vmctorch.wavefunction import (InteractingTrialWaveFunction,
                                   TrialWaveFunction, make_wavefunction)

set_torch_double_precision()

# well separated particles, min distance 0.5 in 1D
POS = torch.tensor([[0., 1., -1., 0.5],
                    [0., 0.5, 0.3, -1.],
                    [0., -0.2, 0.8, 0.9]], dtype=torch.float64)


class TestTrialWaveFunction(unittest.TestCase):

    def setUp(self):
        torch.manual_seed(101)
        self.alpha = 0.4
        self.npart = 4

    def test_kinetic_energy(self):
        """Compare the analytic local energy with autograd and finite differences."""
        for ndim in [1, 2, 3]:
            wf = TrialWaveFunction(ndim, self.npart, beta=2.82843)
            pos = 2 * torch.rand(ndim, self.npart) - 1
            eloc = wf.local_energy(pos, self.alpha)

            eauto = wf.kinetic_energy_autograd(pos, self.alpha) + wf.potential(pos)
            assert torch.allclose(eloc, eauto)

            efd = wf.kinetic_energy_finite_difference(pos, self.alpha) + wf.potential(pos)
            assert torch.allclose(eloc, efd, atol=1E-5)

    def test_quantum_force(self):
        for ndim in [1, 2, 3]:
            wf = TrialWaveFunction(ndim, self.npart, beta=2.)
            pos = 2 * torch.rand(ndim, self.npart) - 1
            qf = wf.quantum_force(pos, self.alpha)
            assert qf.shape == (ndim, self.npart)
            assert torch.allclose(qf, wf.quantum_force_autograd(pos, self.alpha))

    def test_total_exponent(self):
        wf = TrialWaveFunction(3, self.npart)
        pos = 2 * torch.rand(3, self.npart) - 1
        ref = -self.alpha * (pos**2).sum()
        assert torch.allclose(wf.exponent(pos, self.alpha), ref)
        assert torch.allclose(wf.values(pos, self.alpha), torch.exp(ref))
        assert torch.allclose(wf.pdf(pos, self.alpha), torch.exp(2 * ref))
        assert torch.allclose(wf.alpha_derivative(pos), -(pos**2).sum())

    def test_validate(self):
        wf = TrialWaveFunction(1, 1)
        assert wf.validate(0.5) == 0.5
        for alpha in [0., -1., float('nan')]:
            with self.assertRaises(ValueError):
                wf.validate(alpha)

    def test_invalid_inputs(self):
        with self.assertRaises(ValueError):
            TrialWaveFunction(4, 2)
        with self.assertRaises(ValueError):
            TrialWaveFunction(3, 0)

    def test_factory(self):
        wf = make_wavefunction(3, 2)
        assert type(wf) is TrialWaveFunction
        assert not wf.interaction
        wf = make_wavefunction(3, 2, interaction=True, radius=0.01)
        assert isinstance(wf, InteractingTrialWaveFunction)
        assert wf.jastrow.radius == 0.01


class TestInteractingTrialWaveFunction(unittest.TestCase):

    def setUp(self):
        self.alpha = 0.45
        self.radius = 0.3

    def test_local_energy(self):
        """Compare the analytic local energy with autograd."""
        for ndim in [1, 2, 3]:
            wf = InteractingTrialWaveFunction(ndim, 4, beta=2.82843, radius=self.radius)
            pos = POS[:ndim].clone()
            eloc = wf.local_energy(pos, self.alpha)
            eauto = wf.kinetic_energy_autograd(pos, self.alpha) + wf.potential(pos)
            assert torch.allclose(eloc, eauto)

    def test_quantum_force(self):
        for ndim in [1, 2, 3]:
            wf = InteractingTrialWaveFunction(ndim, 4, beta=2.82843, radius=self.radius)
            pos = POS[:ndim].clone()
            assert torch.allclose(wf.quantum_force(pos, self.alpha),
                                  wf.quantum_force_autograd(pos, self.alpha))

    def test_zero_radius(self):
        """Without hard core the pair term vanishes."""
        wf = InteractingTrialWaveFunction(3, 4, radius=0.)
        ref = TrialWaveFunction(3, 4)
        assert torch.allclose(wf.exponent(POS, self.alpha), ref.exponent(POS, self.alpha))
        assert torch.allclose(wf.local_energy(POS, self.alpha),
                              ref.local_energy(POS, self.alpha))
        assert torch.allclose(wf.quantum_force(POS, self.alpha),
                              ref.quantum_force(POS, self.alpha))

    def test_overlap(self):
        """Overlapping particles have a zero wave function and an infinite energy."""
        wf = InteractingTrialWaveFunction(3, 4, radius=self.radius)
        pos = POS.clone()
        pos[:, 1] = pos[:, 0] + 0.1
        assert wf.exponent(pos, self.alpha) == float('-inf')
        assert wf.values(pos, self.alpha) == 0.
        assert wf.local_energy(pos, self.alpha) == float('inf')


if __name__ == "__main__":
    unittest.main()
