import unittest

import numpy as np
import torch

from vmctorch.sampler import SamplerBase
from vmctorch.sampler.sampler_base import check_positive
from vmctorch.solver import Accumulator, VariationSweep
from vmctorch.utils import set_torch_double_precision
from vmctorch.wavefunction import (InteractingTrialWaveFunction, TrialWaveFunction,
                                   make_wavefunction)

set_torch_double_precision()


class TestSamplerBase(unittest.TestCase):

    def setUp(self):
        torch.manual_seed(101)
        self.alpha = 0.45
        self.ndim = 3
        self.nparticles = 4
        self.ncycles = 200
        self.wf = TrialWaveFunction(self.ndim, self.nparticles, beta=2.82843)
        self.interacting_wf = InteractingTrialWaveFunction(
            self.ndim, self.nparticles, beta=2.82843, radius=0.0043)

    def generator(self, seed=1234):
        return torch.Generator().manual_seed(seed)

    def check_reject(self, sampler, wf):
        """A rejected move leaves the state bit for bit unchanged."""
        walkers = sampler.initialize(wf, self.alpha, self.generator())
        ref = walkers.clone()
        eloc_ref = walkers.observe(wf, self.alpha)

        sampler._accept = lambda proba, generator: False
        for particle in range(self.nparticles):
            assert not sampler.step(wf, self.alpha, walkers, particle, self.generator())

        assert torch.equal(walkers.pos, ref.pos)
        assert torch.equal(walkers.wave, ref.wave)
        if ref.qforce is not None:
            assert torch.equal(walkers.qforce, ref.qforce)
        assert walkers.observe(wf, self.alpha) == eloc_ref

    def check_accept(self, sampler, wf):
        """An accepted move only changes the moving particle."""
        walkers = sampler.initialize(wf, self.alpha, self.generator())
        ref = walkers.clone()

        sampler._accept = lambda proba, generator: True
        assert sampler.step(wf, self.alpha, walkers, 1, self.generator())

        assert not torch.equal(walkers.pos[:, 1], ref.pos[:, 1])
        for particle in [0, 2, 3]:
            assert torch.equal(walkers.pos[:, particle], ref.pos[:, particle])
        assert walkers.check_consistency(wf, self.alpha)

    def check_run(self, sampler, wf):
        """Sample the cycles and keep the running state consistent."""
        acc = Accumulator()
        walkers = sampler(wf, self.alpha, self.ncycles, self.generator(), acc)
        obs = acc.finalize()
        assert obs.nsamples == self.ncycles * self.nparticles
        assert 0 < obs.acceptance_rate <= 1
        assert walkers.check_consistency(wf, self.alpha)
        return obs

    def check_interacting_start(self, sampler):
        """Crowded 1D hard spheres start without overlap and give finite energies."""
        wf = make_wavefunction(1, 10, interaction=True, radius=0.0043)
        for seed in range(20):
            walkers = sampler.initialize(wf, 0.5, self.generator(seed))
            assert not wf.jastrow.overlap(walkers.pos)
            assert torch.isfinite(walkers.wave)

            solver = VariationSweep(wf, sampler, alphas=[0.5], ncycles=20, seed=seed)
            obs = solver.run()
            assert np.isfinite(obs.table.energy[0])
            assert np.isfinite(obs.table.variance[0])
            assert np.all(np.isfinite(obs.energies))

    def check_impossible_start(self, sampler):
        """No room for the hard spheres."""
        wf = make_wavefunction(1, 10, interaction=True, radius=100.)
        sampler.max_init_attempts = 5
        with self.assertRaises(ValueError):
            sampler.initialize(wf, 0.5, self.generator())


class TestHelpers(unittest.TestCase):

    def test_check_positive(self):
        assert check_positive(2, 'step') == 2.
        for value in [0, -1., float('inf'), float('nan')]:
            with self.assertRaises(ValueError):
                check_positive(value, 'step')

    def test_abstract(self):
        sampler = SamplerBase(1, 1, 1.)
        wf = TrialWaveFunction(1, 1)
        gen = torch.Generator().manual_seed(0)
        with self.assertRaises(NotImplementedError):
            sampler.initialize(wf, 0.5, gen)
        with self.assertRaises(NotImplementedError):
            sampler.step(wf, 0.5, None, 0, gen)

    def test_invalid_sizes(self):
        with self.assertRaises(ValueError):
            SamplerBase(0, 3, 1.)
        with self.assertRaises(ValueError):
            SamplerBase(1, 4, 1.)
        with self.assertRaises(ValueError):
            SamplerBase(1, 3, 0.)


if __name__ == "__main__":
    unittest.main()
