import unittest

import numpy as np
import torch

from vmctorch.sampler import BruteForce, make_sampler
from vmctorch.solver import Accumulator
from vmctorch.wavefunction import TrialWaveFunction
from .test_sampler_base import TestSamplerBase


class TestBruteForce(TestSamplerBase):

    def setUp(self):
        super(TestBruteForce, self).setUp()
        self.sampler = BruteForce(nparticles=self.nparticles, ndim=self.ndim,
                                  step_size=1.)

    def test_initialize(self):
        walkers = self.sampler.initialize(self.wf, self.alpha, self.generator())
        assert walkers.pos.shape == (self.ndim, self.nparticles)
        assert torch.all(walkers.pos.abs() <= 0.5)
        assert walkers.qforce is None
        assert walkers.check_consistency(self.wf, self.alpha)

    def test_reject(self):
        self.check_reject(self.sampler, self.wf)
        self.check_reject(self.sampler, self.interacting_wf)

    def test_accept(self):
        self.check_accept(self.sampler, self.wf)
        self.check_accept(self.sampler, self.interacting_wf)

    def test_move(self):
        for _ in range(10):
            d = self.sampler._move(self.generator(), torch.float64)
            assert d.shape == (self.ndim,)
            assert torch.all(d.abs() <= 0.5)

    def test_run(self):
        obs = self.check_run(self.sampler, self.wf)
        assert obs.acceptance_rate < 1
        self.check_run(self.sampler, self.interacting_wf)

    def test_interacting_start(self):
        sampler = BruteForce(nparticles=10, ndim=1, step_size=0.5)
        self.check_interacting_start(sampler)
        self.check_impossible_start(sampler)

    def test_acceptance_small_steps(self):
        """Tiny steps are almost always accepted."""
        sampler = BruteForce(nparticles=1, ndim=1, step_size=1E-3)
        acc = Accumulator()
        sampler(TrialWaveFunction(1, 1), 0.4, 2000, self.generator(), acc)
        assert acc.finalize().acceptance_rate > 0.99

    def test_reproducible(self):
        """The same stream gives the same chain."""
        energies = []
        for _ in range(2):
            eloc = np.zeros(self.ncycles)
            self.sampler(self.wf, self.alpha, self.ncycles, self.generator(),
                         Accumulator(), energies=eloc)
            energies.append(eloc)
        assert np.array_equal(energies[0], energies[1])

    def test_exact_energy_log(self):
        """With alpha=0.5 every cycle has the exact energy."""
        sampler = BruteForce(nparticles=1, ndim=1, step_size=1.)
        eloc = np.zeros(100)
        acc = Accumulator()
        sampler(TrialWaveFunction(1, 1), 0.5, 50, self.generator(), acc,
                energies=eloc, offset=25)
        assert np.all(eloc[:25] == 0.)
        assert np.all(eloc[25:75] == 0.5)
        assert np.all(eloc[75:] == 0.)
        assert acc.finalize().energy == 0.5

    def test_thermalization(self):
        """Thermalization cycles are not accumulated."""
        acc = Accumulator()
        self.sampler(self.wf, self.alpha, 10, self.generator(), acc, ntherm=20)
        assert acc.nsamples == 10 * self.nparticles

    def test_factory(self):
        sampler = make_sampler('brute', 2, 3, step_size=0.5)
        assert isinstance(sampler, BruteForce)
        assert sampler.step_size == 0.5
        with self.assertRaises(ValueError):
            make_sampler('metropolis', 2, 3)


if __name__ == "__main__":
    unittest.main()
