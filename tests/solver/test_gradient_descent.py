import os
import shutil
import tempfile
import unittest

import h5py
import numpy as np
import torch

from vmctorch.sampler import BruteForce
from vmctorch.solver import GradientDescent
from vmctorch.utils import set_torch_double_precision
from vmctorch.wavefunction import TrialWaveFunction

set_torch_double_precision()


class TestGradientDescent(unittest.TestCase):

    def setUp(self):
        torch.manual_seed(101)
        self.wf = TrialWaveFunction(1, 1)
        self.sampler = BruteForce(nparticles=1, ndim=1, step_size=1.)

    def test_converge(self):
        """The descent ends close to the exact alpha."""
        solver = GradientDescent(self.wf, self.sampler, initial_alpha=0.3,
                                 learning_rate=0.1, niterations=40, ncycles=1000)
        obs = solver.run()
        assert len(obs.table.alpha) == 40
        assert obs.table.alpha[0] == 0.3
        assert abs(solver.alpha - 0.5) < 0.05
        assert abs(obs.table.energy[-1] - 0.5) < 0.01
        assert not solver.converged

    def test_tolerance(self):
        solver = GradientDescent(self.wf, self.sampler, initial_alpha=0.3,
                                 learning_rate=0.1, niterations=200,
                                 tolerance=1E-2, ncycles=1000)
        obs = solver.run()
        assert solver.converged
        assert len(obs.table.alpha) < 200
        assert abs(obs.table.derivative[-1]) < 1E-2

    def test_update(self):
        solver = GradientDescent(self.wf, self.sampler, learning_rate=0.1, ncycles=10)
        assert np.isclose(solver.update(0.4, -1.), 0.5)
        with self.assertRaises(ValueError):
            solver.update(0.4, 4.)
        with self.assertRaises(ValueError):
            solver.update(0.4, float('nan'))

    def test_negative_alpha(self):
        """A step leading to a non positive alpha stops the descent."""
        solver = GradientDescent(self.wf, self.sampler, initial_alpha=2.,
                                 learning_rate=100., niterations=3, ncycles=1000)
        with self.assertRaises(ValueError):
            solver.run()
        assert len(solver.statistics) == 1

    def test_negative_alpha_saved(self):
        """The iterations sampled before the failing step are written."""
        tmpdir = tempfile.mkdtemp()
        try:
            fname = os.path.join(tmpdir, 'gd.hdf5')
            solver = GradientDescent(self.wf, self.sampler, initial_alpha=2.,
                                     learning_rate=100., niterations=3, ncycles=1000,
                                     output=fname)
            with self.assertRaises(ValueError):
                solver.run()
            with h5py.File(fname, 'r') as f5:
                grp = f5['gradient_descent']
                assert grp.attrs['type'] == 'GradientDescent'
                assert np.allclose(grp['table']['alpha'][()], [2.])
                assert grp['energies'].shape == (1000, 1)
        finally:
            shutil.rmtree(tmpdir)

    def test_invalid_inputs(self):
        with self.assertRaises(ValueError):
            GradientDescent(self.wf, self.sampler, initial_alpha=0., ncycles=10)
        with self.assertRaises(ValueError):
            GradientDescent(self.wf, self.sampler, learning_rate=0., ncycles=10)
        with self.assertRaises(ValueError):
            GradientDescent(self.wf, self.sampler, niterations=0, ncycles=10)


if __name__ == "__main__":
    unittest.main()
