import os
import shutil
import tempfile
import unittest
from types import SimpleNamespace

import h5py
import numpy as np
import torch

from vmctorch.utils import add_group_attr, dump_to_hdf5, load_from_hdf5


class TestHdf5Utils(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.fname = os.path.join(self.tmpdir, 'test.hdf5')
        self.obs = SimpleNamespace(
            table=SimpleNamespace(alpha=np.array([0.4, 0.5]),
                                  energy=np.array([0.51, 0.5])),
            energies=torch.ones(3, 2),
            name='sweep',
            _private=1)

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_dump_load(self):
        dump_to_hdf5(self.obs, self.fname, root_name='run')
        obj = load_from_hdf5(SimpleNamespace(), self.fname, 'run')
        assert np.allclose(obj.table.alpha, self.obs.table.alpha)
        assert np.allclose(obj.table.energy, self.obs.table.energy)
        assert np.allclose(obj.energies, np.ones((3, 2)))
        assert not hasattr(obj, '_private')

    def test_overwrite(self):
        """A second dump with the same name replaces the group."""
        dump_to_hdf5(self.obs, self.fname, root_name='run')
        self.obs.table.alpha = np.array([0.1])
        dump_to_hdf5(self.obs, self.fname, root_name='run')
        obj = load_from_hdf5(SimpleNamespace(), self.fname, 'run')
        assert np.allclose(obj.table.alpha, [0.1])

    def test_attributes(self):
        dump_to_hdf5(self.obs, self.fname, root_name='run')
        add_group_attr(self.fname, 'run', {'type': 'VariationSweep', 'seed': 1337})
        with h5py.File(self.fname, 'r') as f5:
            assert f5['run'].attrs['type'] == 'VariationSweep'
            assert f5['run'].attrs['seed'] == 1337

    def test_strings(self):
        """Strings and string arrays are read back as str."""
        self.obs.labels = np.array(['brute', 'importance'])
        dump_to_hdf5(self.obs, self.fname, root_name='run')
        obj = load_from_hdf5(SimpleNamespace(), self.fname, 'run')
        assert obj.name == 'sweep'
        assert list(obj.labels) == ['brute', 'importance']

    def test_unsupported_value(self):
        self.obs.sampler = object()
        with self.assertWarns(UserWarning):
            dump_to_hdf5(self.obs, self.fname, root_name='run')
        obj = load_from_hdf5(SimpleNamespace(), self.fname, 'run')
        assert not hasattr(obj, 'sampler')
        assert np.allclose(obj.table.alpha, self.obs.table.alpha)


if __name__ == "__main__":
    unittest.main()
