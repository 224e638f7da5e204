import unittest

import torch

from vmctorch.utils import (gradients, laplacian, set_torch_double_precision,
                            set_torch_single_precision)


class TestTorchUtils(unittest.TestCase):

    def tearDown(self):
        set_torch_double_precision()

    def test_precision(self):
        set_torch_single_precision()
        assert torch.rand(2).dtype == torch.float32
        set_torch_double_precision()
        assert torch.rand(2).dtype == torch.float64

    def test_derivatives(self):
        """Gradient and laplacian of sum(-a x^2)."""
        set_torch_double_precision()
        pos = torch.rand(3, 4).requires_grad_(True)
        out = (-0.4 * pos**2).sum()

        assert torch.allclose(gradients(out, pos), -0.8 * pos.detach())

        out = (-0.4 * pos**2).sum()
        hess, jacob = laplacian(out, pos)
        assert torch.allclose(hess, torch.tensor(-0.8 * 12))
        assert torch.allclose(jacob, -0.8 * pos.detach())


if __name__ == "__main__":
    unittest.main()
