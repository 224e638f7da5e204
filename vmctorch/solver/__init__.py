__all__ = ['Accumulator', 'SolverBase',
           'VariationSweep', 'GradientDescent']

from .accumulator import Accumulator
from .solver_base import SolverBase
from .variation_sweep import VariationSweep
from .gradient_descent import GradientDescent
