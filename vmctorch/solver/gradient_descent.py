from types import SimpleNamespace
from typing import Optional

from .. import log
from ..sampler import SamplerBase
from ..wavefunction import TrialWaveFunction, check_alpha
from .solver_base import SolverBase


class GradientDescent(SolverBase):

    def __init__(self,
                 wf: TrialWaveFunction,
                 sampler: SamplerBase,
                 initial_alpha: float = 0.1,
                 learning_rate: float = 1E-4,
                 niterations: int = 100,
                 tolerance: Optional[float] = None,
                 **kwargs) -> None:
        r"""Optimize the variational parameter by gradient descent

        .. math::
            \alpha_{k+1} = \alpha_k - \eta \frac{d \langle E \rangle}{d\alpha}

        where the derivative is estimated from the samples as

        .. math::
            \frac{d \langle E \rangle}{d\alpha} = 2 \left( \langle E_L \frac{d\ln\Psi}{d\alpha} \rangle
                - \langle E_L \rangle \langle \frac{d\ln\Psi}{d\alpha} \rangle \right)

        Args:
            wf (TrialWaveFunction): trial wave function
            sampler (SamplerBase): sampler
            initial_alpha (float, optional): starting value of alpha. Defaults to 0.1.
            learning_rate (float, optional): learning rate. Defaults to 1E-4.
            niterations (int, optional): maximum number of iterations. Defaults to 100.
            tolerance (float, optional): stop when |dE/dalpha| is below. Defaults to None.
            **kwargs: see SolverBase
        """
        super().__init__(wf, sampler, **kwargs)

        if niterations < 1:
            raise ValueError('number of iterations must be at least 1')
        if learning_rate <= 0:
            raise ValueError('learning rate must be strictly positive')

        self.initial_alpha = check_alpha(initial_alpha)
        self.learning_rate = learning_rate
        self.niterations = niterations
        self.tolerance = tolerance
        self.converged = False

        log.info('  Initial alpha       : {0}', self.initial_alpha)
        log.info('  Learning rate       : {0}', self.learning_rate)
        log.info('  Max iterations      : {0}', self.niterations)
        log.info('  Tolerance           : {0}', self.tolerance)

    def update(self, alpha: float, derivative: float) -> float:
        """Gradient descent step.

        Args:
            alpha (float): current alpha
            derivative (float): estimate of dE/dalpha at alpha

        Raises:
            ValueError: if the step leads to a non positive alpha

        Returns:
            float: next alpha
        """
        new_alpha = alpha - self.learning_rate * derivative
        if not new_alpha > 0:
            raise ValueError(
                'gradient descent step from alpha=%f gives alpha=%f, '
                'reduce the learning rate' % (alpha, new_alpha))
        return new_alpha

    def run(self, hdf5_group: str = 'gradient_descent') -> SimpleNamespace:
        """Iterate until the budget is exhausted or the derivative is small enough.

        Args:
            hdf5_group (str, optional): hdf5 group where to store the data.
                                        Defaults to 'gradient_descent'.

        Raises:
            ValueError: if a step leads to a non positive alpha, the iterations
                        already sampled are saved first and stay in the solver

        Returns:
            SimpleNamespace: statistics table and energy log, one entry per iteration
        """
        self.reset()
        self.converged = False

        alpha = self.initial_alpha
        for iteration in range(self.niterations):

            obs = self.advance(alpha)
            log.debug('  iteration {0} dE/dalpha {1}', iteration, obs.derivative)

            if self.tolerance is not None and abs(obs.derivative) < self.tolerance:
                self.converged = True
                log.info('  Converged after {0} iterations', iteration + 1)
                break

            if iteration < self.niterations - 1:
                try:
                    alpha = self.update(alpha, obs.derivative)
                except ValueError:
                    # keep the iterations already sampled
                    self.save(hdf5_group)
                    raise

        return self.save(hdf5_group)

    @property
    def alpha(self) -> float:
        """Last value of alpha that has been sampled."""
        return self.statistics[-1].alpha
