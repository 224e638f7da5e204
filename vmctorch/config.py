"""Run configuration of a VMC calculation.

All the inputs of a run are gathered in an immutable dataclass validated
at construction, so that invalid values are rejected before any Monte
Carlo cycle is run.
"""

from dataclasses import dataclass, fields
from math import isfinite
from typing import Any, Dict, Optional

from .sampler import make_sampler, SamplerBase
from .solver import GradientDescent, SolverBase, VariationSweep
from .wavefunction import make_wavefunction, TrialWaveFunction


def _check_positive(name: str, value: float) -> None:
    if not isfinite(value) or value <= 0.0:
        raise ValueError("%s must be a finite strictly positive number" % name)


@dataclass(frozen=True)
class RunConfig:
    """Inputs of a VMC run.

    Attributes:
        ndim: number of cartesian dimensions (1, 2 or 3).
        nparticles: number of particles.
        ncycles: number of Monte Carlo cycles per variational parameter.
        nvariations: number of points of the alpha grid.
        alpha_start: first alpha of the grid, alpha_step if None.
        alpha_step: spacing of the alpha grid.
        seed: master seed of the random streams.
        sampling: 'brute' or 'importance'.
        step_size: brute force step length.
        time_step: importance sampling time step.
        diffusion: importance sampling diffusion coefficient.
        beta: anisotropy of the trap and of the trial function.
        interaction: include the hard sphere pair term.
        radius: hard sphere radius.
        learning_rate: gradient descent learning rate.
        niterations: gradient descent iteration budget.
        initial_alpha: gradient descent starting point.
        tolerance: gradient descent stops when |dE/dalpha| is below, never if None.
        nworkers: number of threads sharing the cycles.
        ntherm: thermalization cycles.
    """

    ndim: int = 3
    nparticles: int = 10
    ncycles: int = 10000
    nvariations: int = 40
    alpha_start: Optional[float] = None
    alpha_step: float = 0.025
    seed: int = 1337
    sampling: str = "brute"
    step_size: float = 0.5
    time_step: float = 0.1
    diffusion: float = 0.5
    beta: float = 1.0
    interaction: bool = False
    radius: float = 0.0043
    learning_rate: float = 1e-4
    niterations: int = 100
    initial_alpha: float = 0.1
    tolerance: Optional[float] = None
    nworkers: int = 1
    ntherm: int = 0

    def __post_init__(self) -> None:
        """Validate the configuration."""
        if self.ndim not in (1, 2, 3):
            raise ValueError("unsupported dimensionality %s, must be 1, 2 or 3" % self.ndim)
        for name in ("nparticles", "ncycles", "nvariations", "niterations", "nworkers"):
            if getattr(self, name) < 1:
                raise ValueError("%s must be at least 1" % name)
        if self.nworkers > self.ncycles:
            raise ValueError("nworkers must not exceed ncycles")
        if self.ntherm < 0:
            raise ValueError("ntherm must be positive")
        if self.seed < 0:
            raise ValueError("seed must be positive")
        if self.sampling not in ("brute", "importance"):
            raise ValueError("sampling must be 'brute' or 'importance'")
        for name in ("alpha_step", "step_size", "time_step", "diffusion",
                     "beta", "learning_rate", "initial_alpha"):
            _check_positive(name, getattr(self, name))
        if self.alpha_start is not None:
            _check_positive("alpha_start", self.alpha_start)
        if self.radius < 0.0:
            raise ValueError("radius must be positive")
        if self.tolerance is not None and self.tolerance <= 0.0:
            raise ValueError("tolerance must be strictly positive")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunConfig":
        """Build a configuration from a dictionary, unknown keys are rejected."""
        names = {f.name for f in fields(cls)}
        unknown = set(data) - names
        if unknown:
            raise ValueError("unknown configuration keys: %s" % sorted(unknown))
        return cls(**data)

    def as_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def build_wavefunction(config: RunConfig) -> TrialWaveFunction:
    """Trial wave function of the configuration."""
    return make_wavefunction(config.ndim, config.nparticles, beta=config.beta,
                             interaction=config.interaction, radius=config.radius)


def build_sampler(config: RunConfig, with_tqdm: bool = False) -> SamplerBase:
    """Sampler of the configuration."""
    if config.sampling == "brute":
        kwargs = {"step_size": config.step_size}
    else:
        kwargs = {"time_step": config.time_step, "diffusion": config.diffusion}
    return make_sampler(config.sampling, config.nparticles, config.ndim,
                        with_tqdm=with_tqdm, **kwargs)


def build_solver(config: RunConfig, mode: str = "sweep",
                 with_tqdm: bool = False, output: Optional[str] = None) -> SolverBase:
    """Wire the wave function, the sampler and the solver of a run.

    Args:
        config (RunConfig): configuration of the run
        mode (str, optional): 'sweep' or 'gd'. Defaults to 'sweep'.
        with_tqdm (bool, optional): progress bar over the cycles. Defaults to False.
        output (str, optional): hdf5 filename. Defaults to None.

    Returns:
        SolverBase: VariationSweep or GradientDescent
    """
    wf = build_wavefunction(config)
    sampler = build_sampler(config, with_tqdm)
    common = dict(ncycles=config.ncycles, seed=config.seed, nworkers=config.nworkers,
                  ntherm=config.ntherm, output=output)

    if mode == "sweep":
        return VariationSweep(wf, sampler, nvariations=config.nvariations,
                              alpha_start=config.alpha_start,
                              alpha_step=config.alpha_step, **common)
    if mode == "gd":
        return GradientDescent(wf, sampler, initial_alpha=config.initial_alpha,
                               learning_rate=config.learning_rate,
                               niterations=config.niterations,
                               tolerance=config.tolerance, **common)
    raise ValueError("mode must be 'sweep' or 'gd'")
