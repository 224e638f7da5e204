__all__ = [
    "SamplerBase",
    "Walkers",
    "BruteForce",
    "ImportanceSampling",
    "make_sampler",
]

from .sampler_base import SamplerBase
from .walkers import Walkers
from .brute_force import BruteForce
from .importance_sampling import ImportanceSampling


def make_sampler(method: str, nparticles: int, ndim: int, **kwargs) -> SamplerBase:
    """Create a sampler from its name ('brute' or 'importance')."""
    samplers = {'brute': BruteForce, 'importance': ImportanceSampling}
    if method not in samplers:
        raise ValueError(
            'sampling method %s not recognized, valid methods are %s'
            % (method, list(samplers.keys())))
    return samplers[method](nparticles=nparticles, ndim=ndim, **kwargs)
