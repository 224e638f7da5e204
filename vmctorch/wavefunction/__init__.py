__all__ = [
    "GaussianOrbital",
    "Gaussian1D",
    "Gaussian2D",
    "Gaussian3D",
    "make_orbital",
    "check_alpha",
    "HardSphereJastrow",
    "TrialWaveFunction",
    "InteractingTrialWaveFunction",
    "make_wavefunction",
]

from .orbitals import (GaussianOrbital, Gaussian1D, Gaussian2D, Gaussian3D,
                       make_orbital, check_alpha)
from .jastrow import HardSphereJastrow
from .trial_wavefunction import (TrialWaveFunction,
                                 InteractingTrialWaveFunction,
                                 make_wavefunction)
