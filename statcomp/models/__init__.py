"""
Reference statistical models used by the scenario and tests.
"""

from statcomp.models.frechet import (
    LogLikelihood,
    frechet_log_likelihood,
    sample_frechet,
)
from statcomp.models.targets import normal_mixture_density, mixture_mean

__all__ = [
    'LogLikelihood',
    'frechet_log_likelihood',
    'sample_frechet',
    'normal_mixture_density',
    'mixture_mean',
]
