"""
statcomp: classical numerical-computing primitives.

Root finders for maximum-likelihood estimation, Monte Carlo and
importance sampling estimators, and a Metropolis-Hastings sampler.
"""

from statcomp.analysis import (
    bisect,
    newton,
    monte_carlo,
    importance_sampling,
    importance_weights,
    metropolis_hastings,
    ConvergenceResult,
    EstimateResult,
    Chain,
    TerminationReason,
    EstimationError,
)

__version__ = "0.1.0"

__all__ = [
    'bisect',
    'newton',
    'monte_carlo',
    'importance_sampling',
    'importance_weights',
    'metropolis_hastings',
    'ConvergenceResult',
    'EstimateResult',
    'Chain',
    'TerminationReason',
    'EstimationError',
]
