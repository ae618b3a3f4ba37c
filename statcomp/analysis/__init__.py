"""
Root finders, expectation estimators and Markov chain sampling.
"""

from statcomp.analysis.results import (
    TerminationReason,
    EstimationError,
    BracketError,
    InsufficientSampleError,
    DegenerateWeightsError,
    IterationTrace,
    ConvergenceResult,
    EstimateResult,
    WeightedSample,
    Chain,
)
from statcomp.analysis.roots import bisect, newton
from statcomp.analysis.monte_carlo import monte_carlo
from statcomp.analysis.importance import importance_sampling, importance_weights
from statcomp.analysis.metropolis import (
    metropolis_hastings,
    gaussian_random_walk,
    independence_proposal,
    run_chains,
)
from statcomp.analysis.diagnostics import (
    mode_crossing_fraction,
    autocorrelation,
    chain_summary,
)

__all__ = [
    # Results
    'TerminationReason',
    'EstimationError',
    'BracketError',
    'InsufficientSampleError',
    'DegenerateWeightsError',
    'IterationTrace',
    'ConvergenceResult',
    'EstimateResult',
    'WeightedSample',
    'Chain',
    # Root finding
    'bisect',
    'newton',
    # Estimation
    'monte_carlo',
    'importance_sampling',
    'importance_weights',
    # Sampling
    'metropolis_hastings',
    'gaussian_random_walk',
    'independence_proposal',
    'run_chains',
    # Diagnostics
    'mode_crossing_fraction',
    'autocorrelation',
    'chain_summary',
]
