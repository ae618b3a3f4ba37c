"""
Self-normalized importance sampling.

Used when the target density is known only up to a constant, so draws
cannot be taken from it directly. Draws come from a tractable proposal
and are reweighted by target/proposal density ratios. Normalizing the
weights to sum to one cancels the unknown constant; the price is a bias
that vanishes as the sample grows.

The standard error is the plug-in estimate

    SE = sqrt(sum(w_i^2 * (phi(x_i) - estimate)^2))

which treats the normalized weights as approximate probabilities. It is
one of several consistent choices for self-normalized estimators.
"""

from __future__ import annotations

import logging

import numpy as np

from statcomp.analysis.results import (
    DegenerateWeightsError,
    EstimateResult,
    WeightedSample,
)
from statcomp.config.loader import load_constants
from statcomp.utils.numeric import (
    ScalarFunction,
    as_sample,
    evaluate,
    normal_critical_value,
)

logger = logging.getLogger(__name__)

_constants = load_constants()

DEFAULT_CONFIDENCE = _constants['estimation']['confidence_level']
MIN_ESS_FRACTION = _constants['estimation']['min_ess_fraction']


def importance_weights(
    unnormalized_target: ScalarFunction,
    proposal_density: ScalarFunction,
    proposal_sample,
    vectorized: bool = False,
) -> WeightedSample:
    """
    Compute self-normalized importance weights for proposal draws.

    Args:
        unnormalized_target: Target density up to a positive constant
        proposal_density: Normalized or unnormalized density of the proposal
        proposal_sample: Draws from the proposal
        vectorized: Both densities accept numpy arrays (default: called
            once per draw)

    Returns:
        WeightedSample whose weights are non-negative and sum to 1

    Raises:
        DegenerateWeightsError: If the raw weights sum to zero, are
            negative or are not finite
    """
    values = as_sample(proposal_sample)
    if len(values) == 0:
        raise DegenerateWeightsError("proposal sample is empty")

    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        target = evaluate(unnormalized_target, values, vectorized=vectorized)
        proposal = evaluate(proposal_density, values, vectorized=vectorized)
        raw_weights = target / proposal
        total = np.sum(raw_weights)

    if not np.isfinite(total) or total <= 0:
        raise DegenerateWeightsError(
            f"raw weights sum to {total!r}; target and proposal supports may not overlap"
        )
    if np.any(raw_weights < 0):
        raise DegenerateWeightsError("negative density ratio; densities must be non-negative")

    weights = raw_weights / total
    weights.setflags(write=False)
    raw_weights.setflags(write=False)
    return WeightedSample(values=values, weights=weights, raw_weights=raw_weights)


def importance_sampling(
    unnormalized_target: ScalarFunction,
    proposal_density: ScalarFunction,
    phi: ScalarFunction,
    proposal_sample,
    confidence: float = DEFAULT_CONFIDENCE,
    vectorized: bool = False,
) -> EstimateResult:
    """
    Estimate E[phi(X)] for X following a density known up to a constant.

    Args:
        unnormalized_target: Target density up to a positive constant
        proposal_density: Density the draws were taken from
        phi: Function whose expectation under the target is estimated
        proposal_sample: Draws from the proposal
        confidence: Interval confidence level
        vectorized: All three functions accept numpy arrays (default: called
            once per draw)

    Returns:
        EstimateResult carrying the Kish effective sample size

    Raises:
        DegenerateWeightsError: If the weights cannot be normalized
    """
    weighted = importance_weights(
        unnormalized_target, proposal_density, proposal_sample, vectorized=vectorized,
    )
    w = weighted.weights
    phi_values = evaluate(phi, weighted.values, vectorized=vectorized)

    estimate = float(np.sum(w * phi_values))
    standard_error = float(np.sqrt(np.sum(w ** 2 * (phi_values - estimate) ** 2)))

    z = normal_critical_value(confidence)
    interval = (estimate - z * standard_error, estimate + z * standard_error)

    n = len(weighted)
    ess = weighted.effective_sample_size
    if ess < MIN_ESS_FRACTION * n:
        logger.warning("importance weights are concentrated: ESS %.1f of %d draws", ess, n)
    logger.debug("importance_sampling n=%d estimate=%r se=%r ess=%.1f",
                 n, estimate, standard_error, ess)

    return EstimateResult(
        estimate=estimate,
        standard_error=standard_error,
        interval=interval,
        confidence=confidence,
        sample_size=n,
        effective_sample_size=ess,
    )
