"""
Monte Carlo estimation of E[h(X)] from i.i.d. draws.
"""

from __future__ import annotations

import logging

import numpy as np

from statcomp.analysis.results import EstimateResult, InsufficientSampleError
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


def monte_carlo(
    h: ScalarFunction,
    sample,
    confidence: float = DEFAULT_CONFIDENCE,
    vectorized: bool = False,
) -> EstimateResult:
    """
    Estimate E[h(X)] by the sample mean of h over draws of X.

    The interval is estimate +/- z * SE with z the normal critical value
    (1.96 at 95%). It is exact only asymptotically, by the central limit
    theorem.

    Args:
        h: Function of X whose expectation is estimated
        sample: i.i.d. draws of X
        confidence: Interval confidence level
        vectorized: h accepts a numpy array and can be called once on the
            whole sample; by default h is called once per draw

    Returns:
        EstimateResult with SE = sample std (ddof=1) / sqrt(n)

    Raises:
        InsufficientSampleError: If the sample has fewer than 2 draws
    """
    values = as_sample(sample)
    n = len(values)
    if n < 2:
        raise InsufficientSampleError(f"need at least 2 draws, got {n}")

    h_values = evaluate(h, values, vectorized=vectorized)
    estimate = float(np.mean(h_values))
    standard_error = float(np.std(h_values, ddof=1) / np.sqrt(n))

    z = normal_critical_value(confidence)
    interval = (estimate - z * standard_error, estimate + z * standard_error)

    logger.debug("monte_carlo n=%d estimate=%r se=%r", n, estimate, standard_error)

    return EstimateResult(
        estimate=estimate,
        standard_error=standard_error,
        interval=interval,
        confidence=confidence,
        sample_size=n,
    )
