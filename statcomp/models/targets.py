"""
Unnormalized target densities for importance sampling and MCMC.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from scipy import stats

from statcomp.utils.numeric import ScalarFunction


def normal_mixture_density(
    weights: Sequence[float],
    means: Sequence[float],
    scales: Sequence[float],
    normalizer: float = 1.0,
) -> ScalarFunction:
    """
    Mixture of normal densities multiplied by an arbitrary positive constant.

    Args:
        weights: Component weights (need not sum to 1)
        means: Component means
        scales: Component standard deviations
        normalizer: Positive constant the density is multiplied by

    Returns:
        Vectorized density function; returns a float for scalar input
    """
    weights = np.asarray(weights, dtype=float)
    means = np.asarray(means, dtype=float)
    scales = np.asarray(scales, dtype=float)
    if not (len(weights) == len(means) == len(scales)):
        raise ValueError("weights, means and scales must have equal length")
    if normalizer <= 0 or np.any(scales <= 0) or np.any(weights < 0):
        raise ValueError("normalizer and scales must be positive, weights non-negative")

    def density(x):
        x_arr = np.asarray(x, dtype=float)
        components = stats.norm.pdf(x_arr[..., None], loc=means, scale=scales)
        result = normalizer * np.sum(weights * components, axis=-1)
        if x_arr.ndim == 0:
            return float(result)
        return result

    return density


def mixture_mean(weights: Sequence[float], means: Sequence[float]) -> float:
    """Mean of a normal mixture, normalizing the weights."""
    weights = np.asarray(weights, dtype=float)
    return float(np.dot(weights / weights.sum(), means))
