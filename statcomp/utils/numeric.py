"""
Shared numeric helpers: machine epsilon, function evaluation over samples,
random generator handling and normal critical values.
"""

from __future__ import annotations

from typing import Callable

import numpy as np
from scipy import stats

# Smallest increment for double precision, as reported by numpy
MACHINE_EPSILON = float(np.finfo(float).eps)

ScalarFunction = Callable[[float], float]


def as_sample(sample) -> np.ndarray:
    """
    Convert a caller-supplied sample to a read-only 1-D float array.

    The caller's data is copied, so estimators never write to it.
    """
    values = np.array(sample, dtype=float).ravel()
    values.setflags(write=False)
    return values


def evaluate(func: ScalarFunction, values: np.ndarray, vectorized: bool = False) -> np.ndarray:
    """
    Apply func to every element of values.

    Args:
        func: Scalar function
        values: 1-D array of points
        vectorized: Call func once on the whole array instead of once per
            element; leave False for plain float -> float callables

    Returns:
        1-D float array of the same length as values

    Raises:
        ValueError: If a vectorized call returns the wrong number of values
    """
    if not vectorized:
        return np.array([func(float(x)) for x in values], dtype=float)

    result = np.asarray(func(values), dtype=float)
    if result.ndim == 0:
        # Constant functions like `lambda x: 1.0` ignore their argument
        result = np.full(len(values), float(result))
    if result.shape != values.shape:
        raise ValueError(
            f"Function returned shape {result.shape} for input shape {values.shape}; "
            "pass vectorized=False for scalar-only callables"
        )
    return result


def as_generator(rng: np.random.Generator | int | None = None) -> np.random.Generator:
    """Return a numpy Generator from a Generator, an int seed, or None."""
    return np.random.default_rng(rng)


def normal_critical_value(confidence: float) -> float:
    """
    Two-sided standard normal critical value for a confidence level.

    1.96 (to two decimals) for a 95% interval.
    """
    if not 0 < confidence < 1:
        raise ValueError(f"Confidence level must be in (0, 1), got {confidence}")
    return float(stats.norm.ppf(0.5 + confidence / 2))