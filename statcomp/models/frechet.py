"""
Frechet (inverse Weibull) log-likelihood in the shape parameter.

With unit scale the density is

    f(x; a) = a * x^(-1-a) * exp(-x^(-a)),  x > 0

so for data x_1..x_n

    l(a)   = n log a - (1 + a) sum(log x) - sum(x^(-a))
    l'(a)  = n / a - sum(log x) + sum(x^(-a) log x)
    l''(a) = -n / a^2 - sum(x^(-a) (log x)^2)

l'' < 0 for every a > 0, so l' is decreasing and has at most one root.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy import stats

from statcomp.utils.numeric import ScalarFunction, as_generator


@dataclass(frozen=True)
class LogLikelihood:
    """Log-likelihood of one scalar parameter with its first two derivatives."""
    value: ScalarFunction
    first_derivative: ScalarFunction
    second_derivative: ScalarFunction


def frechet_log_likelihood(data) -> LogLikelihood:
    """
    Build the Frechet shape log-likelihood for fixed data.

    Args:
        data: Positive observations

    Returns:
        LogLikelihood whose functions close over a private copy of data
    """
    x = np.array(data, dtype=float).ravel()
    if len(x) == 0 or np.any(x <= 0):
        raise ValueError("Frechet data must be non-empty and strictly positive")

    n = len(x)
    log_x = np.log(x)
    sum_log_x = float(np.sum(log_x))

    def value(a: float) -> float:
        return float(n * np.log(a) - (1 + a) * sum_log_x - np.sum(x ** -a))

    def first_derivative(a: float) -> float:
        return float(n / a - sum_log_x + np.sum(x ** -a * log_x))

    def second_derivative(a: float) -> float:
        return float(-n / a ** 2 - np.sum(x ** -a * log_x ** 2))

    return LogLikelihood(value, first_derivative, second_derivative)


def sample_frechet(shape: float, size: int, rng: np.random.Generator | int | None = None) -> np.ndarray:
    """Draw size unit-scale Frechet variates with the given shape."""
    return stats.invweibull(c=shape).rvs(size=size, random_state=as_generator(rng))
