"""
Scalar root finders for maximum-likelihood estimation.

Both methods look for a zero of a log-likelihood derivative. Bisection
halves a sign-change bracket and converges linearly; Newton-Raphson uses
the second derivative and converges quadratically near a simple root, so
it typically needs an order of magnitude fewer iterations for the same
tolerance.

Termination is checked in the same order by both methods on every
iteration:

1. iteration budget exceeded -> no_convergence
2. relative change between successive iterates <= tol -> relative_converged
3. absolute change <= tol -> absolute_converged
"""

from __future__ import annotations

import logging
import math
import time
from typing import Optional

import numpy as np

from statcomp.analysis.results import (
    BracketError,
    ConvergenceResult,
    IterationTrace,
    TerminationReason,
)
from statcomp.config.loader import load_constants
from statcomp.utils.numeric import MACHINE_EPSILON, ScalarFunction

logger = logging.getLogger(__name__)

_constants = load_constants()

DEFAULT_MAX_ITER = _constants['root_finding']['max_iter']
DEFAULT_TOLERANCE = MACHINE_EPSILON


def _check_change(previous: float, current: float, tol: float) -> Optional[TerminationReason]:
    """Return the convergence reason for a step, or None to keep iterating."""
    change = abs(current - previous)
    if change / (abs(previous) + MACHINE_EPSILON) <= tol:
        return TerminationReason.RELATIVE_CONVERGED
    if change <= tol:
        return TerminationReason.ABSOLUTE_CONVERGED
    return None


def _log_outcome(method: str, reason: TerminationReason, value: float, iterations: int):
    if reason in (TerminationReason.NO_CONVERGENCE, TerminationReason.NON_FINITE_ITERATE):
        logger.warning("%s stopped with %s after %d iterations (x=%r)",
                       method, reason.value, iterations, value)
    else:
        logger.debug("%s %s after %d iterations: x=%r",
                     method, reason.value, iterations, value)


def bisect(
    derivative: ScalarFunction,
    low: float,
    high: float,
    max_iter: int = DEFAULT_MAX_ITER,
    tol: float = DEFAULT_TOLERANCE,
) -> ConvergenceResult:
    """
    Find a zero of derivative inside [low, high] by interval halving.

    Args:
        derivative: Function whose root is sought (e.g. a score function)
        low: Lower end of the bracket
        high: Upper end of the bracket
        max_iter: Maximum number of halving steps
        tol: Tolerance on the change between successive midpoints

    Returns:
        ConvergenceResult; derivative_value is None since bisection uses no
        curvature information. brackets holds every bracket visited, the
        initial one first. A NaN or infinite derivative at a midpoint
        stops the run there with reason non_finite_iterate.

    Raises:
        BracketError: If low >= high or derivative has no sign change on
            the bracket
    """
    start_time = time.perf_counter()
    low, high = float(low), float(high)
    if not low < high:
        raise BracketError(f"bracket must satisfy low < high, got ({low}, {high})")

    f_low = float(derivative(low))
    f_high = float(derivative(high))

    # An endpoint that is already a root needs no halving
    for endpoint, f_endpoint in ((low, f_low), (high, f_high)):
        if f_endpoint == 0.0:
            _log_outcome('bisect', TerminationReason.ABSOLUTE_CONVERGED, endpoint, 0)
            return ConvergenceResult(
                value=endpoint,
                function_value=0.0,
                derivative_value=None,
                iterations=0,
                reason=TerminationReason.ABSOLUTE_CONVERGED,
                elapsed=time.perf_counter() - start_time,
                trace=IterationTrace((endpoint,)),
                brackets=((low, high),),
            )

    if not f_low * f_high < 0:
        raise BracketError(
            f"derivative has no sign change on [{low}, {high}] "
            f"(f(low)={f_low!r}, f(high)={f_high!r})"
        )

    logger.debug("bisect on [%r, %r], max_iter=%d, tol=%g", low, high, max_iter, tol)

    a, b = low, high
    f_a = f_low
    x = a + (b - a) / 2
    iterates = [x]
    brackets = [(a, b)]
    reason = TerminationReason.NO_CONVERGENCE
    iterations = max_iter

    for iteration in range(1, max_iter + 1):
        # Both checks stop before halving, so the step is not counted
        f_x = float(derivative(x))
        if f_x == 0.0:
            reason = TerminationReason.ABSOLUTE_CONVERGED
            iterations = iteration - 1
            break
        if not math.isfinite(f_x):
            reason = TerminationReason.NON_FINITE_ITERATE
            iterations = iteration - 1
            break
        if f_a * f_x < 0:
            b = x
        else:
            a, f_a = x, f_x
        brackets.append((a, b))

        previous, x = x, a + (b - a) / 2
        iterates.append(x)

        converged = _check_change(previous, x, tol)
        if converged is not None:
            reason = converged
            iterations = iteration
            break

    _log_outcome('bisect', reason, x, iterations)
    return ConvergenceResult(
        value=x,
        function_value=float(derivative(x)),
        derivative_value=None,
        iterations=iterations,
        reason=reason,
        elapsed=time.perf_counter() - start_time,
        trace=IterationTrace(tuple(iterates)),
        brackets=tuple(brackets),
    )


def newton(
    first_derivative: ScalarFunction,
    second_derivative: ScalarFunction,
    start: float,
    max_iter: int = DEFAULT_MAX_ITER,
    tol: float = DEFAULT_TOLERANCE,
) -> ConvergenceResult:
    """
    Find a zero of first_derivative by Newton-Raphson iteration.

    x_(i+1) = x_i - f'(x_i) / f''(x_i)

    A zero second derivative, a non-finite derivative value or a
    non-finite iterate ends the run with reason non_finite_iterate; the
    last finite iterate is reported.

    Args:
        first_derivative: Function whose root is sought
        second_derivative: Derivative of first_derivative
        start: Starting point
        max_iter: Maximum number of Newton steps
        tol: Tolerance on the change between successive iterates

    Returns:
        ConvergenceResult with function_value = f'(x) and
        derivative_value = f''(x) at the final point
    """
    start_time = time.perf_counter()
    x = float(start)
    iterates = [x]
    reason = TerminationReason.NO_CONVERGENCE
    iterations = max_iter

    logger.debug("newton from %r, max_iter=%d, tol=%g", x, max_iter, tol)

    with np.errstate(all='ignore'):
        g = float(first_derivative(x))
        h = float(second_derivative(x))

        for iteration in range(1, max_iter + 1):
            if not (math.isfinite(g) and math.isfinite(h)) or h == 0.0:
                reason = TerminationReason.NON_FINITE_ITERATE
                iterations = iteration - 1
                break

            candidate = x - g / h
            if not math.isfinite(candidate):
                reason = TerminationReason.NON_FINITE_ITERATE
                iterations = iteration - 1
                break

            previous, x = x, candidate
            iterates.append(x)
            g = float(first_derivative(x))
            h = float(second_derivative(x))

            converged = _check_change(previous, x, tol)
            if converged is not None:
                reason = converged
                iterations = iteration
                break

    _log_outcome('newton', reason, x, iterations)
    return ConvergenceResult(
        value=x,
        function_value=g,
        derivative_value=h,
        iterations=iterations,
        reason=reason,
        elapsed=time.perf_counter() - start_time,
        trace=IterationTrace(tuple(iterates)),
    )
