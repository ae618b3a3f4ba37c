"""
Result records and error types shared by the root finders, estimators
and the Metropolis-Hastings sampler.

Every record is produced once per run and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np
import pandas as pd

from statcomp.utils.numeric import MACHINE_EPSILON


class TerminationReason(str, Enum):
    """Outcome tag attached to every run."""
    RELATIVE_CONVERGED = 'relative_converged'
    ABSOLUTE_CONVERGED = 'absolute_converged'
    NO_CONVERGENCE = 'no_convergence'
    NON_FINITE_ITERATE = 'non_finite_iterate'
    PRECONDITION_VIOLATED = 'precondition_violated'
    INSUFFICIENT_SAMPLE = 'insufficient_sample'
    DEGENERATE_WEIGHTS = 'degenerate_weights'


class EstimationError(ValueError):
    """Base class for usage errors; `reason` names the failure."""
    reason: TerminationReason

    def __init__(self, message: str):
        super().__init__(f"{self.reason.value}: {message}")


class BracketError(EstimationError):
    """Bisection bracket is empty or lacks a sign change."""
    reason = TerminationReason.PRECONDITION_VIOLATED


class InsufficientSampleError(EstimationError):
    """Fewer than two observations; the standard error is undefined."""
    reason = TerminationReason.INSUFFICIENT_SAMPLE


class DegenerateWeightsError(EstimationError):
    """Importance weights sum to zero or are not finite."""
    reason = TerminationReason.DEGENERATE_WEIGHTS


@dataclass(frozen=True)
class IterationTrace:
    """Iterates x0, x1, ... of a root-finding run."""
    iterates: tuple[float, ...]

    def __len__(self) -> int:
        return len(self.iterates)

    def absolute_changes(self) -> np.ndarray:
        """|x_i - x_(i-1)| for i >= 1."""
        return np.abs(np.diff(np.asarray(self.iterates, dtype=float)))

    def relative_changes(self) -> np.ndarray:
        """|x_i - x_(i-1)| / (|x_(i-1)| + eps) for i >= 1."""
        x = np.asarray(self.iterates, dtype=float)
        return np.abs(np.diff(x)) / (np.abs(x[:-1]) + MACHINE_EPSILON)

    def to_frame(self) -> pd.DataFrame:
        """
        Tabulate the trace for a reporting layer.

        Returns:
            DataFrame indexed by iteration with 'iterate', 'abs_change' and
            'rel_change' columns (changes are NaN for the starting point)
        """
        abs_change = np.concatenate([[np.nan], self.absolute_changes()])
        rel_change = np.concatenate([[np.nan], self.relative_changes()])
        frame = pd.DataFrame({
            'iterate': np.asarray(self.iterates, dtype=float),
            'abs_change': abs_change,
            'rel_change': rel_change,
        })
        frame.index.name = 'iteration'
        return frame


@dataclass(frozen=True)
class ConvergenceResult:
    """Result of a root-finding run."""
    value: float
    function_value: float
    derivative_value: Optional[float]
    iterations: int
    reason: TerminationReason
    elapsed: float
    trace: IterationTrace
    brackets: tuple[tuple[float, float], ...] = ()

    @property
    def converged(self) -> bool:
        return self.reason in (
            TerminationReason.RELATIVE_CONVERGED,
            TerminationReason.ABSOLUTE_CONVERGED,
        )


@dataclass(frozen=True)
class EstimateResult:
    """Point estimate with standard error and a normal-approximation interval."""
    estimate: float
    standard_error: float
    interval: tuple[float, float]
    confidence: float
    sample_size: int
    effective_sample_size: Optional[float] = None

    @property
    def width(self) -> float:
        return self.interval[1] - self.interval[0]

    def contains(self, value: float) -> bool:
        """True if value lies inside the closed interval."""
        return self.interval[0] <= value <= self.interval[1]


@dataclass(frozen=True)
class WeightedSample:
    """Proposal draws with their self-normalized importance weights."""
    values: np.ndarray
    weights: np.ndarray
    raw_weights: np.ndarray

    def __post_init__(self):
        if not (len(self.values) == len(self.weights) == len(self.raw_weights)):
            raise ValueError("values, weights and raw_weights must have equal length")

    def __len__(self) -> int:
        return len(self.values)

    @property
    def effective_sample_size(self) -> float:
        """Kish effective sample size, 1 / sum(w^2)."""
        return float(1.0 / np.sum(self.weights ** 2))


@dataclass
class MarkovChainState:
    """Current position of a chain; written only by the sampler that owns it."""
    position: float
    density: float
    n_accepted: int = 0


@dataclass(frozen=True)
class Chain:
    """
    Metropolis-Hastings sample path.

    states has one more entry than accepted: states[0] is the start and
    states[i] is the state after transition i.
    """
    states: np.ndarray
    accepted: np.ndarray

    def __len__(self) -> int:
        return len(self.states)

    @property
    def iterations(self) -> int:
        return len(self.accepted)

    @property
    def n_accepted(self) -> int:
        return int(np.sum(self.accepted))

    @property
    def acceptance_rate(self) -> float:
        if self.iterations == 0:
            return 0.0
        return self.n_accepted / self.iterations
