"""
Unit tests for result records.
"""

import numpy as np
import pandas as pd
import pytest

from statcomp.analysis.results import (
    BracketError,
    ConvergenceResult,
    DegenerateWeightsError,
    EstimationError,
    InsufficientSampleError,
    IterationTrace,
    TerminationReason,
    WeightedSample,
)
from statcomp.utils.numeric import MACHINE_EPSILON


class TestIterationTrace:
    """Test convergence diagnostics derived from iterates."""

    def test_absolute_changes(self):
        trace = IterationTrace((1.0, 1.5, 1.25))
        np.testing.assert_allclose(trace.absolute_changes(), [0.5, 0.25])

    def test_relative_changes_use_previous_iterate(self):
        trace = IterationTrace((2.0, 3.0, 1.5))
        expected = [1.0 / (2.0 + MACHINE_EPSILON), 1.5 / (3.0 + MACHINE_EPSILON)]
        np.testing.assert_allclose(trace.relative_changes(), expected)

    def test_relative_change_from_zero_is_finite(self):
        trace = IterationTrace((0.0, 1e-20))
        assert np.isfinite(trace.relative_changes()[0])

    def test_to_frame(self):
        frame = IterationTrace((1.0, 1.5, 1.25)).to_frame()
        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == ['iterate', 'abs_change', 'rel_change']
        assert frame.index.name == 'iteration'
        assert len(frame) == 3
        assert np.isnan(frame['abs_change'].iloc[0])
        assert frame['abs_change'].iloc[2] == 0.25

    def test_immutable(self):
        trace = IterationTrace((1.0,))
        with pytest.raises(AttributeError):
            trace.iterates = (2.0,)


class TestConvergenceResult:
    """Test the converged property."""

    @pytest.mark.parametrize("reason, converged", [
        (TerminationReason.RELATIVE_CONVERGED, True),
        (TerminationReason.ABSOLUTE_CONVERGED, True),
        (TerminationReason.NO_CONVERGENCE, False),
        (TerminationReason.NON_FINITE_ITERATE, False),
    ])
    def test_converged(self, reason, converged):
        result = ConvergenceResult(
            value=1.0, function_value=0.0, derivative_value=None, iterations=3,
            reason=reason, elapsed=0.0, trace=IterationTrace((0.0, 1.0)),
        )
        assert result.converged is converged


class TestWeightedSample:
    """Test the weighted sample invariants."""

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            WeightedSample(values=np.zeros(3), weights=np.zeros(2), raw_weights=np.zeros(3))

    def test_effective_sample_size(self):
        sample = WeightedSample(values=np.zeros(4), weights=np.full(4, 0.25),
                                raw_weights=np.ones(4))
        assert sample.effective_sample_size == pytest.approx(4.0)

    def test_single_dominant_weight(self):
        sample = WeightedSample(values=np.zeros(3), weights=np.array([1.0, 0.0, 0.0]),
                                raw_weights=np.array([5.0, 0.0, 0.0]))
        assert sample.effective_sample_size == pytest.approx(1.0)


class TestErrors:
    """Test the error taxonomy."""

    @pytest.mark.parametrize("error, reason", [
        (BracketError, TerminationReason.PRECONDITION_VIOLATED),
        (InsufficientSampleError, TerminationReason.INSUFFICIENT_SAMPLE),
        (DegenerateWeightsError, TerminationReason.DEGENERATE_WEIGHTS),
    ])
    def test_reason_tags(self, error, reason):
        exc = error("details")
        assert isinstance(exc, EstimationError)
        assert isinstance(exc, ValueError)
        assert exc.reason == reason
        assert str(exc) == f"{reason.value}: details"

    def test_reason_is_string_enum(self):
        assert TerminationReason.NO_CONVERGENCE == 'no_convergence'
