"""Shared numeric utilities."""

from statcomp.utils.numeric import (
    MACHINE_EPSILON,
    ScalarFunction,
    as_generator,
    as_sample,
    evaluate,
    normal_critical_value,
)

__all__ = [
    'MACHINE_EPSILON',
    'ScalarFunction',
    'as_generator',
    'as_sample',
    'evaluate',
    'normal_critical_value',
]
