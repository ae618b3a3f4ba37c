"""
Integration test fixtures.

Runs the reference scenario once per session; it is deterministic for a
given seed.
"""

from __future__ import annotations

import copy

import pytest

from statcomp.config.loader import load_constants
from statcomp.scenario import run_reference_scenario


@pytest.fixture(scope="session")
def scenario_constants():
    """Reference constants with shorter chains to keep the suite fast."""
    constants = copy.deepcopy(load_constants())
    constants['scenario']['chains']['iterations'] = 3000
    return constants


@pytest.fixture(scope="session")
def scenario_result(scenario_constants):
    """Result of one reference scenario run."""
    return run_reference_scenario(scenario_constants)
