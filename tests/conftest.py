"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from statcomp.models import frechet_log_likelihood, normal_mixture_density, sample_frechet


@pytest.fixture
def rng():
    """Seeded generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def frechet_data():
    """Seeded Frechet sample of size 50 with shape 2."""
    return sample_frechet(shape=2.0, size=50, rng=20240917)


@pytest.fixture
def frechet_loglik(frechet_data):
    """Frechet shape log-likelihood over the seeded sample."""
    return frechet_log_likelihood(frechet_data)


@pytest.fixture
def bimodal_target():
    """Two well-separated normal modes at -4 and 4, scaled by an arbitrary constant."""
    return normal_mixture_density(
        weights=[0.5, 0.5],
        means=[-4.0, 4.0],
        scales=[1.0, 1.0],
        normalizer=3.0,
    )
