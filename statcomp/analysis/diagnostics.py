"""
Mixing diagnostics for Metropolis-Hastings chains.
"""

from __future__ import annotations

import numpy as np

from statcomp.analysis.results import Chain


def mode_crossing_fraction(chain: Chain, boundary: float) -> float:
    """
    Share of accepted moves that jump across boundary.

    For a bimodal target with boundary placed between the modes, this
    measures how often the chain moves between modes.

    Returns:
        Fraction in [0, 1]; 0.0 when no move was accepted
    """
    if chain.n_accepted == 0:
        return 0.0
    before = chain.states[:-1][chain.accepted]
    after = chain.states[1:][chain.accepted]
    crossed = (before < boundary) != (after < boundary)
    return float(np.mean(crossed))


def autocorrelation(chain: Chain, max_lag: int = 50) -> np.ndarray:
    """
    Sample autocorrelation of the chain states for lags 0..max_lag.

    Lags past the chain length are dropped. A constant chain has
    autocorrelation 1 at lag 0 and NaN elsewhere.
    """
    x = np.asarray(chain.states, dtype=float)
    n = len(x)
    max_lag = min(max_lag, n - 1)
    centered = x - x.mean()
    variance = np.dot(centered, centered) / n

    acf = np.empty(max_lag + 1)
    acf[0] = 1.0
    for lag in range(1, max_lag + 1):
        if variance == 0:
            acf[lag] = np.nan
        else:
            acf[lag] = np.dot(centered[:-lag], centered[lag:]) / (n * variance)
    return acf


def chain_summary(chain: Chain) -> dict:
    """
    Summarize a chain.

    Returns:
        Dict with:
        - length: Number of states, start included
        - mean: Mean of states
        - std: Standard deviation of states (ddof=1)
        - acceptance_rate: Accepted transitions / transitions
    """
    states = np.asarray(chain.states, dtype=float)
    return {
        'length': len(states),
        'mean': float(np.mean(states)),
        'std': float(np.std(states, ddof=1)) if len(states) > 1 else 0.0,
        'acceptance_rate': chain.acceptance_rate,
    }
