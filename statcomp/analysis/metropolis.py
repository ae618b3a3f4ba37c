"""
Single-chain Metropolis-Hastings sampling for densities known up to a
constant.

The acceptance ratio target(candidate) / target(current) only involves a
ratio of target values, so the unknown normalizing constant cancels. A
rejected proposal repeats the current state in the chain; dropping
rejections would bias the stationary distribution.

The sampler does no burn-in removal, proposal tuning or convergence
checking. Mixing diagnostics live in statcomp.analysis.diagnostics.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import numpy as np

from statcomp.analysis.results import Chain, MarkovChainState
from statcomp.config.loader import load_constants
from statcomp.utils.numeric import ScalarFunction, as_generator

logger = logging.getLogger(__name__)

_constants = load_constants()

DEFAULT_ITERATIONS = _constants['sampling']['iterations']
DEFAULT_PROPOSAL_SCALE = _constants['sampling']['proposal_scale']

Proposal = Callable[[float], float]
# proposal_density(to, frm) is q(to | frm)
ProposalDensity = Callable[[float, float], float]


def gaussian_random_walk(
    scale: float = DEFAULT_PROPOSAL_SCALE,
    rng: np.random.Generator | int | None = None,
) -> Proposal:
    """
    Symmetric random-walk proposal: current + N(0, scale^2).

    Args:
        scale: Standard deviation of the perturbation
        rng: Generator (or seed) the proposal draws from

    Returns:
        Proposal function of the current state
    """
    if scale <= 0:
        raise ValueError(f"Proposal scale must be positive, got {scale}")
    generator = as_generator(rng)

    def propose(current: float) -> float:
        return current + generator.normal(0.0, scale)

    return propose


def independence_proposal(
    loc: float,
    scale: float,
    rng: np.random.Generator | int | None = None,
) -> tuple[Proposal, ProposalDensity]:
    """
    Asymmetric proposal that ignores the current state: N(loc, scale^2).

    Returns:
        (propose, proposal_density) pair; pass both to metropolis_hastings
        so the acceptance ratio is corrected
    """
    if scale <= 0:
        raise ValueError(f"Proposal scale must be positive, got {scale}")
    generator = as_generator(rng)

    def propose(current: float) -> float:
        return generator.normal(loc, scale)

    def proposal_density(to: float, frm: float) -> float:
        z = (to - loc) / scale
        return float(np.exp(-0.5 * z * z) / (scale * np.sqrt(2 * np.pi)))

    return propose, proposal_density


def _acceptance_ratio(
    target_candidate: float,
    target_current: float,
    candidate: float,
    current: float,
    proposal_density: Optional[ProposalDensity],
) -> float:
    """Hastings ratio; NaN (from 0/0) never passes the u < r test."""
    with np.errstate(divide='ignore', invalid='ignore'):
        ratio = np.float64(target_candidate) / np.float64(target_current)
        if proposal_density is not None:
            ratio *= (np.float64(proposal_density(current, candidate))
                      / np.float64(proposal_density(candidate, current)))
    return float(ratio)


def metropolis_hastings(
    unnormalized_target: ScalarFunction,
    propose: Proposal,
    start: float,
    iterations: int = DEFAULT_ITERATIONS,
    rng: np.random.Generator | int | None = None,
    proposal_density: Optional[ProposalDensity] = None,
) -> Chain:
    """
    Run one Metropolis-Hastings chain for a fixed number of transitions.

    Args:
        unnormalized_target: Target density up to a positive constant
        propose: Draws a candidate given the current state. Assumed
            symmetric unless proposal_density is given.
        start: Initial state
        iterations: Number of transitions
        rng: Generator (or seed) for the uniform acceptance draws
        proposal_density: q(to, frm) for asymmetric proposals; enables the
            Hastings correction q(current | candidate) / q(candidate | current)

    Returns:
        Chain with iterations + 1 states, the start first
    """
    if iterations < 0:
        raise ValueError(f"iterations must be non-negative, got {iterations}")
    generator = as_generator(rng)

    start = float(start)
    state = MarkovChainState(position=start, density=float(unnormalized_target(start)))
    if not state.density > 0:
        logger.warning("target density at start %r is %r", start, state.density)

    states = np.empty(iterations + 1, dtype=float)
    accepted = np.zeros(iterations, dtype=bool)
    states[0] = state.position

    for i in range(iterations):
        candidate = float(propose(state.position))
        candidate_density = float(unnormalized_target(candidate))
        ratio = _acceptance_ratio(
            candidate_density, state.density, candidate, state.position, proposal_density,
        )

        if generator.random() < ratio:
            state.position = candidate
            state.density = candidate_density
            state.n_accepted += 1
            accepted[i] = True

        states[i + 1] = state.position

    logger.debug("metropolis_hastings from %r: %d/%d accepted",
                 start, state.n_accepted, iterations)

    states.setflags(write=False)
    accepted.setflags(write=False)
    return Chain(states=states, accepted=accepted)


def run_chains(
    unnormalized_target: ScalarFunction,
    starts: Sequence[float],
    iterations: int = DEFAULT_ITERATIONS,
    proposal_scale: float = DEFAULT_PROPOSAL_SCALE,
    seed: Optional[int] = None,
) -> list[Chain]:
    """
    Run independent random-walk chains, one per starting point.

    Each chain gets its own child generator spawned from a single
    SeedSequence, so chains share no random state and the whole set is
    reproducible from one seed.

    Args:
        unnormalized_target: Target density up to a positive constant
        starts: Starting point of each chain
        iterations: Transitions per chain
        proposal_scale: Random-walk standard deviation
        seed: Root seed

    Returns:
        Chains in the order of starts
    """
    children = np.random.SeedSequence(seed).spawn(len(starts))
    chains = []
    for start, child in zip(starts, children):
        generator = np.random.default_rng(child)
        propose = gaussian_random_walk(proposal_scale, generator)
        chains.append(metropolis_hastings(
            unnormalized_target, propose, start, iterations, rng=generator,
        ))
    return chains
