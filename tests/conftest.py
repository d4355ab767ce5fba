"""
Pytest configuration and fixtures for pyfa tests.

Provides the reference automata configurations used across unit and
integration tests.
"""

import pytest


@pytest.fixture
def deterministic_rng():
    """Deterministic RNG seeded with 12345 for word sampling."""
    from pyfa.core.rng import make_rng
    return make_rng(12345)


@pytest.fixture
def binary_config():
    """
    Binary automaton over {0, 1} with final state 2.

    Accepts words ending in "10" followed by any number of 0s.
    """
    from pyfa.core.types import AutomatonConfig, TransitionSpec

    return AutomatonConfig(
        initial_state=0,
        final_states={2},
        alphabet={"0", "1"},
        transitions=[
            TransitionSpec(0, "0", 0),
            TransitionSpec(0, "1", 1),
            TransitionSpec(1, "0", 2),
            TransitionSpec(1, "1", 0),
            TransitionSpec(2, "0", 2),
            TransitionSpec(2, "1", 1),
        ],
    )


@pytest.fixture
def lowercase_config():
    """Single range transition 0 --a-z--> 1 with final state 1."""
    from pyfa.core.types import AutomatonConfig, TransitionSpec

    return AutomatonConfig(
        initial_state=0,
        final_states={1},
        alphabet={chr(code) for code in range(ord("a"), ord("z") + 1)},
        transitions=[TransitionSpec(0, "a", 1, range_end="z")],
    )
