"""Building automata from parsed configurations."""

from __future__ import annotations

from typing import Sequence

from pyfa.core.automaton import Automaton
from pyfa.core.types import EMPTY_STRING, AutomatonConfig


def build_automaton(
    config: AutomatonConfig,
    dead_state_policy: str = "exact",
    empty_token: str | None = EMPTY_STRING,
) -> Automaton:
    """
    Construct and finalize an automaton from a parsed configuration.

    Transitions are inserted in declaration order against the declared
    alphabet, so a symbol outside it fails the whole construction.

    Args:
        config: Parsed configuration.
        dead_state_policy: "exact", "incremental" or "off".
        empty_token: Input token standing for the empty string, or None.

    Returns:
        A finalized Automaton, safe to query concurrently.

    Raises:
        InvalidSymbolError: If a transition uses a symbol outside the alphabet.
        MalformedConfigurationError: If a transition symbol spec is malformed.
    """
    automaton = Automaton(
        initial_state=config.initial_state,
        final_states=config.final_states,
        alphabet=config.alphabet,
        dead_state_policy=dead_state_policy,
        empty_token=empty_token,
    )
    for transition in config.transitions:
        symbol_spec = transition.symbol
        if transition.range_end is not None:
            symbol_spec = (transition.symbol, transition.range_end)
        automaton.add_transition(transition.state, symbol_spec, transition.next_state)

    automaton.finalize()
    return automaton


def accepts(automaton: Automaton, word: Sequence[str]) -> bool:
    return automaton.accepts(word)
