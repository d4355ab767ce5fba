"""
Deterministic finite automaton engine.

An Automaton owns its transition table, final states and dead-state
bookkeeping, and answers acceptance queries for single words, word batches
and step-by-step traces.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from pyfa.core.reachability import IncrementalDeadStates, dead_states, validate_policy
from pyfa.core.table import SymbolOrRange, TransitionTable
from pyfa.core.types import EMPTY_STRING, AutomatonSummary

logger = logging.getLogger(__name__)

FOREIGN_SYMBOL = "foreign_symbol"
DEAD_STATE = "dead_state"
UNDEFINED_TRANSITION = "undefined_transition"
NOT_FINAL = "not_final"


@dataclass
class Trace:
    """Walk of one input: visited states (initial first) and why it stopped."""

    states: list[int]
    accepted: bool
    reason: str | None = None
    consumed: int = 0


class Automaton:
    """
    Deterministic finite automaton over integer states and single-character symbols.

    Transitions are added during construction; once ``finalize`` has run the
    automaton is treated as read-only and may be queried from several threads.
    """

    def __init__(
        self,
        initial_state: int,
        final_states: Iterable[int],
        alphabet: Iterable[str] | None,
        dead_state_policy: str = "exact",
        empty_token: str | None = EMPTY_STRING,
    ):
        validate_policy(dead_state_policy)

        self._initial_state = initial_state
        self.final_states: frozenset[int] = frozenset(final_states)
        self.table = TransitionTable(alphabet)
        self.dead_state_policy = dead_state_policy
        self.empty_token = empty_token

        self._incremental: IncrementalDeadStates | None = None
        if dead_state_policy == "incremental":
            self._incremental = IncrementalDeadStates(self.final_states)
        self._dead: frozenset[int] | None = None

    @property
    def initial_state(self) -> int:
        return self._initial_state

    @property
    def alphabet(self) -> frozenset[str]:
        return self.table.symbols

    @property
    def finalized(self) -> bool:
        return self.dead_state_policy != "exact" or self._dead is not None

    def add_transition(
        self,
        state: int,
        symbol_or_range: SymbolOrRange,
        next_state: int,
    ) -> list[str]:
        expanded = self.table.add(state, symbol_or_range, next_state)

        if self._incremental is not None:
            if self._incremental.check(self.table, state):
                logger.debug("state %d marked dead after transition on %r", state, symbol_or_range)
        elif self.dead_state_policy == "exact":
            self._dead = None
        return expanded

    def finalize(self) -> frozenset[int]:
        """Compute dead states for the current table and return them."""
        if self.dead_state_policy == "exact":
            self._dead = self._compute_dead_states()
            logger.debug("dead states: %s", sorted(self._dead))
        return self.dead_states

    @property
    def dead_states(self) -> frozenset[int]:
        """
        Dead states of the current table.

        In exact mode an automaton that gained transitions since its last
        ``finalize`` gets a fresh, uncached computation; the early-rejection
        shortcut in ``accepts`` stays off until ``finalize`` runs again.
        """
        if self._incremental is not None:
            return frozenset(self._incremental.dead)
        if self.dead_state_policy == "off":
            return frozenset()
        if self._dead is None:
            return self._compute_dead_states()
        return self._dead

    def _compute_dead_states(self) -> frozenset[int]:
        return dead_states(
            self.table,
            self.final_states,
            extra_states=(self._initial_state,),
        )

    def is_dead(self, state: int) -> bool:
        if self._incremental is not None:
            return state in self._incremental
        return self._dead is not None and state in self._dead

    def is_empty_input(self, word: Sequence[str]) -> bool:
        if len(word) == 0:
            return True
        return self.empty_token is not None and isinstance(word, str) and word == self.empty_token

    def trace(self, word: Sequence[str]) -> Trace:
        """
        Walk ``word`` from the initial state.

        Stops at the first symbol outside the alphabet, the first dead state
        (when dead-state tracking is on) or the first missing transition.
        """
        current = self._initial_state
        states = [current]
        if self.is_empty_input(word):
            accepted = current in self.final_states
            return Trace(states, accepted, None if accepted else NOT_FINAL, 0)

        alphabet = self.table.symbols
        for consumed, symbol in enumerate(word):
            if symbol not in alphabet:
                return Trace(states, False, FOREIGN_SYMBOL, consumed)
            if self.is_dead(current):
                return Trace(states, False, DEAD_STATE, consumed)
            next_state = self.table.get(current, symbol)
            if next_state is None:
                return Trace(states, False, UNDEFINED_TRANSITION, consumed)
            current = next_state
            states.append(current)

        accepted = current in self.final_states
        return Trace(states, accepted, None if accepted else NOT_FINAL, len(word))

    def accepts(self, word: Sequence[str]) -> bool:
        if self.is_empty_input(word):
            return self._initial_state in self.final_states

        alphabet = self.table.symbols
        current = self._initial_state
        for symbol in word:
            if symbol not in alphabet:
                return False
            if self.is_dead(current):
                return False
            next_state = self.table.get(current, symbol)
            if next_state is None:
                return False
            current = next_state
        return current in self.final_states

    def accepts_many(self, words: Iterable[Sequence[str]]) -> np.ndarray:
        return np.fromiter((self.accepts(word) for word in words), dtype=bool)

    def states(self) -> set[int]:
        return self.table.states() | self.final_states | {self._initial_state}

    def summary(self) -> AutomatonSummary:
        return AutomatonSummary(
            states=tuple(sorted(self.states())),
            initial_state=self._initial_state,
            final_states=tuple(sorted(self.final_states)),
            alphabet=tuple(sorted(self.alphabet)),
            transitions=tuple(self.table.items()),
            dead_states=tuple(sorted(self.dead_states)),
        )
