"""
Core types for pyfa: TransitionSpec, AutomatonConfig, AutomatonSummary.

Pure data containers with validation. No behavior logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from pyfa.core.errors import MalformedConfigurationError

EMPTY_STRING = "Λ"


def _is_state(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_symbol(value) -> bool:
    return isinstance(value, str) and len(value) == 1


@dataclass(frozen=True)
class TransitionSpec:
    """
    One raw transition declaration.

    A single-symbol declaration leaves ``range_end`` as None. A range
    declaration covers every code point from ``symbol`` to ``range_end``
    inclusive.
    """

    state: int
    symbol: str
    next_state: int
    range_end: Optional[str] = None

    def __post_init__(self):
        """Validate TransitionSpec constraints."""
        if not _is_state(self.state):
            raise MalformedConfigurationError(f"state must be an int, got {self.state!r}")
        if not _is_state(self.next_state):
            raise MalformedConfigurationError(
                f"next_state must be an int, got {self.next_state!r}"
            )
        if not _is_symbol(self.symbol):
            raise MalformedConfigurationError(
                f"symbol must be a single character, got {self.symbol!r}"
            )
        if self.range_end is not None:
            if not _is_symbol(self.range_end):
                raise MalformedConfigurationError(
                    f"range_end must be a single character, got {self.range_end!r}"
                )
            if ord(self.symbol) > ord(self.range_end):
                raise MalformedConfigurationError(
                    f"range start {self.symbol!r} is after range end {self.range_end!r}"
                )

    @property
    def is_range(self) -> bool:
        return self.range_end is not None

    @property
    def label(self) -> str:
        """Symbol as written in configuration text: ``a`` or ``a-z``."""
        if self.range_end is None:
            return self.symbol
        return f"{self.symbol}-{self.range_end}"


@dataclass(frozen=True)
class AutomatonConfig:
    """
    Parsed configuration of one automaton.

    Collections are normalized on construction: final states and alphabet to
    frozensets, transitions and test strings to tuples.
    """

    initial_state: int
    final_states: frozenset
    alphabet: frozenset
    transitions: tuple = ()
    test_strings: tuple = ()
    name: Optional[str] = None

    def __post_init__(self):
        """Normalize collections and validate AutomatonConfig constraints."""
        try:
            object.__setattr__(self, "final_states", frozenset(self.final_states))
            object.__setattr__(self, "alphabet", frozenset(self.alphabet))
            object.__setattr__(self, "transitions", tuple(self.transitions))
            object.__setattr__(self, "test_strings", tuple(self.test_strings))
        except TypeError as exc:
            raise MalformedConfigurationError(
                f"config collections must be iterables of scalars: {exc}"
            ) from None

        if not _is_state(self.initial_state):
            raise MalformedConfigurationError(
                f"initial_state must be an int, got {self.initial_state!r}"
            )
        for state in self.final_states:
            if not _is_state(state):
                raise MalformedConfigurationError(f"final state must be an int, got {state!r}")
        for symbol in self.alphabet:
            if not _is_symbol(symbol):
                raise MalformedConfigurationError(
                    f"alphabet symbol must be a single character, got {symbol!r}"
                )
        for transition in self.transitions:
            if not isinstance(transition, TransitionSpec):
                raise MalformedConfigurationError(
                    f"transitions must be TransitionSpec, got {type(transition).__name__}"
                )
        for test_string in self.test_strings:
            if not isinstance(test_string, str):
                raise MalformedConfigurationError(
                    f"test strings must be str, got {type(test_string).__name__}"
                )


@dataclass(frozen=True)
class AutomatonSummary:
    """Introspection record of a built automaton, consumed by reporters."""

    states: tuple[int, ...]
    initial_state: int
    final_states: tuple[int, ...]
    alphabet: tuple[str, ...]
    transitions: tuple[tuple[int, str, int], ...]
    dead_states: tuple[int, ...] = field(default=())
