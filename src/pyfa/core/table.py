"""
Transition table storage.

Symbols and inclusive ranges are parsed and expanded here, checked against the
alphabet, and stored as one row per source state. The table can be exported as
a scipy sparse adjacency matrix for reachability analysis.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Union

import numpy as np
from scipy.sparse import coo_matrix, csr_matrix

from pyfa.core.errors import InvalidSymbolError, MalformedConfigurationError

SymbolOrRange = Union[str, tuple[str, str]]


def parse_symbol_spec(symbol_or_range: SymbolOrRange) -> tuple[str, str]:
    """Return the inclusive ``(start, end)`` pair of a symbol or ``start-end`` range."""
    if isinstance(symbol_or_range, tuple):
        if len(symbol_or_range) != 2:
            raise MalformedConfigurationError(
                f"symbol range must have two endpoints, got {symbol_or_range!r}"
            )
        start, end = symbol_or_range
    elif isinstance(symbol_or_range, str) and len(symbol_or_range) == 1:
        start = end = symbol_or_range
    elif isinstance(symbol_or_range, str) and len(symbol_or_range) == 3 and symbol_or_range[1] == "-":
        start, end = symbol_or_range[0], symbol_or_range[2]
    else:
        raise MalformedConfigurationError(
            f"expected a single symbol or a range like 'a-z', got {symbol_or_range!r}"
        )

    for endpoint in (start, end):
        if not isinstance(endpoint, str) or len(endpoint) != 1:
            raise MalformedConfigurationError(
                f"range endpoints must be single characters, got {endpoint!r}"
            )
    if ord(start) > ord(end):
        raise MalformedConfigurationError(f"range start {start!r} is after range end {end!r}")
    return start, end


def expand_symbol_range(start: str, end: str) -> list[str]:
    """Every symbol from ``start`` to ``end`` inclusive, in code point order."""
    if ord(start) > ord(end):
        raise MalformedConfigurationError(f"range start {start!r} is after range end {end!r}")
    return [chr(code) for code in range(ord(start), ord(end) + 1)]


class TransitionTable:
    """
    Deterministic (state, symbol) -> state mapping.

    Rows are kept per source state in insertion order. Re-declaring a pair
    overwrites its successor. With an explicit alphabet every inserted symbol
    must belong to it; with ``alphabet=None`` inserted symbols become implicit
    alphabet members.
    """

    def __init__(self, alphabet: Iterable[str] | None = None):
        self.alphabet: frozenset[str] | None = None if alphabet is None else frozenset(alphabet)
        self._implicit_symbols: set[str] = set()
        self._rows: dict[int, dict[str, int]] = {}

    @property
    def symbols(self) -> frozenset[str]:
        if self.alphabet is not None:
            return self.alphabet
        return frozenset(self._implicit_symbols)

    def add(self, state: int, symbol_or_range: SymbolOrRange, next_state: int) -> list[str]:
        """
        Insert one declaration and return the symbols it expanded to.

        Raises:
            MalformedConfigurationError: If the symbol spec is not a symbol or range.
            InvalidSymbolError: If an expanded symbol is outside the alphabet.
        """
        start, end = parse_symbol_spec(symbol_or_range)
        expanded = expand_symbol_range(start, end)

        if self.alphabet is not None:
            for symbol in expanded:
                if symbol not in self.alphabet:
                    raise InvalidSymbolError(symbol)
        else:
            self._implicit_symbols.update(expanded)

        row = self._rows.setdefault(state, {})
        for symbol in expanded:
            row[symbol] = next_state
        return expanded

    def get(self, state: int, symbol: str) -> int | None:
        """Successor of ``state`` on ``symbol``, or None when undefined."""
        row = self._rows.get(state)
        if row is None:
            return None
        return row.get(symbol)

    def successors(self, state: int) -> dict[str, int]:
        """Copy of the row of ``state``: symbol to next state."""
        return dict(self._rows.get(state, {}))

    def has_row(self, state: int) -> bool:
        return state in self._rows

    def states(self) -> set[int]:
        """Every state appearing as a source or a target."""
        found = set(self._rows)
        for row in self._rows.values():
            found.update(row.values())
        return found

    def items(self) -> Iterator[tuple[int, str, int]]:
        """Yield ``(state, symbol, next_state)`` triples in insertion order."""
        for state, row in self._rows.items():
            for symbol, next_state in row.items():
                yield state, symbol, next_state

    def adjacency(self, extra_states: Iterable[int] = ()) -> tuple[dict[int, int], csr_matrix]:
        """
        Build the transition graph as a sparse state x state matrix.

        Args:
            extra_states: States to index even when no transition mentions them
                (final states, the initial state).

        Returns:
            Mapping from state to row index, and a csr_matrix whose entry
            (i, j) is non-zero iff some symbol leads from state i to state j.
        """
        all_states = sorted(self.states() | set(extra_states))
        index = {state: idx for idx, state in enumerate(all_states)}
        n_states = len(all_states)

        edges = {(index[state], index[next_state]) for state, _, next_state in self.items()}
        if not edges:
            return index, csr_matrix((n_states, n_states), dtype=np.int8)

        row = np.fromiter((src for src, _ in edges), dtype=np.int64, count=len(edges))
        col = np.fromiter((dst for _, dst in edges), dtype=np.int64, count=len(edges))
        data = np.ones(len(edges), dtype=np.int8)
        coo = coo_matrix((data, (row, col)), shape=(n_states, n_states), dtype=np.int8)
        return index, csr_matrix(coo)

    def __contains__(self, key: tuple[int, str]) -> bool:
        state, symbol = key
        return self.get(state, symbol) is not None

    def __len__(self) -> int:
        return sum(len(row) for row in self._rows.values())
