"""
Dead-state analysis.

A state is dead when no sequence of transitions leads from it to a final
state. Two policies are provided:

- productive_states / dead_states: exact, computed once over a finalized
  table by a single backward breadth-first search from the final states.
- IncrementalDeadStates: forward search from a state right after it gains a
  transition. Marks are never withdrawn, so the result depends on the order
  transitions were declared in and can mark a state dead before all of its
  outgoing transitions exist.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable

import numpy as np
from scipy.sparse import coo_matrix
from scipy.sparse.csgraph import breadth_first_order

from pyfa.core.table import TransitionTable

DEAD_STATE_POLICIES = ("exact", "incremental", "off")


def validate_policy(policy: str) -> None:
    if policy not in DEAD_STATE_POLICIES:
        raise ValueError(f"dead_state_policy must be in {DEAD_STATE_POLICIES}, got {policy!r}")


def productive_states(
    table: TransitionTable,
    final_states: Iterable[int],
) -> frozenset[int]:
    """
    Return every state from which some final state is reachable.

    The transition graph is reversed and a virtual root is wired to every final
    state, so one breadth-first search covers all of them.

    Args:
        table: Finalized transition table.
        final_states: Accepting states. They need not appear in the table.

    Returns:
        Frozenset of productive states, final states included.
    """
    finals = sorted(set(final_states))
    if not finals:
        return frozenset()

    index, graph = table.adjacency(extra_states=finals)
    states_by_index = {idx: state for state, idx in index.items()}
    n_states = len(index)
    root = n_states

    src, dst = graph.nonzero()
    final_idx = np.array([index[state] for state in finals], dtype=np.int64)
    row = np.concatenate([dst.astype(np.int64), np.full(final_idx.size, root, dtype=np.int64)])
    col = np.concatenate([src.astype(np.int64), final_idx])
    data = np.ones(row.size, dtype=np.int8)
    reverse = coo_matrix((data, (row, col)), shape=(n_states + 1, n_states + 1)).tocsr()

    order = breadth_first_order(reverse, root, directed=True, return_predecessors=False)
    return frozenset(states_by_index[int(idx)] for idx in order if idx != root)


def dead_states(
    table: TransitionTable,
    final_states: Iterable[int],
    extra_states: Iterable[int] = (),
) -> frozenset[int]:
    """Return the known states (table states plus ``extra_states``) that are not productive."""
    finals = set(final_states)
    known = table.states() | finals | set(extra_states)
    return frozenset(known - productive_states(table, finals))


class IncrementalDeadStates:
    """Order-dependent dead-state marks, updated one insertion at a time."""

    def __init__(self, final_states: Iterable[int]):
        self.final_states = frozenset(final_states)
        self.dead: set[int] = set()

    def check(self, table: TransitionTable, state: int) -> bool:
        """
        Search forward from ``state`` over the table as populated so far.

        Returns True if the state was marked dead by this check.
        """
        if not table.has_row(state) or state in self.final_states:
            return False

        visited: set[int] = set()
        queue = deque([state])
        queued = {state}
        while queue:
            current = queue.popleft()
            if current in self.final_states:
                return False
            visited.add(current)
            for next_state in table.successors(current).values():
                if next_state not in visited and next_state not in queued:
                    queue.append(next_state)
                    queued.add(next_state)

        self.dead.add(state)
        return True

    def __contains__(self, state: int) -> bool:
        return state in self.dead
