"""Plain-text rendering of automaton summaries and acceptance results."""

from __future__ import annotations

from typing import Iterable

from pyfa.core.types import EMPTY_STRING, AutomatonSummary


def _state_set(states: Iterable[int]) -> str:
    return "{" + ", ".join(f"state {state}" for state in states) + "}"


def verdict(accepted: bool) -> str:
    return "Accept" if accepted else "Reject"


def format_summary(summary: AutomatonSummary) -> str:
    lines = [
        "Inputted Finite State Automaton Info:",
        f"1) set of states: {_state_set(summary.states)}, "
        f"initial state is state {summary.initial_state}.",
        f"2) set of final state(s): {_state_set(summary.final_states)}",
        "3) alphabet set: {" + ", ".join(summary.alphabet) + "}",
        "4) transitions:",
    ]
    lines.extend(f"   {state} {symbol} {next_state}" for state, symbol, next_state in summary.transitions)
    if summary.dead_states:
        lines.append(f"5) dead state(s): {_state_set(summary.dead_states)}")
    return "\n".join(lines)


def format_results(results: Iterable[tuple[str, bool]]) -> str:
    lines = ["Results of test strings:"]
    for word, accepted in results:
        shown = word if word else EMPTY_STRING
        lines.append(f"{shown}: {verdict(accepted)}")
    return "\n".join(lines)
