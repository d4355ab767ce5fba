from __future__ import annotations

from pyfa.core.build import build_automaton
from pyfa.core.types import AutomatonSummary
from pyfa.io.report import format_results, format_summary, verdict


def test_verdict() -> None:
    assert verdict(True) == "Accept"
    assert verdict(False) == "Reject"


def test_format_summary(binary_config) -> None:
    text = format_summary(build_automaton(binary_config).summary())

    assert text.splitlines() == [
        "Inputted Finite State Automaton Info:",
        "1) set of states: {state 0, state 1, state 2}, initial state is state 0.",
        "2) set of final state(s): {state 2}",
        "3) alphabet set: {0, 1}",
        "4) transitions:",
        "   0 0 0",
        "   0 1 1",
        "   1 0 2",
        "   1 1 0",
        "   2 0 2",
        "   2 1 1",
    ]


def test_format_summary_lists_dead_states() -> None:
    summary = AutomatonSummary(
        states=(0, 1),
        initial_state=0,
        final_states=(),
        alphabet=("a",),
        transitions=((0, "a", 1),),
        dead_states=(0, 1),
    )
    assert format_summary(summary).splitlines()[-1] == "5) dead state(s): {state 0, state 1}"


def test_format_results() -> None:
    text = format_results([("10", True), ("", False), ("Λ", True)])
    assert text.splitlines() == [
        "Results of test strings:",
        "10: Accept",
        "Λ: Reject",
        "Λ: Accept",
    ]
