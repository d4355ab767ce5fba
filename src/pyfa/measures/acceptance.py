"""
Acceptance measures over batches of words.

Provides acceptance vectors, agreement between two automata, and a confusion
matrix against expected labels.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from pyfa.core.automaton import Automaton


def acceptance_vector(automaton: Automaton, words: Sequence[str]) -> np.ndarray:
    return automaton.accepts_many(words)


def agreement_rate(
    automaton_a: Automaton,
    automaton_b: Automaton,
    words: Sequence[str],
) -> float:
    if not words:
        raise ValueError("words must not be empty")

    verdicts_a = acceptance_vector(automaton_a, words)
    verdicts_b = acceptance_vector(automaton_b, words)
    return float(np.mean(verdicts_a == verdicts_b))


def acceptance_confusion_matrix(
    automaton: Automaton,
    words: Sequence[str],
    expected: Sequence[bool],
) -> np.ndarray:
    """
    Count predicted against expected verdicts.

    Rows are expected, columns predicted; index 0 is reject, 1 is accept.
    """
    if len(words) != len(expected):
        raise ValueError("words and expected must have same length")
    if not words:
        raise ValueError("words must not be empty")

    predicted = acceptance_vector(automaton, words).astype(np.int64)
    truth = np.asarray(expected, dtype=bool).astype(np.int64)

    matrix = np.zeros((2, 2), dtype=np.int64)
    np.add.at(matrix, (truth, predicted), 1)
    return matrix
