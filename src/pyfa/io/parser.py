"""
Configuration text parsing.

Two textual layouts are understood:

Block layout, any number of automata per source::

    FA: optional name
    0            <- initial state
    2            <- final states, comma separated
    01           <- alphabet, one symbol per character
    0, 0, 0      <- transitions: state, symbol or range, next state
    0, 1, 1
    END
    10           <- test strings, Λ for the empty string
    END

Keyed layout, one automaton per source::

    num_states: 3
    initial_state: 0
    final_states: 2
    alphabet: a-z, 0
    transitions:
    0, a-z, 1
    test_strings:
    abc

A malformed block is reported on its own ParsedAutomaton and never stops the
blocks after it from being parsed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

from pyfa.core.errors import MalformedConfigurationError
from pyfa.core.table import expand_symbol_range, parse_symbol_spec
from pyfa.core.types import AutomatonConfig, TransitionSpec

logger = logging.getLogger(__name__)

BLOCK_START = "FA:"
BLOCK_END = "END"
KEYED_HEADERS = (
    "num_states:",
    "initial_state:",
    "final_states:",
    "alphabet:",
    "transitions:",
    "test_strings:",
)


@dataclass
class ParsedAutomaton:
    """Outcome of parsing one automaton: a config, or the error that stopped it."""

    index: int
    config: Optional[AutomatonConfig] = None
    error: Optional[MalformedConfigurationError] = None
    name: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _parse_int(text: str, what: str, line_number: int) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise MalformedConfigurationError(
            f"{what} must be an integer, got {text.strip()!r}", line_number
        ) from None


def _parse_state_list(text: str, line_number: int) -> frozenset[int]:
    items = [item for item in text.split(",") if item.strip()]
    return frozenset(_parse_int(item, "final state", line_number) for item in items)


def parse_transition_line(line: str, line_number: int) -> TransitionSpec:
    """Parse ``state, symbol-or-range, next_state``."""
    parts = [part.strip() for part in line.split(",")]
    if len(parts) != 3:
        raise MalformedConfigurationError(
            f"transition needs 'state, symbol, next_state', got {line.strip()!r}", line_number
        )

    state = _parse_int(parts[0], "transition state", line_number)
    next_state = _parse_int(parts[2], "transition next state", line_number)
    try:
        start, end = parse_symbol_spec(parts[1])
        range_end = None if len(parts[1]) == 1 else end
        return TransitionSpec(state, start, next_state, range_end)
    except MalformedConfigurationError as exc:
        raise MalformedConfigurationError(str(exc), line_number) from None


def _parse_block_alphabet(text: str) -> frozenset[str]:
    return frozenset(char for char in text.strip() if not char.isspace())


def _parse_keyed_alphabet(text: str, line_number: int) -> frozenset[str]:
    symbols: set[str] = set()
    for item in "".join(text.split()).split(","):
        if not item:
            continue
        try:
            start, end = parse_symbol_spec(item)
        except MalformedConfigurationError as exc:
            raise MalformedConfigurationError(str(exc), line_number) from None
        symbols.update(expand_symbol_range(start, end))
    return frozenset(symbols)


def _parse_block(
    cursor: Iterator[tuple[int, str]],
    name: Optional[str],
    start_line: int,
) -> AutomatonConfig:
    """
    Parse one block, consuming lines from ``cursor`` up to its second ``END``.

    ``start_line`` is the number of the ``FA:`` line, used when input runs out.
    """

    def next_line(what: str) -> tuple[int, str]:
        try:
            return next(cursor)
        except StopIteration:
            raise MalformedConfigurationError(
                f"unexpected end of input, expected {what}", start_line
            ) from None

    line_number, text = next_line("initial state")
    initial_state = _parse_int(text, "initial state", line_number)
    line_number, text = next_line("final states")
    final_states = _parse_state_list(text, line_number)
    _, text = next_line("alphabet")
    alphabet = _parse_block_alphabet(text)

    transitions = []
    while True:
        line_number, text = next_line(f"transition or {BLOCK_END}")
        if text.strip() == BLOCK_END:
            break
        if not text.strip():
            continue
        transitions.append(parse_transition_line(text, line_number))

    test_strings = []
    while True:
        line_number, text = next_line(f"test string or {BLOCK_END}")
        if text.strip() == BLOCK_END:
            break
        if text.strip():
            test_strings.append(text.strip())

    return AutomatonConfig(
        initial_state=initial_state,
        final_states=final_states,
        alphabet=alphabet,
        transitions=transitions,
        test_strings=test_strings,
        name=name,
    )


def parse_block_text(text: str) -> list[ParsedAutomaton]:
    """
    Parse every ``FA:`` block in ``text``.

    ``FA:`` is only recognized between blocks; inside a block every line up
    to the second ``END`` belongs to that block. Lines between blocks are
    ignored. After a malformed line, scanning resumes at the next ``FA:``.
    """
    results = []
    cursor = iter(enumerate(text.splitlines(), start=1))
    for line_number, line in cursor:
        if not line.startswith(BLOCK_START):
            continue

        index = len(results)
        name = line[len(BLOCK_START):].strip() or None
        try:
            config = _parse_block(cursor, name, line_number)
        except MalformedConfigurationError as exc:
            logger.warning("skipping automaton %d: %s", index, exc)
            results.append(ParsedAutomaton(index, error=exc, name=name))
        else:
            results.append(ParsedAutomaton(index, config=config, name=name))
    return results


def _parse_keyed(text: str) -> AutomatonConfig:
    initial_state = 0
    final_states: Optional[frozenset[int]] = None
    alphabet: Optional[frozenset[str]] = None
    transitions = []
    test_strings = []
    section = None

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if line.startswith("num_states:"):
            continue
        if line.startswith("initial_state:"):
            initial_state = _parse_int(line.split(":", 1)[1], "initial state", line_number)
        elif line.startswith("final_states:"):
            final_states = _parse_state_list(line.split(":", 1)[1], line_number)
        elif line.startswith("alphabet:"):
            alphabet = _parse_keyed_alphabet(line.split(":", 1)[1], line_number)
        elif line.startswith("transitions:"):
            section = "transitions"
        elif line.startswith("test_strings:"):
            section = "test_strings"
        elif not line:
            continue
        elif section == "transitions":
            transitions.append(parse_transition_line(line, line_number))
        elif section == "test_strings":
            test_strings.append(line)
        else:
            raise MalformedConfigurationError(f"unexpected line {line!r}", line_number)

    if final_states is None:
        raise MalformedConfigurationError("missing final_states section")
    if alphabet is None:
        raise MalformedConfigurationError("missing alphabet section")

    return AutomatonConfig(
        initial_state=initial_state,
        final_states=final_states,
        alphabet=alphabet,
        transitions=transitions,
        test_strings=test_strings,
    )


def parse_keyed_text(text: str) -> list[ParsedAutomaton]:
    try:
        return [ParsedAutomaton(0, config=_parse_keyed(text))]
    except MalformedConfigurationError as exc:
        logger.warning("skipping automaton 0: %s", exc)
        return [ParsedAutomaton(0, error=exc)]


def detect_format(text: str) -> str:
    """Return "block" or "keyed"."""
    lines = text.splitlines()
    if any(line.startswith(BLOCK_START) for line in lines):
        return "block"
    if any(line.strip().startswith(KEYED_HEADERS) for line in lines):
        return "keyed"
    raise MalformedConfigurationError("no automaton configuration found")


def parse_config_text(text: str) -> list[ParsedAutomaton]:
    """Parse configuration text in either layout."""
    if detect_format(text) == "block":
        return parse_block_text(text)
    return parse_keyed_text(text)


def parse_config_file(path: Union[str, Path]) -> list[ParsedAutomaton]:
    """
    Parse a configuration file.

    Raises:
        FileNotFoundError: If path does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"configuration file not found: {path}")
    return parse_config_text(path.read_text(encoding="utf-8"))
