"""Batch evaluation: parse every automaton in a source, build it, run its test strings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from pyfa.core.build import build_automaton
from pyfa.core.errors import AutomatonError
from pyfa.core.types import AutomatonSummary
from pyfa.io.jsonconfig import load_configs
from pyfa.io.parser import ParsedAutomaton, parse_config_file, parse_config_text
from pyfa.io.report import format_results, format_summary

logger = logging.getLogger(__name__)


@dataclass
class AutomatonRun:
    index: int
    name: Optional[str] = None
    summary: Optional[AutomatonSummary] = None
    results: list[tuple[str, bool]] = field(default_factory=list)
    error: Optional[AutomatonError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_parsed(parsed: list[ParsedAutomaton], dead_state_policy: str = "exact") -> list[AutomatonRun]:
    runs = []
    for item in parsed:
        if item.config is None:
            runs.append(AutomatonRun(item.index, name=item.name, error=item.error))
            continue

        config = item.config
        try:
            automaton = build_automaton(config, dead_state_policy=dead_state_policy)
        except AutomatonError as exc:
            logger.warning("skipping automaton %d: %s", item.index, exc)
            runs.append(AutomatonRun(item.index, name=config.name, error=exc))
            continue

        results = [(word, automaton.accepts(word)) for word in config.test_strings]
        runs.append(
            AutomatonRun(item.index, name=config.name, summary=automaton.summary(), results=results)
        )
    return runs


def run_text(text: str, dead_state_policy: str = "exact") -> list[AutomatonRun]:
    return run_parsed(parse_config_text(text), dead_state_policy=dead_state_policy)


def run_file(path: Union[str, Path], dead_state_policy: str = "exact") -> list[AutomatonRun]:
    """Run a text configuration file, or a JSON one when the suffix is ``.json``."""
    if Path(path).suffix.lower() == ".json":
        parsed = load_configs(path)
    else:
        parsed = parse_config_file(path)
    return run_parsed(parsed, dead_state_policy=dead_state_policy)


def render_run(run: AutomatonRun) -> str:
    title = f"Automaton {run.index}" + (f" ({run.name})" if run.name else "")
    if run.error is not None:
        return f"{title}: error: {run.error}"
    return "\n".join([title, format_summary(run.summary), format_results(run.results)])


def render_runs(runs: list[AutomatonRun]) -> str:
    return "\n\n".join(render_run(run) for run in runs)
