"""JSON encoding of AutomatonConfig (save/load lists of configurations)."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Union

from pyfa.core.errors import MalformedConfigurationError
from pyfa.core.types import AutomatonConfig, TransitionSpec
from pyfa.io.parser import ParsedAutomaton

logger = logging.getLogger(__name__)


def config_to_dict(config: AutomatonConfig) -> dict[str, Any]:
    return {
        "name": config.name,
        "initial_state": config.initial_state,
        "final_states": sorted(config.final_states),
        "alphabet": sorted(config.alphabet),
        "transitions": [asdict(transition) for transition in config.transitions],
        "test_strings": list(config.test_strings),
    }


def _transition_from_json(item: Any) -> TransitionSpec:
    if isinstance(item, dict):
        try:
            return TransitionSpec(**item)
        except TypeError as exc:
            raise MalformedConfigurationError(f"bad transition entry {item!r}: {exc}") from None
    if isinstance(item, (list, tuple)):
        if len(item) == 3:
            state, symbol, next_state = item
            return TransitionSpec(state, symbol, next_state)
        if len(item) == 4:
            state, start, end, next_state = item
            return TransitionSpec(state, start, next_state, range_end=end)
    raise MalformedConfigurationError(f"bad transition entry {item!r}")


def _list_field(data: dict[str, Any], key: str, default: Any = None) -> list:
    value = data.get(key, default)
    if not isinstance(value, list):
        raise MalformedConfigurationError(f"{key} must be a list, got {type(value).__name__}")
    return value


def config_from_dict(data: Any) -> AutomatonConfig:
    """
    Rebuild an AutomatonConfig.

    Transitions may be objects with TransitionSpec fields, or arrays
    ``[state, symbol, next]`` / ``[state, start, end, next]``.

    Raises:
        MalformedConfigurationError: If ``data`` is not an object, misses a
            required key, or holds a field of the wrong shape.
    """
    if not isinstance(data, dict):
        raise MalformedConfigurationError(f"config must be an object, got {type(data).__name__}")

    missing = {"initial_state", "final_states", "alphabet"} - set(data)
    if missing:
        raise MalformedConfigurationError(f"config missing keys: {sorted(missing)}")

    name = data.get("name")
    if name is not None and not isinstance(name, str):
        raise MalformedConfigurationError(f"name must be a string, got {type(name).__name__}")

    return AutomatonConfig(
        initial_state=data["initial_state"],
        final_states=_list_field(data, "final_states"),
        alphabet=_list_field(data, "alphabet"),
        transitions=[_transition_from_json(item) for item in _list_field(data, "transitions", [])],
        test_strings=_list_field(data, "test_strings", []),
        name=name,
    )


def save_configs(configs: list[AutomatonConfig], path: Union[str, Path]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump([config_to_dict(config) for config in configs], f, indent=2, ensure_ascii=False)


def load_configs(path: Union[str, Path]) -> list[ParsedAutomaton]:
    """
    Load every configuration in a JSON file.

    The file holds one config object or a list of them. Each entry is decoded
    on its own, so a malformed entry is reported on its ParsedAutomaton and the
    entries after it are still loaded.

    Raises:
        MalformedConfigurationError: If the top level is neither an object nor a list.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise MalformedConfigurationError(
            f"expected a config object or a list of them, got {type(data).__name__}"
        )

    results = []
    for index, item in enumerate(data):
        name = item.get("name") if isinstance(item, dict) else None
        if not isinstance(name, str):
            name = None
        try:
            config = config_from_dict(item)
        except MalformedConfigurationError as exc:
            logger.warning("skipping automaton %d: %s", index, exc)
            results.append(ParsedAutomaton(index, error=exc, name=name))
        else:
            results.append(ParsedAutomaton(index, config=config, name=config.name))
    return results
