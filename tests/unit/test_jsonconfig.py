"""
Tests for JSON configuration save/load.
"""

import json

import pytest

from pyfa.core.errors import MalformedConfigurationError
from pyfa.core.types import AutomatonConfig, TransitionSpec
from pyfa.io.jsonconfig import config_from_dict, config_to_dict, load_configs, save_configs


def test_config_to_dict(lowercase_config):
    data = config_to_dict(lowercase_config)

    assert data["initial_state"] == 0
    assert data["final_states"] == [1]
    assert data["alphabet"][0] == "a"
    assert data["alphabet"][-1] == "z"
    assert data["transitions"] == [{"state": 0, "symbol": "a", "next_state": 1, "range_end": "z"}]
    assert data["test_strings"] == []
    assert data["name"] is None


def test_config_from_dict_accepts_array_transitions():
    config = config_from_dict(
        {
            "initial_state": 0,
            "final_states": [2],
            "alphabet": ["0", "1"],
            "transitions": [[0, "1", 1], [1, "0", "1", 2]],
        }
    )

    assert config.transitions == (
        TransitionSpec(0, "1", 1),
        TransitionSpec(1, "0", 2, range_end="1"),
    )
    assert config.test_strings == ()


@pytest.mark.parametrize(
    "data, match",
    [
        ({"final_states": [], "alphabet": []}, "missing keys"),
        ({"initial_state": 0, "final_states": [], "alphabet": ["a"], "transitions": [[0, "a"]]}, "bad transition"),
        (
            {"initial_state": 0, "final_states": [], "alphabet": ["a"], "transitions": [{"state": 0}]},
            "bad transition",
        ),
        ({"initial_state": "0", "final_states": [], "alphabet": []}, "initial_state"),
        ([1, 2], "must be an object"),
        ({"initial_state": 0, "final_states": 2, "alphabet": []}, "final_states must be a list"),
        ({"initial_state": 0, "final_states": [], "alphabet": "ab"}, "alphabet must be a list"),
        ({"initial_state": 0, "final_states": [[1]], "alphabet": []}, "collections"),
        ({"initial_state": 0, "final_states": [], "alphabet": [], "name": 3}, "name must be a string"),
    ],
)
def test_config_from_dict_errors(data, match):
    with pytest.raises(MalformedConfigurationError, match=match):
        config_from_dict(data)


def test_save_and_load_configs(tmp_path, binary_config, lowercase_config):
    named = AutomatonConfig(
        initial_state=1,
        final_states={1},
        alphabet={"Λ", "x"},
        transitions=[TransitionSpec(1, "x", 1)],
        test_strings=["x", "Λ"],
        name="unicode",
    )
    path = tmp_path / "configs.json"

    save_configs([binary_config, lowercase_config, named], path)
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    assert isinstance(raw, list)
    assert len(raw) == 3

    loaded = load_configs(path)
    assert all(item.ok for item in loaded)
    assert [item.config for item in loaded] == [binary_config, lowercase_config, named]
    assert [item.name for item in loaded] == [None, None, "unicode"]


def test_load_single_object(tmp_path, binary_config):
    path = tmp_path / "single.json"
    path.write_text(json.dumps(config_to_dict(binary_config)), encoding="utf-8")

    loaded = load_configs(path)
    assert [item.config for item in loaded] == [binary_config]


def test_load_configs_isolates_bad_entries(tmp_path, binary_config, caplog):
    path = tmp_path / "mixed.json"
    good = config_to_dict(binary_config)
    good["name"] = "binary"
    broken = {"initial_state": 0, "final_states": [[1]], "alphabet": [], "name": "nested"}
    path.write_text(json.dumps([[1, 2], good, broken]), encoding="utf-8")

    with caplog.at_level("WARNING", logger="pyfa.io.jsonconfig"):
        loaded = load_configs(path)

    assert [item.index for item in loaded] == [0, 1, 2]
    assert [item.ok for item in loaded] == [False, True, False]
    assert isinstance(loaded[0].error, MalformedConfigurationError)
    assert loaded[0].name is None
    assert loaded[1].config.transitions == binary_config.transitions
    assert loaded[1].name == "binary"
    assert isinstance(loaded[2].error, MalformedConfigurationError)
    assert loaded[2].name == "nested"
    assert "skipping automaton 0" in caplog.text
    assert "skipping automaton 2" in caplog.text


def test_load_configs_rejects_scalar_top_level(tmp_path):
    path = tmp_path / "scalar.json"
    path.write_text("3", encoding="utf-8")

    with pytest.raises(MalformedConfigurationError, match="expected a config object"):
        load_configs(path)
