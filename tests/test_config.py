import json

import pytest
import yaml

from distmat.core.exceptions import ConfigurationError
from distmat.core.types import EngineConfig
from distmat.utils.config import (
    create_default_configuration, engine_config_from, load_configuration,
    merge_configurations, save_configuration, validate_configuration_schema
)


def test_default_configuration_is_valid():
    result = validate_configuration_schema(create_default_configuration())
    assert result.is_valid
    assert not result.warnings

def test_load_partial_yaml_fills_defaults(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("distance:\n  method: hamming\nresources:\n  threads: 2\n")
    config = load_configuration(path)
    assert config["distance"]["method"] == "hamming"
    assert config["resources"]["threads"] == 2
    assert config["resources"]["parallel_threshold"] == 500
    assert config["alignment"]["require_equal_length"] is True

def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "cfg.yml"
    path.write_text("")
    assert load_configuration(path) == create_default_configuration()

def test_save_and_load_round_trip(tmp_path):
    config = create_default_configuration()
    config["distance"]["method"] = "similarity"
    for name in ["cfg.yaml", "cfg.json"]:
        save_configuration(config, tmp_path / name)
        assert load_configuration(tmp_path / name) == config

def test_saved_yaml_is_readable(tmp_path):
    save_configuration(create_default_configuration(), tmp_path / "cfg.yaml")
    with open(tmp_path / "cfg.yaml") as f:
        assert yaml.safe_load(f)["distance"]["method"] == "identity"

def test_unknown_method_rejected(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"distance": {"method": "jaccard"}}))
    with pytest.raises(ConfigurationError) as excinfo:
        load_configuration(path)
    assert excinfo.value.config_path == path

def test_invalid_values_reported():
    config = create_default_configuration()
    config["resources"]["threads"] = "many"
    config["resources"]["chunksize"] = 0
    config["logging"]["level"] = "LOUD"
    result = validate_configuration_schema(config)
    assert not result.is_valid
    assert len(result.errors) == 3

def test_unsupported_format(tmp_path):
    path = tmp_path / "cfg.toml"
    path.write_text("")
    with pytest.raises(ConfigurationError):
        load_configuration(path)

def test_malformed_yaml(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("distance: [unclosed\n")
    with pytest.raises(ConfigurationError):
        load_configuration(path)

def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_configuration(tmp_path / "nope.yaml")

def test_merge_does_not_modify_base():
    base = create_default_configuration()
    merged = merge_configurations(base, {"resources": {"threads": 3}})
    assert merged["resources"]["threads"] == 3
    assert base["resources"]["threads"] == 0

def test_engine_config_from():
    config = merge_configurations(
        create_default_configuration(),
        {"resources": {"threads": 2, "chunksize": 10, "parallel_threshold": 0}}
    )
    assert engine_config_from(config) == EngineConfig(threads=2, chunksize=10, parallel_threshold=0)

@pytest.mark.parametrize("section,key,value", [
    ("alignment", "require_equal_length", "false"),
    ("alignment", "require_equal_length", 0),
    ("output", "float_format", "%q"),
    ("output", "float_format", "%.2f %s"),
    ("output", "float_format", 2),
    ("logging", "file", 42),
])
def test_invalid_alignment_output_and_logging_values(section, key, value):
    config = create_default_configuration()
    config[section][key] = value
    result = validate_configuration_schema(config)
    assert not result.is_valid
    assert len(result.errors) == 1

def test_valid_float_format_and_log_file():
    config = create_default_configuration()
    config["output"]["float_format"] = "%.4f"
    config["logging"]["file"] = "distmat.log"
    config["alignment"]["require_equal_length"] = False
    assert validate_configuration_schema(config).is_valid

def test_string_boolean_rejected_on_load(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"alignment": {"require_equal_length": "false"}}))
    with pytest.raises(ConfigurationError):
        load_configuration(path)
