"""Configuration management and validation."""

import copy
import yaml
import json
from pathlib import Path
from typing import Dict, Any, Union

from distmat.core.types import EngineConfig, ValidationResult
from distmat.core.exceptions import ConfigurationError
from distmat.modules.metrics import Metric

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def create_default_configuration() -> Dict[str, Any]:
    """
    Create default configuration.

    Returns:
        Default configuration dictionary
    """
    return {
        "distance": {
            "method": "identity"
        },
        "resources": {
            "threads": 0,
            "chunksize": None,
            "parallel_threshold": 500
        },
        "alignment": {
            "require_equal_length": True
        },
        "output": {
            "float_format": None
        },
        "logging": {
            "level": "INFO",
            "file": None
        }
    }


def load_configuration(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load and validate configuration from file.

    Values missing from the file are taken from the defaults.

    Args:
        config_path: Path to configuration file (YAML or JSON)

    Returns:
        Validated configuration dictionary

    Raises:
        ConfigurationError: Invalid configuration
        FileNotFoundError: Configuration file not found
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            if config_path.suffix.lower() in ['.yaml', '.yml']:
                config = yaml.safe_load(f)
            elif config_path.suffix.lower() == '.json':
                config = json.load(f)
            else:
                raise ConfigurationError(
                    f"Unsupported config file format: {config_path.suffix}", config_path
                )

    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Error parsing configuration file: {e}", config_path)

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigurationError("Configuration file must contain a mapping", config_path)

    try:
        return merge_configurations(create_default_configuration(), config)
    except ConfigurationError as e:
        raise ConfigurationError(str(e), config_path)


def validate_configuration_schema(config: Dict[str, Any]) -> ValidationResult:
    """
    Check configuration structure and values.

    Args:
        config: Configuration dictionary

    Returns:
        ValidationResult with validation status
    """
    errors = []
    warnings = []

    for section in ["distance", "resources", "alignment", "output", "logging"]:
        if section not in config:
            warnings.append(f"Missing '{section}' configuration - using defaults")
        elif not isinstance(config[section], dict):
            errors.append(f"'{section}' must be a dictionary")

    distance = config.get("distance")
    if isinstance(distance, dict) and "method" in distance:
        if str(distance["method"]).lower() not in [m.value for m in Metric]:
            errors.append(f"Unknown distance method: {distance['method']}")

    resources = config.get("resources")
    if isinstance(resources, dict):
        threads = resources.get("threads", 0)
        if not isinstance(threads, int) or isinstance(threads, bool):
            errors.append(f"'resources.threads' must be an integer, got {threads!r}")
        chunksize = resources.get("chunksize")
        if chunksize is not None and (not isinstance(chunksize, int) or chunksize < 1):
            errors.append(f"'resources.chunksize' must be a positive integer, got {chunksize!r}")
        threshold = resources.get("parallel_threshold", 0)
        if not isinstance(threshold, int) or threshold < 0:
            errors.append(
                f"'resources.parallel_threshold' must be a non-negative integer, got {threshold!r}"
            )

    alignment = config.get("alignment")
    if isinstance(alignment, dict):
        require_equal = alignment.get("require_equal_length", True)
        if not isinstance(require_equal, bool):
            errors.append(
                f"'alignment.require_equal_length' must be true or false, got {require_equal!r}"
            )

    output = config.get("output")
    if isinstance(output, dict):
        float_format = output.get("float_format")
        if float_format is not None and not isinstance(float_format, str):
            errors.append(f"'output.float_format' must be a string, got {float_format!r}")
        elif float_format is not None:
            try:
                float_format % 1.0
            except (TypeError, ValueError) as e:
                errors.append(f"Invalid 'output.float_format' {float_format!r}: {e}")

    logging_config = config.get("logging")
    if isinstance(logging_config, dict):
        level = logging_config.get("level", "INFO")
        if str(level).upper() not in LOG_LEVELS:
            errors.append(f"Invalid logging level: {level}")
        log_file = logging_config.get("file")
        if log_file is not None and not isinstance(log_file, str):
            errors.append(f"'logging.file' must be a path string, got {log_file!r}")

    return ValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
        details={"validation": "basic_checks_completed"}
    )


def merge_configurations(
    base_config: Dict[str, Any],
    override_config: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Merge configuration dictionaries with validation.

    Args:
        base_config: Base configuration
        override_config: Override parameters

    Returns:
        Merged configuration
    """
    def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries."""
        result = copy.deepcopy(base)
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    merged = merge_dicts(base_config, override_config)

    validation_result = validate_configuration_schema(merged)
    if not validation_result.is_valid:
        raise ConfigurationError(
            f"Configuration validation failed: {validation_result.errors}"
        )

    return merged


def save_configuration(config: Dict[str, Any], output_path: Union[str, Path]) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration dictionary
        output_path: Output file path

    Raises:
        ConfigurationError: Error saving configuration
    """
    output_path = Path(output_path)

    try:
        with open(output_path, 'w') as f:
            if output_path.suffix.lower() in ['.yaml', '.yml']:
                yaml.dump(config, f, default_flow_style=False, indent=2, sort_keys=False)
            elif output_path.suffix.lower() == '.json':
                json.dump(config, f, indent=2)
            else:
                raise ConfigurationError(
                    f"Unsupported output format: {output_path.suffix}", output_path
                )

    except (yaml.YAMLError, TypeError, OSError) as e:
        raise ConfigurationError(f"Error saving configuration: {e}", output_path)


def engine_config_from(config: Dict[str, Any]) -> EngineConfig:
    """Build the engine concurrency policy from the 'resources' section."""
    resources = config.get("resources", {})
    return EngineConfig(
        threads=resources.get("threads", 0),
        chunksize=resources.get("chunksize"),
        parallel_threshold=resources.get("parallel_threshold", 500)
    )
