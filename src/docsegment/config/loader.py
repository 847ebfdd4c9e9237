"""YAML configuration loading and validation."""

import yaml
from pathlib import Path
from typing import Union
from .schema import PreprocessorConfig


class ConfigLoadError(Exception):
    """Exception raised when configuration loading or validation fails."""
    pass


def _build_config(data, source: str) -> PreprocessorConfig:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigLoadError(f"{source} must contain a YAML mapping, got {type(data)}")

    try:
        config = PreprocessorConfig.model_validate(data)
    except Exception as e:
        raise ConfigLoadError(f"Config validation failed: {e}")

    return config


def load_config(path: Union[str, Path]) -> PreprocessorConfig:
    """
    Load and validate segmentation options from a YAML file.

    Args:
        path: Path to YAML config file

    Returns:
        PreprocessorConfig: Validated configuration

    Raises:
        ConfigLoadError: If file cannot be read or the config is invalid
    """
    path = Path(path)

    if not path.exists():
        raise ConfigLoadError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}")
    except Exception as e:
        raise ConfigLoadError(f"Cannot read config file {path}: {e}")

    return _build_config(data, f"Config file {path}")


def load_config_from_string(yaml_content: str) -> PreprocessorConfig:
    """
    Load and validate segmentation options from a YAML string.

    Raises:
        ConfigLoadError: If YAML is invalid or validation fails
    """
    try:
        data = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML content: {e}")

    return _build_config(data, "Config content")
