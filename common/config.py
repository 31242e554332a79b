"""
Configuration management module for kube-preflight.

Reads config.yaml (or config.json) and provides key access via dot notation.
"""

import os
import json
from pathlib import Path
from typing import Any, Optional, Dict

import yaml


# Global configuration cache
_config: Optional[Dict[str, Any]] = None
_config_path: Optional[Path] = None

CONFIG_ENV_VAR = "KUBE_PREFLIGHT_CONFIG"


def get_config_path() -> Path:
    """
    Get the path to the configuration file.

    Priority order:
    1. KUBE_PREFLIGHT_CONFIG environment variable
    2. config.yaml in project root
    3. config.json in project root

    Returns:
        Path to the configuration file

    Raises:
        FileNotFoundError: If no configuration file is found
    """
    global _config_path

    if _config_path is not None:
        return _config_path

    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        config_file = Path(env_config)
        if config_file.exists():
            _config_path = config_file
            return _config_path
        raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to a missing file: {env_config}")

    project_root = Path(__file__).parent.parent

    yaml_config = project_root / "config.yaml"
    if yaml_config.exists():
        _config_path = yaml_config
        return _config_path

    json_config = project_root / "config.json"
    if json_config.exists():
        _config_path = json_config
        return _config_path

    raise FileNotFoundError(
        "Configuration file not found. "
        "Create config.yaml or config.json in the project root, "
        f"or set the {CONFIG_ENV_VAR} environment variable."
    )


def load_config() -> Dict[str, Any]:
    """
    Load configuration from file.

    When no configuration file exists in the project root, an empty dict is
    cached and the section helpers fall back to their built-in defaults.

    Returns:
        Dictionary containing configuration values

    Raises:
        FileNotFoundError: If KUBE_PREFLIGHT_CONFIG points to a missing file
        ValueError: If the configuration file cannot be parsed, is not a
                    mapping, or has an unsupported suffix
    """
    global _config

    if _config is not None:
        return _config

    try:
        config_path = get_config_path()
    except FileNotFoundError:
        if os.environ.get(CONFIG_ENV_VAR):
            raise
        _config = {}
        return _config

    with open(config_path, 'r', encoding='utf-8') as f:
        if config_path.suffix in ('.yaml', '.yml'):
            try:
                loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {config_path}: {e}") from e
        elif config_path.suffix == '.json':
            try:
                loaded = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {config_path}: {e}") from e
        else:
            raise ValueError(f"Unsupported config file format: {config_path.suffix}")

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Configuration in {config_path} must be a mapping")

    _config = loaded
    return _config


def get_config(key: str = None, default: Any = None) -> Any:
    """
    Get configuration value(s).

    Args:
        key: Configuration key using dot notation (e.g., "preflight.tools.ps").
             If None, returns the entire configuration dictionary.
        default: Default value to return if key is not found

    Returns:
        Configuration value or default if key not found

    Examples:
        >>> get_config("preflight.expected_version.major")
        '1'

        >>> get_config("nonexistent.key", "default_value")
        'default_value'
    """
    config = load_config()

    if key is None:
        return config

    keys = key.split('.')
    value = config

    for k in keys:
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return value


def use_config_file(path: str) -> Dict[str, Any]:
    """
    Load configuration from an explicit file, replacing the cached one.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file cannot be parsed
    """
    global _config, _config_path

    config_file = Path(path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    _config_path = config_file
    _config = None
    return load_config()


def _section(key: str, defaults: Dict[str, Any]) -> Dict[str, Any]:
    section = get_config(key, default={}) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Configuration section '{key}' must be a mapping")
    merged = dict(defaults)
    merged.update(section)
    return merged


def get_preflight_config() -> Dict[str, Any]:
    """
    Get pre-flight verification configuration.

    Returns:
        Dictionary with tool names, version arguments, expected version,
        binaries and config files to verify
    """
    return _section("preflight", {
        "tools": {"ps": "ps", "kubectl": "kubectl"},
        "version_args": ["version"],
        "expected_version": {"major": "", "minor": ""},
        "binaries": [],
        "config_files": [],
    })


def get_reporter_config() -> Dict[str, Any]:
    """Get diagnostic reporter configuration (severity colors)."""
    return _section("reporter", {
        "colors": {
            "PASS": "green",
            "FAIL": "red",
            "WARN": "yellow",
            "INFO": "blue",
        }
    })


def get_logging_config() -> Dict[str, Any]:
    """Get logging configuration."""
    return _section("logging", {
        "verbosity": 0,
        "log_file": "",
        "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    })
