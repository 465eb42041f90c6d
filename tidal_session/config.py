"""
tidal-session configuration system.

Priority order (highest to lowest):
1. Command-line arguments
2. Environment variables
3. Configuration file (YAML)
4. Default values
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)


# Valid log levels
VALID_LOG_LEVELS = {"debug", "info", "warning", "error"}

# Environment variable mappings
ENV_MAPPINGS = {
    # TIDAL
    "TIDAL_TOKEN": ("tidal", "token"),
    "TIDAL_USERNAME": ("tidal", "username"),
    "TIDAL_PASSWORD": ("tidal", "password"),
    # Logging
    "TIDALSESSION_LOG_LEVEL": ("logging", "level"),
}


class ConfigError(Exception):
    """Configuration error."""

    pass


@dataclass
class TidalConfig:
    """TIDAL account configuration."""

    token: str = ""  # Application token
    username: str = ""
    password: str = ""


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class Config:
    """Complete tidal-session configuration."""

    tidal: TidalConfig = field(default_factory=TidalConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def validate_config(config: Config) -> None:
    """
    Validate configuration.

    Raises:
        ConfigError: If configuration is invalid
    """
    errors = []

    # TIDAL credentials
    if not config.tidal.token:
        errors.append("TIDAL application token is required")
    if not config.tidal.username:
        errors.append("TIDAL username is required")
    if not config.tidal.password:
        errors.append("TIDAL password is required")

    # Logging
    if config.logging.level.lower() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid log level: {config.logging.level}. "
            f"Valid values: {sorted(VALID_LOG_LEVELS)}"
        )

    if errors:
        raise ConfigError("Configuration validation failed:\n  - " + "\n  - ".join(errors))


def load_yaml_config(path: Path) -> dict:
    """
    Load configuration from YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Configuration dictionary

    Raises:
        ConfigError: If file cannot be read or parsed
    """
    if not path.exists():
        logger.debug(f"Config file not found: {path}")
        return {}

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML config: {e}")
    except IOError as e:
        raise ConfigError(f"Error reading config file: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    return data


def _set_nested(d: dict, path: tuple, value: Any) -> None:
    """Set a nested dictionary value using a path tuple."""
    for key in path[:-1]:
        d = d.setdefault(key, {})
    d[path[-1]] = value


def load_env_config() -> dict:
    """
    Load configuration from environment variables.

    Returns:
        Configuration dictionary with values from environment
    """
    result: dict = {}

    for env_var, path in ENV_MAPPINGS.items():
        value = os.environ.get(env_var)
        if value is not None:
            _set_nested(result, path, value)

    return result


def _deep_merge(base: dict, override: dict) -> None:
    """Recursively merge override into base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


def merge_configs(*configs: dict) -> dict:
    """
    Deep merge multiple configuration dictionaries.
    Later configs override earlier ones.
    """
    result: dict = {}
    for config in configs:
        _deep_merge(result, config)
    return result


def dict_to_config(d: dict) -> Config:
    """Convert a dictionary to Config dataclass."""
    config = Config()

    # TIDAL
    if "tidal" in d:
        t = d["tidal"] or {}
        config.tidal.token = str(t.get("token", config.tidal.token) or "")
        config.tidal.username = str(t.get("username", config.tidal.username) or "")
        config.tidal.password = str(t.get("password", config.tidal.password) or "")

    # Logging
    if "logging" in d:
        config.logging.level = (d["logging"] or {}).get("level", config.logging.level)

    return config


def load_config(
    config_path: Optional[Path] = None,
    cli_args: Optional[dict] = None,
) -> Config:
    """
    Build a validated Config from the YAML file, environment and CLI arguments,
    later sources overriding earlier ones.

    Raises:
        ConfigError: If configuration is invalid
    """
    sources = [
        (str(config_path), load_yaml_config(config_path) if config_path else {}),
        ("environment", load_env_config()),
        ("command line", cli_args or {}),
    ]
    for name, values in sources:
        if values:
            logger.debug(f"Using settings from {name}: {sorted(values)}")

    config = dict_to_config(merge_configs(*(values for _, values in sources)))
    validate_config(config)
    return config
