"""
Configuration loader
"""
import tomllib
from pathlib import Path

import yaml
from pydantic import ValidationError

from leaderboard.models import Settings


VERSION = "0.3.0"
DEFAULT_CONFIG_PATH = "/etc/leaderboard/leaderboard.yaml"


class ConfigError(Exception):
    """Configuration file missing, unreadable or invalid"""


def _read_document(path: Path) -> dict:
    if path.suffix.lower() == ".toml":
        with open(path, 'rb') as f:
            return tomllib.load(f)
    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Settings:
    """
    Load configuration from a YAML (or .toml) file

    Args:
        config_path: Path to config file

    Returns:
        Settings object

    Raises:
        ConfigError: If the file is missing, cannot be parsed or fails validation
    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        data = _read_document(path)
    except (OSError, yaml.YAMLError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot parse config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e
