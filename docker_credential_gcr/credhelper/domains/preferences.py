"""Persistent user preferences for docker-credential-gcr.

Preferences live next to the Cloud SDK's own configuration:
$CLOUDSDK_CONFIG/docker_credential_gcr_config.json, or
~/.config/gcloud/docker_credential_gcr_config.json when CLOUDSDK_CONFIG is unset.
"""
import os
import json
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "docker_credential_gcr_config.json"


def get_config_dir() -> Path:
    """
    Get the Cloud SDK configuration directory.

    Resolved on every call so changes to CLOUDSDK_CONFIG take effect immediately.
    """
    sdk_config = os.getenv("CLOUDSDK_CONFIG")
    if sdk_config:
        return Path(sdk_config)
    return Path.home() / ".config" / "gcloud"


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILENAME


def load_preferences() -> Dict[str, Any]:
    """
    Load preferences from the config file.

    The file is written as JSON. Content that is not valid JSON is retried
    as YAML so hand-edited files in either syntax are accepted.

    Returns:
        Dictionary of preferences, or empty dict if file doesn't exist

    Raises:
        ConfigError: If the file cannot be read or does not hold a mapping
    """
    config_path = get_config_path()
    if not config_path.exists():
        return {}

    try:
        with open(config_path, 'r') as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(f"Failed to read config file at {config_path}: {e}")

    if not content.strip():
        return {}

    try:
        preferences = json.loads(content)
    except json.JSONDecodeError as json_error:
        try:
            preferences = yaml.safe_load(content)
        except yaml.YAMLError:
            raise ConfigError(f"Failed to parse config file at {config_path}: {json_error}")
        logger.debug(f"Read {config_path} as YAML")

    if preferences is None:
        return {}
    if not isinstance(preferences, dict):
        raise ConfigError(f"Config file at {config_path} must contain a JSON object")
    return preferences


def save_preferences(preferences: Dict[str, Any]) -> None:
    """
    Save preferences to the config file.

    Args:
        preferences: Dictionary of preferences to save
    """
    config_path = get_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            json.dump(preferences, f, indent=2)
    except OSError as e:
        logger.error(f"Failed to save preferences to {config_path}: {e}")
        raise


def set_preference(key: str, value: Any) -> None:
    preferences = load_preferences()
    preferences[key] = value
    save_preferences(preferences)
    logger.info(f"Preference '{key}' set to: {value}")


def clear_preference(key: str) -> None:
    """Drop a single key so it falls back to its default."""
    preferences = load_preferences()
    if key not in preferences:
        logger.debug(f"'{key}' not set in {get_config_path()}")
        return
    del preferences[key]
    save_preferences(preferences)
    logger.info(f"Unset '{key}' in {get_config_path()}")


def clear_all_preferences() -> None:
    """Remove the config file, restoring every default."""
    config_path = get_config_path()
    try:
        config_path.unlink()
        logger.info(f"Removed config file {config_path}")
    except FileNotFoundError:
        logger.debug(f"Config file {config_path} not found, nothing to clear")
