"""
Configuration utilities for the asanacli tool.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from ..asana_api.errors import ConfigError

ENV_FILE_NAME = ".asanacli.env"
CONFIG_FILE_NAME = "config.json"
DEFAULT_BASE_URL = "https://app.asana.com/api/1.0"
DEFAULT_TIMEOUT = 30.0

_TRUTHY = {"1", "true", "yes", "on"}

# Keyed by config file path so a changed ASANACLI_HOME is picked up.
_config_cache: Dict[str, Dict[str, Any]] = {}


def load_env_vars() -> None:
    """
    Load environment variables from .env files in the following order:
    1. .asanacli.env in the current directory
    2. .asanacli.env in the user's home directory
    """
    if os.path.exists(ENV_FILE_NAME):
        load_dotenv(ENV_FILE_NAME)

    home_env = Path.home() / ENV_FILE_NAME
    if home_env.exists():
        load_dotenv(home_env)


def get_config_dir() -> Path:
    return Path(os.getenv("ASANACLI_HOME", str(Path.home() / ".asanacli")))


def _config_path() -> Path:
    return get_config_dir() / CONFIG_FILE_NAME


def get_config() -> Dict[str, Any]:
    """
    Loads remembered settings from config.json in the config directory.
    Caches them for quick subsequent access.
    """
    config_path = _config_path()
    key = str(config_path)
    if key in _config_cache:
        return _config_cache[key]

    config_dict: Dict[str, Any] = {}
    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as cf:
                config_dict.update(json.load(cf))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Could not decode JSON from {config_path}: {e}") from e

    _config_cache[key] = config_dict
    return config_dict


def save_config(new_config: Dict[str, Any]) -> None:
    """
    Merges the provided values into config.json, keeping unrelated keys.
    """
    config_path = _config_path()
    current_config = dict(get_config())
    current_config.update(new_config)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as cf:
        json.dump(current_config, cf, indent=4)

    _config_cache.pop(str(config_path), None)


def get_access_token() -> Optional[str]:
    return os.getenv("ASANA_ACCESS_TOKEN")


def get_base_url() -> str:
    return os.getenv("ASANA_BASE_URL", DEFAULT_BASE_URL)


def get_timeout() -> float:
    """Request timeout in seconds, from ASANA_TIMEOUT."""
    raw = os.getenv("ASANA_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigError(f"ASANA_TIMEOUT must be a number of seconds, got '{raw}'")
    if timeout <= 0:
        raise ConfigError(f"ASANA_TIMEOUT must be positive, got '{raw}'")
    return timeout


def signature_enabled() -> bool:
    """Whether to append the signature to task notes.

    ASANACLI_SIGNATURE wins over the remembered ``signature`` setting.
    """
    raw = os.getenv("ASANACLI_SIGNATURE")
    if raw is not None:
        return raw.strip().lower() in _TRUTHY
    return bool(get_config().get("signature", False))
