"""
Configuration management utilities for the adcraft package.

Configuration Hierarchy:
1. Default configuration (adcraft/core/default_config.json) - Base settings for all installations
2. User configuration (~/.adcraft/config.json) - User-specific overrides that persist across runs
3. Environment overrides - ADCRAFT_PROVIDER, STORAGE_PATH, ADCRAFT_LOG_LEVEL
4. Runtime overrides - Temporary changes made via set_config_value(..., save=False)
"""

import os
import json
from typing import Dict, Any

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.json")
USER_CONFIG_PATH = os.path.expanduser("~/.adcraft/config.json")

# Environment variable -> dotted config key
ENV_OVERRIDES = {
    "ADCRAFT_PROVIDER": "providers.kind",
    "STORAGE_PATH": "storage.path",
    "ADCRAFT_LOG_LEVEL": "logging.level",
}

# Configuration singleton
_config_cache = {}

def get_config(reload: bool = False) -> Dict[str, Any]:
    """
    Get the configuration dictionary, loading it if necessary.

    Args:
        reload (bool): Force reload the configuration even if cached

    Returns:
        Dict[str, Any]: The configuration dictionary
    """
    global _config_cache

    if not _config_cache or reload:
        _config_cache = load_config()

    return _config_cache

def load_config() -> Dict[str, Any]:
    """
    Load configuration from default and user-specific files.

    The default configuration is loaded first, the user configuration is deep
    merged over it, and finally environment overrides are applied.

    Returns:
        Dict[str, Any]: The merged configuration dictionary
    """
    config = {}

    if os.path.exists(DEFAULT_CONFIG_PATH):
        with open(DEFAULT_CONFIG_PATH, 'r') as f:
            config.update(json.load(f))

    if os.path.exists(USER_CONFIG_PATH):
        with open(USER_CONFIG_PATH, 'r') as f:
            deep_merge(config, json.load(f))

    for env_var, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            _set_nested(config, key, value)

    return config

def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """
    Recursively merge override dictionary into base dictionary.

    If a key exists in both dictionaries and both values are dictionaries,
    they are merged recursively; otherwise the override value wins.

    Args:
        base (Dict[str, Any]): Base dictionary to be updated
        override (Dict[str, Any]): Dictionary with values to override
    """
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value

def _set_nested(config: Dict[str, Any], key: str, value: Any) -> None:
    parts = key.split('.')
    current = config
    for part in parts[:-1]:
        if part not in current or not isinstance(current[part], dict):
            current[part] = {}
        current = current[part]
    current[parts[-1]] = value

def get_config_value(key: str, default: Any = None) -> Any:
    """
    Get a specific configuration value by key.

    Dot notation accesses nested values, e.g. 'providers.timeout' reads
    config['providers']['timeout'].

    Examples:
        >>> get_config_value('providers.kind', 'local')
        'openrouter'  # If the value exists in the configuration

        >>> get_config_value('nonexistent.key', 'default-value')
        'default-value'

    Args:
        key (str): The configuration key (can use dot notation for nested keys)
        default (Any): Default value if key is not found

    Returns:
        Any: The configuration value or default
    """
    current = get_config()

    for part in key.split('.'):
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            return default

    return current

def set_config_value(key: str, value: Any, save: bool = True) -> None:
    """
    Set a specific configuration value by key.

    Intermediate dictionaries are created as needed. With ``save=False`` the
    change only lives for the current process; otherwise the key is also
    written to the user configuration file, leaving its other keys alone.

    Args:
        key (str): The configuration key (can use dot notation for nested keys)
        value (Any): The value to set
        save (bool): Whether to save the updated configuration to disk
    """
    _set_nested(get_config(), key, value)

    if save:
        user_config = {}
        if os.path.exists(USER_CONFIG_PATH):
            with open(USER_CONFIG_PATH, 'r') as f:
                user_config = json.load(f)

        _set_nested(user_config, key, value)

        os.makedirs(os.path.dirname(USER_CONFIG_PATH), exist_ok=True)
        with open(USER_CONFIG_PATH, 'w') as f:
            json.dump(user_config, f, indent=2)
