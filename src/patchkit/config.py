"""Configuration management for patchkit."""

import os
import json


DEFAULT_CONFIG = {
    "registry_url": "https://hex.pm",
    "user_agent": "patchkit-installer",
    "request_timeout": 30,
    "fetch_command": None,
    "environment": "dev",
}


def get_config_dir():
    """Directory holding config.json, overridable with PATCHKIT_CONFIG_DIR."""
    return os.environ.get("PATCHKIT_CONFIG_DIR") or os.path.expanduser("~/.patchkit")


def get_config_file():
    return os.path.join(get_config_dir(), "config.json")


def ensure_config_exists():
    """Ensure the configuration directory and file exist."""
    config_dir = get_config_dir()
    if not os.path.exists(config_dir):
        os.makedirs(config_dir)

    config_file = get_config_file()
    if not os.path.exists(config_file):
        with open(config_file, "w") as f:
            json.dump({}, f)


def get_config():
    """Get the current configuration, merged over the defaults.

    Returns:
        dict: Current configuration.
    """
    config = dict(DEFAULT_CONFIG)
    config_file = get_config_file()
    if os.path.exists(config_file):
        with open(config_file, "r") as f:
            config.update(json.load(f))
    return config


def update_config(updates):
    """Update the configuration file with new values.

    Args:
        updates (dict): Dictionary of configuration values to update.
    """
    ensure_config_exists()
    with open(get_config_file(), "r") as f:
        stored = json.load(f)
    stored.update(updates)

    with open(get_config_file(), "w") as f:
        json.dump(stored, f, indent=2)


def get_registry_url():
    """Get the package registry base URL.

    Returns:
        str: PATCHKIT_REGISTRY_URL if set, otherwise the configured URL.
    """
    url = os.environ.get("PATCHKIT_REGISTRY_URL") or get_config()["registry_url"]
    return url.rstrip("/")


def get_current_env():
    """Get the environment the installer runs in (dev, test, prod, ...).

    Returns:
        str: PATCHKIT_ENV if set, otherwise the configured environment.
    """
    return os.environ.get("PATCHKIT_ENV") or get_config()["environment"]


def get_fetch_command():
    """Get the command that fetches dependencies after the manifest changes."""
    return get_config().get("fetch_command")
