"""Shared filesystem paths for user configuration."""

import os
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "ecsctl"
CLI_CONFIG_FILENAME = "config.json"
CONFIG_PATH_ENV = "ECSCTL_CONFIG"


def config_dir() -> Path:
    """Return the user configuration directory.

    Returns:
        The user configuration directory path.
    """
    return Path(user_config_dir(APP_NAME))


def cli_config_path() -> Path:
    """Return the CLI configuration file path.

    ``ECSCTL_CONFIG`` overrides the default location.

    Returns:
        The CLI configuration file path.
    """
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return config_dir() / CLI_CONFIG_FILENAME
