"""CLI configuration package."""

from ecsctl.cli.configuration.models import AwsConfig, CliConfig, SessionConfig
from ecsctl.cli.configuration.store import load_config, save_config, set_config_value

__all__ = [
    "AwsConfig",
    "CliConfig",
    "SessionConfig",
    "load_config",
    "save_config",
    "set_config_value",
]
