"""CLI configuration persistence helpers."""

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ecsctl.cli.configuration.models import CliConfig
from ecsctl.config.paths import cli_config_path
from ecsctl.errors import ConfigError

SETTABLE_KEYS = (
    "aws.region",
    "aws.profile",
    "session.aws_cli",
    "session.port_forward_document",
)


def load_config() -> CliConfig:
    """Read the persisted configuration, or defaults when no file exists.

    Raises:
        ConfigError: When the file is unreadable, not a JSON object, or holds
            invalid values.
    """
    path = cli_config_path()
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return CliConfig()
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration file {path}: {exc}") from exc

    try:
        return CliConfig.model_validate_json(raw)
    except ValidationError as exc:
        problems = "; ".join(_describe(error) for error in exc.errors())
        raise ConfigError(f"Invalid configuration file {path}: {problems}") from exc


def save_config(config: CliConfig) -> Path:
    """Write the configuration and return the file it was written to."""
    path = cli_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(config.model_dump_json(indent=2) + "\n", encoding="utf-8")
    return path


def _describe(error: Any) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error['msg']}" if location else str(error["msg"])


def set_config_value(config: CliConfig, key: str, value: str | None) -> CliConfig:
    """Return a copy of the configuration with one dotted key updated.

    Args:
        config: Current configuration.
        key: One of ``SETTABLE_KEYS``.
        value: New value; empty or ``None`` resets optional AWS values.

    Returns:
        The updated configuration.
    """
    if key not in SETTABLE_KEYS:
        raise ConfigError(
            f"Unknown configuration key '{key}'. Use one of: {', '.join(SETTABLE_KEYS)}."
        )

    section, field = key.split(".", 1)
    data = config.model_dump(mode="json")
    if not value:
        if section != "aws":
            raise ConfigError(f"Configuration key '{key}' cannot be empty.")
        value = None
    data[section][field] = value

    try:
        return CliConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc
