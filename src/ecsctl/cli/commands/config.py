"""Configuration commands."""

import json

import click
from rich.markup import escape

from ecsctl.cli.configuration.models import CliConfig
from ecsctl.cli.configuration.store import SETTABLE_KEYS, save_config, set_config_value
from ecsctl.cli.context import CliContext
from ecsctl.cli.ui import console, err_console
from ecsctl.config.paths import cli_config_path
from ecsctl.errors import ConfigError

pass_cli_context = click.make_pass_decorator(CliContext)


@click.group()
def config() -> None:
    """Show or change persisted settings."""


@config.command("show")
@pass_cli_context
def show(state: CliContext) -> None:
    """Print the configuration file path and values."""
    console.print(f"[dim]{cli_config_path()}[/dim]")
    console.print_json(json.dumps(state.config.model_dump(mode="json")))


@config.command("set")
@click.argument("key", type=click.Choice(SETTABLE_KEYS))
@click.argument("value", required=False, default="")
@pass_cli_context
def set_value(state: CliContext, key: str, value: str) -> None:
    """Set KEY to VALUE; omit VALUE to reset an AWS setting.

    An unreadable configuration file is replaced, starting from defaults.
    """
    try:
        current = state.config
    except ConfigError as exc:
        err_console.print(
            f"[yellow]Replacing unreadable configuration: {escape(str(exc))}[/yellow]"
        )
        current = CliConfig()

    updated = set_config_value(current, key, value)
    path = save_config(updated)
    console.print(f"[green]Saved {key} to {path}[/green]")
