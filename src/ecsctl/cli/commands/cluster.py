"""Cluster commands."""

import click

from ecsctl.cli.context import CliContext
from ecsctl.cli.tables import cluster_table
from ecsctl.cli.ui import console
from ecsctl.core.listing import list_clusters

pass_cli_context = click.make_pass_decorator(CliContext)


@click.group()
def cluster() -> None:
    """Work with ECS clusters."""


@cluster.command("list")
@click.option(
    "--page-size",
    type=click.IntRange(1, 100),
    default=None,
    help="Clusters fetched per API call.",
)
@pass_cli_context
def list_cmd(state: CliContext, page_size: int | None) -> None:
    """List clusters."""
    console.print(cluster_table(list_clusters(state.ecs, page_size)))
