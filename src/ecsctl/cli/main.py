"""CLI entrypoint for ecsctl."""

import click

from ecsctl import __version__
from ecsctl.cli.commands.cluster import cluster
from ecsctl.cli.commands.config import config
from ecsctl.cli.commands.task import task
from ecsctl.cli.context import CliContext
from ecsctl.cli.errors import report_error
from ecsctl.cli.logging_setup import configure_logging


class ReportingGroup(click.Group):
    """Command group that renders failures instead of tracebacks."""

    def invoke(self, ctx: click.Context) -> object:
        try:
            return super().invoke(ctx)
        except (click.ClickException, click.exceptions.Exit, click.exceptions.Abort):
            raise
        except Exception as exc:  # noqa: BLE001
            report_error(exc)
            ctx.exit(1)


@click.group(cls=ReportingGroup)
@click.option("--region", default=None, help="AWS region, overriding the default resolution.")
@click.option("--profile", default=None, help="AWS profile to use.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr.")
@click.version_option(__version__, prog_name="ecsctl")
@click.pass_context
def cli(ctx: click.Context, region: str | None, profile: str | None, verbose: bool) -> None:
    """Inspect ECS clusters and tasks, and connect into running containers."""
    configure_logging(verbose)
    ctx.obj = CliContext(region=region, profile=profile)


cli.add_command(cluster)
cli.add_command(task)
cli.add_command(config)


def main() -> None:
    """Run the CLI."""
    cli(prog_name="ecsctl")
