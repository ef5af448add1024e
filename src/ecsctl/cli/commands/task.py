"""Task commands."""

import asyncio
import logging

import click

from ecsctl.cli.context import CliContext
from ecsctl.cli.tables import container_table, task_table
from ecsctl.cli.ui import console
from ecsctl.core.inspection import TaskInspector
from ecsctl.core.listing import list_tasks
from ecsctl.core.sessions import SessionOrchestrator, spawn_process

logger = logging.getLogger(__name__)

pass_cli_context = click.make_pass_decorator(CliContext)

cluster_option = click.option("--cluster", required=True, help="Cluster name.")
task_option = click.option("--task", "task_id", required=True, help="Task id.")


def _report(message: str) -> None:
    console.print(message, highlight=False, markup=False)


def _orchestrator(state: CliContext) -> SessionOrchestrator:
    return SessionOrchestrator(
        TaskInspector(state.ecs),
        command=state.session_command(),
        spawner=spawn_process,
        reporter=_report,
    )


@click.group()
def task() -> None:
    """Work with ECS tasks."""


@task.command("list")
@cluster_option
@click.option(
    "--page-size",
    type=click.IntRange(1, 100),
    default=None,
    help="Tasks fetched per API call.",
)
@pass_cli_context
def list_cmd(state: CliContext, cluster: str, page_size: int | None) -> None:
    """List tasks in a cluster."""
    console.print(task_table(list_tasks(state.ecs, cluster, page_size)))


@task.group("get")
@cluster_option
@task_option
@click.pass_context
def get(ctx: click.Context, cluster: str, task_id: str) -> None:
    """Show details of a task."""
    ctx.meta["ecsctl.target"] = (cluster, task_id)


@get.command("containers")
@click.pass_context
def get_containers(ctx: click.Context) -> None:
    """Show the containers of a task."""
    state = ctx.find_object(CliContext)
    cluster, task_id = ctx.meta["ecsctl.target"]
    record = TaskInspector(state.ecs).get_containers(cluster, task_id)
    _report(task_id)
    console.print(container_table(record.containers))


@task.command("port-forward")
@cluster_option
@task_option
@click.option(
    "--port",
    "ports",
    multiple=True,
    metavar="LOCAL:REMOTE",
    help="Port mapping, repeatable. One tunnel is started per mapping.",
)
@pass_cli_context
def port_forward(state: CliContext, cluster: str, task_id: str, ports: tuple[str, ...]) -> None:
    """Forward local ports into the first running container of a task.

    Runs until interrupted with CTRL-C.
    """
    asyncio.run(_orchestrator(state).port_forward(cluster, task_id, list(ports)))


@task.command("exec")
@cluster_option
@task_option
@click.option("--container", required=True, help="Container name.")
@pass_cli_context
def exec_cmd(state: CliContext, cluster: str, task_id: str, container: str) -> None:
    """Open an interactive session in a container.

    Leave the session with CTRL-D; CTRL-C is passed to the remote shell.
    """
    returncode = asyncio.run(_orchestrator(state).exec(cluster, task_id, container))
    logger.debug("Session process exited with %s", returncode)
