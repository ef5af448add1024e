"""Rich tables for list and get output."""

from collections.abc import Iterable

from rich.table import Table

from ecsctl.core.models import ClusterRecord, ContainerRecord, TaskRecord


def cluster_table(clusters: Iterable[ClusterRecord]) -> Table:
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Arn", style="bright_white")
    table.add_column("Name", style="white")
    for cluster in clusters:
        table.add_row(cluster.arn, cluster.name)
    return table


def task_table(tasks: Iterable[TaskRecord]) -> Table:
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Task Id", style="bright_white", no_wrap=True)
    table.add_column("Group", style="white")
    table.add_column("AZ", style="white")
    table.add_column("Cpu", style="white", justify="right")
    table.add_column("Memory", style="white", justify="right")
    for task in tasks:
        table.add_row(task.id, task.group, task.availability_zone, task.cpu, task.memory)
    return table


def container_table(containers: Iterable[ContainerRecord]) -> Table:
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bright_white", no_wrap=True)
    table.add_column("ID", style="white")
    table.add_column("Image", style="white")
    table.add_column("Exit Code", justify="right")
    for container in containers:
        exit_code = "" if container.exit_code is None else str(container.exit_code)
        table.add_row(container.name, container.runtime_id or "", container.image, exit_code)
    return table
