"""Task inspection and container resolution."""

import logging
from dataclasses import dataclass
from typing import Any, TypeAlias

from botocore.exceptions import BotoCoreError, ClientError

from ecsctl.core.models import ContainerRecord, TaskRecord
from ecsctl.errors import (
    ContainerNotFound,
    MissingRuntimeId,
    NoRunningContainer,
    NotFound,
    RemoteCallFailed,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FirstRunning:
    """Select the first container that has not exited."""


@dataclass(frozen=True)
class NamedContainer:
    """Select the container with this exact name."""

    name: str


ContainerSelector: TypeAlias = FirstRunning | NamedContainer


class TaskInspector:
    """Describe single tasks and pick containers out of them."""

    def __init__(self, client: Any) -> None:
        self._client = client

    def get_containers(self, cluster: str, task: str) -> TaskRecord:
        """Describe one task.

        Args:
            cluster: Cluster name or ARN.
            task: Task id or ARN.

        Returns:
            The task with its ordered containers.

        Raises:
            NotFound: When the response contains no task.
            RemoteCallFailed: When the describe call fails.
        """
        try:
            response = self._client.describe_tasks(cluster=cluster, tasks=[task])
        except (ClientError, BotoCoreError) as exc:
            raise RemoteCallFailed(f"Failed to describe task {task}: {exc}") from exc

        tasks = response.get("tasks", [])
        if not tasks:
            failures = response.get("failures", [])
            logger.debug("DescribeTasks failures for %s: %s", task, failures)
            raise NotFound(f"Task {task} not found in cluster {cluster}.")

        return TaskRecord.from_response(tasks[0])

    def resolve_running_container(
        self, cluster: str, task: str, selector: ContainerSelector
    ) -> ContainerRecord:
        """Pick the container a session should attach to.

        Args:
            cluster: Cluster name or ARN.
            task: Task id or ARN.
            selector: ``FirstRunning()`` or ``NamedContainer(name)``.

        Returns:
            The selected container; it always carries a runtime id.

        Raises:
            NotFound: When the task does not exist.
            NoRunningContainer: When every container has an exit code.
            ContainerNotFound: When no container has the requested name.
            MissingRuntimeId: When the selected container has no runtime id.
        """
        record = self.get_containers(cluster, task)
        container = select_container(record.containers, selector)
        if container is None:
            if isinstance(selector, NamedContainer):
                raise ContainerNotFound(f"Container {selector.name} not found in task {task}.")
            raise NoRunningContainer(f"Task {task} has no running container.")

        if not container.runtime_id:
            raise MissingRuntimeId(f"Container {container.name} in task {task} has no runtime id.")

        logger.debug("Resolved container %s (%s)", container.name, container.runtime_id)
        return container


def select_container(
    containers: tuple[ContainerRecord, ...] | list[ContainerRecord],
    selector: ContainerSelector,
) -> ContainerRecord | None:
    """Return the first container matching the selector, if any."""
    for container in containers:
        if isinstance(selector, NamedContainer):
            if container.name == selector.name:
                return container
        elif container.is_running:
            return container
    return None
