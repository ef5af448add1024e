"""Read-only records built from ECS API responses."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ClusterRecord:
    """A cluster as returned by DescribeClusters."""

    arn: str
    name: str

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "ClusterRecord":
        return cls(
            arn=str(data.get("clusterArn", "")),
            name=str(data.get("clusterName", "")),
        )


@dataclass(frozen=True)
class ContainerRecord:
    """A container of a task.

    ``exit_code`` is ``None`` while the container is still running.
    """

    name: str
    runtime_id: str | None
    image: str
    exit_code: int | None = None
    last_status: str = ""

    @property
    def is_running(self) -> bool:
        return self.exit_code is None

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "ContainerRecord":
        exit_code = data.get("exitCode")
        return cls(
            name=str(data.get("name", "")),
            runtime_id=data.get("runtimeId") or None,
            image=str(data.get("image", "")),
            exit_code=int(exit_code) if exit_code is not None else None,
            last_status=str(data.get("lastStatus", "")),
        )


@dataclass(frozen=True)
class TaskRecord:
    """A task and its containers as returned by DescribeTasks."""

    id: str
    arn: str = ""
    group: str = ""
    availability_zone: str = ""
    cpu: str = ""
    memory: str = ""
    last_status: str = ""
    containers: tuple[ContainerRecord, ...] = field(default_factory=tuple)

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "TaskRecord":
        arn = str(data.get("taskArn", ""))
        return cls(
            id=task_id_from_arn(arn),
            arn=arn,
            group=str(data.get("group", "")),
            availability_zone=str(data.get("availabilityZone", "")),
            cpu=str(data.get("cpu", "")),
            memory=str(data.get("memory", "")),
            last_status=str(data.get("lastStatus", "")),
            containers=tuple(
                ContainerRecord.from_response(item) for item in data.get("containers", [])
            ),
        )


def task_id_from_arn(arn: str) -> str:
    """Return the short task id, the final ``/`` separated segment of a task ARN.

    Args:
        arn: Task ARN, e.g. ``arn:aws:ecs:eu-west-2:123:task/cluster/abc123``.

    Returns:
        The task id, or an empty string when the ARN is empty.
    """
    return arn.rsplit("/", 1)[-1]
