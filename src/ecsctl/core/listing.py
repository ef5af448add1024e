"""Cluster and task listings built on the paginator.

Every page issues a list call bounded by the continuation token, then a
describe call over exactly the ARNs of that page.
"""

import logging
from collections.abc import Iterator
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from ecsctl.core.models import ClusterRecord, TaskRecord
from ecsctl.core.pagination import PageToken, iter_pages
from ecsctl.errors import RemoteCallFailed

logger = logging.getLogger(__name__)


class ClusterPageFetcher:
    """Fetch one page of clusters with their display fields."""

    def __init__(self, client: Any, page_size: int | None = None) -> None:
        self._client = client
        self._page_size = page_size

    def fetch(
        self, state: None, token: PageToken | None
    ) -> tuple[list[ClusterRecord], None, PageToken | None]:
        request: dict[str, Any] = {}
        if token:
            request["nextToken"] = token
        if self._page_size:
            request["maxResults"] = self._page_size

        try:
            response = self._client.list_clusters(**request)
            arns = response.get("clusterArns", [])
            logger.debug("ListClusters returned %d arn(s)", len(arns))
            if not arns:
                return [], state, response.get("nextToken")
            described = self._client.describe_clusters(clusters=arns)
        except (ClientError, BotoCoreError) as exc:
            raise RemoteCallFailed(f"Failed to list clusters: {exc}") from exc

        clusters = [ClusterRecord.from_response(item) for item in described.get("clusters", [])]
        return clusters, state, response.get("nextToken")


class TaskPageFetcher:
    """Fetch one page of tasks of the cluster carried as pagination state."""

    def __init__(self, client: Any, page_size: int | None = None) -> None:
        self._client = client
        self._page_size = page_size

    def fetch(
        self, cluster: str, token: PageToken | None
    ) -> tuple[list[TaskRecord], str, PageToken | None]:
        request: dict[str, Any] = {"cluster": cluster}
        if token:
            request["nextToken"] = token
        if self._page_size:
            request["maxResults"] = self._page_size

        try:
            response = self._client.list_tasks(**request)
            arns = response.get("taskArns", [])
            logger.debug("ListTasks on %s returned %d arn(s)", cluster, len(arns))
            if not arns:
                return [], cluster, response.get("nextToken")
            described = self._client.describe_tasks(cluster=cluster, tasks=arns)
        except (ClientError, BotoCoreError) as exc:
            raise RemoteCallFailed(f"Failed to list tasks in cluster {cluster}: {exc}") from exc

        tasks = [TaskRecord.from_response(item) for item in described.get("tasks", [])]
        return tasks, cluster, response.get("nextToken")


def list_clusters(client: Any, page_size: int | None = None) -> Iterator[ClusterRecord]:
    """Yield every cluster in arrival order.

    Args:
        client: boto3 ECS client.
        page_size: Optional ``maxResults`` per list call.

    Yields:
        Cluster records, page by page.

    Raises:
        RemoteCallFailed: When a list or describe call fails.
    """
    for page in iter_pages(ClusterPageFetcher(client, page_size), None):
        yield from page


def list_tasks(client: Any, cluster: str, page_size: int | None = None) -> Iterator[TaskRecord]:
    """Yield every task of a cluster in arrival order.

    Args:
        client: boto3 ECS client.
        cluster: Cluster name or ARN.
        page_size: Optional ``maxResults`` per list call.

    Yields:
        Task records, page by page.

    Raises:
        RemoteCallFailed: When a list or describe call fails.
    """
    for page in iter_pages(TaskPageFetcher(client, page_size), cluster):
        yield from page
