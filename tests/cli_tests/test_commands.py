"""Tests for the click command surface."""

from typing import Any

import pytest
from botocore.stub import Stubber
from click.testing import CliRunner

from ecsctl.cli.main import cli
from tests.factories import CLUSTER, TASK_ARN_PREFIX, container_response, task_response

ARN_A = "arn:aws:ecs:eu-west-2:123456789012:cluster/alpha"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def stubbed_client(monkeypatch: pytest.MonkeyPatch, ecs: Any) -> None:
    monkeypatch.setattr("ecsctl.cli.context.ecs_client", lambda session: ecs)


def test_cluster_list(runner: CliRunner, stubber: Stubber) -> None:
    stubber.add_response("list_clusters", {"clusterArns": [ARN_A]}, {})
    stubber.add_response(
        "describe_clusters",
        {"clusters": [{"clusterArn": ARN_A, "clusterName": "alpha"}]},
        {"clusters": [ARN_A]},
    )

    result = runner.invoke(cli, ["cluster", "list"])

    assert result.exit_code == 0, result.output
    assert "alpha" in result.output
    assert ARN_A in result.output


def test_task_list(runner: CliRunner, stubber: Stubber) -> None:
    arn = f"{TASK_ARN_PREFIX}abc123"
    stubber.add_response("list_tasks", {"taskArns": [arn]}, {"cluster": CLUSTER})
    stubber.add_response(
        "describe_tasks",
        {"tasks": [task_response("abc123", group="service:web", cpu="256", memory="512")]},
        {"cluster": CLUSTER, "tasks": [arn]},
    )

    result = runner.invoke(cli, ["task", "list", "--cluster", CLUSTER])

    assert result.exit_code == 0, result.output
    assert "abc123" in result.output
    assert "service:web" in result.output
    assert TASK_ARN_PREFIX not in result.output


def test_task_get_containers(runner: CliRunner, stubber: Stubber) -> None:
    stubber.add_response(
        "describe_tasks",
        {
            "tasks": [
                task_response(
                    "abc123",
                    [
                        container_response("init", "rt-0", exit_code=0),
                        container_response("app", "rt-1"),
                    ],
                )
            ]
        },
        {"cluster": CLUSTER, "tasks": ["abc123"]},
    )

    result = runner.invoke(
        cli, ["task", "get", "--cluster", CLUSTER, "--task", "abc123", "containers"]
    )

    assert result.exit_code == 0, result.output
    assert "rt-0" in result.output
    assert "rt-1" in result.output
    assert "nginx:latest" in result.output


def test_missing_task_exits_nonzero(runner: CliRunner, stubber: Stubber) -> None:
    stubber.add_response(
        "describe_tasks", {"tasks": []}, {"cluster": CLUSTER, "tasks": ["nope"]}
    )

    result = runner.invoke(
        cli, ["task", "get", "--cluster", CLUSTER, "--task", "nope", "containers"]
    )

    assert result.exit_code == 1
    assert "not found" in result.output
    assert "Traceback" not in result.output


def test_port_forward_without_ports_fails(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch
) -> None:
    spawned: list[tuple[str, ...]] = []

    async def spawner(*args: str) -> None:
        spawned.append(args)

    monkeypatch.setattr("ecsctl.cli.commands.task.spawn_process", spawner)

    result = runner.invoke(cli, ["task", "port-forward", "--cluster", CLUSTER, "--task", "t1"])

    assert result.exit_code == 1
    assert "no port specified" in result.output
    assert spawned == []


def test_remote_error_exits_nonzero(runner: CliRunner, stubber: Stubber) -> None:
    stubber.add_client_error(
        "list_clusters", service_error_code="ServerException", service_message="down"
    )

    result = runner.invoke(cli, ["cluster", "list"])

    assert result.exit_code == 1
    assert "RemoteCallFailed" in result.output


def test_auth_error_gets_guidance(runner: CliRunner, stubber: Stubber) -> None:
    stubber.add_client_error(
        "list_clusters", service_error_code="ExpiredTokenException", service_message="expired"
    )

    result = runner.invoke(cli, ["cluster", "list"])

    assert result.exit_code == 1
    assert "AWS authentication failed" in result.output


def test_region_flag_reaches_the_session(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch, ecs: Any
) -> None:
    seen: dict[str, Any] = {}

    def create_session(region: str | None, profile: str | None) -> object:
        seen.update(region=region, profile=profile)
        return object()

    monkeypatch.setattr("ecsctl.cli.context.create_session", create_session)
    with Stubber(ecs) as stub:
        stub.add_response("list_clusters", {"clusterArns": []}, {})
        result = runner.invoke(
            cli, ["--region", "us-east-1", "--profile", "ops", "cluster", "list"]
        )

    assert result.exit_code == 0, result.output
    assert seen == {"region": "us-east-1", "profile": "ops"}
