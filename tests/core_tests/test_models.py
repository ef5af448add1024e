"""Tests for ECS response records."""

from ecsctl.core.models import ClusterRecord, ContainerRecord, TaskRecord, task_id_from_arn


def test_task_id_from_arn() -> None:
    assert task_id_from_arn("arn:aws:ecs:eu-west-2:123456789012:task/abc123") == "abc123"
    assert task_id_from_arn("arn:aws:ecs:eu-west-2:123456789012:task/mycluster/abc123") == "abc123"
    assert task_id_from_arn("") == ""


def test_missing_fields_become_empty_strings() -> None:
    task = TaskRecord.from_response({"taskArn": "arn:aws:ecs:eu-west-2:1:task/c/t1"})

    assert task.id == "t1"
    assert (task.group, task.availability_zone, task.cpu, task.memory) == ("", "", "", "")
    assert task.containers == ()
    assert ClusterRecord.from_response({}) == ClusterRecord(arn="", name="")


def test_container_exit_code_marks_terminated() -> None:
    running = ContainerRecord.from_response({"name": "app", "runtimeId": "rt-1"})
    stopped = ContainerRecord.from_response({"name": "init", "runtimeId": "rt-0", "exitCode": 0})

    assert running.is_running
    assert running.exit_code is None
    assert not stopped.is_running
    assert stopped.exit_code == 0


def test_empty_runtime_id_is_absent() -> None:
    assert ContainerRecord.from_response({"name": "app", "runtimeId": ""}).runtime_id is None
