"""Shared fixtures for the ecsctl tests."""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import boto3
import pytest
from botocore.stub import Stubber


@pytest.fixture(autouse=True)
def aws_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from real AWS credentials and user configuration."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-2")
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.setenv("ECSCTL_CONFIG", str(tmp_path / "config.json"))


@pytest.fixture
def ecs() -> Any:
    return boto3.client("ecs", region_name="eu-west-2")


@pytest.fixture
def stubber(ecs: Any) -> Iterator[Stubber]:
    with Stubber(ecs) as stub:
        yield stub
        stub.assert_no_pending_responses()
