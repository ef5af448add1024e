"""Per-invocation state shared by CLI commands."""

from dataclasses import dataclass
from functools import cached_property
from typing import Any

import boto3

from ecsctl.cli.configuration.models import CliConfig
from ecsctl.cli.configuration.store import load_config
from ecsctl.core.aws import create_session, ecs_client
from ecsctl.core.sessions import SessionCommand


@dataclass
class CliContext:
    """Global options, plus configuration and AWS clients loaded on first use."""

    region: str | None = None
    profile: str | None = None

    @cached_property
    def config(self) -> CliConfig:
        return load_config()

    @property
    def effective_region(self) -> str | None:
        return self.region or self.config.aws.region

    @property
    def effective_profile(self) -> str | None:
        return self.profile or self.config.aws.profile

    @cached_property
    def session(self) -> boto3.session.Session:
        return create_session(self.effective_region, self.effective_profile)

    @cached_property
    def ecs(self) -> Any:
        return ecs_client(self.session)

    def session_command(self) -> SessionCommand:
        """Return the ``aws ssm start-session`` builder for the resolved region."""
        return SessionCommand(
            aws_cli=self.config.session.aws_cli,
            region=self.ecs.meta.region_name,
            profile=self.effective_profile,
            port_forward_document=self.config.session.port_forward_document,
        )
