"""CLI configuration models."""

from pydantic import BaseModel, ConfigDict, Field

from ecsctl.core.sessions import PORT_FORWARD_DOCUMENT


class AwsConfig(BaseModel):
    """AWS configuration values; unset values fall back to boto3 resolution."""

    region: str | None = None
    profile: str | None = None


class SessionConfig(BaseModel):
    """Session Manager invocation settings."""

    aws_cli: str = "aws"
    port_forward_document: str = PORT_FORWARD_DOCUMENT


class CliConfig(BaseModel):
    """Persisted CLI configuration."""

    model_config = ConfigDict(extra="ignore")

    aws: AwsConfig = Field(default_factory=AwsConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
