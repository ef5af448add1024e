"""AWS session helpers."""

import logging
from typing import Any

import boto3

logger = logging.getLogger(__name__)


def create_session(region: str | None = None, profile: str | None = None) -> boto3.session.Session:
    """Create a boto3 session.

    Args:
        region: Region override; boto3 resolves the default when unset.
        profile: Named AWS profile; the default credential chain is used when unset.

    Returns:
        The boto3 session.
    """
    if profile:
        logger.debug("Using AWS profile %s", profile)
        return boto3.session.Session(profile_name=profile, region_name=region)

    return boto3.session.Session(region_name=region)


def ecs_client(session: boto3.session.Session) -> Any:
    """Return an ECS client for the session."""
    client = session.client("ecs")
    logger.debug("ECS client created for region %s", client.meta.region_name)
    return client
