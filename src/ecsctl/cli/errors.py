"""User-facing rendering of command failures."""

import logging
from collections.abc import Iterator

from botocore.exceptions import (
    ClientError,
    EndpointConnectionError,
    NoCredentialsError,
    NoRegionError,
    ProfileNotFound,
)
from rich.markup import escape

from ecsctl.cli.ui import err_console

logger = logging.getLogger(__name__)

AUTH_ERROR_CODES = frozenset(
    {
        "ExpiredToken",
        "ExpiredTokenException",
        # spellchecker:ignore-next-line
        "UnrecognizedClientException",
        "InvalidClientTokenId",
        "InvalidSignatureException",
        "AccessDenied",
        "AccessDeniedException",
    }
)

AUTH_GUIDANCE = (
    "AWS authentication failed. Your credentials are missing, invalid, or expired.",
    "If using AWS profile/SSO, run: aws sso login --profile <profile>. "
    "If using temporary keys, refresh AWS_SESSION_TOKEN and retry.",
)
ENDPOINT_GUIDANCE = (
    "Could not reach AWS endpoint from this environment.",
    "Check network connectivity and AWS region configuration.",
)
REGION_GUIDANCE = (
    "No AWS region configured.",
    "Pass --region, set AWS_REGION, or run: ecsctl config set aws.region REGION",
)


def report_error(exc: Exception) -> None:
    """Render a command failure on stderr.

    Known AWS failures anywhere in the cause chain get a headline and a hint;
    anything else is shown with its type name.
    """
    logger.debug("Command failed", exc_info=exc)

    for cause in _causes(exc):
        guidance = _guidance_for(cause)
        if guidance is not None:
            headline, hint = guidance
            err_console.print(f"[red]{headline}[/red]")
            err_console.print(f"[dim]{hint}[/dim]")
            return

    err_console.print(
        f"[red]Error ({type(exc).__name__}): {escape(str(exc))}[/red]",
        highlight=False,
        soft_wrap=True,
    )


def _guidance_for(error: BaseException) -> tuple[str, str] | None:
    if isinstance(error, (NoCredentialsError, ProfileNotFound)):
        return AUTH_GUIDANCE
    if isinstance(error, ClientError):
        if error.response.get("Error", {}).get("Code") in AUTH_ERROR_CODES:
            return AUTH_GUIDANCE
    if "security token included in the request is expired" in str(error).lower():
        return AUTH_GUIDANCE
    if isinstance(error, EndpointConnectionError):
        return ENDPOINT_GUIDANCE
    if isinstance(error, NoRegionError):
        return REGION_GUIDANCE
    return None


def _causes(exc: BaseException) -> Iterator[BaseException]:
    """Walk ``exc`` and its causes, stopping at cycles."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__
