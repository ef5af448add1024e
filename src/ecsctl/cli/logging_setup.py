"""Logging setup for the CLI."""

import logging

from rich.logging import RichHandler

from ecsctl.cli.ui import err_console

NOISY_LOGGERS = ("botocore", "boto3", "urllib3", "asyncio")


def configure_logging(verbose: bool = False) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=verbose)],
        force=True,
    )
    # AWS SDK debug output drowns ours.
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
