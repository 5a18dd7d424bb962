#!/usr/bin/env python3
"""
Main CLI entry point for the address book server.
"""

import os
import sys

import click
import uvicorn

from addressbook import __version__
from addressbook.config import settings
from addressbook.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="addressbook")
def cli() -> None:
    """Address book CLI - run the GraphQL server."""
    pass


@cli.command()
@click.option(
    "--host",
    default=settings.api_host,
    help=f"Host to bind to (default: {settings.api_host})",
)
@click.option(
    "--port",
    default=settings.api_port,
    type=int,
    help=f"Port to bind to (default: {settings.api_port})",
)
@click.option(
    "--reload",
    is_flag=True,
    default=settings.api_reload,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default=settings.log_level.lower(),
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the address book API server."""
    configure_logging(log_level, console=(log_level == "debug"))

    logger.info(
        "Starting address book API server",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )

    # The app is created by the factory inside uvicorn, so settings travel via env
    os.environ["ADDRESSBOOK_LOG_LEVEL"] = log_level
    if log_level == "debug":
        os.environ["ADDRESSBOOK_DEBUG"] = "true"
    else:
        os.environ.setdefault("ADDRESSBOOK_DEBUG", "false")

    try:
        uvicorn.run(
            "addressbook.api.app:build_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
