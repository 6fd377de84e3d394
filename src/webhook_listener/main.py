"""
Command-line entry point for the webhook listener.

Runs a standalone listener that logs every webhook payload it receives,
and creates default configuration files.
"""

import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
import structlog

from .config.settings import create_default_config, load_config
from .config.store import merge
from .errors import ListenerError
from .listener import WebhookListener
from .utils.logging import setup_logging


def _log_payload(payload: Any) -> None:
    structlog.get_logger("webhook_listener.consumer").info("Webhook received", payload=payload)


async def _serve(overrides: Dict[str, Any]) -> None:
    listener = WebhookListener()
    listener.register(_log_payload)
    server = await listener.start(overrides)
    try:
        await asyncio.Event().wait()
    finally:
        await server.stop()


@click.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--port", "-p", type=int, help="Port to bind (PORT env var takes precedence)")
@click.option("--endpoint", "-e", help="URL path the webhook is served on")
@click.option("--host", help="Interface to bind")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Set logging level",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "console"], case_sensitive=False),
    default="json",
    show_default=True,
    help="Render logs as JSON lines or for a terminal",
)
@click.version_option(package_name="webhook-listener")
def serve(
    config: Optional[Path] = None,
    port: Optional[int] = None,
    endpoint: Optional[str] = None,
    host: Optional[str] = None,
    log_level: Optional[str] = None,
    log_format: str = "json",
) -> None:
    """Run a webhook listener that logs every payload it receives."""
    try:
        overrides = load_config(config_path=config)
        configured_level = overrides.pop("log_level", None)
        level = (log_level or configured_level or "INFO").upper()
        setup_logging(level, log_format=log_format)
    except (OSError, ValueError) as e:
        click.echo(f"Failed to load configuration: {e}", err=True)
        sys.exit(1)

    logger = structlog.get_logger()

    cli_overrides = {
        key: value
        for key, value in (("port", port), ("endpoint", endpoint), ("host", host))
        if value is not None
    }
    if cli_overrides:
        overrides = merge(overrides, {"listener": cli_overrides})

    logger.info(
        "Starting webhook listener",
        config_file=str(config) if config else "default",
        log_level=level,
    )

    try:
        asyncio.run(_serve(overrides))
    except KeyboardInterrupt:
        logger.info("Listener shutdown requested")
    except ListenerError as e:
        logger.error("Listener startup failed", error=e.message, code=e.code)
        sys.exit(1)


@click.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(path_type=Path),
    help="Path to save configuration file",
)
def init_config(config: Optional[Path] = None) -> None:
    """Initialize a configuration file with default settings."""
    config_path = config or Path("webhook-listener.json")

    if config_path.exists():
        click.echo(f"Configuration file already exists: {config_path}")
        if not click.confirm("Overwrite?"):
            return

    try:
        create_default_config(config_path)
    except OSError as e:
        click.echo(f"Failed to create configuration file: {e}", err=True)
        sys.exit(1)

    click.echo(f"Created configuration file: {config_path}")
    click.echo("\nStart the listener with:")
    click.echo(f"   webhook-listener serve --config {config_path}")


@click.group()
def cli() -> None:
    """Webhook Listener CLI."""
    pass


cli.add_command(serve, name="serve")
cli.add_command(init_config, name="init")


if __name__ == "__main__":
    cli()
