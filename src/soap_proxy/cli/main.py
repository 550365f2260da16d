"""Main CLI entry point for soap-proxy.

This module provides the main Click command group for the soap-proxy CLI.
"""

from pathlib import Path
from typing import Optional

import click

from soap_proxy import __version__
from soap_proxy.cli.mock_commands import mock_group
from soap_proxy.cli.service_commands import call, operations
from soap_proxy.config import load_config
from soap_proxy.logging_config import configure_logging
from soap_proxy.utils.exceptions import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="soap-proxy")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: ./config/config.json)",
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging (DEBUG level)")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to log file (overrides config file)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: bool,
    log_file: Optional[Path],
) -> None:
    """soap-proxy - call SOAP services described by a WSDL.

    Common usage:

        # List the operations of a service
        soap-proxy operations http://example.com/Service?wsdl

        # Call an operation
        soap-proxy call findById --wsdl http://example.com/Service?wsdl -a id=123

        # Show the response as a mapping rooted at an XPath
        soap-proxy call findById -a id=123 --format dict --xpath //return

    Use --help with any command for more information.
    """
    ctx.ensure_object(dict)

    try:
        config_obj = load_config(config)
    except ConfigurationError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        ctx.exit(1)
        return

    ctx.obj["config"] = config_obj
    ctx.obj["verbose"] = verbose

    # Precedence: CLI flags > config file > defaults
    log_level = "DEBUG" if verbose else config_obj.logging.level
    log_file_path = log_file if log_file else config_obj.logging.log_file

    configure_logging(level=log_level, log_file=log_file_path)


cli.add_command(operations)
cli.add_command(call)
cli.add_command(mock_group)


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command()
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
def validate(config_file: Path) -> None:
    """Validate a configuration file.

    Example:
        soap-proxy config validate config/config.json
    """
    try:
        config_obj = load_config(config_file)
    except ConfigurationError as e:
        click.echo(click.style("✗", fg="red", bold=True) + " Configuration validation failed")
        click.echo(f"\n{e}", err=True)
        raise click.exceptions.Exit(1)

    click.echo(click.style("✓", fg="green", bold=True) + " Configuration is valid")
    click.echo(f"\nConfiguration file: {config_file}")
    click.echo("\nService:")
    click.echo(f"  WSDL URL:    {config_obj.service.wsdl_url or 'Not configured'}")
    click.echo("\nTransport:")
    click.echo(f"  Verify TLS:  {config_obj.transport.verify_tls}")
    click.echo("\nLogging:")
    click.echo(f"  Level:       {config_obj.logging.level}")
    click.echo(f"  Log file:    {config_obj.logging.log_file}")


cli.add_command(config)


@cli.command()
def version() -> None:
    """Display version information."""
    click.echo(f"soap-proxy version {__version__}")


if __name__ == "__main__":
    cli()
