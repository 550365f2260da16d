"""CLI commands for the mock SOAP server."""

import logging

import click

from soap_proxy.mock_server.app import run_server
from soap_proxy.mock_server.config import MockServerConfig

logger = logging.getLogger(__name__)


@click.group(name="mock")
def mock_group() -> None:
    """Mock SOAP service for local testing."""
    pass


@mock_group.command(name="start")
@click.option("--host", default="127.0.0.1", show_default=True, help="Host address to bind")
@click.option("--port", default=8080, show_default=True, type=int, help="Port to listen on")
@click.option("--path", "service_path", default="/Service", show_default=True, help="Service path")
@click.option("--namespace", default="urn:example", show_default=True, help="WSDL targetNamespace")
def start(host: str, port: int, service_path: str, namespace: str) -> None:
    """Start the mock SOAP service in the foreground.

    Example:
        soap-proxy mock start --port 8080
        soap-proxy operations http://127.0.0.1:8080/Service?wsdl
    """
    try:
        config = MockServerConfig(
            host=host, http_port=port, service_path=service_path, namespace=namespace
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    click.echo(f"Mock SOAP service: {config.base_url}")
    click.echo(f"WSDL:              {config.wsdl_url}")
    click.echo("Press Ctrl+C to stop")

    try:
        run_server(config)
    except KeyboardInterrupt:
        logger.info("Mock server stopped")
    except OSError as e:
        click.echo(click.style("✗", fg="red", bold=True) + f" Failed to start: {e}", err=True)
        raise click.exceptions.Exit(1)
