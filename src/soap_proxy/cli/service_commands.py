"""CLI commands for inspecting and calling SOAP services."""

import json
from typing import Any, Optional

import click

from soap_proxy.config import get_wsdl_url
from soap_proxy.soap.service import Service
from soap_proxy.utils.exceptions import ConfigurationError, SoapProxyError


def parse_arguments(pairs: tuple[str, ...]) -> dict[str, Any]:
    """Parse key=value pairs into an argument mapping.

    Dotted keys create nested mappings and repeated keys create lists.

    Args:
        pairs: Strings of the form "key=value"

    Returns:
        Argument mapping

    Raises:
        click.BadParameter: If a pair has no "=" or an empty key

    Example:
        >>> parse_arguments(("user.name=Bob", "tag=a", "tag=b"))
        {'user': {'name': 'Bob'}, 'tag': ['a', 'b']}
    """
    arguments: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(
                f"Expected key=value, got '{pair}'", param_hint="'-a' / '--arg'"
            )

        *parents, leaf = key.split(".")
        target = arguments
        for parent in parents:
            node = target.setdefault(parent, {})
            if not isinstance(node, dict):
                raise click.BadParameter(
                    f"'{parent}' is both a value and a parent in '{key}'",
                    param_hint="'-a' / '--arg'",
                )
            target = node

        if leaf in target:
            existing = target[leaf]
            target[leaf] = existing + [value] if isinstance(existing, list) else [existing, value]
        else:
            target[leaf] = value
    return arguments


def _resolve_service(ctx: click.Context, wsdl_url: Optional[str]) -> Service:
    config = ctx.obj["config"]
    try:
        url = get_wsdl_url(config, wsdl_url)
    except ConfigurationError as e:
        raise click.UsageError(str(e))
    return Service(url, verify_tls=config.transport.verify_tls)


@click.command()
@click.argument("wsdl_url", required=False)
@click.pass_context
def operations(ctx: click.Context, wsdl_url: Optional[str]) -> None:
    """List the operations declared by a WSDL.

    Example:
        soap-proxy operations http://example.com/Service?wsdl
    """
    service = _resolve_service(ctx, wsdl_url)
    try:
        names = service.operations
        namespace = service.wsdl.namespace_uri
    except SoapProxyError as e:
        click.echo(click.style("✗", fg="red", bold=True) + f" {e}", err=True)
        raise click.exceptions.Exit(1)

    click.echo(f"Namespace: {namespace}")
    click.echo(f"Operations ({len(names)}):")
    for name in names:
        click.echo(f"  {name}")


@click.command()
@click.argument("operation")
@click.option("--wsdl", "wsdl_url", default=None, help="WSDL URL (overrides config)")
@click.option(
    "-a",
    "--arg",
    "args",
    multiple=True,
    help="Operation argument as key=value (repeatable; dotted keys nest)",
)
@click.option("--xpath", default=None, help="XPath selecting the root of --format dict output")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "dict"]),
    default="text",
    show_default=True,
    help="Print the raw body or the parsed mapping as JSON",
)
@click.pass_context
def call(
    ctx: click.Context,
    operation: str,
    wsdl_url: Optional[str],
    args: tuple[str, ...],
    xpath: Optional[str],
    output_format: str,
) -> None:
    """Call OPERATION and print the response.

    Example:
        soap-proxy call findById --wsdl http://example.com/Service?wsdl -a id=123
    """
    arguments = parse_arguments(args)
    service = _resolve_service(ctx, wsdl_url)

    try:
        response = service.invoke(operation, arguments)
    except SoapProxyError as e:
        click.echo(click.style("✗", fg="red", bold=True) + f" {e}", err=True)
        raise click.exceptions.Exit(1)

    if response.status_code >= 400:
        click.echo(f"HTTP {response.status_code}", err=True)

    if output_format == "text":
        click.echo(response.text)
        return

    try:
        result = response.to_dict(xpath)
    except SoapProxyError as e:
        click.echo(click.style("✗", fg="red", bold=True) + f" {e}", err=True)
        raise click.exceptions.Exit(1)
    click.echo(json.dumps(result, indent=2))
