"""Entry point for running soap_proxy as a module.

This allows the package to be executed as:
    python -m soap_proxy
"""

from soap_proxy.cli.main import cli

if __name__ == "__main__":
    cli()
