"""Mock SOAP server module.

This module provides a Flask-based SOAP service for local testing.
"""

from soap_proxy.mock_server.app import create_app, make_mock_server, run_server
from soap_proxy.mock_server.config import MockServerConfig

__all__ = [
    "MockServerConfig",
    "create_app",
    "make_mock_server",
    "run_server",
]
