"""Transport module.

This module provides the HTTP transport used for WSDL retrieval and SOAP calls.
"""

from soap_proxy.transport.http_client import HttpTransport, TLS12Adapter

__all__ = [
    "HttpTransport",
    "TLS12Adapter",
]
